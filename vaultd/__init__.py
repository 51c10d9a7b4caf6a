"""vaultd - REST daemon serving an in-memory mirror of an Obsidian vault."""

__version__ = "0.1.0"
