"""Entry point for ``python -m vaultd``."""

from .cli import main

if __name__ == "__main__":
    main()
