"""Filesystem locations used by vaultd.

The vault cache itself lives only in memory. On disk vaultd keeps just its
configuration file and logs, both under ``VAULTD_HOME`` unless overridden:

    $VAULTD_HOME/config   (VAULTD_CONFIG_DIR)
    $VAULTD_HOME/logs     (VAULTD_LOG_DIR)

Contract:
- Inputs: Environment variables
- Outputs: Resolved Path objects
- Side Effects: Creates directories if they don't exist
"""

import os
from pathlib import Path

DEFAULT_HOME = ".vaultd"


def get_home_dir() -> Path:
    """Get VAULTD_HOME (default: ./.vaultd), resolved to an absolute path."""
    return Path(os.environ.get("VAULTD_HOME", DEFAULT_HOME)).resolve()


def _ensure_dir(override_var: str, subdir: str) -> Path:
    override = os.environ.get(override_var)
    path = Path(override).resolve() if override else get_home_dir() / subdir
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Get the directory holding vaultd.yaml, creating it if needed."""
    return _ensure_dir("VAULTD_CONFIG_DIR", "config")


def get_log_dir() -> Path:
    """Get the log directory, creating it if needed."""
    return _ensure_dir("VAULTD_LOG_DIR", "logs")
