"""Configuration loading for vaultd.

Settings come from three layers, lowest precedence first: VaultSettings
defaults, ``vaultd.yaml`` in the config directory, and ``VAULTD_*``
environment variables.

Contract:
- Inputs: Config file paths, environment variables
- Outputs: VaultSettings objects
- Side Effects: Creates default config file if missing
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from ..storage.paths import get_config_dir
from .settings import VaultSettings

logger = logging.getLogger(__name__)

ENV_PREFIX = "VAULTD_"

DEFAULT_CONFIG = """# vaultd configuration
# Every key can be overridden with a VAULTD_<KEY> environment variable

# Server settings
host: "127.0.0.1"
port: 8430
log_level: "info"
workers: 1

# Obsidian Local REST API
obsidian_base_url: "http://127.0.0.1:27123"
# obsidian_api_key is best supplied via VAULTD_OBSIDIAN_API_KEY
obsidian_verify_ssl: false
request_timeout_seconds: 60

# In-memory vault cache
cache_enabled: true
cache_refresh_interval_min: 10
document_suffixes:
  - ".md"
"""


def get_config_path() -> Path:
    """Get path to vaultd.yaml in the config directory."""
    return get_config_dir() / "vaultd.yaml"


def create_default_config() -> None:
    """Write the commented default config unless one already exists."""
    config_path = get_config_path()
    if config_path.exists():
        logger.debug(f"Config file already exists: {config_path}")
        return

    config_path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    logger.info(f"Created default config: {config_path}")


def _read_yaml(config_path: Path) -> dict[str, Any]:
    """Read the YAML layer; an unreadable or non-mapping file counts as empty."""
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        logger.info("Using default settings and environment variables")
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring config {config_path}: expected a mapping, got {type(data).__name__}")
        return {}

    unknown = sorted(str(key) for key in data if key not in VaultSettings.model_fields)
    if unknown:
        logger.warning(f"Ignoring unknown keys in {config_path}: {', '.join(unknown)}")
    return {key: value for key, value in data.items() if key in VaultSettings.model_fields}


def load_config(config_path: Path | None = None) -> VaultSettings:
    """Load configuration from YAML and environment.

    Args:
        config_path: Config file to read (default: vaultd.yaml in config dir,
            created with defaults if missing)

    Returns:
        Validated settings

    Raises:
        pydantic.ValidationError: If a value fails validation
    """
    if config_path is None:
        config_path = get_config_path()
        create_default_config()

    yaml_settings = _read_yaml(config_path) if config_path.exists() else {}
    if yaml_settings:
        logger.debug(f"Loaded {len(yaml_settings)} setting(s) from {config_path}")

    # A YAML value is only passed when no env var covers it; pydantic reads
    # the env vars itself and init kwargs would otherwise win.
    overridden = {key.upper() for key in os.environ}
    from_yaml = {key: value for key, value in yaml_settings.items() if f"{ENV_PREFIX}{key.upper()}" not in overridden}

    settings = VaultSettings(**from_yaml)
    logger.info(
        f"Configuration loaded: host={settings.host}, port={settings.port}, "
        f"obsidian_base_url={settings.obsidian_base_url}, cache_enabled={settings.cache_enabled}"
    )
    return settings
