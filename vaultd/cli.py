"""vaultd command line.

Provides commands to run the daemon, check connectivity to the vault, and
inspect the config and log files.
"""

import asyncio
import logging
import sys
from collections import deque
from pathlib import Path

import click
import uvicorn

from vault_library.cache import SyncResult
from vault_library.cache import VaultCacheService
from vault_library.config import VaultSettings
from vault_library.config.loader import get_config_path
from vault_library.config.loader import load_config
from vault_library.remote import ObsidianRestClient
from vault_library.storage.paths import get_log_dir

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_log_file() -> Path:
    return get_log_dir() / "vaultd.log"


def _load(config: Path | None) -> VaultSettings:
    try:
        return load_config(config)
    except Exception as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e


@click.group()
def cli():
    """vaultd - in-memory Obsidian vault cache daemon."""


@cli.command()
@click.option("--config", "config", type=click.Path(path_type=Path), default=None, help="Config file to use")
@click.option("--host", default=None, help="Override listen address")
@click.option("--port", type=int, default=None, help="Override listen port")
@click.option("--log-file/--no-log-file", default=True, help="Also write logs to the vaultd log file")
def serve(config: Path | None, host: str | None, port: int | None, log_file: bool):
    """Run the daemon in the foreground."""
    from .main import create_app

    settings = _load(config)
    if host is not None:
        settings.host = host
    if port is not None:
        settings.port = port

    if log_file:
        handler = logging.FileHandler(get_log_file(), encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(handler)

    # The cache lives in process memory, so a second worker would hold a second copy
    if settings.workers != 1:
        logger.warning(f"Ignoring workers={settings.workers}: vaultd runs a single worker")

    uvicorn.run(
        create_app(settings=settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


async def _check(settings: VaultSettings) -> SyncResult | None:
    client = ObsidianRestClient.from_settings(settings)
    service = VaultCacheService.from_settings(settings, client)
    try:
        return await service.build_initial()
    finally:
        await service.aclose()
        await client.aclose()


@cli.command()
@click.option("--config", "config", type=click.Path(path_type=Path), default=None, help="Config file to use")
def check(config: Path | None):
    """Build the cache once and report what was found."""
    settings = _load(config)
    click.echo(f"Checking vault at {settings.obsidian_base_url} ...")
    try:
        result = asyncio.run(_check(settings))
    except Exception as e:
        raise click.ClickException(str(e)) from e

    if result is None or not result.success:
        raise click.ClickException(result.summary() if result else "Build did not run")

    click.echo(result.summary())
    if result.failed_paths:
        click.echo(f"Failed documents ({len(result.failed_paths)}):")
        for path in result.failed_paths:
            click.echo(f"  {path}")


@cli.command("config-path")
def config_path():
    """Print the config file location, creating the default if missing."""
    load_config()
    click.echo(str(get_config_path()))


@cli.command()
@click.option("-n", "--lines", default=50, help="Number of lines to show")
def logs(lines: int):
    """Show the end of the vaultd log file."""
    log_file = get_log_file()
    if not log_file.exists():
        click.echo(f"No logs found at {log_file}")
        return

    with open(log_file, encoding="utf-8") as f:
        for line in deque(f, maxlen=lines):
            click.echo(line.rstrip("\n"))


def main():
    """Entry point for the vaultd command."""
    try:
        cli()
    except KeyboardInterrupt:
        logger.info("Received interrupt, shutting down")
        sys.exit(0)


if __name__ == "__main__":
    main()
