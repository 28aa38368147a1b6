"""CLI entry point for the token cache."""

import sys
from pathlib import Path

import click
import structlog

from token_cache.cli.credentials import credentials_group
from token_cache.config import CacheSettings
from token_cache.exceptions import ConfigurationError
from token_cache.utils.logging_config import configure_logging

log = structlog.get_logger(__name__)


@click.group()
@click.option(
    "--config",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to YAML configuration file",
)
@click.option("--log-level", default="WARNING", help="Logging level")
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"]),
    default="console",
    help="Log line format",
)
@click.pass_context
def cli(ctx: click.Context, config: Path | None, log_level: str, log_format: str) -> None:
    """token-cache: cached authentication tokens for database drivers."""
    configure_logging(log_level, json_output=log_format == "json")

    if config is None:
        ctx.obj = {"settings": None}
        return

    try:
        settings = CacheSettings.from_yaml(str(config))
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        log.debug("config_error", exc_info=True)
        sys.exit(1)

    ctx.obj = {"settings": settings}


cli.add_command(credentials_group)


if __name__ == "__main__":
    cli()
