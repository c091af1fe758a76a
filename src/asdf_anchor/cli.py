"""Command line entry points called by asdf."""
import asyncio
from typing import Any, Coroutine

import click

from asdf_anchor import __version__
from asdf_anchor.constants import (
    DEFAULT_INSTALL_TYPE,
    INSTALL_PATH_ENV,
    INSTALL_TYPE_ENV,
    INSTALL_VERSION_ENV,
    LOG_LEVEL_ENV,
    PLUGIN_NAME,
)
from asdf_anchor.errors import PluginError, log_error
from asdf_anchor.installer import install as install_version
from asdf_anchor.logging import DEFAULT_LOG_LEVEL, configure_logging, get_logger
from asdf_anchor.types import PluginConfig
from asdf_anchor.versions import latest_stable as find_latest_stable
from asdf_anchor.versions import list_versions

logger = get_logger("cli")


def run(ctx: click.Context, coro: Coroutine[Any, Any, Any]) -> Any:
    """Run ``coro`` to completion, turning plugin errors into exit code 1."""
    try:
        return asyncio.run(coro)
    except PluginError as e:
        log_error(e, logger=logger, level="debug")
        click.echo(f"{PLUGIN_NAME}: {e}", err=True)
        ctx.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name=PLUGIN_NAME)
@click.option(
    "--log-level",
    envvar=LOG_LEVEL_ENV,
    default=DEFAULT_LOG_LEVEL,
    show_default=True,
    help="Log level for messages written to stderr.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str) -> None:
    """asdf plugin for the Anchor CLI."""
    configure_logging(log_level)
    ctx.obj = PluginConfig.from_env()


@cli.command("list-all")
@click.pass_context
def list_all(ctx: click.Context) -> None:
    """Print every installable version, oldest first."""
    versions = run(ctx, list_versions(ctx.obj))
    click.echo(" ".join(versions))


@cli.command("latest-stable")
@click.argument("query", default="")
@click.pass_context
def latest_stable(ctx: click.Context, query: str) -> None:
    """Print the newest stable version starting with QUERY."""
    click.echo(run(ctx, find_latest_stable(ctx.obj, query)))


@cli.command()
@click.option(
    "--install-type",
    envvar=INSTALL_TYPE_ENV,
    default=DEFAULT_INSTALL_TYPE,
    show_default=True,
)
@click.option("--version", "version", envvar=INSTALL_VERSION_ENV, required=True)
@click.option(
    "--install-path",
    envvar=INSTALL_PATH_ENV,
    required=True,
    type=click.Path(file_okay=False),
)
@click.pass_context
def install(ctx: click.Context, install_type: str, version: str, install_path: str) -> None:
    """Install VERSION into INSTALL_PATH/bin."""
    run(ctx, install_version(install_type, version, install_path, ctx.obj))


def main() -> None:
    cli()
