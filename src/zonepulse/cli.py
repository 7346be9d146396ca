"""Root CLI group for zonepulse with global flags and command registration."""

from __future__ import annotations

import click

from zonepulse import __version__
from zonepulse.commands import register_commands
from zonepulse.commands._context import AppContext
from zonepulse.config.settings import ConfigError, PulseSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="zonepulse")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--db", "db_url", default=None, help="Backing store URL (overrides [database] url).")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    db_url: str | None,
) -> None:
    """zonepulse: market-data layers, histories and zone scores."""
    ctx.ensure_object(dict)
    try:
        settings = PulseSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
            database={"url": db_url} if db_url else None,
        )
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
