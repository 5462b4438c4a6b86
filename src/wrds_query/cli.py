"""
CLI entry point for wrds-query.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from .config.env import config as env_config
from .config.loader import load_settings
from .config.schema import ConnectionSettings
from .explorer import describe_table, list_libraries, list_tables
from .queries import get_table, raw_sql
from .render import render_result


def _resolve_settings(ctx: click.Context) -> ConnectionSettings:
    """Settings from --config when given, otherwise from WRDS_* variables."""
    opts = ctx.obj
    if opts["config"] is not None:
        settings = load_settings(opts["config"])
        if opts["username"]:
            settings = settings.model_copy(update={"username": opts["username"]})
        return settings
    return env_config.connection_settings(opts["username"])


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version="0.1.0")
@click.option(
    "-c", "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to YAML connection settings"
)
@click.option("-u", "--username", help="WRDS username (overrides config and WRDS_USERNAME)")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity")
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], username: Optional[str], verbose: int):
    """wrds-query - Explore and query the WRDS data warehouse."""
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = getattr(logging, env_config.LOG_LEVEL, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    ctx.ensure_object(dict)
    ctx.obj.update(config=config, username=username)


@cli.command()
@click.option("--all", "show_all", is_flag=True, help="List every schema instead of SAS libraries")
@click.option("--sas-only", is_flag=True, help="Only print SAS library names")
@click.pass_context
def libraries(ctx: click.Context, show_all: bool, sas_only: bool):
    """List available libraries."""
    try:
        settings = _resolve_settings(ctx)
        names = list_libraries(settings, print=not (show_all or sas_only), sas_only=sas_only)
        if show_all or sas_only:
            for name in names:
                click.echo(name)
    except Exception as e:
        _fail(e)


@cli.command()
@click.argument("library")
@click.option("--no-verify-links", is_flag=True, help="Build URLs without looking up backing schemas")
@click.pass_context
def tables(ctx: click.Context, library: str, no_verify_links: bool):
    """List the tables of LIBRARY."""
    try:
        settings = _resolve_settings(ctx)
        list_tables(settings, library, verify_links=not no_verify_links)
    except Exception as e:
        _fail(e)


@cli.command()
@click.argument("library")
@click.argument("table")
@click.option(
    "-p", "--property", "properties",
    multiple=True,
    help="information_schema.columns field to show (repeatable)"
)
@click.pass_context
def describe(ctx: click.Context, library: str, table: str, properties: Tuple[str, ...]):
    """Describe the columns of LIBRARY.TABLE."""
    try:
        settings = _resolve_settings(ctx)
        if properties:
            describe_table(settings, library, table, properties=properties)
        else:
            describe_table(settings, library, table)
    except Exception as e:
        _fail(e)


@cli.command()
@click.argument("library")
@click.argument("table")
@click.option("--columns", help="Comma-separated column list")
@click.option("--where", "conditions", multiple=True, help="Filter condition (repeatable, joined with AND)")
@click.option("--limit", default=10, type=int, show_default=True, help="Maximum rows to fetch")
@click.option("--all-rows", is_flag=True, help="Fetch the whole table")
@click.option("--offset", default=0, type=int, help="Rows to skip")
@click.pass_context
def get(
    ctx: click.Context,
    library: str,
    table: str,
    columns: Optional[str],
    conditions: Tuple[str, ...],
    limit: int,
    all_rows: bool,
    offset: int,
):
    """Fetch rows from LIBRARY.TABLE."""
    try:
        settings = _resolve_settings(ctx)
        result = get_table(
            settings,
            library,
            table,
            columns=[c.strip() for c in columns.split(",")] if columns else None,
            where=list(conditions) or None,
            limit=None if all_rows else limit,
            offset=offset,
        )
        render_result(result)
    except Exception as e:
        _fail(e)


@cli.command()
@click.argument("query")
@click.pass_context
def sql(ctx: click.Context, query: str):
    """Run QUERY and print the result."""
    try:
        settings = _resolve_settings(ctx)
        render_result(raw_sql(settings, query))
    except Exception as e:
        _fail(e)


@cli.command()
@click.option(
    "-c", "--config",
    required=True,
    type=click.Path(exists=True, path_type=Path),
    help="Path to YAML connection settings"
)
def validate(config: Path):
    """Validate a settings file without connecting."""
    
    try:
        click.echo(f"Validating {config}...")
        settings = load_settings(config)
        
        click.echo(click.style("✓ Configuration is valid!", fg="green"))
        click.echo(f"  User: {settings.username}")
        click.echo(f"  Server: {settings.host}:{settings.port}/{settings.dbname}")
        if settings.password:
            click.echo("  Auth: password")
        elif settings.passfile:
            click.echo(f"  Auth: passfile {settings.passfile}")
        else:
            click.echo("  Auth: libpq default")
            
    except FileNotFoundError as e:
        click.echo(click.style(f"✗ Error: {e}", fg="red"), err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(click.style(f"✗ Validation failed: {e}", fg="red"), err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
