"""
dapsd — CLI entrypoint.

Usage:
    dapsd --help
    dapsd serve --port 8080
    dapsd resolve rust.docs daps index.html
    dapsd projects --json
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from dapsd import __version__
from dapsd.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    level_from_flags,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="dapsd")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to dapsd.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """dapsd — serve project documentation from registered directories."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=level_from_flags(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
        quiet_third_party=not debug,
    )


def _load_config(ctx: click.Context):  # type: ignore[no-untyped-def]
    """Load config or exit with a readable error."""
    from dapsd.core.config.loader import ConfigError, load_config

    try:
        return load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)


def _seeded_service(ctx: click.Context):  # type: ignore[no-untyped-def]
    """Process-wide service with the config's projects registered."""
    from dapsd.core.config.loader import ConfigError, seed_registry
    from dapsd.core.context import get_directory_service

    config = _load_config(ctx)
    service = get_directory_service()
    try:
        seed_registry(config, service)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)
    return config, service


@cli.command()
@click.option("--host", default=None, help="Address to bind (default: from config).")
@click.option("--port", "-p", type=int, default=None, help="Port to bind (default: from config).")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Start the documentation server."""
    from dapsd.ui.web.server import create_app, run_server

    config, service = _seeded_service(ctx)
    app = create_app(service=service)

    bind_host = host or config.server.host
    bind_port = port if port is not None else config.server.port

    if not ctx.obj.get("quiet"):
        click.secho(f"\n📚 dapsd {__version__}", fg="cyan", bold=True)
        click.echo(f"   Listening on http://{bind_host}:{bind_port}")
        click.echo(f"   Projects: {len(service.registry)}")
        click.echo()

    run_server(app, host=bind_host, port=bind_port, debug=ctx.obj.get("debug", False))


@cli.command()
@click.argument("host")
@click.argument("project_name")
@click.argument("requested_path", default="")
@click.pass_context
def resolve(ctx: click.Context, host: str, project_name: str, requested_path: str) -> None:
    """Resolve a request against the configured projects.

    Prints the on-disk path a request would be served from, without
    reading it.

    Examples:

        dapsd resolve rust.docs daps index.html

        dapsd resolve rust.docs daps ../secret.txt
    """
    from dapsd.core.errors import ResolveError

    _, service = _seeded_service(ctx)
    try:
        path = service.resolve_request(host, project_name, requested_path)
    except ResolveError as e:
        click.secho(f"❌ {e.label}: {e}", fg="red")
        sys.exit(1)

    click.echo(str(path))


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def projects(ctx: click.Context, as_json: bool) -> None:
    """List the projects registered from config."""
    _, service = _seeded_service(ctx)
    entries = service.list_projects()

    if as_json:
        click.echo(json.dumps([e.to_dict() for e in entries], indent=2))
        return

    if not entries:
        click.echo("No projects registered.")
        return

    click.secho(f"\n📚 Projects: {len(entries)}", fg="cyan", bold=True)
    for entry in entries:
        click.echo(f"   • {entry.language}.docs/{entry.project_name}  → {entry.directory}")
    click.echo()


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
