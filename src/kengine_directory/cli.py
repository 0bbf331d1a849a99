"""
Command-line interface for kengine-directory

Provides CLI commands for:
- Listing tenant namespaces: kengine-directory namespaces
- Showing backend configs: kengine-directory show --namespace default
- Resolving a tenant: kengine-directory resolve user@example.com
"""

import json
from typing import Any, Optional

import click
import yaml

from . import __version__
from .context import NON_SAAS_DIR_KEY, new_context_with_namespace
from .directory import get_directory
from .errors import DirectoryError
from .settings import DirectorySettings, configure_logging, load_settings

SECRET_MASK = "******"


def mask_secrets(data: Any) -> Any:
    """Replace non-empty password values in a dumped config"""
    if isinstance(data, dict):
        return {
            key: SECRET_MASK
            if key == "password" and value
            else mask_secrets(value)
            for key, value in data.items()
        }
    return data


@click.group()
@click.version_option(version=__version__, prog_name="kengine-directory")
@click.pass_context
def cli(ctx: click.Context):
    """kengine-directory - per-tenant backend configuration registry"""
    settings = load_settings()
    configure_logging(settings)
    ctx.obj = settings


@cli.command()
def namespaces():
    """List tenant namespaces"""
    directory = get_directory()
    mode = "saas" if directory.saas_mode else "single-tenant"
    click.echo(f"Mode: {mode}")
    for ns in sorted(directory.get_all_namespaces()):
        click.echo(ns)


@cli.command()
@click.option("--namespace", default=NON_SAAS_DIR_KEY, help="Namespace to show")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["yaml", "json"]),
    default=None,
    help="Output format",
)
@click.option("--show-secrets", is_flag=True, help="Do not mask passwords")
@click.pass_context
def show(
    ctx: click.Context,
    namespace: str,
    output_format: Optional[str],
    show_secrets: bool,
):
    """Show backend configuration for a namespace"""
    settings: DirectorySettings = ctx.obj
    output_format = output_format or settings.output_format
    show_secrets = show_secrets or settings.show_secrets

    try:
        cfg = get_directory().get_database_config(new_context_with_namespace(namespace))
    except DirectoryError as e:
        click.echo(f"❌ {e}", err=True)
        ctx.exit(1)

    data = cfg.model_dump()
    if not show_secrets:
        data = mask_secrets(data)

    if output_format == "json":
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(yaml.dump(data, default_flow_style=False, indent=2), nl=False)


@cli.command()
@click.argument("identity")
@click.pass_context
def resolve(ctx: click.Context, identity: str):
    """Resolve the tenant namespace for a user identity"""
    try:
        click.echo(get_directory().resolve_tenant(identity))
    except DirectoryError as e:
        click.echo(f"❌ {e}", err=True)
        ctx.exit(1)


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == "__main__":
    main()
