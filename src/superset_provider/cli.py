"""
CLI entry point for the Superset provider.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import click
from pydantic import ValidationError

from .config.loader import load_config
from .config.schema import ProviderFile
from .data_sources import DATA_SOURCE_TYPES
from .models import dump_state
from .provider import SupersetProvider
from .resources import RESOURCE_TYPES, Diagnostic, ResourceResponse


def _echo_diagnostics(diagnostics: List[Diagnostic]):
    for diagnostic in diagnostics:
        color = "red" if diagnostic.severity == "error" else "yellow"
        where = f" ({diagnostic.attribute})" if diagnostic.attribute else ""
        click.echo(click.style(f"✗ {diagnostic.summary}{where}", fg=color), err=True)
        if diagnostic.detail:
            click.echo(f"  {diagnostic.detail}", err=True)


def _echo_state(response: ResourceResponse, indent: int):
    if response.diagnostics:
        _echo_diagnostics(response.diagnostics)
    if response.has_error or response.state is None:
        sys.exit(1)
    click.echo(json.dumps(dump_state(response.state), indent=indent, ensure_ascii=False))


async def _with_provider(sync_config: ProviderFile, action):
    provider = SupersetProvider()
    configured = await provider.configure(sync_config.provider)
    if configured.has_error:
        return ResourceResponse(diagnostics=configured.diagnostics)
    try:
        return await action(provider)
    finally:
        await provider.close()


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Superset Provider - Manage Superset roles, databases and datasets."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option(
    "-c", "--config",
    required=True,
    type=click.Path(exists=True, path_type=Path),
    help="Path to YAML configuration file"
)
def validate(config: Path):
    """Validate a configuration file without connecting to Superset."""

    try:
        click.echo(f"Validating {config}...")
        sync_config = load_config(config)
    except Exception as e:
        click.echo(click.style(f"✗ Validation failed: {e}", fg="red"), err=True)
        sys.exit(1)

    failed = False
    for declaration in sync_config.resources:
        resource_cls = RESOURCE_TYPES.get(declaration.type)
        if resource_cls is None:
            click.echo(click.style(
                f"✗ {declaration.name}: unknown resource type '{declaration.type}'", fg="red"
            ), err=True)
            failed = True
            continue
        try:
            plan = resource_cls.state_model.model_validate(declaration.values)
        except ValidationError as e:
            click.echo(click.style(f"✗ {declaration.name}: {e}", fg="red"), err=True)
            failed = True
            continue
        diagnostics = resource_cls.validate(plan)
        if diagnostics:
            click.echo(click.style(f"✗ {declaration.name}:", fg="red"), err=True)
            _echo_diagnostics(diagnostics)
            failed = True

    if failed:
        sys.exit(1)

    click.echo(click.style("✓ Configuration is valid!", fg="green"))
    click.echo(f"  Host: {sync_config.provider.host or '(from SUPERSET_HOST)'}")
    click.echo(f"  Resources: {len(sync_config.resources)}")


@cli.command(name="import")
@click.argument("resource_type", type=click.Choice(sorted(RESOURCE_TYPES)))
@click.argument("import_id")
@click.option(
    "-c", "--config",
    required=True,
    type=click.Path(exists=True, path_type=Path),
    help="Path to YAML configuration file"
)
@click.option("--indent", default=2, type=int, help="JSON indentation level")
def import_(resource_type: str, import_id: str, config: Path, indent: int):
    """Import an existing Superset object by ID and print its state."""

    try:
        sync_config = load_config(config)
    except Exception as e:
        click.echo(click.style(f"✗ Error: {e}", fg="red"), err=True)
        sys.exit(1)

    async def action(provider: SupersetProvider):
        return await provider.resource(resource_type).import_state(import_id)

    response = asyncio.run(_with_provider(sync_config, action))
    _echo_state(response, indent)


@cli.command()
@click.argument("data_source", type=click.Choice(sorted(DATA_SOURCE_TYPES)))
@click.option(
    "-c", "--config",
    required=True,
    type=click.Path(exists=True, path_type=Path),
    help="Path to YAML configuration file"
)
@click.option("--role-name", default=None, help="Role to read, for superset_role_permissions")
@click.option("--indent", default=2, type=int, help="JSON indentation level")
def read(data_source: str, config: Path, role_name: Optional[str], indent: int):
    """Read a data source and print it as JSON."""

    try:
        sync_config = load_config(config)
    except Exception as e:
        click.echo(click.style(f"✗ Error: {e}", fg="red"), err=True)
        sys.exit(1)

    source_config = {"role_name": role_name} if role_name else {}

    async def action(provider: SupersetProvider):
        return await provider.data_source(data_source).read(source_config)

    response = asyncio.run(_with_provider(sync_config, action))
    _echo_state(response, indent)


if __name__ == "__main__":
    cli()
