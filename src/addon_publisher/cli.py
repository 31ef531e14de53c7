"""Command line interface for addon publisher."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import aiohttp
import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .domain.catalog.entities import Addon, AddonCatalog
from .domain.catalog.services import CatalogService, publication_order
from .domain.catalog.value_objects import ContentType
from .domain.errors import DomainError
from .exceptions import AddonPublisherError
from .infrastructure.repositories import FileAddonRepository
from .models.config import Config, create_default_config, load_config
from .publishing import PublishingPlatform, default_registry, publish_to_all

console = Console()


def configure_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """Send log records to the console through rich, and optionally to a file."""
    level = logging.DEBUG if verbose else logging.INFO
    handlers: List[logging.Handler] = [
        RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    ]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        handlers.append(file_handler)
    logging.basicConfig(level=level, format="%(message)s", handlers=handlers, force=True)


class AppContext:
    """State shared by every command."""

    def __init__(self, config: Config):
        self.config = config
        self.repository = FileAddonRepository(config.storage.catalog_path)
        self.service = CatalogService(self.repository)


def _resolve_ids(catalog: AddonCatalog, ids: Sequence[str]) -> List[Addon]:
    """Match full ids or unique id prefixes against the catalog."""
    matched = []
    for raw in ids:
        prefix = raw.strip().lower()
        candidates = [a for a in catalog.get_all_addons() if str(a.id).startswith(prefix)]
        if len(candidates) != 1:
            reason = "no addon" if not candidates else "more than one addon"
            raise click.BadParameter(f"'{raw}' matches {reason}", param_hint="ID")
        matched.append(candidates[0])
    return matched


def _addon_table(addons: Sequence[Addon], title: str) -> Table:
    table = Table(title=title)
    table.add_column("", width=1)
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("Version")
    table.add_column("Creator")
    table.add_column("Install path", overflow="fold")
    for addon in addons:
        metadata = addon.metadata
        table.add_row(
            "[green]✓[/green]" if addon.is_selected else "",
            str(addon.id)[:8],
            metadata.title,
            metadata.content_type.value,
            metadata.version,
            metadata.creator,
            addon.install_path,
        )
    return table


def _run(coro):
    """Run a coroutine and report domain errors without a traceback."""
    try:
        return asyncio.run(coro)
    except (AddonPublisherError, DomainError) as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@click.group()
@click.version_option(package_name="addon-publisher")
@click.option('--config', 'config_path', type=click.Path(exists=True, path_type=Path),
              help='Configuration file path')
@click.option('--catalog', 'catalog_path', type=click.Path(path_type=Path),
              help='Catalog file (overrides the configuration)')
@click.option('--verbose', is_flag=True, help='Verbose output')
@click.option('--log-file', type=click.Path(path_type=Path), help='Also write logs to this file')
@click.pass_context
def cli(ctx, config_path: Optional[Path], catalog_path: Optional[Path], verbose: bool,
        log_file: Optional[Path]):
    """Catalog installed addons and announce the selected ones."""
    configure_logging(verbose, log_file)
    try:
        config = load_config(config_path) if config_path else Config.default()
    except AddonPublisherError as e:
        raise click.ClickException(str(e))
    if catalog_path:
        config.storage.catalog_path = catalog_path
    ctx.obj = AppContext(config)


@cli.command(name='list')
@click.option('--type', 'content_type', type=click.Choice([t.value for t in ContentType], case_sensitive=False),
              help='Only show addons of this content type')
@click.option('--selected', is_flag=True, help='Only show selected addons')
@click.pass_obj
def list_addons(app: AppContext, content_type: Optional[str], selected: bool):
    """List the addons in the catalog."""
    catalog = _run(app.service.load_catalog())

    if content_type:
        addons = catalog.get_addons_by_type(ContentType.parse(content_type))
    else:
        addons = catalog.get_all_addons()
    if selected:
        addons = [a for a in addons if a.is_selected]

    if not addons:
        console.print("[yellow]No addons found[/yellow]")
        return

    addons = publication_order(addons)
    console.print(_addon_table(addons, str(catalog)))


async def _change_selection(app: AppContext, ids: Tuple[str, ...], select: bool) -> int:
    catalog = await app.service.load_catalog()
    changed = 0
    for addon in _resolve_ids(catalog, ids):
        if addon.select() if select else addon.deselect():
            changed += 1
    await app.service.save_catalog(catalog)
    return changed


@cli.command()
@click.argument('ids', nargs=-1, required=True)
@click.pass_obj
def select(app: AppContext, ids: Tuple[str, ...]):
    """Select addons by ID (or unique ID prefix)."""
    changed = _run(_change_selection(app, ids, True))
    console.print(f"[green]Selected {changed} addon(s)[/green]")


@cli.command()
@click.argument('ids', nargs=-1, required=True)
@click.pass_obj
def deselect(app: AppContext, ids: Tuple[str, ...]):
    """Deselect addons by ID (or unique ID prefix)."""
    changed = _run(_change_selection(app, ids, False))
    console.print(f"[green]Deselected {changed} addon(s)[/green]")


async def _bulk_selection(app: AppContext, select_all: bool) -> AddonCatalog:
    catalog = await app.service.load_catalog()
    if select_all:
        catalog.select_all()
    else:
        catalog.clear_selection()
    await app.service.save_catalog(catalog)
    return catalog


@cli.command(name='select-all')
@click.pass_obj
def select_all(app: AppContext):
    """Select every addon."""
    catalog = _run(_bulk_selection(app, True))
    console.print(f"[green]{catalog}[/green]")


@cli.command(name='clear-selection')
@click.pass_obj
def clear_selection(app: AppContext):
    """Deselect every addon."""
    catalog = _run(_bulk_selection(app, False))
    console.print(f"[green]{catalog}[/green]")


async def _remove(app: AppContext, raw_id: str) -> Addon:
    catalog = await app.service.load_catalog()
    addon = _resolve_ids(catalog, [raw_id])[0]
    await app.repository.delete(addon.id)
    return addon


@cli.command()
@click.argument('addon_id')
@click.pass_obj
def remove(app: AppContext, addon_id: str):
    """Remove an addon from the catalog."""
    addon = _run(_remove(app, addon_id))
    console.print(f"[green]Removed {addon.metadata.display_name()}[/green]")


def _create_platforms(app: AppContext, names: Tuple[str, ...],
                      session: aiohttp.ClientSession) -> List[PublishingPlatform]:
    registry = default_registry()
    if names:
        return [registry.create(name, app.config.publishing, session) for name in names]
    return registry.create_all(app.config.publishing, session)


async def _publish(app: AppContext, names: Tuple[str, ...]):
    catalog = await app.service.load_catalog()
    selected = publication_order(catalog.get_selected_addons())

    timeout = aiohttp.ClientTimeout(total=app.config.publishing.timeout_seconds)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        platforms = _create_platforms(app, names, session)
        if not platforms:
            raise AddonPublisherError("No publishing platform is configured")
        return await publish_to_all(platforms, selected)


@cli.command()
@click.option('--platform', 'platforms', multiple=True,
              help='Platform to publish to (repeatable). Defaults to every configured platform.')
@click.pass_obj
def publish(app: AppContext, platforms: Tuple[str, ...]):
    """Publish the selected addons."""
    results = _run(_publish(app, platforms))

    all_ok = True
    for name, result in results.items():
        colour = "green" if result.success else ("yellow" if result.is_partial else "red")
        console.print(f"[{colour}]{name}:[/{colour}] {result.message}")
        for error in result.errors:
            console.print(f"  - {error}")
        all_ok = all_ok and result.success

    if not all_ok:
        sys.exit(1)


async def _validate(app: AppContext, names: Tuple[str, ...]):
    async with aiohttp.ClientSession() as session:
        platforms = _create_platforms(app, names, session)
        if not platforms:
            raise AddonPublisherError("No publishing platform is configured")
        checks = await asyncio.gather(*(p.validate_credentials() for p in platforms))
        return {p.platform_name: ok for p, ok in zip(platforms, checks)}


@cli.command()
@click.option('--platform', 'platforms', multiple=True,
              help='Platform to check (repeatable). Defaults to every configured platform.')
@click.pass_obj
def validate(app: AppContext, platforms: Tuple[str, ...]):
    """Check that platform endpoints accept requests."""
    checks = _run(_validate(app, platforms))
    for name, ok in checks.items():
        status = "[green]OK[/green]" if ok else "[red]FAILED[/red]"
        console.print(f"{name}: {status}")
    if not all(checks.values()):
        sys.exit(1)


@cli.command(name='init-config')
@click.argument('path', type=click.Path(path_type=Path))
def init_config(path: Path):
    """Write a default configuration file to PATH."""
    if path.exists() and not click.confirm(f"{path} exists. Overwrite?"):
        console.print("[yellow]Cancelled[/yellow]")
        return
    create_default_config(path)
    console.print(f"[green]Wrote default configuration to {path}[/green]")


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
