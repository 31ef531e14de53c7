"""Catalog Context Domain Services.

Domain services contain business logic that doesn't naturally fit in entities
or value objects. The catalog service moves addons between the in-memory
aggregate and the repository, applies scanner output to the catalog, and
hands the selection to a publishing platform.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, List, Set
from uuid import UUID

from .entities import Addon, AddonCatalog, utcnow
from .repositories import AddonRepository
from .value_objects import PublishResult

if TYPE_CHECKING:
    from ...publishing.base import PublishingPlatform

logger = logging.getLogger(__name__)


def publication_order(addons: Iterable[Addon]) -> List[Addon]:
    """Order addons for announcement: by title, then id for equal titles."""
    return sorted(addons, key=lambda a: (a.title.lower(), str(a.id)))


@dataclass
class SyncSummary:
    """What a scan sync changed in the catalog."""
    added: List[UUID] = field(default_factory=list)
    replaced: List[UUID] = field(default_factory=list)
    removed: List[UUID] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.replaced or self.removed)


class CatalogService:
    """Service bridging the AddonCatalog aggregate and an AddonRepository."""

    def __init__(self, repository: AddonRepository):
        self.repository = repository

    async def load_catalog(self) -> AddonCatalog:
        """Build a catalog from every stored addon."""
        addons = await self.repository.get_all()
        catalog = AddonCatalog(addons={addon.id: addon for addon in addons})
        logger.info(f"Loaded catalog with {catalog.count} addons")
        return catalog

    async def save_catalog(self, catalog: AddonCatalog) -> None:
        """Flush the catalog so the repository holds exactly its addons."""
        stored_ids = {addon.id for addon in await self.repository.get_all()}
        current = catalog.get_all_addons()

        for addon in current:
            if addon.id in stored_ids:
                await self.repository.update(addon)
            else:
                await self.repository.add(addon)

        for stale_id in stored_ids - {addon.id for addon in current}:
            await self.repository.delete(stale_id)

        logger.debug(f"Saved catalog with {len(current)} addons")

    def register_discovered(self, catalog: AddonCatalog, discovered: Iterable[Addon]) -> SyncSummary:
        """Add or replace scanner output in the catalog.

        A rediscovered addon (same id, or same install path) keeps its
        identity, creation time and selection flag but takes the new
        metadata and path. Id matches win over path matches, and each
        catalog addon is matched at most once per batch.
        """
        discovered = list(discovered)
        summary = SyncSummary()
        by_path: Dict[str, Addon] = {a.install_path: a for a in catalog.get_all_addons()}
        claimed: Set[UUID] = {a.id for a in discovered if catalog.contains_addon(a.id)}
        matched: Set[UUID] = set()

        for addon in discovered:
            existing = catalog.get_addon_by_id(addon.id)
            if existing is None:
                candidate = by_path.get(addon.install_path)
                if candidate is not None and candidate.id not in claimed and candidate.id not in matched:
                    existing = candidate
            if existing is None:
                catalog.add_addon(addon)
                by_path[addon.install_path] = addon
                matched.add(addon.id)
                summary.added.append(addon.id)
                continue

            replacement = Addon(
                addon.metadata,
                addon.install_path,
                addon.discovered_at,
                id=existing.id,
                is_selected=existing.is_selected,
                created_at=existing.created_at,
                updated_at=utcnow(),
            )
            catalog.add_addon(replacement)
            if by_path.get(existing.install_path) is existing:
                del by_path[existing.install_path]
            by_path[replacement.install_path] = replacement
            if existing.id not in matched:
                matched.add(existing.id)
                summary.replaced.append(existing.id)

        return summary

    def sync_discovered(self, catalog: AddonCatalog, discovered: Iterable[Addon]) -> SyncSummary:
        """Apply a full scan: register what was found, drop what is gone."""
        discovered = list(discovered)
        summary = self.register_discovered(catalog, discovered)

        present = set(summary.added) | set(summary.replaced)
        for addon in catalog.get_all_addons():
            if addon.id not in present and catalog.remove_addon(addon.id):
                summary.removed.append(addon.id)

        logger.info(
            f"Scan sync: {len(summary.added)} added, "
            f"{len(summary.replaced)} replaced, {len(summary.removed)} removed"
        )
        return summary

    async def publish_selected(self, catalog: AddonCatalog, platform: "PublishingPlatform") -> PublishResult:
        """Publish the catalog's selection, ordered by title."""
        return await platform.publish(publication_order(catalog.get_selected_addons()))
