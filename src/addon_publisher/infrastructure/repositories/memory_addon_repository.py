"""
In-memory Addon Repository.

Implements the AddonRepository contract without touching the filesystem, for
tests and for running the catalog without a persistent store. Like the file
store, it keeps its own copies: callers never share an Addon instance with it.
"""

from typing import Dict, List, Optional
from uuid import UUID

from ...domain.catalog.entities import Addon
from ...domain.catalog.repositories import AddonRepository
from ...domain.errors import AlreadyExistsError, NotFoundError


def _copy(addon: Addon) -> Addon:
    return Addon(
        addon.metadata,
        addon.install_path,
        addon.discovered_at,
        id=addon.id,
        is_selected=addon.is_selected,
        created_at=addon.created_at,
        updated_at=addon.updated_at,
    )


class InMemoryAddonRepository(AddonRepository):
    """In-memory implementation of AddonRepository for testing and development."""

    def __init__(self) -> None:
        self._addons: Dict[UUID, Addon] = {}

    async def get_all(self) -> List[Addon]:
        return [_copy(addon) for addon in self._addons.values()]

    async def get_by_id(self, addon_id: UUID) -> Optional[Addon]:
        addon = self._addons.get(addon_id)
        return _copy(addon) if addon is not None else None

    async def add(self, addon: Addon) -> None:
        if addon is None:
            raise TypeError("addon cannot be None")
        if addon.id in self._addons:
            raise AlreadyExistsError(f"Addon with ID {addon.id} already exists.")
        self._addons[addon.id] = _copy(addon)

    async def update(self, addon: Addon) -> None:
        if addon is None:
            raise TypeError("addon cannot be None")
        if addon.id not in self._addons:
            raise NotFoundError(f"Addon with ID {addon.id} not found.")
        self._addons[addon.id] = _copy(addon)

    async def delete(self, addon_id: UUID) -> None:
        if self._addons.pop(addon_id, None) is None:
            raise NotFoundError(f"Addon with ID {addon_id} not found.")

    async def count(self) -> int:
        return len(self._addons)
