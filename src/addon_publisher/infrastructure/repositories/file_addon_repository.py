"""
File-based Addon Repository.

Persists the full addon set as a single JSON document. Every mutating
operation reads the whole document, applies its change and writes the whole
document back while holding the repository's lock.
"""

import asyncio
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

import aiofiles
import aiofiles.os

from ...domain.catalog.entities import Addon, as_utc
from ...domain.catalog.repositories import AddonRepository
from ...domain.catalog.value_objects import AddonMetadata, ContentType
from ...domain.errors import AlreadyExistsError, DomainError, NotFoundError
from ...exceptions import StorageError
from ...models.config import default_catalog_path

logger = logging.getLogger(__name__)


def _format_timestamp(value: datetime) -> str:
    return as_utc(value).isoformat()


def _parse_timestamp(value: str) -> datetime:
    return as_utc(datetime.fromisoformat(value))


def addon_to_record(addon: Addon) -> Dict[str, Any]:
    """Convert an Addon into its stored record."""
    metadata = addon.metadata
    return {
        "id": str(addon.id),
        "title": metadata.title,
        "creator": metadata.creator,
        "version": metadata.version,
        "contentType": metadata.content_type.value,
        "packageVersion": metadata.package_version,
        "minimumGameVersion": metadata.minimum_game_version,
        "releaseNotes": dict(metadata.release_notes),
        "installPath": addon.install_path,
        "isSelected": addon.is_selected,
        "discoveredAt": _format_timestamp(addon.discovered_at),
        "createdAt": _format_timestamp(addon.created_at),
        "updatedAt": _format_timestamp(addon.updated_at),
    }


def record_to_addon(record: Dict[str, Any]) -> Addon:
    """Convert a stored record into an Addon."""
    metadata = AddonMetadata(
        title=record["title"],
        creator=record["creator"],
        version=record["version"],
        content_type=ContentType.parse(record["contentType"]),
        package_version=record["packageVersion"],
        minimum_game_version=record["minimumGameVersion"],
        release_notes=record.get("releaseNotes") or {},
    )
    return Addon(
        metadata,
        record["installPath"],
        _parse_timestamp(record["discoveredAt"]),
        id=record["id"],
        is_selected=bool(record.get("isSelected", False)),
        created_at=_parse_timestamp(record["createdAt"]),
        updated_at=_parse_timestamp(record["updatedAt"]),
    )


class FileAddonRepository(AddonRepository):
    """JSON file implementation of AddonRepository."""

    def __init__(self, file_path: Optional[Union[str, Path]] = None):
        self.file_path = Path(file_path) if file_path else default_catalog_path()
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        self._tmp_path = self.file_path.with_name(self.file_path.name + ".tmp")
        self._lock = asyncio.Lock()

    async def _read_all(self) -> List[Addon]:
        """Load every addon from the file. Caller holds the lock."""
        if not await aiofiles.os.path.exists(self.file_path):
            return []

        async with aiofiles.open(self.file_path, 'r', encoding='utf-8') as f:
            text = await f.read()

        if not text.strip():
            return []

        try:
            records = json.loads(text)
            if not isinstance(records, list):
                raise StorageError(f"Catalog file {self.file_path} does not hold a list of addons")
            return [record_to_addon(record) for record in records]
        except (KeyError, TypeError, ValueError, DomainError) as e:
            raise StorageError(f"Catalog file {self.file_path} is corrupt: {e}") from e

    async def _write_all(self, addons: List[Addon]) -> None:
        """Replace the file with the given addons. Caller holds the lock."""
        text = json.dumps([addon_to_record(addon) for addon in addons], indent=2, ensure_ascii=False)

        async with aiofiles.open(self._tmp_path, 'w', encoding='utf-8') as f:
            await f.write(text)
            await f.flush()
        await aiofiles.os.replace(self._tmp_path, self.file_path)
        logger.debug(f"Wrote {len(addons)} addons to {self.file_path}")

    async def get_all(self) -> List[Addon]:
        """Get every stored addon."""
        async with self._lock:
            return await self._read_all()

    async def get_by_id(self, addon_id: UUID) -> Optional[Addon]:
        """Find an addon by its ID."""
        addons = await self.get_all()
        return next((addon for addon in addons if addon.id == addon_id), None)

    async def add(self, addon: Addon) -> None:
        """Store a new addon."""
        if addon is None:
            raise TypeError("addon cannot be None")

        async with self._lock:
            addons = await self._read_all()
            if any(existing.id == addon.id for existing in addons):
                raise AlreadyExistsError(f"Addon with ID {addon.id} already exists.")
            addons.append(addon)
            await self._write_all(addons)

    async def update(self, addon: Addon) -> None:
        """Replace a stored addon."""
        if addon is None:
            raise TypeError("addon cannot be None")

        async with self._lock:
            addons = await self._read_all()
            for index, existing in enumerate(addons):
                if existing.id == addon.id:
                    addons[index] = addon
                    break
            else:
                raise NotFoundError(f"Addon with ID {addon.id} not found.")
            await self._write_all(addons)

    async def delete(self, addon_id: UUID) -> None:
        """Delete a stored addon."""
        async with self._lock:
            addons = await self._read_all()
            remaining = [addon for addon in addons if addon.id != addon_id]
            if len(remaining) == len(addons):
                raise NotFoundError(f"Addon with ID {addon_id} not found.")
            await self._write_all(remaining)

    async def count(self) -> int:
        """Get total count of addons."""
        return len(await self.get_all())
