"""Catalog Context Entities.

This module defines the core entities for the Catalog bounded context.
The Catalog context is responsible for tracking discovered addons and the
user's selection over them.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple, Union
from uuid import UUID, uuid4

from ..errors import ValidationError
from .value_objects import AddonMetadata, ContentType

EMPTY_ID = UUID(int=0)


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat a naive timestamp as UTC; aware ones are returned unchanged."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def coerce_id(value: Union[UUID, str, None], label: str = "Id") -> UUID:
    """Turn a UUID or its string form into a UUID, rejecting empty ids."""
    if value is None:
        raise ValidationError(f"{label} cannot be empty.")
    if not isinstance(value, UUID):
        try:
            value = UUID(str(value))
        except ValueError as e:
            raise ValidationError(f"{label} is not a valid identifier: {value!r}") from e
    if value == EMPTY_ID:
        raise ValidationError(f"{label} cannot be empty.")
    return value


class Addon:
    """
    A single discovered addon installation.

    Identity is the ``id`` alone: two instances with the same id are the same
    logical addon even if their metadata differs. The selection flag can only
    change through ``select``, ``deselect`` and ``toggle_selection``, and
    ``updated_at`` only moves when the flag actually changes.
    """

    __slots__ = (
        "_id",
        "_metadata",
        "_install_path",
        "_is_selected",
        "_discovered_at",
        "_created_at",
        "_updated_at",
    )

    def __init__(
        self,
        metadata: AddonMetadata,
        install_path: Union[str, Path],
        discovered_at: Optional[datetime] = None,
        *,
        id: Union[UUID, str, None] = None,
        is_selected: bool = False,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ) -> None:
        if not isinstance(metadata, AddonMetadata):
            raise TypeError(f"metadata must be AddonMetadata, got {type(metadata).__name__}")

        if isinstance(install_path, Path):
            install_path = str(install_path)
        if not isinstance(install_path, str) or not install_path.strip():
            raise ValidationError("Install path cannot be empty or whitespace.")

        now = utcnow()
        self._id = uuid4() if id is None else coerce_id(id)
        self._metadata = metadata
        self._install_path = install_path
        self._is_selected = bool(is_selected)
        self._discovered_at = as_utc(discovered_at) or now
        self._created_at = as_utc(created_at) or now
        self._updated_at = as_utc(updated_at) or self._created_at

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def metadata(self) -> AddonMetadata:
        return self._metadata

    @property
    def install_path(self) -> str:
        return self._install_path

    @property
    def is_selected(self) -> bool:
        return self._is_selected

    @property
    def discovered_at(self) -> datetime:
        return self._discovered_at

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def title(self) -> str:
        """Get the addon title."""
        return self._metadata.title

    @property
    def content_type(self) -> ContentType:
        """Get the addon content type."""
        return self._metadata.content_type

    def select(self) -> bool:
        """Mark the addon as selected. Returns True if the state changed."""
        if self._is_selected:
            return False
        self._set_selected(True)
        return True

    def deselect(self) -> bool:
        """Clear the selection flag. Returns True if the state changed."""
        if not self._is_selected:
            return False
        self._set_selected(False)
        return True

    def toggle_selection(self) -> bool:
        """Flip the selection flag. Always a change, so always returns True."""
        self._set_selected(not self._is_selected)
        return True

    def _set_selected(self, value: bool) -> None:
        self._is_selected = value
        self._updated_at = max(self._updated_at, utcnow())

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Addon):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Addon(id={self._id!s}, title={self._metadata.title!r}, selected={self._is_selected})"

    def __str__(self) -> str:
        return (
            f"Addon: {self._metadata.title} v{self._metadata.version} "
            f"({self._metadata.content_type}) at {self._install_path}"
        )


class AddonCatalog:
    """
    Aggregate root over the set of known addons and the current selection.

    ``updated_at`` is a watermark: it only advances when an operation
    changes something observable, and it never moves backwards.
    """

    def __init__(
        self,
        id: Union[UUID, str, None] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        addons: Optional[Mapping[UUID, Addon]] = None,
    ) -> None:
        now = utcnow()
        self._id = uuid4() if id is None else coerce_id(id, "Catalog id")
        self._created_at = as_utc(created_at) or now
        self._updated_at = as_utc(updated_at) or self._created_at

        # Own copy; later changes to the source map are not seen here
        self._addons: Dict[UUID, Addon] = {}
        for key, addon in (addons or {}).items():
            if not isinstance(addon, Addon):
                raise TypeError(f"Catalog entries must be Addon, got {type(addon).__name__}")
            if coerce_id(key) != addon.id:
                raise ValidationError(f"Catalog key {key} does not match addon id {addon.id}.")
            self._addons[addon.id] = addon

    @classmethod
    def reconstitute(
        cls,
        id: Union[UUID, str],
        created_at: datetime,
        updated_at: datetime,
        addons: Mapping[UUID, Addon],
    ) -> "AddonCatalog":
        """Rebuild a catalog from stored state."""
        if addons is None:
            raise TypeError("addons cannot be None")
        return cls(id=coerce_id(id, "Catalog id"), created_at=created_at, updated_at=updated_at, addons=addons)

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def count(self) -> int:
        """Get number of addons in the catalog."""
        return len(self._addons)

    @property
    def selected_count(self) -> int:
        """Get number of selected addons."""
        return sum(1 for addon in self._addons.values() if addon.is_selected)

    def __len__(self) -> int:
        return len(self._addons)

    def __contains__(self, addon_id: Any) -> bool:
        return addon_id in self._addons

    def _touch(self) -> None:
        self._updated_at = max(self._updated_at, utcnow())

    def add_addon(self, addon: Addon) -> None:
        """Insert an addon, replacing any existing addon with the same id."""
        if addon is None:
            raise TypeError("addon cannot be None")
        if not isinstance(addon, Addon):
            raise TypeError(f"addon must be Addon, got {type(addon).__name__}")
        self._addons[addon.id] = addon
        self._touch()

    def remove_addon(self, addon_id: UUID) -> bool:
        """Remove an addon. Returns False when no addon has that id."""
        if self._addons.pop(addon_id, None) is None:
            return False
        self._touch()
        return True

    def get_selected_addons(self) -> FrozenSet[Addon]:
        """Snapshot of the currently selected addons."""
        return frozenset(addon for addon in self._addons.values() if addon.is_selected)

    def clear_selection(self) -> None:
        """Deselect every addon."""
        changed = False
        for addon in self._addons.values():
            changed = addon.deselect() or changed
        if changed:
            self._touch()

    def select_all(self) -> None:
        """Select every addon."""
        changed = False
        for addon in self._addons.values():
            changed = addon.select() or changed
        if changed:
            self._touch()

    def get_addons_by_type(self, content_type: ContentType) -> Tuple[Addon, ...]:
        """All addons whose metadata has the given content type."""
        return tuple(
            addon for addon in self._addons.values()
            if addon.metadata.content_type == content_type
        )

    def get_addon_by_id(self, addon_id: UUID) -> Optional[Addon]:
        return self._addons.get(addon_id)

    def contains_addon(self, addon_id: UUID) -> bool:
        return addon_id in self._addons

    def get_all_addons(self) -> Tuple[Addon, ...]:
        """Snapshot of every addon in the catalog."""
        return tuple(self._addons.values())

    def clear(self) -> None:
        """Remove every addon."""
        if self._addons:
            self._addons.clear()
            self._touch()

    def get_statistics(self) -> Dict[str, Any]:
        """Get catalog statistics."""
        by_type: Dict[str, int] = {}
        for addon in self._addons.values():
            key = addon.metadata.content_type.value
            by_type[key] = by_type.get(key, 0) + 1
        return {
            "total_addons": self.count,
            "selected_addons": self.selected_count,
            "by_content_type": by_type,
            "created_at": self._created_at.isoformat(),
            "updated_at": self._updated_at.isoformat(),
        }

    def __str__(self) -> str:
        return f"AddonCatalog: {self.count} addons ({self.selected_count} selected)"
