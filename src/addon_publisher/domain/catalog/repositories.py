"""Catalog Context Repository Interfaces.

Repositories provide abstraction over data storage and retrieval. The addon
repository stores individual Addon records keyed by id; the AddonCatalog is
rebuilt from and flushed to it by the catalog service.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from .entities import Addon


class AddonRepository(ABC):
    """Repository for Addon entities."""

    @abstractmethod
    async def get_all(self) -> List[Addon]:
        """Get every stored addon. Empty when nothing has been stored yet."""
        pass

    @abstractmethod
    async def get_by_id(self, addon_id: UUID) -> Optional[Addon]:
        """Find an addon by its ID."""
        pass

    @abstractmethod
    async def add(self, addon: Addon) -> None:
        """Store a new addon.

        Raises:
            AlreadyExistsError: If an addon with the same id is stored.
        """
        pass

    @abstractmethod
    async def update(self, addon: Addon) -> None:
        """Replace a stored addon.

        Raises:
            NotFoundError: If no addon with that id is stored.
        """
        pass

    @abstractmethod
    async def delete(self, addon_id: UUID) -> None:
        """Delete a stored addon.

        Raises:
            NotFoundError: If no addon with that id is stored.
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Get total count of addons."""
        pass
