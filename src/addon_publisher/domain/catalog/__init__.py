"""
Catalog Context - Managing the addon catalog and selection.

This bounded context is responsible for:
- Describing discovered addons and their manifest metadata
- Tracking which addons the user has selected
- Defining how addons are stored
- Keeping the in-memory catalog and the store consistent
"""

from .entities import Addon, AddonCatalog
from .value_objects import AddonMetadata, ContentType, PublishResult
from .repositories import AddonRepository
from .services import CatalogService, SyncSummary, publication_order

__all__ = [
    # Entities
    "Addon",
    "AddonCatalog",
    # Value Objects
    "AddonMetadata",
    "ContentType",
    "PublishResult",
    # Repositories
    "AddonRepository",
    # Services
    "CatalogService",
    "SyncSummary",
    "publication_order",
]
