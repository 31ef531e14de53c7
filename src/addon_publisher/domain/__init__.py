"""
Domain Layer - Addon Publisher

This module contains the domain layer following Domain-Driven Design principles.

Bounded Contexts:
- Catalog: Discovered addons, their metadata and the user's selection
"""

from .catalog import (
    Addon,
    AddonCatalog,
    AddonMetadata,
    AddonRepository,
    CatalogService,
    ContentType,
    PublishResult,
    SyncSummary,
)
from .errors import (
    AlreadyExistsError,
    DomainError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    # Catalog context
    "Addon",
    "AddonCatalog",
    "AddonMetadata",
    "AddonRepository",
    "CatalogService",
    "ContentType",
    "PublishResult",
    "SyncSummary",
    # Errors
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "AlreadyExistsError",
]
