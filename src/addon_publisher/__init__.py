"""Addon Publisher

Catalogs locally installed simulator addons, tracks which ones are selected,
and announces the selection on chat and webhook platforms.
"""

__version__ = "0.1.0"

from .domain.catalog import (
    Addon,
    AddonCatalog,
    AddonMetadata,
    AddonRepository,
    CatalogService,
    ContentType,
    PublishResult,
)
from .infrastructure.repositories import FileAddonRepository, InMemoryAddonRepository
from .infrastructure.platforms import DiscordPublishingPlatform, TwitchPublishingPlatform
from .publishing import PlatformRegistry, PublishingPlatform, default_registry, publish_to_all

__all__ = [
    # Catalog
    "Addon",
    "AddonCatalog",
    "AddonMetadata",
    "AddonRepository",
    "CatalogService",
    "ContentType",
    "PublishResult",

    # Storage
    "FileAddonRepository",
    "InMemoryAddonRepository",

    # Publishing
    "PublishingPlatform",
    "PlatformRegistry",
    "DiscordPublishingPlatform",
    "TwitchPublishingPlatform",
    "default_registry",
    "publish_to_all",
]
