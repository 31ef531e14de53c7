"""Publishing platform framework for the addon publisher."""

from .base import HttpPublishingPlatform, PublishingPlatform
from .registry import PlatformRegistry, default_registry
from .service import publish_to_all

__all__ = [
    "PublishingPlatform",
    "HttpPublishingPlatform",
    "PlatformRegistry",
    "default_registry",
    "publish_to_all",
]
