"""
Repository Implementations - Infrastructure Layer

This package contains repository implementations for data access,
following the Repository pattern from Domain-Driven Design.
"""

from .file_addon_repository import FileAddonRepository
from .memory_addon_repository import InMemoryAddonRepository

__all__ = [
    "FileAddonRepository",
    "InMemoryAddonRepository",
]
