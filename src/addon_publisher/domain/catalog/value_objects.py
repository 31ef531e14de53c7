"""
Catalog Context value objects.

Value objects are immutable objects that are defined by their attributes rather
than identity. AddonMetadata is what the scanner extracts from a package
manifest; PublishResult is what a publishing platform hands back after an
attempt to announce a set of addons.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple

from ..errors import ValidationError


class ContentType(Enum):
    """Kinds of content an addon package can provide."""
    AIRCRAFT = "Aircraft"
    SCENERY = "Scenery"
    SIM_OBJECT = "SimObject"
    LIVERY = "Livery"
    MISSION = "Mission"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: str) -> "ContentType":
        """Parse a symbolic content type name, case-insensitively."""
        if isinstance(value, ContentType):
            return value
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == normalized or member.name.lower() == normalized:
                return member
        raise ValidationError(f"Unknown content type: {value!r}")

    def __str__(self) -> str:
        return self.value


def _require_text(value: Optional[str], label: str) -> str:
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} cannot be empty or whitespace.")
    return value


@dataclass(frozen=True, slots=True, eq=False)
class AddonMetadata:
    """
    Descriptive record extracted from an addon manifest.

    Two instances are equal when every field is equal. Release notes are
    compared by content, so maps built in a different insertion order still
    compare (and hash) equal.
    """

    title: str
    creator: str
    version: str
    content_type: ContentType
    package_version: str
    minimum_game_version: str
    release_notes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _require_text(self.title, "Title")
        _require_text(self.creator, "Creator")
        _require_text(self.version, "Version")
        _require_text(self.package_version, "Package version")
        _require_text(self.minimum_game_version, "Minimum game version")

        if not isinstance(self.content_type, ContentType):
            object.__setattr__(self, "content_type", ContentType.parse(self.content_type))

        notes = dict(self.release_notes or {})
        object.__setattr__(self, "release_notes", MappingProxyType(notes))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, AddonMetadata):
            return NotImplemented
        if self is other:
            return True
        return (
            self.title == other.title
            and self.creator == other.creator
            and self.version == other.version
            and self.content_type == other.content_type
            and self.package_version == other.package_version
            and self.minimum_game_version == other.minimum_game_version
            and dict(self.release_notes) == dict(other.release_notes)
        )

    def __hash__(self) -> int:
        return hash((
            self.title,
            self.creator,
            self.version,
            self.content_type,
            self.package_version,
            self.minimum_game_version,
            frozenset(self.release_notes.items()),
        ))

    def display_name(self) -> str:
        """Get human-readable display name."""
        return f"{self.title} v{self.version}"


@dataclass(frozen=True, slots=True)
class PublishResult:
    """Outcome of one publish attempt against a platform."""

    success: bool
    message: str
    published_count: int = 0
    errors: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _require_text(self.message, "Message")
        if self.published_count < 0:
            raise ValidationError("Published count cannot be negative.")
        object.__setattr__(self, "errors", tuple(self.errors or ()))

    @classmethod
    def create_success(cls, published_count: int, message: Optional[str] = None) -> "PublishResult":
        """Every addon was published."""
        return cls(
            success=True,
            message=message or f"Successfully published {published_count} addon(s).",
            published_count=published_count,
        )

    @classmethod
    def create_failure(cls, message: str, errors: Optional[Iterable[str]] = None) -> "PublishResult":
        """Nothing was published; the count is always zero."""
        return cls(
            success=False,
            message=message,
            published_count=0,
            errors=tuple(errors or ()),
        )

    @classmethod
    def create_partial_success(
        cls,
        published_count: int,
        total_count: int,
        errors: Iterable[str],
    ) -> "PublishResult":
        """Some addons were published and some failed."""
        errors = tuple(errors)
        if not errors:
            raise ValidationError("A partial success must carry at least one error.")
        if published_count >= total_count:
            raise ValidationError("A partial success must publish fewer addons than were attempted.")
        return cls(
            success=False,
            message=(
                f"Published {published_count} out of {total_count} addon(s). "
                f"{len(errors)} error(s) occurred."
            ),
            published_count=published_count,
            errors=errors,
        )

    @property
    def is_partial(self) -> bool:
        """True when something but not everything was published."""
        return not self.success and self.published_count > 0

    def __str__(self) -> str:
        return self.message
