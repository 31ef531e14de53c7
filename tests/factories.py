"""Builders for addons and fake HTTP sessions used across the tests."""

from datetime import datetime, timezone
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

from addon_publisher.domain.catalog.entities import Addon
from addon_publisher.domain.catalog.value_objects import AddonMetadata, ContentType


class MockAsyncContextManager:
    """Helper class for mocking async context managers."""
    def __init__(self, return_value):
        self.return_value = return_value

    async def __aenter__(self):
        return self.return_value

    async def __aexit__(self, *args):
        pass


def make_metadata(
    title: str = "Test Aircraft",
    content_type: ContentType = ContentType.AIRCRAFT,
    version: str = "1.0.0",
    release_notes: Optional[dict] = None,
) -> AddonMetadata:
    return AddonMetadata(
        title=title,
        creator="Test Creator",
        version=version,
        content_type=content_type,
        package_version="1.0.0",
        minimum_game_version="1.30.12",
        release_notes=release_notes if release_notes is not None else {"1.0.0": "Initial release"},
    )


def make_addon(title: str = "Test Aircraft", content_type: ContentType = ContentType.AIRCRAFT,
               version: str = "1.0.0", **kwargs) -> Addon:
    install_path = kwargs.pop("install_path", f"/Community/{title.lower().replace(' ', '-')}")
    return Addon(
        make_metadata(title, content_type, version),
        install_path,
        datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
        **kwargs,
    )


def make_session(status: int = 200, reason: str = "OK", body: str = "") -> MagicMock:
    """aiohttp-like session whose post() yields a response with the given status."""
    response = MagicMock()
    response.status = status
    response.reason = reason
    response.text = AsyncMock(return_value=body)

    session = MagicMock()
    session.post = MagicMock(return_value=MockAsyncContextManager(response))
    session.close = AsyncMock()
    return session
