"""Shared fixtures for addon publisher tests."""

import pytest

from factories import make_addon, make_metadata


@pytest.fixture
def sample_metadata():
    """Create sample metadata."""
    return make_metadata()


@pytest.fixture
def sample_addon():
    """Create a sample addon."""
    return make_addon()


@pytest.fixture(autouse=True)
def clean_platform_env(monkeypatch):
    """Keep real platform settings out of the tests."""
    for name in (
        "DISCORD_WEBHOOK_URL",
        "DISCORD_USERNAME",
        "TWITCH_ENDPOINT_URL",
        "TWITCH_CHANNEL",
        "ADDON_PUBLISHER_CATALOG",
    ):
        monkeypatch.delenv(name, raising=False)
