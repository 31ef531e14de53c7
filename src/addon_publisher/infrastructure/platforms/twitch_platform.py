"""Twitch chat endpoint publishing platform."""

from typing import Any, Dict, Optional, Sequence

import aiohttp

from ...domain.catalog.entities import Addon
from ...exceptions import ConfigurationError
from ...models.config import TWITCH_ENDPOINT_URL_ENV, TwitchConfig
from ...publishing.base import HttpPublishingPlatform


class TwitchPublishingPlatform(HttpPublishingPlatform):
    """
    Publishes addon announcements to a chat relay endpoint for a Twitch channel.

    The endpoint URL comes from the given TwitchConfig, falling back to the
    TWITCH_ENDPOINT_URL environment variable (and TWITCH_CHANNEL).
    """

    def __init__(
        self,
        config: Optional[TwitchConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = 30.0,
    ):
        if config is None or not config.endpoint_url or not config.endpoint_url.strip():
            config = TwitchConfig.from_environment()
        if not config.endpoint_url or not config.endpoint_url.strip():
            raise ConfigurationError(
                "Twitch endpoint URL is not configured. Set it in the configuration "
                f"or via the {TWITCH_ENDPOINT_URL_ENV} environment variable."
            )
        super().__init__(config.endpoint_url, session=session, timeout=timeout)
        self.channel = config.channel or None

    @property
    def platform_name(self) -> str:
        return "Twitch"

    def build_message(self, addons: Sequence[Addon]) -> str:
        lines = ["New MSFS Addons:"]
        for addon in addons:
            metadata = addon.metadata
            lines.append(f"- {metadata.title} ({metadata.content_type.value}) - v{metadata.version}")
        return "\n".join(lines)

    def build_payload(self, message: str) -> Dict[str, Any]:
        return {"channel": self.channel, "message": message}
