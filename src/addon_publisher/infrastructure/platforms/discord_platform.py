"""Discord webhook publishing platform."""

from typing import Any, Dict, Optional, Sequence

import aiohttp

from ...domain.catalog.entities import Addon
from ...exceptions import ConfigurationError
from ...models.config import DISCORD_WEBHOOK_URL_ENV, DiscordConfig
from ...publishing.base import HttpPublishingPlatform


def _resolve_config(config: Optional[DiscordConfig]) -> DiscordConfig:
    if config is not None and config.webhook_url and config.webhook_url.strip():
        return config
    return DiscordConfig.from_environment()


class DiscordPublishingPlatform(HttpPublishingPlatform):
    """
    Publishes addon announcements through a Discord webhook.

    The webhook URL comes from the given DiscordConfig, falling back to the
    DISCORD_WEBHOOK_URL environment variable (and DISCORD_USERNAME for the
    display name).
    """

    endpoint_noun = "webhook"

    def __init__(
        self,
        config: Optional[DiscordConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = 30.0,
    ):
        resolved = _resolve_config(config)
        if not resolved.webhook_url or not resolved.webhook_url.strip():
            raise ConfigurationError(
                "Discord webhook URL is not configured. Set it in the configuration "
                f"or via the {DISCORD_WEBHOOK_URL_ENV} environment variable."
            )
        super().__init__(resolved.webhook_url, session=session, timeout=timeout)
        self.username = resolved.username or None

    @property
    def platform_name(self) -> str:
        return "Discord"

    def build_message(self, addons: Sequence[Addon]) -> str:
        lines = ["New MSFS Addons Published:"]
        for addon in addons:
            metadata = addon.metadata
            lines.append(f"• {metadata.title} ({metadata.content_type.value}) — v{metadata.version}")
        return "\n".join(lines)

    def build_payload(self, message: str) -> Dict[str, Any]:
        return {"username": self.username, "content": message}
