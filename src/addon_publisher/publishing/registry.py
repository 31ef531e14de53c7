"""Registry of publishing platforms by name."""

import logging
from typing import Callable, Dict, List, Optional

import aiohttp

from ..domain.errors import AlreadyExistsError, NotFoundError
from ..exceptions import ConfigurationError
from ..models.config import PublishingConfig
from .base import PublishingPlatform

logger = logging.getLogger(__name__)

PlatformFactory = Callable[[PublishingConfig, Optional[aiohttp.ClientSession]], PublishingPlatform]


class PlatformRegistry:
    """Maps platform names to factories.

    New targets are added by registering a factory; nothing else needs to
    know about them.
    """

    def __init__(self) -> None:
        self._factories: Dict[str, PlatformFactory] = {}

    @staticmethod
    def _key(name: str) -> str:
        return name.strip().lower()

    def register(self, name: str, factory: PlatformFactory) -> None:
        """Register a factory under a platform name.

        Raises:
            AlreadyExistsError: If the name is already registered
        """
        key = self._key(name)
        if key in self._factories:
            raise AlreadyExistsError(f"Platform '{name}' is already registered")
        self._factories[key] = factory
        logger.debug(f"Registered publishing platform: {key}")

    def unregister(self, name: str) -> None:
        """Remove a platform. Unknown names are ignored."""
        self._factories.pop(self._key(name), None)

    def is_registered(self, name: str) -> bool:
        return self._key(name) in self._factories

    def names(self) -> List[str]:
        """Registered platform names, sorted."""
        return sorted(self._factories)

    def create(
        self,
        name: str,
        config: PublishingConfig,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> PublishingPlatform:
        """Construct the named platform.

        Raises:
            NotFoundError: If no platform has that name
            ConfigurationError: If the platform's endpoint is not configured
        """
        factory = self._factories.get(self._key(name))
        if factory is None:
            raise NotFoundError(
                f"Unknown platform '{name}'. Available: {', '.join(self.names()) or 'none'}"
            )
        return factory(config, session)

    def create_all(
        self,
        config: PublishingConfig,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> List[PublishingPlatform]:
        """Construct every platform whose configuration is usable."""
        platforms = []
        for name in self.names():
            try:
                platforms.append(self.create(name, config, session))
            except ConfigurationError as e:
                logger.debug(f"Skipping platform {name}: {e}")
        return platforms


def default_registry() -> PlatformRegistry:
    """Registry with the built-in Discord and Twitch platforms."""
    from ..infrastructure.platforms import DiscordPublishingPlatform, TwitchPublishingPlatform

    registry = PlatformRegistry()
    registry.register(
        "discord",
        lambda config, session: DiscordPublishingPlatform(
            config.discord, session=session, timeout=config.timeout_seconds
        ),
    )
    registry.register(
        "twitch",
        lambda config, session: TwitchPublishingPlatform(
            config.twitch, session=session, timeout=config.timeout_seconds
        ),
    )
    return registry
