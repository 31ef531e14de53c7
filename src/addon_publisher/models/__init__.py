"""Data models for addon publisher."""

from .config import (
    Config,
    DiscordConfig,
    PublishingConfig,
    StorageConfig,
    TwitchConfig,
    create_default_config,
    load_config,
    save_config,
)

__all__ = [
    "Config",
    "DiscordConfig",
    "PublishingConfig",
    "StorageConfig",
    "TwitchConfig",
    "create_default_config",
    "load_config",
    "save_config",
]
