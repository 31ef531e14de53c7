"""
Publishing platforms - Anti-Corruption Layer for chat and webhook services.

Each platform isolates the domain from one remote service's request format.
"""

from .discord_platform import DiscordPublishingPlatform
from .twitch_platform import TwitchPublishingPlatform

__all__ = [
    "DiscordPublishingPlatform",
    "TwitchPublishingPlatform",
]
