"""Publishing to several platforms at once."""

import asyncio
import logging
from typing import Dict, Iterable, Sequence

from ..domain.catalog.entities import Addon
from ..domain.catalog.value_objects import PublishResult
from .base import PublishingPlatform

logger = logging.getLogger(__name__)


async def publish_to_all(
    platforms: Sequence[PublishingPlatform],
    addons: Iterable[Addon],
) -> Dict[str, PublishResult]:
    """Publish the same addons to every platform concurrently.

    Returns:
        PublishResult per platform name. Cancellation propagates.
    """
    if addons is None:
        raise TypeError("addons cannot be None")
    addon_list = list(addons)

    results = await asyncio.gather(*(platform.publish(addon_list) for platform in platforms))
    outcome = {platform.platform_name: result for platform, result in zip(platforms, results)}

    failed = [name for name, result in outcome.items() if not result.success]
    if failed:
        logger.warning(f"Publishing failed on: {', '.join(failed)}")
    return outcome
