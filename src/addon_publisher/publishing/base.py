"""Base publishing platform interfaces for the addon publisher."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Sequence

import aiohttp

from ..domain.catalog.entities import Addon
from ..domain.catalog.value_objects import PublishResult
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

NO_ADDONS_MESSAGE = "No addons provided to publish."
VALIDATION_PING = "MSFS Addon Publisher: validation ping"
VALIDATION_TIMEOUT_SECONDS = 10.0


class PublishingPlatform(ABC):
    """Base class for all publishing targets."""

    @property
    @abstractmethod
    def platform_name(self) -> str:
        """Stable display name of the platform."""
        pass

    @abstractmethod
    async def publish(self, addons: Iterable[Addon]) -> PublishResult:
        """Announce a set of addons on the platform.

        Args:
            addons: The addons to publish, in the order they should appear

        Returns:
            PublishResult describing the outcome. Remote and unexpected local
            errors are reported as a failed result; cancellation propagates.

        Raises:
            TypeError: If addons is None
        """
        pass

    @abstractmethod
    async def validate_credentials(self) -> bool:
        """Probe the platform. Returns False on any failure, never raises."""
        pass

    async def close(self) -> None:
        """Release any resources held by the platform."""
        pass

    async def __aenter__(self) -> "PublishingPlatform":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()


class HttpPublishingPlatform(PublishingPlatform):
    """Publishing platform that POSTs a JSON payload to a single URL.

    Subclasses provide the message rendering and the payload shape; this class
    owns the HTTP exchange and turns its outcome into a PublishResult.
    """

    endpoint_noun = "endpoint"

    def __init__(
        self,
        endpoint_url: Optional[str],
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = 30.0,
    ):
        """Initialize the platform.

        Args:
            endpoint_url: URL the payload is POSTed to
            session: Optional shared aiohttp session; one is created lazily otherwise
            timeout: Total timeout in seconds for a publish request

        Raises:
            ConfigurationError: If endpoint_url is missing or blank
        """
        if not endpoint_url or not endpoint_url.strip():
            raise ConfigurationError(f"{self.platform_name} {self.endpoint_noun} URL is not configured.")
        self.endpoint_url = endpoint_url.strip()
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the session if this platform created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    @abstractmethod
    def build_message(self, addons: Sequence[Addon]) -> str:
        """Render the announcement text, one line per addon in input order."""
        pass

    @abstractmethod
    def build_payload(self, message: str) -> Dict[str, Any]:
        """Wrap a rendered message in the platform's JSON body."""
        pass

    def build_ping_payload(self) -> Dict[str, Any]:
        """JSON body sent by validate_credentials."""
        return self.build_payload(VALIDATION_PING)

    async def publish(self, addons: Iterable[Addon]) -> PublishResult:
        if addons is None:
            raise TypeError("addons cannot be None")

        addon_list: List[Addon] = list(addons)
        if not addon_list:
            return PublishResult.create_failure(NO_ADDONS_MESSAGE)

        payload = self.build_payload(self.build_message(addon_list))

        try:
            session = await self._get_session()
            async with session.post(self.endpoint_url, json=payload) as response:
                if not 200 <= response.status < 300:
                    body = await response.text()
                    logger.warning(
                        f"{self.platform_name} publish rejected with {response.status} {response.reason}"
                    )
                    return PublishResult.create_failure(
                        f"{self.platform_name} {self.endpoint_noun} returned "
                        f"{response.status}: {response.reason}. Body: {body}"
                    )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Error publishing to {self.platform_name}: {e}")
            return PublishResult.create_failure(f"Failed to publish to {self.platform_name}: {e}")

        logger.info(f"Published {len(addon_list)} addon(s) to {self.platform_name}")
        return PublishResult.create_success(
            len(addon_list),
            f"Published {len(addon_list)} addon(s) to {self.platform_name}.",
        )

    async def validate_credentials(self) -> bool:
        try:
            return await asyncio.wait_for(self._probe(), timeout=VALIDATION_TIMEOUT_SECONDS)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.debug(f"{self.platform_name} credential probe failed: {e}")
            return False

    async def _probe(self) -> bool:
        session = await self._get_session()
        async with session.post(
            self.endpoint_url,
            json=self.build_ping_payload(),
            timeout=aiohttp.ClientTimeout(total=VALIDATION_TIMEOUT_SECONDS),
        ) as response:
            return 200 <= response.status < 300
