"""
Portal sessions.

``ArcGISSessionProvider`` opens an anonymous connection to a portal and reads
its description. ``SessionCache`` memoizes one session per owner and
guarantees it is created at most once even under concurrent first use.
"""
import asyncio
from dataclasses import dataclass
from typing import Callable, Optional

import aiohttp
from loguru import logger
from pydantic import ValidationError

from ..config import PortalSettings
from .errors import PortalConnectionError
from .models import PortalInfo
from .ports import SessionProvider
from .rest import get_json


@dataclass
class PortalSession:
    portal_url: str
    info: PortalInfo
    http: aiohttp.ClientSession

    @property
    def rest_url(self) -> str:
        return f"{self.portal_url}/sharing/rest"

    async def close(self) -> None:
        if not self.http.closed:
            await self.http.close()


class ArcGISSessionProvider(SessionProvider):
    """Creates sessions against an ArcGIS Online or Enterprise portal."""

    def __init__(self, settings: PortalSettings):
        self._settings = settings

    async def create_session(self) -> PortalSession:
        portal_url = self._settings.url.rstrip("/")
        timeout = aiohttp.ClientTimeout(total=self._settings.request_timeout)
        http = aiohttp.ClientSession(timeout=timeout)
        try:
            payload = await get_json(http, f"{portal_url}/sharing/rest/portals/self", {}, PortalConnectionError)
            info = PortalInfo.model_validate(payload)
        except ValidationError as e:
            await http.close()
            raise PortalConnectionError(f"Unexpected portal description from {portal_url}") from e
        except BaseException:
            await http.close()
            raise
        return PortalSession(portal_url=portal_url, info=info, http=http)


class SessionCache:
    """
    Compute-once holder for a portal session.

    The provider is looked up through `provider_getter` each time a session
    is created, so a replaced provider takes effect after `invalidate()`.
    A failed creation leaves the cache empty so the next caller retries.
    """

    def __init__(self, provider_getter: Callable[[], SessionProvider]):
        self._provider_getter = provider_getter
        self._session: Optional[PortalSession] = None
        self._lock = asyncio.Lock()

    @property
    def session(self) -> Optional[PortalSession]:
        return self._session

    async def get(self) -> PortalSession:
        if self._session is not None:
            return self._session
        async with self._lock:
            if self._session is None:
                logger.info("Creating portal session")
                self._session = await self._provider_getter().create_session()
                logger.info(f"Connected to portal '{self._session.info.name}'")
        return self._session

    def invalidate(self) -> Optional[PortalSession]:
        """Forget the current session and return it; the caller closes it."""
        session, self._session = self._session, None
        return session

    async def close(self) -> None:
        async with self._lock:
            session = self.invalidate()
        if session is not None:
            await session.close()
            logger.debug("Portal session closed")
