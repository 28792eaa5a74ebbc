"""
Portal collaborator interfaces.

The ViewModel depends only on these; the ArcGIS REST adapters implement them.
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

from .models import PortalItem, RenderableMap, SearchQuery

if TYPE_CHECKING:
    from .session import PortalSession


class SessionProvider(ABC):
    @abstractmethod
    async def create_session(self) -> "PortalSession":
        """
        Open a connection to the portal.

        Raises:
            PortalConnectionError: If the portal cannot be reached.
        """


class CatalogSearch(ABC):
    @abstractmethod
    async def search_featured(self, session: "PortalSession") -> List[PortalItem]:
        """Return the portal's featured items, in portal order."""

    @abstractmethod
    async def search(self, session: "PortalSession", query: SearchQuery) -> List[PortalItem]:
        """
        Run a ranked search.

        Raises:
            QueryError: On a malformed query or remote failure.
        """


class MapResolver(ABC):
    @abstractmethod
    async def resolve(self, item: PortalItem, session: "PortalSession") -> RenderableMap:
        """
        Resolve a portal item into a renderable map.

        Raises:
            LoadError: If the item is missing, invalid or not accessible.
        """
