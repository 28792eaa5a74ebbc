from typing import Any, Dict, List

from loguru import logger
from pydantic import ValidationError

from .errors import QueryError
from .models import PortalItem, SearchQuery
from .ports import CatalogSearch
from .rest import get_json


class ArcGISCatalog(CatalogSearch):
    """Catalog search over the sharing REST ``search`` endpoint."""

    async def search_featured(self, session) -> List[PortalItem]:
        query = session.info.featured_query
        if not query:
            logger.warning(f"Portal '{session.info.name}' has no featured content group")
            return []

        groups = await get_json(session.http, f"{session.rest_url}/community/groups", {"q": query, "num": 1}, QueryError)
        group_id = next((g.get("id") for g in groups.get("results") or [] if g.get("id")), None)
        if group_id is None:
            logger.warning(f"Featured content group not found for query: {query}")
            return []

        payload = await get_json(
            session.http,
            f"{session.rest_url}/search",
            {"q": f'group:"{group_id}"', "num": session.info.featured_count},
            QueryError,
        )
        return self._items(payload)

    async def search(self, session, query: SearchQuery) -> List[PortalItem]:
        payload = await get_json(session.http, f"{session.rest_url}/search", query.to_params(), QueryError)
        items = self._items(payload)
        logger.debug(f"Search '{query.q}' returned {len(items)} of {payload.get('total', len(items))} items")
        return items

    @staticmethod
    def _items(payload: Dict[str, Any]) -> List[PortalItem]:
        try:
            return [PortalItem.model_validate(result) for result in payload.get("results") or []]
        except ValidationError as e:
            raise QueryError(f"Malformed search results: {e.error_count()} invalid field(s)") from e
