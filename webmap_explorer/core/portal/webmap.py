from loguru import logger
from pydantic import ValidationError

from .errors import LoadError
from .models import PortalItem, RenderableMap, WebMapDefinition
from .ports import MapResolver
from .rest import get_json


class ArcGISMapResolver(MapResolver):
    """Reads a web map item's JSON definition and builds a RenderableMap."""

    async def resolve(self, item: PortalItem, session) -> RenderableMap:
        if not item.is_web_map:
            raise LoadError(f"'{item}' is a {item.type or 'untyped item'}, not a web map")

        payload = await get_json(session.http, f"{session.rest_url}/content/items/{item.id}/data", {}, LoadError)
        try:
            definition = WebMapDefinition.model_validate(payload)
        except ValidationError as e:
            raise LoadError(f"'{item}' has a malformed web map definition") from e

        web_map = RenderableMap.from_definition(item, definition)
        logger.info(f"Resolved web map '{web_map.title}' with {len(web_map.operational_layers)} operational layer(s)")
        return web_map
