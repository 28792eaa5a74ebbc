"""
Portal access: models, collaborator ports and ArcGIS REST adapters.
"""
from .errors import PortalError, PortalConnectionError, QueryError, LoadError
from .models import (
    PortalInfo, PortalItem, SearchQuery, MapLayer, Basemap, WebMapDefinition, RenderableMap,
)
from .ports import SessionProvider, CatalogSearch, MapResolver
from .session import PortalSession, ArcGISSessionProvider, SessionCache
from .catalog import ArcGISCatalog
from .webmap import ArcGISMapResolver

__all__ = [
    "PortalError", "PortalConnectionError", "QueryError", "LoadError",
    "PortalInfo", "PortalItem", "SearchQuery", "MapLayer", "Basemap",
    "WebMapDefinition", "RenderableMap",
    "SessionProvider", "CatalogSearch", "MapResolver",
    "PortalSession", "ArcGISSessionProvider", "SessionCache",
    "ArcGISCatalog", "ArcGISMapResolver",
]
