"""
Portal data models.

Pydantic models for the subset of the ArcGIS sharing REST payloads the
application consumes. Field aliases follow the REST JSON names.
"""
from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

WEB_MAP_TYPE = "Web Map"


class _RestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class PortalInfo(_RestModel):
    """Subset of ``portals/self`` describing the connected portal."""
    id: Optional[str] = None
    name: str = ""
    featured_group_query: Optional[str] = Field(default=None, alias="homePageFeaturedContent")
    featured_items_group_query: Optional[str] = Field(default=None, alias="featuredItemsGroupQuery")
    featured_count: int = Field(default=12, alias="homePageFeaturedContentCount")

    @property
    def featured_query(self) -> Optional[str]:
        return self.featured_group_query or self.featured_items_group_query


class PortalItem(_RestModel):
    """A catalog entry returned by search."""
    id: str
    title: str = ""
    type: str = ""
    owner: str = ""
    snippet: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    thumbnail: Optional[str] = None
    avg_rating: float = Field(default=0.0, alias="avgRating")
    num_views: int = Field(default=0, alias="numViews")
    modified: Optional[datetime] = None
    extent: Optional[List[List[float]]] = None

    @field_validator("modified", mode="before")
    @classmethod
    def _epoch_millis(cls, value):
        # REST timestamps are epoch milliseconds
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        return value

    @field_validator("extent", mode="before")
    @classmethod
    def _empty_extent(cls, value):
        return value or None

    @property
    def is_web_map(self) -> bool:
        return self.type == WEB_MAP_TYPE

    def __str__(self) -> str:
        return self.title or self.id


class SearchQuery(_RestModel):
    """Parameters of a ranked catalog search."""
    query_text: str = ""
    item_type_filter: str = ""
    limit: int = 20
    sort_field: str = "avgrating"
    sort_order: Literal["asc", "desc"] = "desc"

    @property
    def q(self) -> str:
        """Full-text query sent to the portal."""
        return " ".join(part for part in (self.query_text.strip(), self.item_type_filter.strip()) if part)

    def to_params(self) -> dict:
        return {
            "q": self.q,
            "num": self.limit,
            "sortField": self.sort_field,
            "sortOrder": self.sort_order,
        }


# --- Web map definition ---

class MapLayer(_RestModel):
    id: str = ""
    title: str = ""
    url: Optional[str] = None
    layer_type: Optional[str] = Field(default=None, alias="layerType")
    visibility: bool = True
    opacity: float = 1.0
    item_id: Optional[str] = Field(default=None, alias="itemId")


class Basemap(_RestModel):
    title: str = ""
    layers: List[MapLayer] = Field(default_factory=list, alias="baseMapLayers")


class SpatialReference(_RestModel):
    wkid: Optional[int] = None
    latest_wkid: Optional[int] = Field(default=None, alias="latestWkid")


class WebMapDefinition(_RestModel):
    """The JSON stored as a web map item's data."""
    operational_layers: List[MapLayer] = Field(default_factory=list, alias="operationalLayers")
    basemap: Basemap = Field(alias="baseMap")
    spatial_reference: Optional[SpatialReference] = Field(default=None, alias="spatialReference")
    version: Optional[str] = None


class RenderableMap(_RestModel):
    """A web map ready for display, resolved from a portal item."""
    item: PortalItem
    basemap: Basemap
    operational_layers: List[MapLayer] = Field(default_factory=list)
    wkid: Optional[int] = None
    extent: Optional[List[List[float]]] = None
    version: Optional[str] = None

    @property
    def title(self) -> str:
        return self.item.title

    @property
    def visible_layers(self) -> List[MapLayer]:
        return [layer for layer in self.operational_layers if layer.visibility]

    @classmethod
    def from_definition(cls, item: PortalItem, definition: WebMapDefinition) -> "RenderableMap":
        sr = definition.spatial_reference
        return cls(
            item=item,
            basemap=definition.basemap,
            operational_layers=definition.operational_layers,
            wkid=(sr.latest_wkid or sr.wkid) if sr else None,
            extent=item.extent,
            version=definition.version,
        )
