from .load_webmap_view import LoadWebMapView

__all__ = ["LoadWebMapView"]
