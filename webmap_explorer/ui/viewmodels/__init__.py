from .load_webmap_viewmodel import LoadWebMapViewModel

__all__ = ["LoadWebMapViewModel"]
