"""Web Map Explorer: search a portal and load web maps, MVVM style."""

__version__ = "0.1.0"
