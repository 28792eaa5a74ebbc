import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from PySide6.QtWidgets import QApplication

from webmap_explorer.core.config import AppConfig
from webmap_explorer.core.portal import (
    CatalogSearch, MapResolver, PortalItem, SessionProvider,
)


# Ensure QApplication exists for Qt tests
@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


class FakeSession:
    """Stands in for PortalSession in ViewModel tests."""

    def __init__(self, name: str = "Test Portal"):
        self.info = SimpleNamespace(name=name)
        self.closed = False

    async def close(self):
        self.closed = True


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def locator(session):
    """Mock ServiceLocator with async collaborator ports."""
    locator = MagicMock()
    locator.config.data = AppConfig()

    locator.sessions = AsyncMock(spec=SessionProvider)
    locator.sessions.create_session.return_value = session

    locator.catalog = AsyncMock(spec=CatalogSearch)
    locator.catalog.search_featured.return_value = []
    locator.catalog.search.return_value = []

    locator.maps = AsyncMock(spec=MapResolver)
    return locator


def _make_item(item_id: str, title: str = None, item_type: str = "Web Map", **extra) -> PortalItem:
    return PortalItem(id=item_id, title=title or f"Map {item_id}", type=item_type, **extra)


@pytest.fixture
def items():
    return [_make_item("a1", "Rivers"), _make_item("b2", "Roads"), _make_item("c3", "Parcels")]


@pytest.fixture
def make_item():
    """Factory for PortalItem test data."""
    return _make_item
