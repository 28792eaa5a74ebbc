"""
ViewModel for searching a portal and loading a web map.

Owns all state of the Load Web Map screen:
- featured items are requested once at construction
- text searches replace the result list wholesale
- a selected item is resolved into a RenderableMap

Results-producing operations and loads are sequenced with monotonic tokens:
only the response of the most recent request is applied. The busy flag is
backed by an in-flight counter so overlapping operations keep it raised.
"""
import asyncio
from contextlib import contextmanager
from typing import Awaitable, Callable, List, Optional

from PySide6.QtCore import Signal
from loguru import logger

from webmap_explorer.core.portal import (
    PortalError, PortalItem, PortalSession, RenderableMap, SearchQuery, SessionCache,
)
from ..mvvm.command import AsyncCommand
from ..mvvm.viewmodel import BaseViewModel, BindableProperty


class LoadWebMapViewModel(BaseViewModel):
    # Property-specific signals
    busyChanged = Signal(bool)
    searchTextChanged = Signal(str)
    searchResultsChanged = Signal(object)
    loadedItemChanged = Signal(object)
    currentMapChanged = Signal(object)
    errorMessageChanged = Signal(str)

    # Blocking failure notification: (title, message)
    errorOccurred = Signal(str, str)

    is_busy = BindableProperty(default=False, signal_name="busyChanged")
    search_text = BindableProperty(default="", signal_name="searchTextChanged", coerce=lambda v: v or "")
    search_results = BindableProperty(default=(), signal_name="searchResultsChanged", coerce=tuple)
    loaded_item = BindableProperty(default=None, signal_name="loadedItemChanged")
    current_map = BindableProperty(default=None, signal_name="currentMapChanged")
    error_message = BindableProperty(default="", signal_name="errorMessageChanged")

    def __init__(self, locator, auto_initialize: bool = True):
        """
        Args:
            locator: Provides `config`, `sessions`, `catalog` and `maps`
            auto_initialize: Schedule the featured items query on the running loop
        """
        super().__init__(locator)
        self._sessions = SessionCache(lambda: self.locator.sessions)
        locator.config.on_changed.connect(self._on_config_changed)
        self._in_flight = 0
        self._results_token = 0
        self._load_token = 0

        self.search_command = AsyncCommand(self.search, name="search")
        self.load_web_map_command = AsyncCommand(
            self.load_web_map,
            can_execute=lambda item: item is not None,
            name="load_web_map",
        )

        self.initialization: Optional[asyncio.Task] = None
        if auto_initialize:
            self.initialization = asyncio.ensure_future(self.load_featured())
            self.initialization.add_done_callback(self._log_unhandled)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def load_featured(self) -> None:
        """Replace the results with the portal's featured items."""
        await self._refresh_results("featured items", self.locator.catalog.search_featured)

    async def search(self, query_text: Optional[str] = None) -> None:
        """
        Search the portal for web maps.

        Args:
            query_text: Text to search for; defaults to `search_text`.
                An empty string searches all web maps.
        """
        if query_text is not None:
            self.search_text = query_text

        settings = self.locator.config.data.search
        query = SearchQuery(
            query_text=self.search_text,
            item_type_filter=settings.item_type_filter,
            limit=settings.result_limit,
            sort_field=settings.sort_field,
            sort_order=settings.sort_order,
        )

        async def run(session: PortalSession) -> List[PortalItem]:
            return await self.locator.catalog.search(session, query)

        await self._refresh_results(f"search '{query.q}'", run)

    async def load_web_map(self, item: Optional[PortalItem]) -> None:
        """Resolve `item` and make it the current map."""
        if item is None:
            logger.debug("No portal item to load")
            return

        self._load_token += 1
        token = self._load_token

        with self._busy():
            try:
                session = await self._sessions.get()
                web_map: RenderableMap = await self.locator.maps.resolve(item, session)
            except PortalError as e:
                logger.error(f"Failed to load web map '{item}': {e}")
                if token == self._load_token:
                    self.error_message = str(e)
                    self.errorOccurred.emit("Load Web Map", str(e))
                return

            if token != self._load_token:
                logger.debug(f"Discarding stale load of '{item}'")
                return

            self.error_message = ""
            self.loaded_item = item
            self.current_map = web_map
            logger.info(f"Loaded web map '{web_map.title}'")

    async def close(self) -> None:
        """Release the portal session."""
        self.locator.config.on_changed.disconnect(self._on_config_changed)
        await self._sessions.close()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def session(self) -> Optional[PortalSession]:
        return self._sessions.session

    @contextmanager
    def _busy(self):
        self._in_flight += 1
        self.is_busy = True
        try:
            yield
        finally:
            self._in_flight -= 1
            if self._in_flight == 0:
                self.is_busy = False

    async def _refresh_results(
        self,
        description: str,
        fetch: Callable[[PortalSession], Awaitable[List[PortalItem]]],
    ) -> None:
        self._results_token += 1
        token = self._results_token

        with self._busy():
            try:
                session = await self._sessions.get()
                items = await fetch(session)
            except PortalError as e:
                logger.warning(f"{description.capitalize()} failed: {e}")
                if token == self._results_token:
                    self.error_message = str(e)
                return

            if token != self._results_token:
                logger.debug(f"Discarding stale results of {description}")
                return

            self.error_message = ""
            self.search_results = items
            logger.info(f"{description.capitalize()}: {len(self.search_results)} result(s)")

    def _on_config_changed(self, section: str, key: str, value) -> None:
        if section != "portal":
            return
        # Next operation reconnects with the new portal settings
        session = self._sessions.invalidate()
        if session is not None:
            logger.info(f"Portal setting '{key}' changed, dropping current session")
            close_task = asyncio.ensure_future(session.close())
            close_task.add_done_callback(self._log_unhandled)

    @staticmethod
    def _log_unhandled(task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            exc = task.exception()
            logger.opt(exception=exc).error(f"Background task {task.get_name()} failed: {exc}")
