"""
Binding tests for LoadWebMapView against a real ViewModel.
"""
import asyncio
import pytest
from unittest.mock import MagicMock
import qasync
from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import QApplication, QMessageBox

from webmap_explorer.core.portal import Basemap, LoadError, MapLayer, RenderableMap
from webmap_explorer.ui.viewmodels import LoadWebMapViewModel
from webmap_explorer.ui.views import LoadWebMapView


@pytest.fixture
def view_model(qapp, locator):
    return LoadWebMapViewModel(locator, auto_initialize=False)


@pytest.fixture
def presenter():
    return MagicMock()


@pytest.fixture
def view(qapp, view_model, presenter):
    widget = LoadWebMapView(view_model, error_presenter=presenter)
    yield widget
    widget.deleteLater()


def test_results_populate_list(view, view_model, items):
    view_model.search_results = items

    assert view.results_list.count() == 3
    assert view.results_list.item(1).data(Qt.UserRole) == items[1]


def test_busy_flag_toggles_indicator(view, view_model):
    view_model.is_busy = True
    assert view.busy_bar.isVisibleTo(view)
    assert not view.search_btn.isEnabled()

    view_model.is_busy = False
    assert not view.busy_bar.isVisibleTo(view)
    assert view.search_btn.isEnabled()


def test_search_text_binds_both_ways(view, view_model):
    view.search_input.textEdited.emit("rivers")
    assert view_model.search_text == "rivers"

    view_model.search_text = "roads"
    assert view.search_input.text() == "roads"


def test_map_panel_shows_loaded_map(view, view_model, items):
    web_map = RenderableMap(
        item=items[0],
        basemap=Basemap(title="Streets"),
        operational_layers=[MapLayer(id="l1", title="Parks", layer_type="ArcGISFeatureLayer")],
        wkid=3857,
    )

    view_model.current_map = web_map

    assert view.map_title.text() == "Rivers"
    assert "Streets" in view.map_details.text()
    assert view.layer_tree.topLevelItem(0).text(0) == "Parks"

    view_model.current_map = None
    assert view.map_title.text() == "No web map loaded"
    assert view.layer_tree.topLevelItemCount() == 0


def test_error_notification_is_queued_to_presenter(qapp, view, view_model, presenter):
    view_model.errorOccurred.emit("Load Web Map", "boom")
    presenter.assert_not_called()
    qapp.processEvents()

    presenter.assert_called_once_with(view, "Load Web Map", "boom")


@pytest.mark.asyncio
async def test_selecting_result_loads_web_map(view, view_model, locator, items):
    locator.maps.resolve.side_effect = lambda item, session: RenderableMap(item=item, basemap=Basemap())
    view_model.search_results = items

    view.results_list.setCurrentRow(2)
    await asyncio.gather(*view_model.load_web_map_command.pending_tasks)

    locator.maps.resolve.assert_awaited_once()
    assert view_model.loaded_item == items[2]
    assert view.map_title.text() == "Parcels"


@pytest.mark.asyncio
async def test_search_button_runs_search(view, view_model, locator, items):
    locator.catalog.search.return_value = items
    view.search_input.setText("parks")
    view.search_input.textEdited.emit("parks")

    view.search_btn.click()
    await asyncio.gather(*view_model.search_command.pending_tasks)

    _, query = locator.catalog.search.await_args.args
    assert query.query_text == "parks"
    assert view.results_list.count() == 3


def test_load_error_dialog_leaves_other_operations_running(qapp, locator, items):
    """A modal load error must not stall a search that finishes while it is open."""
    view_model = LoadWebMapViewModel(locator, auto_initialize=False)
    view = LoadWebMapView(view_model)

    async def slow_search(session, query):
        await asyncio.sleep(0.05)
        return items

    locator.catalog.search.side_effect = slow_search
    locator.maps.resolve.side_effect = LoadError("Item does not exist or is inaccessible.")

    dialogs = []

    def close_dialog():
        dialog = QApplication.activeModalWidget()
        if isinstance(dialog, QMessageBox):
            dialogs.append((dialog.text(), view_model.search_results == tuple(items)))
            dialog.done(0)

    closer = QTimer()
    closer.setInterval(150)
    closer.timeout.connect(close_dialog)

    async def scenario():
        closer.start()
        search_task = view_model.search_command("rivers")
        load_task = view_model.load_web_map_command(items[0])
        await asyncio.gather(search_task, load_task)
        while not dialogs:
            await asyncio.sleep(0.05)
        closer.stop()
        return search_task

    loop = qasync.QEventLoop(qapp)
    asyncio.set_event_loop(loop)
    try:
        search_task = loop.run_until_complete(asyncio.wait_for(scenario(), timeout=10))
    finally:
        closer.stop()
        asyncio.set_event_loop(None)
        loop.close()
        view.deleteLater()

    # Search completed while the dialog was still open
    assert dialogs == [("Item does not exist or is inaccessible.", True)]
    assert search_task.done() and not search_task.cancelled()
    assert view_model.search_results == tuple(items)
    assert view_model.is_busy is False
    assert view_model.loaded_item is None
