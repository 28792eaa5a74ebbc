"""
Load Web Map view.

Passive widget bound to a LoadWebMapViewModel: search box, busy indicator,
result list and a map panel describing the loaded web map.
"""
from typing import Callable, Optional

from PySide6.QtWidgets import (QWidget, QVBoxLayout, QHBoxLayout, QLineEdit, QPushButton,
                               QLabel, QListWidget, QListWidgetItem, QProgressBar, QSplitter,
                               QTreeWidget, QTreeWidgetItem, QMessageBox)
from PySide6.QtCore import Qt
from loguru import logger

from webmap_explorer.core.portal import PortalItem, RenderableMap
from ..viewmodels.load_webmap_viewmodel import LoadWebMapViewModel

ErrorPresenter = Callable[[QWidget, str, str], object]


class LoadWebMapView(QWidget):
    """
    Left side: search box and results
    Right side: map panel
    """

    def __init__(self, view_model: LoadWebMapViewModel, parent=None,
                 error_presenter: Optional[ErrorPresenter] = None):
        super().__init__(parent)
        self.vm = view_model
        self._present_error = error_presenter or QMessageBox.critical
        self._init_ui()
        self._bind()

    def _init_ui(self):
        layout = QVBoxLayout(self)

        # Search bar
        search_layout = QHBoxLayout()
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search web maps...")
        search_layout.addWidget(self.search_input)
        self.search_btn = QPushButton("Search")
        search_layout.addWidget(self.search_btn)
        layout.addLayout(search_layout)

        self.busy_bar = QProgressBar()
        self.busy_bar.setRange(0, 0)
        self.busy_bar.setTextVisible(False)
        self.busy_bar.setVisible(False)
        layout.addWidget(self.busy_bar)

        splitter = QSplitter(Qt.Horizontal)

        self.results_list = QListWidget()
        splitter.addWidget(self.results_list)

        map_panel = QWidget()
        map_layout = QVBoxLayout(map_panel)
        self.map_title = QLabel("No web map loaded")
        self.map_title.setStyleSheet("font-weight: bold; font-size: 14px;")
        map_layout.addWidget(self.map_title)
        self.map_details = QLabel("")
        self.map_details.setWordWrap(True)
        map_layout.addWidget(self.map_details)
        self.layer_tree = QTreeWidget()
        self.layer_tree.setHeaderLabels(["Layer", "Type", "Visible"])
        map_layout.addWidget(self.layer_tree)
        splitter.addWidget(map_panel)

        splitter.setSizes([300, 600])
        layout.addWidget(splitter)

        self.status_label = QLabel("")
        self.status_label.setStyleSheet("color: red;")
        layout.addWidget(self.status_label)

    def _bind(self):
        # View -> ViewModel
        self.search_input.textEdited.connect(self._on_text_edited)
        self.search_input.returnPressed.connect(self._on_search)
        self.search_btn.clicked.connect(self._on_search)
        self.results_list.currentItemChanged.connect(self._on_selection_changed)

        # ViewModel -> View
        self.vm.busyChanged.connect(self._on_busy_changed)
        self.vm.searchTextChanged.connect(self._on_search_text_changed)
        self.vm.searchResultsChanged.connect(self._on_results_changed)
        self.vm.currentMapChanged.connect(self._on_map_changed)
        self.vm.errorMessageChanged.connect(self.status_label.setText)
        # Queued so the modal dialog runs after the failing task step returns
        self.vm.errorOccurred.connect(self._on_error, Qt.QueuedConnection)

        # Initial state
        self._on_busy_changed(self.vm.is_busy)
        self._on_search_text_changed(self.vm.search_text)
        self._on_results_changed(self.vm.search_results)
        self._on_map_changed(self.vm.current_map)

    # --- View events ---

    def _on_text_edited(self, text: str):
        self.vm.search_text = text

    def _on_search(self):
        self.vm.search_command()

    def _on_selection_changed(self, current: Optional[QListWidgetItem], _previous=None):
        if current is None:
            return
        item = current.data(Qt.UserRole)
        command = self.vm.load_web_map_command
        if command.can_execute(item):
            command.execute(item)

    # --- ViewModel notifications ---

    def _on_busy_changed(self, busy: bool):
        self.busy_bar.setVisible(busy)
        self.search_btn.setEnabled(not busy)

    def _on_search_text_changed(self, text: str):
        if self.search_input.text() != text:
            self.search_input.setText(text)

    def _on_results_changed(self, items):
        self.results_list.blockSignals(True)
        try:
            self.results_list.clear()
            for portal_item in items:
                row = QListWidgetItem(self._describe_item(portal_item))
                row.setData(Qt.UserRole, portal_item)
                row.setToolTip(portal_item.snippet or "")
                self.results_list.addItem(row)
        finally:
            self.results_list.blockSignals(False)

    def _on_map_changed(self, web_map: Optional[RenderableMap]):
        self.layer_tree.clear()
        if web_map is None:
            self.map_title.setText("No web map loaded")
            self.map_details.setText("")
            return

        self.map_title.setText(web_map.title)
        details = [f"Basemap: {web_map.basemap.title or 'untitled'}"]
        if web_map.wkid:
            details.append(f"Spatial reference: {web_map.wkid}")
        if web_map.item.owner:
            details.append(f"Owner: {web_map.item.owner}")
        self.map_details.setText(" | ".join(details))

        for layer in web_map.operational_layers:
            QTreeWidgetItem(self.layer_tree, [layer.title or layer.id, layer.layer_type or "", "yes" if layer.visibility else "no"])
        basemap_node = QTreeWidgetItem(self.layer_tree, [web_map.basemap.title or "Basemap", "basemap", ""])
        for layer in web_map.basemap.layers:
            QTreeWidgetItem(basemap_node, [layer.title or layer.id, layer.layer_type or "", "yes" if layer.visibility else "no"])

    def _on_error(self, title: str, message: str):
        logger.debug(f"Showing error dialog: {message}")
        self._present_error(self, title, message)

    @staticmethod
    def _describe_item(item: PortalItem) -> str:
        if item.owner:
            return f"{item.title} ({item.owner})"
        return item.title or item.id
