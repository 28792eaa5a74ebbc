from PySide6.QtWidgets import QMainWindow
from loguru import logger

from .viewmodels.load_webmap_viewmodel import LoadWebMapViewModel
from .views.load_webmap_view import LoadWebMapView


class MainWindow(QMainWindow):
    """Top-level window hosting the Load Web Map view."""

    def __init__(self, view_model: LoadWebMapViewModel):
        super().__init__()
        self.setWindowTitle("Web Map Explorer")
        self.resize(1100, 700)

        self.view = LoadWebMapView(view_model, self)
        self.setCentralWidget(self.view)

        view_model.errorMessageChanged.connect(self._on_error_message)
        logger.info("MainWindow initialized")

    def _on_error_message(self, message: str):
        if message:
            self.statusBar().showMessage(message, 10000)
        else:
            self.statusBar().clearMessage()
