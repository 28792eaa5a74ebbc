import sys
import asyncio
import argparse
from PySide6.QtWidgets import QApplication
from loguru import logger
import qasync

from webmap_explorer.core.locator import sl
from webmap_explorer.core.logging import setup_logging
from webmap_explorer.ui.mvvm import ViewModelProvider
from webmap_explorer.ui.viewmodels import LoadWebMapViewModel


async def main(app: QApplication, config_path: str):
    # 0. Initialize Service Locator and logging from config
    sl.init(config_path)
    general = sl.config.data.general
    setup_logging(general.debug_mode, general.log_dir)

    app_close_event = asyncio.Event()
    app.aboutToQuit.connect(app_close_event.set)

    # 1. ViewModels (featured items start loading on construction)
    provider = ViewModelProvider(sl)
    view_model = provider.get(LoadWebMapViewModel)

    # 2. UI
    from webmap_explorer.ui.main_window import MainWindow
    window = MainWindow(view_model)
    window.show()

    logger.info(f"Application started against portal {sl.config.data.portal.url}")

    await app_close_event.wait()
    await provider.close_all()
    logger.info("Application stopped")


def run(argv=None):
    parser = argparse.ArgumentParser(description="Search a portal and load web maps.")
    parser.add_argument("--config", default="config.json", help="Path to JSON or TOML config file")
    args, qt_args = parser.parse_known_args(argv if argv is not None else sys.argv[1:])

    app = QApplication.instance() or QApplication([sys.argv[0], *qt_args])
    app.setStyle("Fusion")

    # qasync combines the asyncio and Qt event loops
    loop = qasync.QEventLoop(app)
    asyncio.set_event_loop(loop)

    with loop:
        loop.run_until_complete(main(app, args.config))


if __name__ == "__main__":
    run()
