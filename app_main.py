"""Application entry point for QuizPlayer."""

from __future__ import annotations

import asyncio
import socket
import sys

from PySide6.QtWidgets import QApplication

from quiz_player.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from quiz_player.constants.quiz_constants import DEFAULT_CATALOG_FILE
from quiz_player.core.quiz_controller import QuizController
from quiz_player.core.quiz_source import QuizSource
from quiz_player.server.api_server import start_api_server
from quiz_player.ui.player_main_window import PlayerMainWindow
from quiz_player.utils.logging_config import configure_logging


def _determine_player_url(port: int) -> str:
    """Best-effort determination of the local IP for the browser player URL."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}/"


def main() -> None:
    """Initialize logging, load the catalog, start the API server, and launch the Qt UI.

    The catalog location may be given as the first command-line argument, as a
    path or an http(s) URL; it defaults to quiz-list.json in the working directory.
    """
    logger = configure_logging()
    logger.info("Starting QuizPlayer…")

    catalog_location = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_CATALOG_FILE
    controller = QuizController(QuizSource(catalog_location))
    asyncio.run(controller.load_catalog())

    start_api_server(controller=controller, host=DEFAULT_HOST, port=DEFAULT_PORT)
    logger.info("Browser player available at %s", _determine_player_url(DEFAULT_PORT))

    app = QApplication(sys.argv[:1])
    window = PlayerMainWindow(controller=controller)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
