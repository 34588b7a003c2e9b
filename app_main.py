"""Application entry point for MovieQuiz."""

from __future__ import annotations

import logging
import os
from pathlib import Path
import socket
import sys
import tempfile

from PySide6.QtWidgets import QApplication

from movie_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT, MOVIES_API_KEY_ENV
from movie_quiz.constants.ui_constants import POSTER_DIR_ENV
from movie_quiz.core.errors import SourceUnavailable
from movie_quiz.core.movies_loader import MoviesLoader
from movie_quiz.core.question_factory import RemoteQuestionFactory
from movie_quiz.core.question_source import QuestionSource, StaticQuestionSource
from movie_quiz.core.quiz_manager import MovieQuizManager
from movie_quiz.core.services.key_value_store import QSettingsKeyValueStore
from movie_quiz.core.services.statistics_store import StatisticsStore
from movie_quiz.server.api_server import start_api_server
from movie_quiz.ui.movie_quiz_window import MovieQuizWindow
from movie_quiz.ui.poster_loader import DEFAULT_POSTER_DIR
from movie_quiz.utils.logging_config import configure_logging


def _determine_game_url(port: int) -> str:
    """Best-effort determination of the local IP for the browser URL."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}/"


def _build_question_source() -> QuestionSource:
    """Use the movie feed when an API key is configured, the bundled questions otherwise."""
    api_key = os.environ.get(MOVIES_API_KEY_ENV, "").strip()
    if not api_key:
        return StaticQuestionSource()
    poster_cache_dir = Path(tempfile.gettempdir()) / "movie_quiz_posters"
    factory = RemoteQuestionFactory(MoviesLoader(api_key), poster_cache_dir)
    factory.load_data(_log_movie_list_loaded)
    return factory


def _log_movie_list_loaded(error: SourceUnavailable | None) -> None:
    if error is None:
        logging.getLogger(__name__).info("Movie list loaded")


def _poster_dir() -> Path:
    configured = os.environ.get(POSTER_DIR_ENV, "").strip()
    return Path(configured) if configured else DEFAULT_POSTER_DIR


def main() -> None:
    """Initialize logging, start the API server, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting MovieQuiz…")

    app = QApplication(sys.argv)

    statistics = StatisticsStore(QSettingsKeyValueStore.from_defaults())
    quiz_manager = MovieQuizManager(source=_build_question_source(), statistics=statistics)
    start_api_server(quiz_manager=quiz_manager, host=DEFAULT_HOST, port=DEFAULT_PORT)
    game_url = _determine_game_url(DEFAULT_PORT)
    logger.info("Browser game available at %s", game_url)

    window = MovieQuizWindow(quiz_manager=quiz_manager, game_url=game_url, poster_dir=_poster_dir())
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
