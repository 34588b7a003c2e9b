"""Qt main window that plays one round after another."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QObject, Qt, QTimer, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from movie_quiz.constants.about import (
    APP_ABOUT_TEXT,
    APP_LICENSE,
    APP_NAME,
    APP_VERSION,
    HELP_TEXT,
)
from movie_quiz.constants.quiz_constants import ANSWER_BORDER_WIDTH, FEEDBACK_DELAY_MS
from movie_quiz.constants.ui_constants import (
    ERROR_BUTTON_TEXT,
    ERROR_TITLE,
    GAME_URL_PLACEHOLDER,
    LOADING_MESSAGE,
    NO_BUTTON_TEXT,
    POSTER_PLACEHOLDER,
    QUESTION_LABEL_TEXT,
    WINDOW_TITLE,
    YES_BUTTON_TEXT,
)
from movie_quiz.core.errors import NoActiveRound, SourceUnavailable
from movie_quiz.core.models import AlertModel, QuizResultsViewModel, QuizStepViewModel
from movie_quiz.core.quiz_manager import MovieQuizManager
from movie_quiz.styling.color_palette import ColorPalette, Theme
from movie_quiz.styling.styles import Styles
from movie_quiz.ui.dialog_helpers import show_info, show_result
from movie_quiz.ui.poster_loader import DEFAULT_POSTER_DIR, load_poster_pixmap
from movie_quiz.ui.settings_dialog import SettingsDialog

logger = logging.getLogger(__name__)


class _DeliveryBridge(QObject):
    """Moves question-source callbacks from worker threads onto the Qt thread."""

    round_ready = Signal(object)
    round_failed = Signal(object)


class MovieQuizWindow(QMainWindow):
    """Poster, prompt, counter and Yes/No buttons for the current question."""

    def __init__(
        self,
        quiz_manager: MovieQuizManager,
        game_url: str | None = None,
        poster_dir: Path = DEFAULT_POSTER_DIR,
    ) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)

        self.quiz_manager = quiz_manager
        self.game_url = game_url or GAME_URL_PLACEHOLDER
        self._poster_dir = poster_dir

        self._theme = Theme.DARK
        self._game_font_size: int = 14
        self._feedback_delay_ms: int = FEEDBACK_DELAY_MS

        self._bridge = _DeliveryBridge(self)
        self._bridge.round_ready.connect(self._show_step)
        self._bridge.round_failed.connect(self._show_network_error)

        self._build_ui()
        self._apply_styles()
        self._load_round()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        header_row = QHBoxLayout()
        self.question_title_label = QLabel(QUESTION_LABEL_TEXT, self)
        self.counter_label = QLabel("", self)
        header_row.addWidget(self.question_title_label)
        header_row.addStretch()
        header_row.addWidget(self.counter_label)
        root_layout.addLayout(header_row)

        self.poster_label = QLabel(POSTER_PLACEHOLDER, self)
        self.poster_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.poster_label.setMinimumSize(320, 420)
        self.poster_label.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        root_layout.addWidget(self.poster_label, stretch=1)

        self.question_label = QLabel(LOADING_MESSAGE, self)
        self.question_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.question_label.setWordWrap(True)
        root_layout.addWidget(self.question_label)

        answer_row = QHBoxLayout()
        self.no_button = QPushButton(NO_BUTTON_TEXT, self)
        self.no_button.clicked.connect(lambda: self._handle_answer(False))
        answer_row.addWidget(self.no_button)

        self.yes_button = QPushButton(YES_BUTTON_TEXT, self)
        self.yes_button.clicked.connect(lambda: self._handle_answer(True))
        answer_row.addWidget(self.yes_button)
        root_layout.addLayout(answer_row)

        menu_row = QHBoxLayout()
        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        menu_row.addWidget(self.about_button)

        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        menu_row.addWidget(self.help_button)

        self.settings_button = QPushButton("Settings", self)
        self.settings_button.clicked.connect(self._handle_settings)
        menu_row.addWidget(self.settings_button)
        root_layout.addLayout(menu_row)

        self._set_answer_buttons_enabled(False)

    # --- Round flow ---

    def _load_round(self) -> None:
        self._set_answer_buttons_enabled(False)
        self.question_label.setText(LOADING_MESSAGE)
        self.quiz_manager.collect_round(
            on_ready=self._bridge.round_ready.emit,
            on_failure=self._bridge.round_failed.emit,
        )

    def _show_step(self, step: QuizStepViewModel) -> None:
        self._set_poster_border(None)
        pixmap = load_poster_pixmap(step.image_key, self._poster_dir)
        if pixmap is None:
            self.poster_label.clear()
            self.poster_label.setText(step.image_key)
        else:
            self.poster_label.setPixmap(
                pixmap.scaled(
                    self.poster_label.size(),
                    Qt.AspectRatioMode.KeepAspectRatio,
                    Qt.TransformationMode.SmoothTransformation,
                )
            )
        self.question_label.setText(step.question)
        self.counter_label.setText(step.question_number)
        self._set_answer_buttons_enabled(True)

    def _handle_answer(self, choice: bool) -> None:
        self._set_answer_buttons_enabled(False)
        try:
            result = self.quiz_manager.answer(choice)
        except NoActiveRound as exc:
            logger.warning("Ignoring answer: %s", exc)
            return
        color = ColorPalette.ANSWER_CORRECT if result.is_correct else ColorPalette.ANSWER_WRONG
        self._set_poster_border(color.get(self._theme))
        QTimer.singleShot(self._feedback_delay_ms, self._show_next_question_or_results)

    def _show_next_question_or_results(self) -> None:
        self._set_poster_border(None)
        outcome = self.quiz_manager.show_next_question_or_results()
        if isinstance(outcome, QuizResultsViewModel):
            self._show_results(outcome)
        else:
            self._show_step(outcome)

    def _show_results(self, results: QuizResultsViewModel) -> None:
        alert = AlertModel(
            title=results.title,
            message=results.text,
            button_text=results.button_text,
            completion=self._load_round,
        )
        show_result(self, alert, font_point_size=self._game_font_size)

    def _show_network_error(self, error: SourceUnavailable) -> None:
        logger.error("Question source failed: %s", error)
        alert = AlertModel(
            title=ERROR_TITLE,
            message=str(error),
            button_text=ERROR_BUTTON_TEXT,
            completion=self._load_round,
        )
        show_result(self, alert, font_point_size=self._game_font_size)

    # --- Menu actions ---

    def _handle_about(self) -> None:
        show_info(
            self,
            f"About {APP_NAME}",
            f"{APP_NAME} {APP_VERSION}\n\n{APP_ABOUT_TEXT}\n\nPlay in a browser: {self.game_url}\n\n{APP_LICENSE}",
        )

    def _handle_help(self) -> None:
        show_info(self, "Help", HELP_TEXT)

    def _handle_settings(self) -> None:
        dialog = SettingsDialog(
            self,
            game_font_size=self._game_font_size,
            feedback_delay_ms=self._feedback_delay_ms,
            dark_theme=self._theme == Theme.DARK,
        )
        if dialog.exec():
            self._game_font_size = dialog.get_game_font_size()
            self._feedback_delay_ms = dialog.get_feedback_delay_ms()
            self._theme = Theme.DARK if dialog.get_dark_theme() else Theme.LIGHT
            self._apply_styles()

    # --- Styling helpers ---

    def _apply_styles(self) -> None:
        self.setStyleSheet(Styles.get_main_window_style(self._theme, self._game_font_size))
        self.question_title_label.setStyleSheet(Styles.get_counter_style(self._theme))
        self.counter_label.setStyleSheet(Styles.get_counter_style(self._theme))
        self.question_label.setStyleSheet(Styles.get_large_label_style())
        self._set_poster_border(None)

    def _set_poster_border(self, color: str | None) -> None:
        width = ANSWER_BORDER_WIDTH if color else 0
        self.poster_label.setStyleSheet(Styles.get_poster_style(self._theme, color, width))

    def _set_answer_buttons_enabled(self, enabled: bool) -> None:
        self.yes_button.setEnabled(enabled)
        self.no_button.setEnabled(enabled)
