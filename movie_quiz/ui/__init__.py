"""Qt UI components for the quiz application."""

from .dialog_helpers import show_info, show_result
from .movie_quiz_window import MovieQuizWindow

__all__ = [
    "MovieQuizWindow",
    "show_info",
    "show_result",
]
