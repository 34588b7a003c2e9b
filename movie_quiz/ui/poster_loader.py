"""Resolve a question's image key to a pixmap for display.

Posters are optional and none are bundled. Built-in questions are looked up
by movie title in the directory named by `MOVIE_QUIZ_POSTER_DIR`, falling back
to `movie_quiz/data/posters`. Without a matching file the window shows the
title instead.
"""

from __future__ import annotations

from pathlib import Path

from PySide6.QtGui import QPixmap

from movie_quiz.constants.ui_constants import POSTER_DIRECTORY_NAME, POSTER_SUFFIXES

DEFAULT_POSTER_DIR = Path(__file__).resolve().parent.parent / "data" / POSTER_DIRECTORY_NAME


def resolve_poster_path(image_key: str, poster_dir: Path = DEFAULT_POSTER_DIR) -> Path | None:
    """Return the poster file for ``image_key``, if one exists.

    Remote questions carry the path of a downloaded poster, bundled questions
    carry a movie title that is looked up in ``poster_dir``.
    """
    direct = Path(image_key)
    if direct.suffix and direct.is_file():
        return direct
    for suffix in POSTER_SUFFIXES:
        candidate = poster_dir / f"{image_key}{suffix}"
        if candidate.is_file():
            return candidate
    return None


def load_poster_pixmap(image_key: str, poster_dir: Path = DEFAULT_POSTER_DIR) -> QPixmap | None:
    path = resolve_poster_path(image_key, poster_dir)
    if path is None:
        return None
    pixmap = QPixmap(str(path))
    return None if pixmap.isNull() else pixmap
