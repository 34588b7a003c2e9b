"""Helper functions for common dialog patterns in the quiz UI."""

from __future__ import annotations

from PySide6.QtGui import QFont
from PySide6.QtWidgets import QMessageBox, QWidget

from movie_quiz.core.models import AlertModel


def _apply_optional_font(widget: QWidget, font_point_size: int | None) -> None:
    """Apply font size to a widget when requested."""
    if font_point_size is None or font_point_size <= 0:
        return

    font: QFont = widget.font()
    font.setPointSize(font_point_size)
    widget.setFont(font)


def show_result(parent: QWidget, alert: AlertModel, *, font_point_size: int | None = None) -> None:
    """Show a modal alert and run its completion once it is dismissed.

    Args:
        parent: Parent widget for the dialog
        alert: Title, message, button text and completion callback
        font_point_size: Optional font size for the message and button
    """
    msg_box = QMessageBox(parent)
    msg_box.setIcon(QMessageBox.Icon.NoIcon)
    msg_box.setWindowTitle(alert.title)
    msg_box.setText(alert.title)
    msg_box.setInformativeText(alert.message)
    msg_box.addButton(alert.button_text, QMessageBox.ButtonRole.AcceptRole)
    _apply_optional_font(msg_box, font_point_size)
    msg_box.exec()
    alert.completion()


def show_info(
    parent: QWidget,
    title: str,
    message: str,
    *,
    font_point_size: int | None = None,
) -> None:
    """Show information dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Information message
    """
    msg_box = QMessageBox(parent)
    msg_box.setIcon(QMessageBox.Icon.Information)
    msg_box.setWindowTitle(title)
    msg_box.setText(message)
    msg_box.setStandardButtons(QMessageBox.StandardButton.Ok)
    _apply_optional_font(msg_box, font_point_size)
    msg_box.exec()
