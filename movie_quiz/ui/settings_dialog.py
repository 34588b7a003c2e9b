"""Settings dialog for configuring MovieQuiz preferences."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QSpinBox,
    QPushButton,
    QGroupBox,
    QCheckBox,
)


class SettingsDialog(QDialog):
    """Dialog for configuring application settings."""

    def __init__(
        self,
        parent=None,
        game_font_size: int = 14,
        feedback_delay_ms: int = 1000,
        dark_theme: bool = True,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.setMinimumWidth(400)

        self._game_font_size = game_font_size
        self._feedback_delay_ms = max(0, min(5000, feedback_delay_ms))
        self._dark_theme = dark_theme

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        display_group = QGroupBox("Display Settings")
        display_layout = QVBoxLayout()
        display_group.setLayout(display_layout)

        font_row = QHBoxLayout()
        font_label = QLabel("Game Font Size:")
        font_label.setToolTip("Font size for the question, counter and buttons")
        self.font_spinbox = QSpinBox()
        self.font_spinbox.setRange(10, 32)
        self.font_spinbox.setValue(self._game_font_size)
        self.font_spinbox.setSuffix(" pt")
        font_row.addWidget(font_label)
        font_row.addStretch()
        font_row.addWidget(self.font_spinbox)
        display_layout.addLayout(font_row)

        self.dark_theme_checkbox = QCheckBox("Use dark theme")
        self.dark_theme_checkbox.setChecked(self._dark_theme)
        display_layout.addWidget(self.dark_theme_checkbox)

        layout.addWidget(display_group)

        gameplay_group = QGroupBox("Gameplay")
        gameplay_layout = QVBoxLayout()
        gameplay_group.setLayout(gameplay_layout)

        delay_row = QHBoxLayout()
        delay_label = QLabel("Answer highlight duration:")
        delay_label.setToolTip("How long the green/red highlight stays before the next question")
        self.delay_spinbox = QSpinBox()
        self.delay_spinbox.setRange(0, 5000)
        self.delay_spinbox.setSingleStep(250)
        self.delay_spinbox.setValue(self._feedback_delay_ms)
        self.delay_spinbox.setSuffix(" ms")
        delay_row.addWidget(delay_label)
        delay_row.addStretch()
        delay_row.addWidget(self.delay_spinbox)
        gameplay_layout.addLayout(delay_row)

        layout.addWidget(gameplay_group)

        button_row = QHBoxLayout()
        button_row.addStretch()

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)

        self.apply_button = QPushButton("Apply")
        self.apply_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        self.apply_button.setDefault(True)
        button_row.addWidget(self.apply_button)

        layout.addLayout(button_row)

    def get_game_font_size(self) -> int:
        """Get the selected game font size."""
        return self.font_spinbox.value()

    def get_feedback_delay_ms(self) -> int:
        """Get how long answer feedback stays visible."""
        return self.delay_spinbox.value()

    def get_dark_theme(self) -> bool:
        return self.dark_theme_checkbox.isChecked()
