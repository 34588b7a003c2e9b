"""Centralized styles and font definitions for the application."""

from .color_palette import ColorPalette, Theme


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.DARK, font_size: int = 14) -> str:
        return f"""
            QMainWindow, QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: {font_size}pt;
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_BG.get(theme)};
                color: {ColorPalette.BUTTON_TEXT.get(theme)};
                border: none;
                border-radius: 15px;
                padding: 14px 12px;
                font-weight: 600;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:disabled {{
                background-color: {ColorPalette.BUTTON_DISABLED_BG.get(theme)};
            }}
        """

    @staticmethod
    def get_poster_style(theme: Theme = Theme.DARK, border_color: str | None = None, border_width: int = 0) -> str:
        border = f"{border_width}px solid {border_color}" if border_color and border_width else "none"
        return (
            f"background-color: {ColorPalette.POSTER_BACKGROUND.get(theme)};"
            f" border-radius: 20px; border: {border};"
        )

    @staticmethod
    def get_counter_style(theme: Theme = Theme.DARK) -> str:
        return f"color: {ColorPalette.TEXT_SECONDARY.get(theme)}; font-weight: 500;"

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 20pt; font-weight: bold;"
