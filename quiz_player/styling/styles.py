"""Centralized styles and font definitions for the player window."""

from .color_palette import ColorPalette, Theme

class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Noto Sans Tamil', 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_SECONDARY_BG.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QComboBox, QSpinBox, QTextBrowser {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
        """

    @staticmethod
    def get_option_button_style(marking: str | None, font_size: int, theme: Theme = Theme.LIGHT) -> str:
        """Style for an option button; ``marking`` is ``"correct"``, ``"wrong"`` or None."""
        base = f"text-align: left; padding: 10px 14px; font-size: {font_size}pt;"
        if marking == "correct":
            return (
                f"QPushButton {{ {base} background-color: {ColorPalette.OPTION_CORRECT_BG.get(theme)};"
                f" color: {ColorPalette.OPTION_MARKED_TEXT.get(theme)}; }}"
            )
        if marking == "wrong":
            return (
                f"QPushButton {{ {base} background-color: {ColorPalette.OPTION_WRONG_BG.get(theme)};"
                f" color: {ColorPalette.OPTION_MARKED_TEXT.get(theme)}; }}"
            )
        return f"QPushButton {{ {base} }}"

    @staticmethod
    def get_note_style(theme: Theme = Theme.LIGHT) -> str:
        return f"color: {ColorPalette.NOTE.get(theme)};"

    @staticmethod
    def get_status_style(theme: Theme = Theme.LIGHT) -> str:
        return f"color: {ColorPalette.ERROR.get(theme)};"

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"
