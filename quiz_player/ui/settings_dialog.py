"""Settings dialog for configuring QuizPlayer preferences."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)

from quiz_player.constants.quiz_constants import SUPPORTED_LANGUAGES
from quiz_player.constants.ui_constants import MAX_FONT_SIZE, MIN_FONT_SIZE

_LANGUAGE_NAMES = {"ta": "தமிழ்", "en": "English"}


class SettingsDialog(QDialog):
    """Dialog for configuring font sizes and the message language."""

    def __init__(
        self,
        parent=None,
        ui_font_size: int = 10,
        question_font_size: int = 14,
        language: str = "ta",
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.setMinimumWidth(400)

        self._ui_font_size = max(MIN_FONT_SIZE, min(MAX_FONT_SIZE, ui_font_size))
        self._question_font_size = max(MIN_FONT_SIZE, min(MAX_FONT_SIZE, question_font_size))
        self._language = language

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        # Font settings group
        font_group = QGroupBox("Font Sizes")
        font_layout = QVBoxLayout()
        font_group.setLayout(font_layout)

        ui_font_row = QHBoxLayout()
        ui_font_label = QLabel("UI Font Size (buttons, labels):")
        self.ui_font_spinbox = QSpinBox()
        self.ui_font_spinbox.setRange(MIN_FONT_SIZE, MAX_FONT_SIZE)
        self.ui_font_spinbox.setValue(self._ui_font_size)
        self.ui_font_spinbox.setSuffix(" pt")
        ui_font_row.addWidget(ui_font_label)
        ui_font_row.addStretch()
        ui_font_row.addWidget(self.ui_font_spinbox)
        font_layout.addLayout(ui_font_row)

        question_font_row = QHBoxLayout()
        question_font_label = QLabel("Question Font Size (prompt, options):")
        self.question_font_spinbox = QSpinBox()
        self.question_font_spinbox.setRange(MIN_FONT_SIZE, MAX_FONT_SIZE)
        self.question_font_spinbox.setValue(self._question_font_size)
        self.question_font_spinbox.setSuffix(" pt")
        question_font_row.addWidget(question_font_label)
        question_font_row.addStretch()
        question_font_row.addWidget(self.question_font_spinbox)
        font_layout.addLayout(question_font_row)

        layout.addWidget(font_group)

        # Language group
        language_group = QGroupBox("Language")
        language_layout = QHBoxLayout()
        language_group.setLayout(language_layout)
        language_layout.addWidget(QLabel("Messages:"))
        self.language_combo = QComboBox()
        for code in SUPPORTED_LANGUAGES:
            self.language_combo.addItem(_LANGUAGE_NAMES.get(code, code), code)
        current = self.language_combo.findData(self._language)
        self.language_combo.setCurrentIndex(max(0, current))
        language_layout.addStretch()
        language_layout.addWidget(self.language_combo)

        layout.addWidget(language_group)

        # Buttons
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

    def get_ui_font_size(self) -> int:
        """Get the selected UI font size."""
        return self.ui_font_spinbox.value()

    def get_question_font_size(self) -> int:
        """Get the selected question font size."""
        return self.question_font_spinbox.value()

    def get_language(self) -> str:
        """Get the selected message language code."""
        return self.language_combo.currentData()
