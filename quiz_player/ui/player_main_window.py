"""Qt main window for taking a quiz question by question."""

from __future__ import annotations

import asyncio
import html
import logging
from threading import Thread

from PySide6.QtCore import QTimer, Signal
from PySide6.QtGui import QCloseEvent, QStandardItemModel
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from quiz_player.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from quiz_player.constants.ui_constants import (
    ABOUT_BUTTON,
    DEFAULT_QUESTION_FONT_SIZE,
    DEFAULT_UI_FONT_SIZE,
    HELP_BUTTON,
    SETTINGS_BUTTON,
    STATE_REFRESH_INTERVAL_MS,
    WINDOW_TITLE,
)
from quiz_player.core.models import QuestionView, SessionStatus
from quiz_player.core.quiz_controller import QuizController
from quiz_player.core.services.quiz_session import NoActiveSessionError, QuizSessionError
from quiz_player.styling.styles import Styles
from quiz_player.ui.dialog_helpers import confirm_switch_quiz, show_error, show_info
from quiz_player.ui.question_renderer import format_option_caption, render_question_document
from quiz_player.ui.settings_dialog import SettingsDialog

logger = logging.getLogger(__name__)


class PlayerMainWindow(QMainWindow):
    """Main Qt window: quiz picker, current question, navigation, and results.

    Listens for finished quizzes without taking over the controller's results
    renderer, so the browser page keeps its own result display. Results and
    quiz loads finish on other threads and reach the widgets through queued
    signals.
    """

    results_ready = Signal(int, int, str)
    quiz_load_finished = Signal(int, bool)

    def __init__(self, controller: QuizController) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)

        self.controller = controller

        self._ui_font_size: int = DEFAULT_UI_FONT_SIZE
        self._question_font_size: int = DEFAULT_QUESTION_FONT_SIZE
        self._option_buttons: list[QPushButton] = []
        self._selected_combo_index: int = 0
        self._rendered_key: tuple | None = None

        self._build_ui()
        self._apply_styles()
        self.results_ready.connect(self._display_results)
        self.quiz_load_finished.connect(self._handle_quiz_loaded)
        self.controller.subscribe_results(self._handle_result_payload)
        self._populate_catalog()
        self._configure_refresh_timer()
        self._refresh_state(force=True)

    def _handle_result_payload(self, payload: dict[str, object]) -> None:
        self.results_ready.emit(int(payload["score"]), int(payload["total"]), str(payload["title"]))

    def closeEvent(self, event: QCloseEvent) -> None:
        self.refresh_timer.stop()
        self.controller.unsubscribe_results(self._handle_result_payload)
        super().closeEvent(event)

    # --- UI construction ---

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        top_row = QHBoxLayout()
        self.quiz_select = QComboBox(self)
        self.quiz_select.currentIndexChanged.connect(self._handle_quiz_selected)
        top_row.addWidget(self.quiz_select, stretch=1)

        self.settings_button = QPushButton(SETTINGS_BUTTON, self)
        self.settings_button.clicked.connect(self._handle_settings)
        top_row.addWidget(self.settings_button)

        self.help_button = QPushButton(HELP_BUTTON, self)
        self.help_button.clicked.connect(self._handle_help)
        top_row.addWidget(self.help_button)

        self.about_button = QPushButton(ABOUT_BUTTON, self)
        self.about_button.clicked.connect(self._handle_about)
        top_row.addWidget(self.about_button)
        root_layout.addLayout(top_row)

        self.status_label = QLabel("", self)
        self.status_label.setWordWrap(True)
        root_layout.addWidget(self.status_label)

        self.quiz_area = QWidget(self)
        quiz_layout = QVBoxLayout()
        self.quiz_area.setLayout(quiz_layout)

        self.progress_label = QLabel("", self.quiz_area)
        self.progress_label.setStyleSheet(Styles.get_large_label_style())
        quiz_layout.addWidget(self.progress_label)

        self.question_view = QWebEngineView(self.quiz_area)
        self.question_view.setMinimumHeight(160)
        quiz_layout.addWidget(self.question_view, stretch=1)

        self.options_layout = QVBoxLayout()
        quiz_layout.addLayout(self.options_layout)

        self.no_options_label = QLabel("", self.quiz_area)
        self.no_options_label.setVisible(False)
        quiz_layout.addWidget(self.no_options_label)

        self.feedback_label = QLabel("", self.quiz_area)
        self.feedback_label.setWordWrap(True)
        self.feedback_label.setVisible(False)
        quiz_layout.addWidget(self.feedback_label)

        self.note_label = QLabel("", self.quiz_area)
        self.note_label.setWordWrap(True)
        quiz_layout.addWidget(self.note_label)

        nav_row = QHBoxLayout()
        self.prev_button = QPushButton(self.quiz_area)
        self.prev_button.clicked.connect(self._handle_previous)
        nav_row.addWidget(self.prev_button)

        self.next_button = QPushButton(self.quiz_area)
        self.next_button.clicked.connect(self._handle_next)
        nav_row.addWidget(self.next_button)

        nav_row.addStretch()

        self.finish_button = QPushButton(self.quiz_area)
        self.finish_button.clicked.connect(self._handle_finish)
        nav_row.addWidget(self.finish_button)
        quiz_layout.addLayout(nav_row)

        root_layout.addWidget(self.quiz_area, stretch=1)

        self.results_label = QLabel("", self)
        self.results_label.setStyleSheet(Styles.get_large_label_style())
        self.results_label.setVisible(False)
        root_layout.addWidget(self.results_label)

    def _configure_refresh_timer(self) -> None:
        # Picks up answers and navigation made from the browser page.
        self.refresh_timer = QTimer(self)
        self.refresh_timer.setInterval(STATE_REFRESH_INTERVAL_MS)
        self.refresh_timer.timeout.connect(self._refresh_state)
        self.refresh_timer.start()

    def _populate_catalog(self) -> None:
        self.quiz_select.blockSignals(True)
        self.quiz_select.clear()
        self.quiz_select.addItem(self.controller.message("select_quiz"), None)
        model = self.quiz_select.model()
        for category in self.controller.catalog_categories():
            self.quiz_select.addItem(category.name, None)
            if isinstance(model, QStandardItemModel):
                model.item(self.quiz_select.count() - 1).setEnabled(False)
            for entry in category.entries:
                self.quiz_select.addItem(f"    {entry.title}", entry.identifier)
        self.quiz_select.setCurrentIndex(0)
        self._selected_combo_index = 0
        self.quiz_select.setEnabled(self.controller.selection_enabled)
        self.quiz_select.blockSignals(False)

    # --- Event handlers ---

    def _handle_quiz_selected(self, index: int) -> None:
        identifier = self.quiz_select.itemData(index)
        if not identifier:
            return

        if self._has_unfinished_answers() and not confirm_switch_quiz(self):
            self.quiz_select.blockSignals(True)
            self.quiz_select.setCurrentIndex(self._selected_combo_index)
            self.quiz_select.blockSignals(False)
            return

        title = self.quiz_select.itemText(index).strip()
        self.status_label.setText(self.controller.message("quiz_loading"))

        def load() -> None:
            loaded = asyncio.run(self.controller.load_quiz(identifier, title))
            self.quiz_load_finished.emit(index, loaded)

        Thread(target=load, name="QuizLoader", daemon=True).start()

    def _handle_quiz_loaded(self, index: int, loaded: bool) -> None:
        if loaded:
            self._selected_combo_index = index
            self.results_label.setVisible(False)
        self._refresh_state(force=True)

    def _handle_option_clicked(self, choice_index: int) -> None:
        self._run_session_action(lambda: self.controller.select_answer(choice_index))

    def _handle_previous(self) -> None:
        self._run_session_action(self.controller.previous_question)

    def _handle_next(self) -> None:
        self._run_session_action(self.controller.next_question)

    def _handle_finish(self) -> None:
        self._run_session_action(self.controller.finish_now)

    def _run_session_action(self, action) -> None:
        try:
            action()
        except QuizSessionError as exc:
            logger.error("Quiz action rejected: %s", exc)
            show_error(self, "Quiz error", str(exc))
        self._refresh_state(force=True)

    def _handle_settings(self) -> None:
        dialog = SettingsDialog(
            self,
            self._ui_font_size,
            self._question_font_size,
            self.controller.language,
        )
        if dialog.exec():
            self._ui_font_size = dialog.get_ui_font_size()
            self._question_font_size = dialog.get_question_font_size()
            self.controller.set_language(dialog.get_language())
            self._apply_styles()
            self._populate_catalog()
            self._refresh_state(force=True)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _display_results(self, score: int, total: int, title: str) -> None:
        percentage = self.controller.result.percentage if self.controller.result else 0
        self.results_label.setText(
            f"{title}\n"
            f"{self.controller.message('result_score', score=score, total=total)}\n"
            f"{self.controller.message('result_percentage', percentage=percentage)}"
        )
        self.results_label.setVisible(True)
        self._refresh_state(force=True)

    # --- Rendering ---

    def _has_unfinished_answers(self) -> bool:
        if self.controller.session_status is not SessionStatus.IN_PROGRESS:
            return False
        return any(state.is_answered for state in self.controller.answer_states())

    def _refresh_state(self, force: bool = False) -> None:
        status_message = self.controller.status_message
        status = self.controller.session_status
        try:
            view = self.controller.current_view()
        except NoActiveSessionError:
            view = None

        key = (status, status_message, self.controller.note_message, self.controller.language, view)
        if not force and key == self._rendered_key:
            return
        self._rendered_key = key

        self.status_label.setText(status_message)
        self.status_label.setVisible(bool(status_message))
        self.quiz_select.setEnabled(self.controller.selection_enabled)

        self.prev_button.setText(self.controller.message("previous"))
        self.next_button.setText(self.controller.message("next"))
        self.finish_button.setText(self.controller.message("finish"))

        in_progress = view is not None and status is SessionStatus.IN_PROGRESS
        self.quiz_area.setVisible(in_progress)
        if in_progress:
            self._render_question(view)

    def _render_question(self, view: QuestionView) -> None:
        self.progress_label.setText(self.controller.progress_text())
        self.question_view.setHtml(render_question_document(view, font_size=self._question_font_size))

        for button in self._option_buttons:
            self.options_layout.removeWidget(button)
            button.deleteLater()
        self._option_buttons = []

        for index, (label, text) in enumerate(view.options):
            button = QPushButton(format_option_caption(label, text), self.quiz_area)
            button.setStyleSheet(
                Styles.get_option_button_style(self._option_marking(view, index), self._question_font_size)
            )
            button.setEnabled(view.selectable)
            button.clicked.connect(lambda _checked=False, i=index: self._handle_option_clicked(i))
            self.options_layout.addWidget(button)
            self._option_buttons.append(button)

        self.no_options_label.setText(self.controller.message("no_options"))
        self.no_options_label.setVisible(not view.options)

        if view.is_answered and view.explanation:
            self.feedback_label.setText(
                f"<b>{self.controller.message('explanation_label')}:</b> {html.escape(view.explanation)}"
            )
            self.feedback_label.setVisible(True)
        else:
            self.feedback_label.setVisible(False)

        self.note_label.setText(self.controller.note_message)
        self.prev_button.setEnabled(not view.is_first)

    @staticmethod
    def _option_marking(view: QuestionView, index: int) -> str | None:
        if not view.is_answered:
            return None
        if index == view.correct_index:
            return "correct"
        if index == view.chosen_index and not view.is_correct:
            return "wrong"
        return None

    def _apply_styles(self) -> None:
        self.setStyleSheet(Styles.get_main_window_style())

        ui_style = f"font-size: {self._ui_font_size}pt;"
        for button in (self.settings_button, self.help_button, self.about_button):
            button.setStyleSheet(ui_style)
        for button in (self.prev_button, self.next_button, self.finish_button):
            button.setStyleSheet(ui_style)
        self.note_label.setStyleSheet(f"{ui_style} {Styles.get_note_style()}")
        self.status_label.setStyleSheet(f"{ui_style} {Styles.get_status_style()}")
        self.feedback_label.setStyleSheet(ui_style)
        self.quiz_select.setStyleSheet(ui_style)
