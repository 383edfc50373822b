"""FastAPI server that exposes the quiz player to a browser."""

from __future__ import annotations

import logging
from threading import Thread

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel
import uvicorn

from quiz_player.constants.about import APP_NAME, APP_VERSION
from quiz_player.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from quiz_player.core.markdown_math_renderer import renderer
from quiz_player.core.models import QuestionView
from quiz_player.core.quiz_controller import QuizController
from quiz_player.core.services.quiz_session import NoActiveSessionError, QuizSessionError

logger = logging.getLogger(__name__)

_PLAYER_PAGE_HTML = """<!doctype html>
<html lang="ta">
  <head>
    <meta charset="utf-8" />
    <title>QuizPlayer</title>
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <style>
      :root { font-family: 'Noto Sans Tamil', 'Inter', system-ui, sans-serif; background: #0b1120; color: #f5f7ff; }
      body { margin: 0; padding: 1.5rem; display: flex; flex-direction: column; gap: 1rem; max-width: 54rem; margin-inline: auto; }
      .card { background: #111a30; border-radius: 0.75rem; padding: 1.5rem; box-shadow: 0 0.5rem 1.5rem rgba(0, 0, 0, 0.4); }
      .hidden { display: none; }
      select { width: 100%; padding: 0.6rem; border-radius: 0.5rem; font-size: 1rem; }
      #tv-progress { font-weight: 600; color: #94a3b8; }
      #tv-question { min-height: 4rem; font-size: 1.15rem; line-height: 1.6; }
      #tv-options { display: flex; flex-direction: column; gap: 0.6rem; }
      .option-btn { text-align: left; border: none; border-radius: 0.75rem; padding: 0.9rem 1rem; font-size: 1rem; background: #1f9aa5; color: #fff; cursor: pointer; transition: transform 120ms ease, background 120ms ease; }
      .option-btn:hover:enabled { transform: translateY(-2px); background: #16808a; }
      .option-btn:disabled { cursor: default; opacity: 0.85; }
      .option-btn.correct { background: #15803d; }
      .option-btn.wrong { background: #b91c1c; }
      #tv-feedback { background: #0f2a3d; border-radius: 0.5rem; padding: 0.75rem 1rem; }
      .nav-row { display: flex; gap: 0.75rem; }
      .nav-btn { border: none; border-radius: 0.75rem; padding: 0.7rem 1.3rem; font-size: 1rem; background: #334155; color: #fff; cursor: pointer; }
      .nav-btn:disabled { opacity: 0.5; cursor: not-allowed; }
      #tv-note { min-height: 1.25rem; color: #facc15; }
      #tv-status { min-height: 1.25rem; color: #f87171; }
    </style>
    <script>
      window.MathJax = { tex: { inlineMath: [['$','$']], displayMath: [['$$','$$']] }, svg: { fontCache: 'global' } };
    </script>
    <script defer src="https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"></script>
  </head>
  <body>
    <section class="card">
      <select id="quizSelect" disabled><option value="">—</option></select>
      <p id="tv-status" role="status"></p>
    </section>
    <section class="card hidden" id="quiz-card">
      <div id="tv-progress"></div>
      <div id="tv-question"></div>
      <div id="tv-options"></div>
      <div id="tv-feedback" class="hidden"></div>
      <p id="tv-note" role="status"></p>
      <div class="nav-row">
        <button id="tv-prev" class="nav-btn" type="button"></button>
        <button id="tv-next" class="nav-btn" type="button"></button>
        <button id="tv-finish" class="nav-btn" type="button"></button>
      </div>
    </section>
    <section class="card hidden" id="tv-results"></section>
    <script>
      const quizSelect = document.getElementById('quizSelect');
      const statusEl = document.getElementById('tv-status');
      const quizCard = document.getElementById('quiz-card');
      const progressEl = document.getElementById('tv-progress');
      const questionEl = document.getElementById('tv-question');
      const optionsEl = document.getElementById('tv-options');
      const feedbackEl = document.getElementById('tv-feedback');
      const noteEl = document.getElementById('tv-note');
      const resultsEl = document.getElementById('tv-results');
      const prevBtn = document.getElementById('tv-prev');
      const nextBtn = document.getElementById('tv-next');
      const finishBtn = document.getElementById('tv-finish');
      let resultDispatched = false;
      let lastStateKey = null;

      function setVisibility(element, isVisible) {
        element.classList.toggle('hidden', !isVisible);
      }

      function typeset() {
        if (window.MathJax && window.MathJax.typesetPromise) {
          window.MathJax.typesetPromise();
        }
      }

      async function request(method, url, body) {
        const response = await fetch(url, {
          method,
          headers: { 'Content-Type': 'application/json' },
          body: body === undefined ? undefined : JSON.stringify(body),
        });
        const payload = await response.json();
        if (!response.ok) {
          statusEl.textContent = payload.detail ?? 'Request failed.';
          return null;
        }
        return payload;
      }

      function renderCatalog(catalog) {
        const placeholder = quizSelect.options[0];
        quizSelect.innerHTML = '';
        placeholder.textContent = catalog.placeholder;
        quizSelect.appendChild(placeholder);
        for (const category of catalog.categories) {
          const group = document.createElement('optgroup');
          group.label = category.name;
          for (const quiz of category.quizzes) {
            const opt = document.createElement('option');
            opt.value = quiz.identifier;
            opt.textContent = quiz.title;
            group.appendChild(opt);
          }
          quizSelect.appendChild(group);
        }
        quizSelect.disabled = !catalog.enabled;
        statusEl.textContent = catalog.status;
      }

      function renderState(state) {
        const stateKey = JSON.stringify(state);
        if (stateKey === lastStateKey) return;
        lastStateKey = stateKey;
        statusEl.textContent = state.status_message;
        prevBtn.textContent = state.labels.previous;
        nextBtn.textContent = state.labels.next;
        finishBtn.textContent = state.labels.finish;
        const question = state.question;
        setVisibility(quizCard, question !== null && state.status === 'in_progress');
        if (question !== null && state.status === 'in_progress') {
          progressEl.textContent = state.progress;
          questionEl.innerHTML = question.prompt_html;
          optionsEl.innerHTML = '';
          if (question.options.length === 0) {
            optionsEl.innerHTML = '<p>' + state.labels.no_options + '</p>';
          }
          question.options.forEach((option, index) => {
            const btn = document.createElement('button');
            btn.type = 'button';
            btn.className = 'option-btn';
            btn.innerHTML = '<strong>' + option.label + '.</strong> ' + option.html;
            if (question.answered) {
              btn.disabled = true;
              if (index === question.correct_index) btn.classList.add('correct');
              if (index === question.chosen_index && !question.is_correct) btn.classList.add('wrong');
            } else {
              btn.addEventListener('click', () => submitAnswer(index));
            }
            optionsEl.appendChild(btn);
          });
          if (question.answered) {
            feedbackEl.innerHTML = '<strong>' + state.labels.explanation + ':</strong> ' + question.explanation_html;
            setVisibility(feedbackEl, true);
          } else {
            setVisibility(feedbackEl, false);
          }
          noteEl.textContent = state.note;
          prevBtn.disabled = question.position === 0;
          typeset();
        }
        const result = state.result;
        if (result === null) resultDispatched = false;
        setVisibility(resultsEl, result !== null && !state.custom_results);
        if (result !== null) {
          resultsEl.innerHTML = '<h3>' + state.labels.result_score + '</h3><p>' + state.labels.result_percentage + '</p>';
          if (!resultDispatched) {
            resultDispatched = true;
            document.dispatchEvent(new CustomEvent('quiz-finished', { detail: result }));
            document.dispatchEvent(new CustomEvent('save-quiz-result', { detail: result }));
          }
        }
      }

      async function loadCatalog() {
        const catalog = await request('GET', '/catalog');
        if (catalog) renderCatalog(catalog);
      }

      async function refreshState() {
        const state = await request('GET', '/state');
        if (state) renderState(state);
      }

      async function loadQuiz(identifier, title) {
        const state = await request('POST', '/quiz', { identifier, title });
        if (state) renderState(state);
      }

      async function submitAnswer(index) {
        const state = await request('POST', '/answer', { choice_index: index });
        if (state) renderState(state);
      }

      async function navigate(path) {
        const state = await request('POST', path);
        if (state) renderState(state);
      }

      quizSelect.addEventListener('change', (event) => {
        const identifier = event.target.value;
        const title = event.target.options[event.target.selectedIndex]?.text;
        if (identifier) loadQuiz(identifier, title);
      });
      prevBtn.addEventListener('click', () => navigate('/previous'));
      nextBtn.addEventListener('click', () => navigate('/next'));
      finishBtn.addEventListener('click', () => navigate('/finish'));

      window.refreshQuizList = async () => {
        const catalog = await request('POST', '/catalog/refresh');
        if (catalog) renderCatalog(catalog);
      };

      loadCatalog();
      refreshState();
      // Picks up answers and navigation made in the desktop window.
      setInterval(refreshState, 2000);
    </script>
  </body>
</html>
"""


class QuizSelectionPayload(BaseModel):
    """Payload schema for choosing a quiz from the catalog."""

    identifier: str
    title: str | None = None


class AnswerPayload(BaseModel):
    """Payload schema for a selected option."""

    choice_index: int


def _get_controller_dependency(controller: QuizController):
    def dependency() -> QuizController:
        return controller

    return dependency


def _serialize_catalog(controller: QuizController) -> dict[str, object]:
    return {
        "enabled": controller.selection_enabled,
        "status": controller.status_message,
        "placeholder": controller.message("select_quiz"),
        "categories": [
            {
                "name": category.name,
                "quizzes": [
                    {"identifier": entry.identifier, "title": entry.title}
                    for entry in category.entries
                ],
            }
            for category in controller.catalog_categories()
        ],
    }


def _serialize_question(view: QuestionView) -> dict[str, object]:
    return {
        "position": view.position,
        "total": view.total,
        "prompt_html": renderer.render_fragment(view.prompt),
        "options": [
            {"label": label, "html": renderer.render_inline(text)} for label, text in view.options
        ],
        "selectable": view.selectable,
        "answered": view.is_answered,
        "chosen_index": view.chosen_index,
        "is_correct": view.is_correct,
        "correct_index": view.correct_index,
        "explanation_html": renderer.render_inline(view.explanation) if view.explanation else None,
    }


def _serialize_state(controller: QuizController) -> dict[str, object]:
    try:
        view = controller.current_view()
    except NoActiveSessionError:
        view = None
    result = controller.result
    return {
        "status": controller.session_status.name.lower(),
        "title": view.title if view else None,
        "progress": controller.progress_text(),
        "note": controller.note_message,
        "status_message": controller.status_message,
        "question": _serialize_question(view) if view else None,
        "result": result.as_payload() if result else None,
        "custom_results": controller.uses_custom_results_renderer(),
        "labels": {
            "previous": controller.message("previous"),
            "next": controller.message("next"),
            "finish": controller.message("finish"),
            "explanation": controller.message("explanation_label"),
            "no_options": controller.message("no_options"),
            "result_score": controller.message(
                "result_score", score=result.score, total=result.total
            ) if result else "",
            "result_percentage": controller.message(
                "result_percentage", percentage=result.percentage
            ) if result else "",
        },
    }


def create_api_app(controller: QuizController) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz controller."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    controller_dep = _get_controller_dependency(controller)

    @app.get("/", response_class=HTMLResponse)
    def serve_player_page() -> str:
        return _PLAYER_PAGE_HTML

    @app.get("/catalog")
    def get_catalog(ctrl: QuizController = Depends(controller_dep)) -> dict[str, object]:
        return _serialize_catalog(ctrl)

    @app.post("/catalog/refresh")
    async def refresh_catalog(ctrl: QuizController = Depends(controller_dep)) -> dict[str, object]:
        await ctrl.refresh_catalog()
        return _serialize_catalog(ctrl)

    @app.post("/quiz")
    async def load_quiz(
        payload: QuizSelectionPayload,
        ctrl: QuizController = Depends(controller_dep),
    ) -> dict[str, object]:
        loaded = await ctrl.load_quiz(payload.identifier, payload.title)
        if not loaded:
            raise HTTPException(status_code=422, detail=ctrl.status_message)
        return _serialize_state(ctrl)

    @app.get("/state")
    def get_state(ctrl: QuizController = Depends(controller_dep)) -> dict[str, object]:
        return _serialize_state(ctrl)

    @app.post("/answer")
    def submit_answer(
        payload: AnswerPayload,
        ctrl: QuizController = Depends(controller_dep),
    ) -> dict[str, object]:
        try:
            ctrl.select_answer(payload.choice_index)
        except QuizSessionError as exc:
            logger.error("Quiz action rejected: %s", exc)
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _serialize_state(ctrl)

    @app.post("/next")
    def next_question(ctrl: QuizController = Depends(controller_dep)) -> dict[str, object]:
        try:
            ctrl.next_question()
        except QuizSessionError as exc:
            logger.error("Quiz action rejected: %s", exc)
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _serialize_state(ctrl)

    @app.post("/previous")
    def previous_question(ctrl: QuizController = Depends(controller_dep)) -> dict[str, object]:
        try:
            ctrl.previous_question()
        except QuizSessionError as exc:
            logger.error("Quiz action rejected: %s", exc)
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _serialize_state(ctrl)

    @app.post("/finish")
    def finish_quiz(ctrl: QuizController = Depends(controller_dep)) -> dict[str, object]:
        try:
            ctrl.finish_now()
        except QuizSessionError as exc:
            logger.error("Quiz action rejected: %s", exc)
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _serialize_state(ctrl)

    return app


def start_api_server(
    controller: QuizController,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(controller)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="QuizApiServer", daemon=True)
    thread.start()
    return thread
