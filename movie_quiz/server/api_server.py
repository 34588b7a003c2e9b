"""FastAPI server that lets a browser play the quiz."""

from __future__ import annotations

import logging
from threading import Lock, Thread

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel
import uvicorn

from movie_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from movie_quiz.core.errors import InvalidInput, NoActiveRound, SourceUnavailable
from movie_quiz.core.markdown_renderer import renderer
from movie_quiz.core.models import QuizResultsViewModel, QuizStepViewModel, StatisticsSnapshot
from movie_quiz.core.quiz_manager import MovieQuizManager

logger = logging.getLogger(__name__)

_PLAYER_PAGE_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>MovieQuiz</title>
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <style>
      :root { font-family: 'Inter', system-ui, sans-serif; background: #1a1b22; color: #ffffff; }
      body { margin: 0; padding: 1.5rem; display: flex; flex-direction: column; gap: 1rem; max-width: 36rem; margin-inline: auto; }
      .card { background: #24252d; border-radius: 1rem; padding: 1.5rem; }
      .hidden { display: none; }
      #header { display: flex; justify-content: space-between; color: #aeafb4; }
      #poster { min-height: 12rem; display: flex; align-items: center; justify-content: center; border-radius: 1.25rem; border: 8px solid transparent; background: #2d2e36; font-size: 1.2rem; }
      #poster.correct { border-color: #60c28e; }
      #poster.wrong { border-color: #f56b6c; }
      #prompt { font-size: 1.4rem; text-align: center; min-height: 4rem; }
      .buttons { display: grid; grid-template-columns: 1fr 1fr; gap: 1.25rem; }
      button { border: none; border-radius: 0.9rem; padding: 1rem; font-size: 1.1rem; background: #ffffff; color: #1a1b22; cursor: pointer; }
      button:disabled { opacity: 0.5; cursor: not-allowed; }
      #error { color: #f56b6c; min-height: 1.25rem; }
    </style>
  </head>
  <body>
    <section class="card" id="quiz-card">
      <div id="header"><span>Question:</span><span id="counter"></span></div>
      <div id="poster"></div>
      <div id="prompt">Loading questions…</div>
      <div class="buttons">
        <button id="no-button">No</button>
        <button id="yes-button">Yes</button>
      </div>
      <p id="error"></p>
    </section>
    <section class="card hidden" id="result-card">
      <h2 id="result-title"></h2>
      <div id="result-text"></div>
      <button id="again-button"></button>
    </section>
    <script>
      const FEEDBACK_DELAY_MS = 1000;
      const LOADING_POLL_MS = 500;
      const poster = document.getElementById('poster');
      const prompt = document.getElementById('prompt');
      const counter = document.getElementById('counter');
      const errorEl = document.getElementById('error');
      const yesButton = document.getElementById('yes-button');
      const noButton = document.getElementById('no-button');
      const quizCard = document.getElementById('quiz-card');
      const resultCard = document.getElementById('result-card');
      const againButton = document.getElementById('again-button');

      function setButtonsEnabled(enabled) {
        yesButton.disabled = !enabled;
        noButton.disabled = !enabled;
      }

      function showStep(step) {
        poster.className = '';
        poster.textContent = step.image_key;
        prompt.innerHTML = step.question_html;
        counter.textContent = step.question_number;
        quizCard.classList.remove('hidden');
        resultCard.classList.add('hidden');
        setButtonsEnabled(!step.answered);
      }

      function showLoading() {
        poster.className = '';
        poster.textContent = '';
        prompt.textContent = 'Loading questions…';
        counter.textContent = '';
        quizCard.classList.remove('hidden');
        resultCard.classList.add('hidden');
        setButtonsEnabled(false);
        setTimeout(() => loadCurrent(false), LOADING_POLL_MS);
      }

      function showResults(results) {
        document.getElementById('result-title').textContent = results.title;
        document.getElementById('result-text').innerHTML = results.text_html;
        againButton.textContent = results.button_text;
        quizCard.classList.add('hidden');
        resultCard.classList.remove('hidden');
      }

      function showError(message) {
        document.getElementById('result-title').textContent = 'Error';
        document.getElementById('result-text').textContent = message;
        againButton.textContent = 'Try again';
        quizCard.classList.add('hidden');
        resultCard.classList.remove('hidden');
      }

      function showPayload(payload) {
        if (payload.loading) {
          showLoading();
        } else if (payload.finished) {
          showResults(payload);
        } else {
          showStep(payload);
        }
      }

      async function request(method, path, body) {
        const response = await fetch(path, {
          method,
          headers: { 'Content-Type': 'application/json' },
          body: body === undefined ? undefined : JSON.stringify(body),
        });
        const payload = await response.json();
        if (!response.ok) {
          throw new Error(payload.detail || response.statusText);
        }
        return payload;
      }

      async function loadCurrent(startIfIdle = true) {
        try {
          errorEl.textContent = '';
          showPayload(await request('GET', '/question'));
        } catch (err) {
          if (startIfIdle) {
            await playAgain();
            return;
          }
          showError(err.message);
        }
      }

      async function answer(choice) {
        setButtonsEnabled(false);
        try {
          const result = await request('POST', '/answer', { choice });
          poster.className = result.is_correct ? 'correct' : 'wrong';
          setTimeout(async () => {
            try {
              showPayload(await request('POST', '/next'));
            } catch (err) {
              errorEl.textContent = err.message;
            }
          }, FEEDBACK_DELAY_MS);
        } catch (err) {
          errorEl.textContent = err.message;
        }
      }

      async function playAgain() {
        againButton.disabled = true;
        try {
          errorEl.textContent = '';
          showPayload(await request('POST', '/restart'));
        } catch (err) {
          showError(err.message);
        } finally {
          againButton.disabled = false;
        }
      }

      yesButton.addEventListener('click', () => answer(true));
      noButton.addEventListener('click', () => answer(false));
      againButton.addEventListener('click', playAgain);
      loadCurrent();
    </script>
  </body>
</html>
"""


class AnswerPayload(BaseModel):
    """Payload schema for a yes/no answer."""

    choice: bool


class RoundLoader:
    """Tracks the most recent request for a new round."""

    def __init__(self, manager: MovieQuizManager) -> None:
        self._manager = manager
        self._lock = Lock()
        self._last_error: SourceUnavailable | None = None

    def request_round(self) -> QuizStepViewModel | None:
        """Start collecting a round; returns the first step when it is already available.

        While a collection is still running no new one is started.
        """
        ready: list[QuizStepViewModel] = []
        with self._lock:
            if self._manager.is_collecting():
                logger.info("Ignoring restart while questions are loading")
                return None
            self._last_error = None
        self._manager.collect_round(
            on_ready=ready.append,
            on_failure=self._record_failure,
        )
        return ready[0] if ready else None

    def is_pending(self) -> bool:
        return self._manager.is_collecting()

    def last_error(self) -> SourceUnavailable | None:
        with self._lock:
            return self._last_error

    def _record_failure(self, error: SourceUnavailable) -> None:
        with self._lock:
            self._last_error = error


_LOADING_PAYLOAD: dict[str, object] = {"finished": False, "loading": True}


def _step_payload(step: QuizStepViewModel, answered: bool) -> dict[str, object]:
    return {
        "finished": False,
        "image_key": step.image_key,
        "question": step.question,
        "question_html": renderer.render_fragment(step.question),
        "question_number": step.question_number,
        "answered": answered,
    }


def _results_payload(results: QuizResultsViewModel) -> dict[str, object]:
    return {
        "finished": True,
        "title": results.title,
        "text": results.text,
        "text_html": renderer.render_fragment(results.text),
        "button_text": results.button_text,
        "correct": results.correct,
        "total": results.total,
    }


def _statistics_payload(snapshot: StatisticsSnapshot) -> dict[str, object]:
    return {
        "games_count": snapshot.games_count,
        "total_accuracy": snapshot.total_accuracy,
        "cumulative_correct": snapshot.cumulative_correct,
        "cumulative_total": snapshot.cumulative_total,
        "best_game": snapshot.best_game.to_dict(),
    }


def _get_quiz_manager_dependency(quiz_manager: MovieQuizManager):
    def dependency() -> MovieQuizManager:
        return quiz_manager

    return dependency


def create_api_app(quiz_manager: MovieQuizManager) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""
    app = FastAPI(title="MovieQuiz API", version="0.1.0")
    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)
    round_loader = RoundLoader(quiz_manager)

    @app.get("/", response_class=HTMLResponse)
    def serve_player_page() -> str:
        return _PLAYER_PAGE_HTML

    @app.get("/question")
    def get_question(manager: MovieQuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        if round_loader.is_pending():
            return dict(_LOADING_PAYLOAD)
        results = manager.last_results()
        if results is not None:
            return _results_payload(results)
        try:
            step = manager.current_step()
        except NoActiveRound as exc:
            error = round_loader.last_error()
            if error is not None:
                raise HTTPException(status_code=503, detail=str(error)) from exc
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _step_payload(step, manager.is_current_answered())

    @app.post("/answer")
    def submit_answer(
        payload: AnswerPayload,
        manager: MovieQuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            result = manager.answer(payload.choice)
        except NoActiveRound as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return {
            "is_correct": result.is_correct,
            "is_round_finished": result.is_round_finished,
        }

    @app.post("/next")
    def show_next(manager: MovieQuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            outcome = manager.show_next_question_or_results()
        except NoActiveRound as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        if isinstance(outcome, QuizResultsViewModel):
            return _results_payload(outcome)
        return _step_payload(outcome, answered=False)

    @app.post("/restart", status_code=201)
    def restart() -> dict[str, object]:
        try:
            step = round_loader.request_round()
        except InvalidInput as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        if step is not None:
            return _step_payload(step, answered=False)
        error = round_loader.last_error()
        if error is not None:
            raise HTTPException(status_code=503, detail=str(error))
        return dict(_LOADING_PAYLOAD)

    @app.get("/statistics")
    def get_statistics(manager: MovieQuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return _statistics_payload(manager.statistics())

    return app


def start_api_server(
    quiz_manager: MovieQuizManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(quiz_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="MovieQuizApiServer", daemon=True)
    thread.start()
    logger.info("API server listening on %s:%s", host, port)
    return thread
