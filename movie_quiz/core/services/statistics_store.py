"""Aggregate statistics across all completed rounds, persisted between sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import json
import logging
from typing import Callable

from movie_quiz.core.errors import InvalidInput, PersistenceWarning
from movie_quiz.core.models import GameRecord, StatisticsSnapshot
from movie_quiz.core.services.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

KEY_CORRECT = "correct"
KEY_TOTAL = "total"
KEY_GAMES_COUNT = "gamesCount"
KEY_BEST_GAME = "bestGame"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class _StatisticsState:
    cumulative_correct: int = 0
    cumulative_total: int = 0
    games_count: int = 0
    best_game: GameRecord = field(default_factory=GameRecord.empty)


class StatisticsStore:
    """Merges finished rounds into running totals and keeps the best game.

    State is read from the backend on first use and every update is written
    back immediately. A failed write is reported as a ``PersistenceWarning``
    (logged, and passed to ``on_warning`` when given) and the in-memory
    values keep the new data.
    """

    def __init__(
        self,
        backend: KeyValueStore,
        clock: Callable[[], datetime] = _utc_now,
        on_warning: Callable[[PersistenceWarning], None] | None = None,
    ) -> None:
        self._backend = backend
        self._clock = clock
        self._on_warning = on_warning
        self._state: _StatisticsState | None = None

    @property
    def total_accuracy(self) -> float | None:
        state = self._load()
        if state.cumulative_total == 0:
            return None
        return state.cumulative_correct / state.cumulative_total

    @property
    def games_count(self) -> int:
        return self._load().games_count

    @property
    def best_game(self) -> GameRecord:
        return self._load().best_game

    def store(self, correct: int, total: int) -> StatisticsSnapshot:
        """Record one finished round and return the updated statistics."""
        self._validate_round(correct, total)
        state = self._load()

        state.cumulative_correct += correct
        self._write(KEY_CORRECT, state.cumulative_correct)
        state.cumulative_total += total
        self._write(KEY_TOTAL, state.cumulative_total)
        state.games_count += 1
        self._write(KEY_GAMES_COUNT, state.games_count)

        candidate = GameRecord(correct=correct, total=total, played_at=self._clock())
        if candidate.is_better_than(state.best_game):
            state.best_game = candidate
            self._write_best_game(candidate)

        logger.info(
            "Stored round %s/%s (games played: %s)", correct, total, state.games_count
        )
        return self.snapshot()

    def snapshot(self) -> StatisticsSnapshot:
        state = self._load()
        return StatisticsSnapshot(
            total_accuracy=self.total_accuracy,
            games_count=state.games_count,
            best_game=state.best_game,
            cumulative_correct=state.cumulative_correct,
            cumulative_total=state.cumulative_total,
        )

    def reset(self) -> None:
        """Forget every stored round."""
        for key in (KEY_CORRECT, KEY_TOTAL, KEY_GAMES_COUNT, KEY_BEST_GAME):
            try:
                self._backend.remove(key)
            except OSError as exc:
                self._report(PersistenceWarning(key, exc))
        self._state = _StatisticsState()

    def _load(self) -> _StatisticsState:
        if self._state is None:
            self._state = _StatisticsState(
                cumulative_correct=self._read_int(KEY_CORRECT),
                cumulative_total=self._read_int(KEY_TOTAL),
                games_count=self._read_int(KEY_GAMES_COUNT),
                best_game=self._read_best_game(),
            )
        return self._state

    def _read_int(self, key: str) -> int:
        raw = self._backend.get(key)
        if raw is None:
            return 0
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring unreadable value for '%s': %r", key, raw)
            return 0

    def _read_best_game(self) -> GameRecord:
        raw = self._backend.get(KEY_BEST_GAME)
        if raw is None:
            return GameRecord.empty()
        try:
            return GameRecord.from_dict(json.loads(str(raw)))
        except (TypeError, ValueError, KeyError) as exc:
            logger.warning("Ignoring unreadable best game record: %s", exc)
            return GameRecord.empty()

    def _write(self, key: str, value: int) -> None:
        try:
            self._backend.set(key, value)
        except OSError as exc:
            self._report(PersistenceWarning(key, exc))

    def _write_best_game(self, record: GameRecord) -> None:
        try:
            payload = json.dumps(record.to_dict())
            self._backend.set(KEY_BEST_GAME, payload)
        except (TypeError, ValueError, OSError) as exc:
            self._report(PersistenceWarning(KEY_BEST_GAME, exc))

    def _report(self, warning: PersistenceWarning) -> None:
        logger.warning("%s", warning)
        if self._on_warning is not None:
            self._on_warning(warning)

    @staticmethod
    def _validate_round(correct: int, total: int) -> None:
        for name, value in (("correct", correct), ("total", total)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInput(f"{name} must be an integer, got {value!r}.")
        if not 0 <= correct <= total:
            raise InvalidInput(
                f"Expected 0 <= correct <= total, got correct={correct}, total={total}."
            )
