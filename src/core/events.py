from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Optional, Protocol, Union

from core.logging import get_logger

logger = get_logger("core.events")


@dataclass(frozen=True)
class FixtureStarted:
    fixture_id: int
    home_team: str
    away_team: str


@dataclass(frozen=True)
class ScoreUpdated:
    fixture_id: int
    home_score: int
    away_score: int


@dataclass(frozen=True)
class FixtureFinished:
    fixture_id: int
    home_team: str
    away_team: str


@dataclass(frozen=True)
class ValidationFailed:
    operation: str
    reason: str
    fixture_id: Optional[int] = None


ScoreboardEvent = Union[FixtureStarted, ScoreUpdated, FixtureFinished, ValidationFailed]

_EVENT_NAMES = {
    FixtureStarted: "fixture_started",
    ScoreUpdated: "score_updated",
    FixtureFinished: "fixture_finished",
    ValidationFailed: "validation_failed",
}


def event_name(event: ScoreboardEvent) -> str:
    return _EVENT_NAMES[type(event)]


class ScoreboardObserver(Protocol):
    def on_event(self, event: ScoreboardEvent) -> None:
        ...


class LoggingObserver:
    """Scrive ogni evento come riga di log JSON strutturata."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._logger = log or get_logger("core.events.log")

    def on_event(self, event: ScoreboardEvent) -> None:
        extra: Dict[str, Any] = asdict(event)
        extra["event"] = event_name(event)
        level = logging.WARNING if isinstance(event, ValidationFailed) else logging.INFO
        self._logger.log(level, _describe(event), extra=extra)


def _describe(event: ScoreboardEvent) -> str:
    if isinstance(event, FixtureStarted):
        return f"Match started: {event.home_team} vs {event.away_team} with ID: {event.fixture_id}"
    if isinstance(event, ScoreUpdated):
        return (
            f"Score updated for Fixture ID: {event.fixture_id}. "
            f"New Score: {event.home_score} - {event.away_score}"
        )
    if isinstance(event, FixtureFinished):
        return f"Fixture finished: {event.home_team} vs {event.away_team} with ID: {event.fixture_id}"
    return f"Validation failed in {event.operation}: {event.reason}"


def notify(observers: Iterable[ScoreboardObserver], event: ScoreboardEvent) -> None:
    """
    Inoltra l'evento a tutti gli observer.
    Un observer che fallisce viene loggato e saltato: non altera mai l'esito dell'operazione.
    """
    for observer in observers:
        try:
            observer.on_event(event)
        except Exception:
            logger.exception(
                "Observer %s failed on %s", type(observer).__name__, event_name(event),
                extra={"event": event_name(event)},
            )


__all__ = [
    "FixtureStarted",
    "ScoreUpdated",
    "FixtureFinished",
    "ValidationFailed",
    "ScoreboardEvent",
    "ScoreboardObserver",
    "LoggingObserver",
    "event_name",
    "notify",
]
