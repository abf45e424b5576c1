from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, List, NoReturn, Optional, Tuple

from core.config import Settings, get_settings
from core.events import (
    FixtureFinished,
    FixtureStarted,
    LoggingObserver,
    ScoreboardEvent,
    ScoreboardObserver,
    ScoreUpdated,
    ValidationFailed,
    notify,
)
from core.exceptions import (
    AlreadyExistsError,
    InvalidArgumentError,
    NotFoundError,
    ScoreboardError,
    ScoreOutOfRangeError,
)
from core.logging import get_logger
from core.models import Fixture, FixtureScore, is_blank_name
from core.store import FixtureStore, SortMode

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_summary_line(fixture: Fixture) -> str:
    return (
        f"{fixture.home_team} {fixture.score.home_score} - "
        f"{fixture.away_team} {fixture.score.away_score}"
    )


class Scoreboard:
    """
    API pubblica dello scoreboard live.

    Valida gli input prima di toccare lo store, applica le regole di
    esistenza/unicità e delega la memorizzazione a FixtureStore.
    Gli errori di regola diventano eventi ValidationFailed e vengono rilanciati;
    errori inattesi dello store sono loggati con traceback e rilanciati invariati.
    """

    def __init__(
        self,
        store: FixtureStore,
        observers: Optional[Iterable[ScoreboardObserver]] = None,
        *,
        log: Optional[logging.Logger] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        if store is None:
            raise InvalidArgumentError("A fixture store is required.")
        self._store = store
        self._observers: List[ScoreboardObserver] = list(observers or [])
        self._logger = log or get_logger("core.scoreboard")
        self._clock = clock or _utcnow

    @property
    def store(self) -> FixtureStore:
        return self._store

    @property
    def observers(self) -> Tuple[ScoreboardObserver, ...]:
        return tuple(self._observers)

    def add_observer(self, observer: ScoreboardObserver) -> None:
        self._observers.append(observer)

    def _emit(self, event: ScoreboardEvent) -> None:
        notify(self._observers, event)

    def _reject(self, operation: str, error: ScoreboardError, fixture_id: Optional[int] = None) -> NoReturn:
        # La riga WARNING la scrive LoggingObserver sull'evento ValidationFailed
        self._logger.debug(str(error), extra={"operation": operation, "fixture_id": fixture_id})
        self._emit(ValidationFailed(operation=operation, reason=str(error), fixture_id=fixture_id))
        raise error

    def start_fixture(self, fixture_id: int, home_team: str, away_team: str) -> None:
        op = "start_fixture"
        if is_blank_name(home_team):
            self._reject(op, InvalidArgumentError("Home team name cannot be empty."), fixture_id)
        if is_blank_name(away_team):
            self._reject(op, InvalidArgumentError("Away team name cannot be empty."), fixture_id)

        try:
            if self._store.get_by_id(fixture_id) is not None:
                self._reject(
                    op,
                    AlreadyExistsError(
                        f"Attempted to start a fixture that already exists. Fixture ID: {fixture_id}"
                    ),
                    fixture_id,
                )
            fixture = Fixture(
                fixture_id=fixture_id,
                home_team=home_team,
                away_team=away_team,
                score=FixtureScore(0, 0),
                start_time=self._clock(),
            )
            self._store.add(fixture)
        except ScoreboardError:
            raise
        except Exception:
            self._logger.exception("Error starting fixture.", extra={"fixture_id": fixture_id})
            raise

        self._emit(FixtureStarted(fixture_id=fixture_id, home_team=home_team, away_team=away_team))

    def update_score(self, fixture_id: int, home_score: int, away_score: int) -> None:
        op = "update_score"
        if home_score < 0 or away_score < 0:
            self._reject(op, ScoreOutOfRangeError("Scores must be non-negative."), fixture_id)

        try:
            fixture = self._store.get_by_id(fixture_id)
            if fixture is None:
                self._reject(
                    op,
                    NotFoundError(
                        f"Attempted to update score for a fixture that does not exist. Fixture ID: {fixture_id}"
                    ),
                    fixture_id,
                )
            incoming = Fixture(
                fixture_id=fixture.fixture_id,
                home_team=fixture.home_team,
                away_team=fixture.away_team,
                score=FixtureScore(home_score, away_score),
                start_time=fixture.start_time,
            )
            self._store.update(incoming)
        except ScoreboardError:
            raise
        except Exception:
            self._logger.exception("Error updating score.", extra={"fixture_id": fixture_id})
            raise

        self._emit(ScoreUpdated(fixture_id=fixture_id, home_score=home_score, away_score=away_score))

    def finish_fixture(self, fixture_id: int) -> None:
        op = "finish_fixture"
        try:
            fixture = self._store.get_by_id(fixture_id)
            if fixture is None:
                self._reject(
                    op,
                    NotFoundError(
                        f"Attempted to finish a fixture that does not exist. Fixture ID: {fixture_id}"
                    ),
                    fixture_id,
                )
            self._store.delete(fixture_id)
        except ScoreboardError:
            raise
        except Exception:
            self._logger.exception("Error finishing fixture.", extra={"fixture_id": fixture_id})
            raise

        self._emit(
            FixtureFinished(fixture_id=fixture_id, home_team=fixture.home_team, away_team=fixture.away_team)
        )

    def get_summary(self) -> List[str]:
        """
        Righe "<home> <hs> - <away> <as>" ordinate per punteggio totale
        decrescente e, a parità, per start_time crescente.
        """
        try:
            fixtures = self._store.list_all(SortMode.TOTAL_SCORE_DESC_START_ASC)
        except Exception:
            self._logger.exception("Error retrieving fixture summary.")
            raise
        summary = [format_summary_line(f) for f in fixtures]
        self._logger.debug("Summary requested", extra={"total_fixtures": len(summary)})
        return summary

    def get_fixtures(self) -> List[Fixture]:
        try:
            return self._store.list_all()
        except Exception:
            self._logger.exception("Error retrieving fixtures.")
            raise


class AsyncScoreboard:
    """
    Facciata awaitable sopra Scoreboard. Le operazioni sono in memoria e
    non sospendono mai: semantica ed errori identici alla versione sincrona.
    """

    def __init__(self, scoreboard: Scoreboard) -> None:
        self._scoreboard = scoreboard

    @property
    def scoreboard(self) -> Scoreboard:
        return self._scoreboard

    async def start_fixture(self, fixture_id: int, home_team: str, away_team: str) -> None:
        self._scoreboard.start_fixture(fixture_id, home_team, away_team)

    async def update_score(self, fixture_id: int, home_score: int, away_score: int) -> None:
        self._scoreboard.update_score(fixture_id, home_score, away_score)

    async def finish_fixture(self, fixture_id: int) -> None:
        self._scoreboard.finish_fixture(fixture_id)

    async def get_summary(self) -> List[str]:
        return self._scoreboard.get_summary()

    async def get_fixtures(self) -> List[Fixture]:
        return self._scoreboard.get_fixtures()


def build_scoreboard(
    store: Optional[FixtureStore] = None,
    observers: Optional[Iterable[ScoreboardObserver]] = None,
    *,
    settings: Optional[Settings] = None,
    clock: Optional[Clock] = None,
) -> Scoreboard:
    """
    Crea uno Scoreboard pronto all'uso con gli observer abilitati da configurazione.
    """
    settings = settings or get_settings()
    store = store if store is not None else FixtureStore()
    wired: List[ScoreboardObserver] = []
    if settings.enable_event_log:
        wired.append(LoggingObserver())
    if settings.enable_prometheus_metrics:
        # Import locale: prometheus_client serve solo se le metriche sono attive.
        from monitoring.prometheus_metrics import PrometheusObserver

        wired.append(PrometheusObserver(store, namespace=settings.prometheus_namespace))
    wired.extend(observers or [])
    return Scoreboard(store, wired, clock=clock)


__all__ = ["Scoreboard", "AsyncScoreboard", "build_scoreboard", "format_summary_line"]
