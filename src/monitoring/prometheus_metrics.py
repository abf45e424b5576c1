from __future__ import annotations

from typing import Optional

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    generate_latest,
)

from core.config import get_settings
from core.events import (
    FixtureFinished,
    FixtureStarted,
    ScoreboardEvent,
    ScoreUpdated,
    ValidationFailed,
)
from core.logging import get_logger
from core.store import FixtureStore

logger = get_logger("monitoring.prometheus_metrics")


class PrometheusObserver:
    """
    Observer che aggiorna metriche Prometheus in-process.
    Ogni istanza usa un registry dedicato (niente collisioni tra scoreboard/test).
    Il gauge active_fixtures è letto dallo store a ogni scrape, quindi resta
    allineato anche con store pre-popolati o observer aggiunti in ritardo.
    """

    def __init__(
        self,
        store: FixtureStore,
        namespace: Optional[str] = None,
        registry: Optional[CollectorRegistry] = None,
    ) -> None:
        ns = namespace or get_settings().prometheus_namespace
        self.registry = registry or CollectorRegistry()
        self.fixtures_started = Counter(
            "fixtures_started", "Numero fixture avviate", namespace=ns, registry=self.registry
        )
        self.score_updates = Counter(
            "score_updates", "Numero aggiornamenti punteggio", namespace=ns, registry=self.registry
        )
        self.fixtures_finished = Counter(
            "fixtures_finished", "Numero fixture terminate", namespace=ns, registry=self.registry
        )
        self.validation_failures = Counter(
            "validation_failures",
            "Operazioni rifiutate per validazione",
            ["operation"],
            namespace=ns,
            registry=self.registry,
        )
        self.active_fixtures = Gauge(
            "active_fixtures", "Fixture attualmente in corso", namespace=ns, registry=self.registry
        )
        self.active_fixtures.set_function(lambda: len(store))

    def on_event(self, event: ScoreboardEvent) -> None:
        if isinstance(event, FixtureStarted):
            self.fixtures_started.inc()
        elif isinstance(event, ScoreUpdated):
            self.score_updates.inc()
        elif isinstance(event, FixtureFinished):
            self.fixtures_finished.inc()
        elif isinstance(event, ValidationFailed):
            self.validation_failures.labels(operation=event.operation).inc()
        else:
            logger.debug("Evento non gestito: %r", event)

    def generate_prometheus_text(self) -> bytes:
        return generate_latest(self.registry)


__all__ = ["PrometheusObserver"]
