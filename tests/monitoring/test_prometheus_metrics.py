from datetime import datetime, timezone

import pytest

from core.config import Settings
from core.exceptions import NotFoundError
from core.models import Fixture
from core.scoreboard import Scoreboard, build_scoreboard
from core.store import FixtureStore
from monitoring.prometheus_metrics import PrometheusObserver


def _preloaded_store(*ids):
    store = FixtureStore()
    for fid in ids:
        store.add(Fixture(fid, f"Home{fid}", f"Away{fid}", start_time=datetime(2026, 6, 14, 10, 0, tzinfo=timezone.utc)))
    return store


def test_observer_tracks_lifecycle():
    store = FixtureStore()
    observer = PrometheusObserver(store, namespace="test_sb")
    sb = Scoreboard(store, [observer])

    sb.start_fixture(1, "Mexico", "Canada")
    sb.start_fixture(2, "Spain", "Brazil")
    sb.update_score(1, 0, 1)
    sb.update_score(1, 0, 2)
    sb.finish_fixture(2)
    with pytest.raises(NotFoundError):
        sb.finish_fixture(2)

    reg = observer.registry
    assert reg.get_sample_value("test_sb_fixtures_started_total") == 2.0
    assert reg.get_sample_value("test_sb_score_updates_total") == 2.0
    assert reg.get_sample_value("test_sb_fixtures_finished_total") == 1.0
    assert reg.get_sample_value("test_sb_active_fixtures") == 1.0
    assert reg.get_sample_value(
        "test_sb_validation_failures_total", {"operation": "finish_fixture"}
    ) == 1.0


def test_active_fixtures_follows_preloaded_store():
    store = _preloaded_store(1)
    settings = Settings(
        log_level="INFO",
        enable_event_log=False,
        enable_prometheus_metrics=True,
        prometheus_namespace="test_preload",
    )
    sb = build_scoreboard(store, settings=settings)
    observer = next(o for o in sb.observers if isinstance(o, PrometheusObserver))

    assert observer.registry.get_sample_value("test_preload_active_fixtures") == 1.0
    sb.finish_fixture(1)
    assert observer.registry.get_sample_value("test_preload_active_fixtures") == 0.0
    assert len(store) == 0


def test_active_fixtures_with_late_observer():
    store = FixtureStore()
    sb = Scoreboard(store)
    sb.start_fixture(1, "Mexico", "Canada")
    sb.start_fixture(2, "Spain", "Brazil")

    observer = PrometheusObserver(store, namespace="test_late")
    sb.add_observer(observer)
    sb.finish_fixture(1)
    sb.finish_fixture(2)

    assert observer.registry.get_sample_value("test_late_active_fixtures") == 0.0
    assert observer.registry.get_sample_value("test_late_fixtures_finished_total") == 2.0


def test_namespace_from_settings(monkeypatch):
    monkeypatch.setenv("PROMETHEUS_NAMESPACE", "wc2026")
    observer = PrometheusObserver(FixtureStore())
    output = observer.generate_prometheus_text().decode("utf-8")
    assert "wc2026_fixtures_started_total" in output
    assert "wc2026_active_fixtures" in output


def test_observers_use_separate_registries():
    store = FixtureStore()
    a = PrometheusObserver(store, namespace="dup")
    b = PrometheusObserver(FixtureStore(), namespace="dup")
    Scoreboard(store, [a]).start_fixture(1, "Mexico", "Canada")
    assert a.registry.get_sample_value("dup_fixtures_started_total") == 1.0
    assert b.registry.get_sample_value("dup_fixtures_started_total") == 0.0
