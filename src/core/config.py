import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value == "":
        return default
    v = value.strip().lower()
    if v in {"0", "false", "no"}:
        return False
    return True


@dataclass
class Settings:
    log_level: str

    enable_event_log: bool

    enable_prometheus_metrics: bool
    prometheus_namespace: str

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_env(cls) -> "Settings":
        log_level = os.getenv("SCOREBOARD_LOG_LEVEL", "INFO").strip().upper() or "INFO"
        if log_level not in _VALID_LOG_LEVELS:
            raise ValueError(
                f"Variabile SCOREBOARD_LOG_LEVEL non valida (valore: {log_level!r}). "
                f"Valori ammessi: {', '.join(sorted(_VALID_LOG_LEVELS))}"
            )

        enable_event_log = _parse_bool(os.getenv("ENABLE_EVENT_LOG"), True)

        enable_prometheus_metrics = _parse_bool(os.getenv("ENABLE_PROMETHEUS_METRICS"), False)
        prometheus_namespace = os.getenv("PROMETHEUS_NAMESPACE", "scoreboard").strip() or "scoreboard"

        return cls(
            log_level=log_level,
            enable_event_log=enable_event_log,
            enable_prometheus_metrics=enable_prometheus_metrics,
            prometheus_namespace=prometheus_namespace,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def _reset_settings_cache_for_tests() -> None:
    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "_reset_settings_cache_for_tests"]
