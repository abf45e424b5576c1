from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class FixtureScore:
    home_score: int = 0
    away_score: int = 0

    @property
    def total_score(self) -> int:
        # Usato solo per l'ordinamento del summary
        return self.home_score + self.away_score

    def is_valid(self) -> bool:
        return self.home_score >= 0 and self.away_score >= 0


@dataclass
class Fixture:
    fixture_id: int
    home_team: str
    away_team: str
    score: FixtureScore = field(default_factory=FixtureScore)
    start_time: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fixture_id": self.fixture_id,
            "home_team": self.home_team,
            "away_team": self.away_team,
            "home_score": self.score.home_score,
            "away_score": self.score.away_score,
            "start_time": self.start_time.isoformat(),
        }


def is_blank_name(value: Optional[str]) -> bool:
    """True per nomi squadra mancanti, vuoti o composti solo da spazi."""
    return value is None or not str(value).strip()
