from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import List, Optional

from core.exceptions import AlreadyExistsError, InvalidArgumentError, NotFoundError
from core.logging import get_logger
from core.models import Fixture, is_blank_name

logger = get_logger("core.store")


class SortMode(str, Enum):
    """Ordinamenti supportati da FixtureStore.list_all."""

    NONE = "none"
    TOTAL_SCORE_DESC_START_ASC = "total_score_desc_start_asc"


class FixtureStore:
    """
    Contenitore in memoria delle fixture attive.

    Mantiene l'ordine di inserimento. Non è thread-safe: le sequenze
    check-then-act del chiamante vanno protette da un lock esterno.
    """

    def __init__(self) -> None:
        self._fixtures: List[Fixture] = []

    def __len__(self) -> int:
        return len(self._fixtures)

    def __contains__(self, fixture_id: object) -> bool:
        return any(f.fixture_id == fixture_id for f in self._fixtures)

    def add(self, fixture: Optional[Fixture]) -> None:
        if fixture is None:
            raise InvalidArgumentError("Cannot add a missing fixture.")
        if is_blank_name(fixture.home_team) or is_blank_name(fixture.away_team):
            raise InvalidArgumentError("Home team and away team cannot be empty.")

        if fixture.fixture_id in self:
            message = f"Attempted to add a fixture that already exists. Fixture ID: {fixture.fixture_id}"
            logger.warning(message, extra={"fixture_id": fixture.fixture_id})
            raise AlreadyExistsError(message)

        self._fixtures.append(fixture)
        logger.debug("Fixture added", extra={"fixture_id": fixture.fixture_id})

    def get_by_id(self, fixture_id: int) -> Optional[Fixture]:
        for f in self._fixtures:
            if f.fixture_id == fixture_id:
                return f
        logger.debug("Fixture not found", extra={"fixture_id": fixture_id})
        return None

    def update(self, fixture: Optional[Fixture]) -> None:
        """
        Copia sulla fixture memorizzata solo il punteggio di `fixture`.
        Squadre e start_time della fixture esistente restano invariati.
        """
        if fixture is None:
            raise InvalidArgumentError("Cannot update with a missing fixture.")
        if not fixture.score.is_valid():
            raise InvalidArgumentError("Scores must be non-negative.")

        existing = self.get_by_id(fixture.fixture_id)
        if existing is None:
            message = f"Attempted to update a fixture that does not exist. Fixture ID: {fixture.fixture_id}"
            logger.warning(message, extra={"fixture_id": fixture.fixture_id})
            raise NotFoundError(message)

        existing.score = replace(fixture.score)
        logger.debug("Fixture updated", extra={"fixture_id": fixture.fixture_id})

    def delete(self, fixture_id: int) -> None:
        existing = self.get_by_id(fixture_id)
        if existing is None:
            logger.warning(
                "Attempted to delete a fixture that does not exist", extra={"fixture_id": fixture_id}
            )
            return
        self._fixtures.remove(existing)
        logger.debug("Fixture deleted", extra={"fixture_id": fixture_id})

    def list_all(self, sort_mode: SortMode = SortMode.NONE) -> List[Fixture]:
        try:
            sort_mode = SortMode(sort_mode)
        except ValueError as e:
            raise InvalidArgumentError(f"Unsupported sort mode: {sort_mode!r}") from e
        if sort_mode is SortMode.TOTAL_SCORE_DESC_START_ASC:
            # sorted è stabile: a parità di entrambe le chiavi resta l'ordine di inserimento
            return sorted(self._fixtures, key=lambda f: (-f.score.total_score, f.start_time))
        return list(self._fixtures)


__all__ = ["FixtureStore", "SortMode"]
