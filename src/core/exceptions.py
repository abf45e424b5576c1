class ScoreboardError(Exception):
    """Base di tutti gli errori sollevati dallo scoreboard e dallo store."""


class InvalidArgumentError(ScoreboardError, ValueError):
    """Sollevata per input non validi (fixture mancante, nome squadra vuoto, punteggio negativo)."""


class ScoreOutOfRangeError(InvalidArgumentError):
    """Sollevata quando un aggiornamento punteggio contiene valori negativi."""


class AlreadyExistsError(ScoreboardError):
    """Sollevata quando si avvia una fixture con un id già attivo."""


class NotFoundError(ScoreboardError, LookupError):
    """Sollevata quando l'id richiesto non corrisponde a nessuna fixture attiva."""


__all__ = [
    "ScoreboardError",
    "InvalidArgumentError",
    "ScoreOutOfRangeError",
    "AlreadyExistsError",
    "NotFoundError",
]
