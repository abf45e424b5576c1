from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence, Tuple

from core.exceptions import ScoreboardError
from core.logging import get_logger
from core.scoreboard import build_scoreboard

log = get_logger("scripts.run_scoreboard_demo")

DEFAULT_FIXTURES = [
    "1:Mexico:Canada",
    "2:Spain:Brazil",
    "3:Germany:France",
    "4:Uruguay:Italy",
    "5:Argentina:Australia",
]
DEFAULT_SCORES = ["1:0-5", "2:10-2", "3:2-2", "4:6-6", "5:3-1"]


def _parse_fixture(raw: str) -> Tuple[int, str, str]:
    parts = raw.split(":")
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"Formato fixture non valido (atteso ID:HOME:AWAY): {raw!r}")
    try:
        return int(parts[0]), parts[1], parts[2]
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"ID fixture non intero: {raw!r}") from e


def _parse_score(raw: str) -> Tuple[int, int, int]:
    try:
        fid, goals = raw.split(":", 1)
        home, away = goals.split("-", 1)
        return int(fid), int(home), int(away)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Formato punteggio non valido (atteso ID:H-A): {raw!r}") from e


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Avvia fixture, aggiorna punteggi e stampa il summary dello scoreboard")
    ap.add_argument("--fixture", action="append", type=_parse_fixture, dest="fixtures", help="ID:HOME:AWAY")
    ap.add_argument("--score", action="append", type=_parse_score, dest="scores", help="ID:H-A")
    ap.add_argument("--finish", action="append", type=int, default=[], help="ID fixture da terminare")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    fixtures = args.fixtures or [_parse_fixture(f) for f in DEFAULT_FIXTURES]
    scores = args.scores if args.scores is not None else (
        [_parse_score(s) for s in DEFAULT_SCORES] if args.fixtures is None else []
    )

    scoreboard = build_scoreboard()
    try:
        for fid, home, away in fixtures:
            scoreboard.start_fixture(fid, home, away)
        for fid, home_score, away_score in scores:
            scoreboard.update_score(fid, home_score, away_score)
        for fid in args.finish:
            scoreboard.finish_fixture(fid)
    except ScoreboardError as exc:
        log.error("Scoreboard error: %s", exc)
        return 1

    lines: List[str] = scoreboard.get_summary()
    for idx, line in enumerate(lines, start=1):
        print(f"{idx}. {line}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
