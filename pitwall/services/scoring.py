"""
Bet scoring.

An exact hit earns the table value of its slot; the right driver in the
wrong slot earns the flat participation point, as long as the driver
finished inside the scored range.
"""
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from pitwall.core.enums import SessionKind
from pitwall.models.game import PredictionSettings, UserBet
from pitwall.models.results import ResultEntry
from pitwall.services.points import parse_position
from pitwall.services.results import get_session_result

UNCLASSIFIED = 999


def finishing_order(entries: Sequence[ResultEntry]) -> List[Optional[int]]:
    """Driver ids by numeric position; DNF/DNS rows go last in stored order."""
    def sort_key(e):
        pos = parse_position(e.position)
        return pos if pos is not None else UNCLASSIFIED
    return [e.driver_id for e in sorted(entries, key=sort_key)]


def score_prediction(predicted: Sequence[int], table: Sequence[int],
                     participation_point: int, actual: Sequence[Optional[int]]) -> int:
    n = len(table)
    top_n = {d for d in actual[:n] if d is not None}
    total = 0
    for i, driver_id in enumerate(predicted[:n]):
        if i < len(actual) and actual[i] is not None and actual[i] == driver_id:
            total += table[i]
        elif driver_id in top_n:
            total += participation_point
    return total


def score_bet(predicted: Sequence[int], kind: SessionKind,
              entries: Optional[Sequence[ResultEntry]],
              settings: PredictionSettings) -> int:
    if not entries:
        return 0
    return score_prediction(
        predicted,
        settings.table_for(kind),
        settings.participation_point,
        finishing_order(entries),
    )


def score_user_bet(db: Session, bet: UserBet, settings: PredictionSettings) -> int:
    result = get_session_result(db, bet.event_id, bet.kind)
    return score_bet(bet.drivers, bet.kind, result.entries if result else None, settings)
