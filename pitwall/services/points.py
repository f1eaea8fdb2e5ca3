"""
Championship points per finishing position.

Reduced tables apply to races that did not reach full distance. Tier bounds
are strict: 25% lands in the 25-49 tier, 50% in 50-74 and 75% gets the full
table.
"""
import re
from typing import List, Optional

from pitwall.core.enums import SessionKind

POINTS_SYSTEM = {
    SessionKind.race: [25, 18, 15, 12, 10, 8, 6, 4, 2, 1],
    SessionKind.sprint: [8, 7, 6, 5, 4, 3, 2, 1],
}

# (upper bound exclusive, table)
REDUCED_RACE_POINTS = [
    (25, [6, 4, 3, 2, 1]),
    (50, [13, 10, 8, 6, 5, 4, 3, 2, 1]),
    (75, [19, 14, 12, 10, 8, 6, 4, 3, 2, 1]),
]

DISTANCE_PERCENTAGES = (25, 50, 75, 100)

_LEADING_INT = re.compile(r"^\s*(\d+)")


def parse_position(position) -> Optional[int]:
    """Numeric finishing position, or None for DNF/DNS/blank."""
    if isinstance(position, int):
        return position
    m = _LEADING_INT.match(str(position or ""))
    return int(m.group(1)) if m else None


def points_table(kind: SessionKind, distance_pct: Optional[int] = 100) -> List[int]:
    if kind == SessionKind.race:
        if distance_pct is None:
            distance_pct = 100
        for upper, table in REDUCED_RACE_POINTS:
            if distance_pct < upper:
                return table
        return POINTS_SYSTEM[SessionKind.race]
    return POINTS_SYSTEM.get(kind, [])


def compute_points(position, kind: SessionKind, distance_pct: Optional[int] = 100) -> int:
    pos = parse_position(position)
    if pos is None or pos < 1:
        return 0
    table = points_table(kind, distance_pct)
    if pos > len(table):
        return 0
    return table[pos - 1]
