"""
Session result ingestion.

Pasted tables go parser -> resolver -> points calculator and come back as a
preview. Saving a result replaces the stored one for (event, kind) and
rebuilds the season standings in the same transaction.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from pitwall.core.enums import SessionKind
from pitwall.core.errors import InvalidResult, ParseFailure, UnresolvedDriver
from pitwall.models.roster import Driver
from pitwall.models.results import ResultEntry, SessionResult
from pitwall.schemas.results import ParsedRow, ResultEntryIn, ResultImport
from pitwall.schemas.standings import StandingsResponse
from pitwall.services import providers, standings
from pitwall.services.parser import parse_result_table
from pitwall.services.points import DISTANCE_PERCENTAGES, compute_points, parse_position
from pitwall.services.resolver import resolve_driver

logger = logging.getLogger(__name__)


def entry_points(position: str, kind: SessionKind, distance_pct: Optional[int]) -> int:
    if not kind.scores_championship:
        return 0
    return compute_points(position, kind, distance_pct if distance_pct is not None else 100)


def build_entries(rows: Iterable[ParsedRow], roster: List[Driver],
                  kind: SessionKind, distance_pct: int = 100) -> List[ResultEntryIn]:
    by_id = {d.id: d for d in roster}
    entries: List[ResultEntryIn] = []
    for row in rows:
        driver_id = resolve_driver(row.driver_name_raw, roster)
        team_id = by_id[driver_id].team_id if driver_id is not None else None
        entries.append(ResultEntryIn(
            driver_id=driver_id,
            driver_name_raw=row.driver_name_raw,
            team_id=team_id,
            position=row.pos,
            laps=parse_position(row.laps) or 0,
            time=row.time,
            points=entry_points(row.pos, kind, distance_pct),
            q1=row.q1 or None,
            q2=row.q2 or None,
            q3=row.q3 or None,
        ))
    return entries


def import_result_table(db: Session, event_id: int, kind: SessionKind, html: str,
                        distance_pct: int = 100) -> ResultImport | ParseFailure:
    """Preview only, nothing is written."""
    providers.get_event_session(db, event_id, kind)
    parsed = parse_result_table(html)
    if isinstance(parsed, ParseFailure):
        return parsed
    entries = build_entries(parsed.rows, providers.list_roster(db), kind, distance_pct)
    unresolved = [e.driver_name_raw for e in entries if not e.resolved]
    logger.info(
        "Imported %d rows for event %s %s (%d unresolved)",
        len(entries), event_id, kind.value, len(unresolved),
    )
    return ResultImport(table_kind=parsed.table_kind, entries=entries, unresolved=unresolved)


def require_resolved(entries: Iterable[ResultEntryIn]) -> None:
    missing = [e.driver_name_raw or "(blank)" for e in entries if not e.resolved]
    if missing:
        raise UnresolvedDriver(missing)


def get_session_result(db: Session, event_id: int, kind: SessionKind) -> Optional[SessionResult]:
    return db.scalars(
        select(SessionResult).where(SessionResult.event_id == event_id, SessionResult.kind == kind)
    ).first()


def _validate_distance(kind: SessionKind, distance_pct: Optional[int]) -> Optional[int]:
    if kind != SessionKind.race:
        return None
    if distance_pct is None:
        return 100
    if distance_pct not in DISTANCE_PERCENTAGES:
        raise InvalidResult(f"distance_pct must be one of {DISTANCE_PERCENTAGES}, got {distance_pct}")
    return distance_pct


def _team_snapshot(db: Session, entry: ResultEntryIn) -> Optional[int]:
    if entry.team_id is not None or entry.driver_id is None:
        return entry.team_id
    driver = providers.get_driver(db, entry.driver_id)
    return driver.team_id if driver is not None else None


def save_session_result(db: Session, event_id: int, kind: SessionKind,
                        entries: List[ResultEntryIn],
                        distance_pct: Optional[int] = None) -> StandingsResponse:
    event = providers.get_event(db, event_id)
    providers.get_event_session(db, event_id, kind)
    distance_pct = _validate_distance(kind, distance_pct)

    try:
        result = get_session_result(db, event_id, kind)
        if result is None:
            result = SessionResult(event_id=event_id, kind=kind)
            db.add(result)
        else:
            result.entries.clear()
            db.flush()
        result.distance_pct = distance_pct

        for row, e in enumerate(entries):
            override = e.points_override and e.points is not None
            result.entries.append(ResultEntry(
                row=row,
                driver_id=e.driver_id,
                driver_name_raw=e.driver_name_raw,
                team_id=_team_snapshot(db, e),
                position=e.position,
                laps=e.laps,
                time=e.time,
                points=e.points if override else entry_points(e.position, kind, distance_pct),
                points_override=override,
                q1=e.q1,
                q2=e.q2,
                q3=e.q3,
            ))
        db.flush()
        standings.rebuild_standings(db, event.season)
        db.commit()
    except Exception:
        db.rollback()
        raise

    unresolved = sum(1 for e in entries if not e.resolved)
    if unresolved:
        logger.warning("Saved %s %s with %d unresolved entries", event_id, kind.value, unresolved)
    else:
        logger.info("Saved %s %s (%d entries)", event_id, kind.value, len(entries))
    return standings.get_standings(db, event.season)


def delete_session_result(db: Session, event_id: int, kind: SessionKind) -> StandingsResponse:
    event = providers.get_event(db, event_id)
    try:
        result = get_session_result(db, event_id, kind)
        if result is not None:
            db.delete(result)
            db.flush()
        standings.rebuild_standings(db, event.season)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return standings.get_standings(db, event.season)
