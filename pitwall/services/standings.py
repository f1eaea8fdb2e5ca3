"""
Season standings for drivers and teams.

Standings are never patched. Every rebuild starts from all stored race and
sprint results of the season, so running it twice gives the same table.
"""
import logging
from collections import defaultdict
from typing import Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from pitwall.core.enums import SessionKind, StandingSubject, Trend
from pitwall.models.calendar import Event
from pitwall.models.results import SessionResult, Standing
from pitwall.schemas.standings import StandingRow, StandingsResponse
from pitwall.services import providers

logger = logging.getLogger(__name__)


def trend_for(new_rank: int, previous_rank: Optional[int]) -> Trend:
    if not previous_rank or previous_rank == new_rank:
        return Trend.same
    return Trend.up if new_rank < previous_rank else Trend.down


def season_points(db: Session, season: int):
    """Returns (driver_points, team_points) summed over race and sprint results."""
    results = db.scalars(
        select(SessionResult)
        .join(Event, Event.id == SessionResult.event_id)
        .where(
            Event.season == season,
            SessionResult.kind.in_([SessionKind.race, SessionKind.sprint]),
        )
        .options(selectinload(SessionResult.entries))
    )
    driver_points: Dict[int, int] = defaultdict(int)
    team_points: Dict[int, int] = defaultdict(int)
    skipped = 0
    for result in results:
        for entry in result.entries:
            if not entry.resolved:
                skipped += 1
                continue
            pts = entry.points or 0
            driver_points[entry.driver_id] += pts
            # team snapshot from the result, not the driver's current team
            if entry.team_id is not None:
                team_points[entry.team_id] += pts
    if skipped:
        logger.warning("Season %s: %d unresolved result entries left out of standings", season, skipped)
    return driver_points, team_points


def _rank(db: Session, season: int, subject: StandingSubject,
          ids: List[int], points: Dict[int, int]) -> None:
    previous = {
        s.subject_id: s.rank
        for s in db.scalars(
            select(Standing).where(Standing.season == season, Standing.subject == subject)
        )
    }
    db.execute(delete(Standing).where(Standing.season == season, Standing.subject == subject))

    # sorted() is stable: equal points keep roster display order
    ordered = sorted(ids, key=lambda i: points.get(i, 0), reverse=True)
    for idx, subject_id in enumerate(ordered):
        rank = idx + 1
        db.add(Standing(
            season=season,
            subject=subject,
            subject_id=subject_id,
            points=points.get(subject_id, 0),
            rank=rank,
            trend=trend_for(rank, previous.get(subject_id)),
        ))


def rebuild_standings(db: Session, season: int) -> None:
    """Rewrites the season's standing rows inside the caller's transaction."""
    driver_points, team_points = season_points(db, season)
    drivers = providers.list_roster(db)
    teams = providers.list_teams(db)
    _rank(db, season, StandingSubject.driver, [d.id for d in drivers], driver_points)
    _rank(db, season, StandingSubject.team, [t.id for t in teams], team_points)
    db.flush()
    logger.info("Rebuilt standings for %s: %d drivers, %d teams", season, len(drivers), len(teams))


def recompute_standings(db: Session, season: int) -> StandingsResponse:
    try:
        rebuild_standings(db, season)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return get_standings(db, season)


def get_standings(db: Session, season: int) -> StandingsResponse:
    names = {
        StandingSubject.driver: {d.id: d.full_name for d in providers.list_roster(db)},
        StandingSubject.team: {t.id: t.name for t in providers.list_teams(db)},
    }
    rows: Dict[StandingSubject, List[StandingRow]] = {s: [] for s in StandingSubject}
    stored = db.scalars(
        select(Standing)
        .where(Standing.season == season)
        .order_by(Standing.subject, Standing.rank)
    )
    for s in stored:
        rows[s.subject].append(StandingRow(
            id=s.subject_id,
            name=names[s.subject].get(s.subject_id, "Unknown"),
            points=s.points,
            rank=s.rank,
            trend=s.trend,
        ))
    return StandingsResponse(
        season=season,
        drivers=rows[StandingSubject.driver],
        teams=rows[StandingSubject.team],
    )
