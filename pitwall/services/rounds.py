"""
Betting window per (event, session).

An administrator can pin a round open, locked or settled. Without a pinned
status the window follows the session start time.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from pitwall.core.enums import RoundStatus, SessionKind
from pitwall.models.game import RoundState
from pitwall.services import providers
from pitwall.services.results import get_session_result

logger = logging.getLogger(__name__)


def utc(dt: datetime) -> datetime:
    """Naive datetimes are stored and compared as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _state(db: Session, event_id: int, kind: SessionKind) -> Optional[RoundState]:
    return db.scalars(
        select(RoundState).where(RoundState.event_id == event_id, RoundState.kind == kind)
    ).first()


def get_round_status(db: Session, event_id: int, kind: SessionKind) -> Optional[RoundStatus]:
    state = _state(db, event_id, kind)
    return state.status if state else None


def set_round_status(db: Session, event_id: int, kind: SessionKind, status: RoundStatus) -> RoundStatus:
    providers.get_event_session(db, event_id, kind)
    try:
        state = _state(db, event_id, kind)
        if state is None:
            state = RoundState(event_id=event_id, kind=kind)
            db.add(state)
        state.status = status
        db.commit()
    except Exception:
        db.rollback()
        raise

    if status == RoundStatus.settled:
        if get_session_result(db, event_id, kind) is None:
            logger.warning("Round %s %s settled without a stored result", event_id, kind.value)
    logger.info("Round %s %s -> %s", event_id, kind.value, status.value)
    return status


def clear_round_status(db: Session, event_id: int, kind: SessionKind) -> None:
    try:
        state = _state(db, event_id, kind)
        if state is not None:
            db.delete(state)
        db.commit()
    except Exception:
        db.rollback()
        raise


def window_closed(status: Optional[RoundStatus], deadline: datetime, now: datetime) -> bool:
    if status in (RoundStatus.locked, RoundStatus.settled):
        return True
    if status == RoundStatus.open:
        return False
    return utc(now) > utc(deadline)


def is_betting_closed(db: Session, event_id: int, kind: SessionKind,
                      deadline: datetime, now: Optional[datetime] = None) -> bool:
    # one clock read per evaluation
    now = now or datetime.now(timezone.utc)
    return window_closed(get_round_status(db, event_id, kind), deadline, now)
