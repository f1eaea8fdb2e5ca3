"""Read-only lookups into roster, calendar and user data owned elsewhere."""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from pitwall.core.enums import SessionKind
from pitwall.core.errors import NotFound, UnknownSession
from pitwall.models.calendar import Event, EventSession
from pitwall.models.roster import Driver, Team
from pitwall.models.users import User


def list_roster(db: Session) -> List[Driver]:
    return list(db.scalars(select(Driver).order_by(Driver.order, Driver.id)))

def list_teams(db: Session) -> List[Team]:
    return list(db.scalars(select(Team).order_by(Team.order, Team.id)))

def get_driver(db: Session, driver_id: int) -> Optional[Driver]:
    return db.get(Driver, driver_id)

def list_users(db: Session) -> List[User]:
    return list(db.scalars(select(User).order_by(User.id)))

def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)

def get_event(db: Session, event_id: int) -> Event:
    event = db.get(Event, event_id)
    if event is None:
        raise NotFound(f"Event {event_id} not found")
    return event

def get_event_session(db: Session, event_id: int, kind: SessionKind) -> EventSession:
    sess = db.scalars(
        select(EventSession).where(EventSession.event_id == event_id, EventSession.kind == kind)
    ).first()
    if sess is None:
        raise UnknownSession(f"Event {event_id} has no {kind.value} session")
    return sess
