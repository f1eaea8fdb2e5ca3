from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pitwall.api.deps import game_manager, http_error
from pitwall.core.enums import SessionKind
from pitwall.core.errors import PitwallError
from pitwall.db.session import get_db
from pitwall.schemas.game import RoundStatusIn, RoundStatusOut
from pitwall.services import providers, rounds

router = APIRouter()

def _round_out(db: Session, event_id: int, kind: SessionKind) -> RoundStatusOut:
    session = providers.get_event_session(db, event_id, kind)
    status = rounds.get_round_status(db, event_id, kind)
    now = datetime.now(timezone.utc)
    return RoundStatusOut(
        event_id=event_id,
        kind=kind,
        status=status,
        deadline=rounds.utc(session.starts_at),
        closed=rounds.window_closed(status, session.starts_at, now),
    )

@router.get("/{event_id}/{kind}", response_model=RoundStatusOut)
def get_round(event_id: int, kind: SessionKind, db: Session = Depends(get_db)):
    try:
        return _round_out(db, event_id, kind)
    except PitwallError as e:
        raise http_error(e)

@router.get("/{event_id}/{kind}/closed")
def round_closed(event_id: int, kind: SessionKind, db: Session = Depends(get_db)):
    try:
        return {"closed": _round_out(db, event_id, kind).closed}
    except PitwallError as e:
        raise http_error(e)

@router.put("/{event_id}/{kind}", response_model=RoundStatusOut,
            dependencies=[Depends(game_manager)])
def set_round(event_id: int, kind: SessionKind, body: RoundStatusIn, db: Session = Depends(get_db)):
    try:
        rounds.set_round_status(db, event_id, kind, body.status)
        return _round_out(db, event_id, kind)
    except PitwallError as e:
        raise http_error(e)

@router.delete("/{event_id}/{kind}", response_model=RoundStatusOut,
               dependencies=[Depends(game_manager)])
def clear_round(event_id: int, kind: SessionKind, db: Session = Depends(get_db)):
    try:
        rounds.clear_round_status(db, event_id, kind)
        return _round_out(db, event_id, kind)
    except PitwallError as e:
        raise http_error(e)
