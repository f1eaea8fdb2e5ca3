from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pitwall.api.deps import current_user, http_error
from pitwall.core.enums import SessionKind
from pitwall.core.errors import PitwallError
from pitwall.db.session import get_db
from pitwall.models.users import User
from pitwall.schemas.game import BetIn, BetOut
from pitwall.services import bets as bet_service

router = APIRouter()

@router.get("/{event_id}/{kind}", response_model=BetOut)
def my_bet(event_id: int, kind: SessionKind,
           user: User = Depends(current_user), db: Session = Depends(get_db)):
    bet = bet_service.get_user_bet(db, user.id, event_id, kind)
    if bet is None:
        raise HTTPException(404, "No bet for this session")
    return bet

@router.put("/{event_id}/{kind}", response_model=BetOut)
def submit_bet(event_id: int, kind: SessionKind, body: BetIn,
               user: User = Depends(current_user), db: Session = Depends(get_db)):
    try:
        return bet_service.submit_bet(db, user.id, event_id, kind, body.drivers)
    except PitwallError as e:
        raise http_error(e)
