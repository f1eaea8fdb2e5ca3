from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from pitwall.core.enums import GAME_MANAGER_ROLES
from pitwall.core.errors import (
    InvalidBetSubmission, InvalidConfiguration, InvalidResult, NotFound, PitwallError, UnresolvedDriver,
)
from pitwall.db.session import get_db
from pitwall.models.users import User
from pitwall.services import providers


def current_user(x_user_id: int = Header(..., description="Id of the signed-in user"),
                 db: Session = Depends(get_db)) -> User:
    user = providers.get_user(db, x_user_id)
    if user is None:
        raise HTTPException(401, detail="Unknown user")
    return user

def game_manager(user: User = Depends(current_user)) -> User:
    if user.role not in GAME_MANAGER_ROLES:
        raise HTTPException(403, detail="Not allowed to manage the prediction game")
    return user

def http_error(e: PitwallError) -> HTTPException:
    if isinstance(e, NotFound):
        return HTTPException(404, detail=e.reason)
    if isinstance(e, InvalidBetSubmission):
        return HTTPException(409, detail=e.reason)
    if isinstance(e, (InvalidConfiguration, InvalidResult, UnresolvedDriver)):
        return HTTPException(422, detail=e.reason)
    return HTTPException(400, detail=e.reason)
