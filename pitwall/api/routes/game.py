from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from pitwall.api.deps import game_manager, http_error
from pitwall.core.errors import PitwallError
from pitwall.db.session import get_db
from pitwall.schemas.game import LeaderboardResponse, PredictionSettingsIn, PredictionSettingsOut
from pitwall.services import settings as settings_service
from pitwall.services.leaderboard import build_leaderboard

router = APIRouter()

@router.get("/settings", response_model=PredictionSettingsOut)
def get_settings(db: Session = Depends(get_db)):
    return settings_service.get_prediction_settings(db)

@router.put("/settings", response_model=PredictionSettingsOut,
            dependencies=[Depends(game_manager)])
def update_settings(body: PredictionSettingsIn, db: Session = Depends(get_db)):
    try:
        return settings_service.update_prediction_settings(db, body)
    except PitwallError as e:
        raise http_error(e)

@router.get("/leaderboard/{season}", response_model=LeaderboardResponse)
def leaderboard(season: int = Path(..., ge=1950), db: Session = Depends(get_db)):
    entries = build_leaderboard(db, season)
    return {"season": season, "count": len(entries), "entries": entries}
