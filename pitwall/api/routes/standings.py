from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from pitwall.api.deps import game_manager
from pitwall.db.session import get_db
from pitwall.schemas.standings import StandingsResponse
from pitwall.services import standings as standings_service

router = APIRouter()

@router.get("/{season}", response_model=StandingsResponse)
def get_standings(season: int = Path(..., ge=1950), db: Session = Depends(get_db)):
    """
    Driver and team standings for a season, ordered by rank.
    """
    return standings_service.get_standings(db, season)

@router.post("/{season}/recompute", response_model=StandingsResponse,
             dependencies=[Depends(game_manager)])
def recompute(season: int = Path(..., ge=1950), db: Session = Depends(get_db)):
    return standings_service.recompute_standings(db, season)
