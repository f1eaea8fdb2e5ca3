"""Season-wide configuration of the prediction game."""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from pitwall.core.config import settings as app_settings
from pitwall.core.errors import InvalidConfiguration
from pitwall.models.game import BonusQuestion, PredictionSettings
from pitwall.schemas.game import PredictionSettingsIn

logger = logging.getLogger(__name__)

DEFAULT_RACE_POINTS = [10, 8, 6, 5, 4, 3, 2, 1]
DEFAULT_QUALI_POINTS = [5, 4, 3, 2, 1]
DEFAULT_PARTICIPATION_POINT = 1
STANDARD_QUESTION_POINTS = 10


def current_season() -> int:
    return app_settings.season


def default_settings(season: int) -> PredictionSettings:
    return PredictionSettings(
        season=season,
        race_points=list(DEFAULT_RACE_POINTS),
        quali_points=list(DEFAULT_QUALI_POINTS),
        participation_point=DEFAULT_PARTICIPATION_POINT,
    )


def get_prediction_settings(db: Session, season: Optional[int] = None) -> PredictionSettings:
    """Stored settings for the season, or unsaved defaults."""
    season = season or current_season()
    stored = db.scalars(select(PredictionSettings).where(PredictionSettings.season == season)).first()
    return stored if stored is not None else default_settings(season)


def _check_table(name: str, table: List[int]) -> None:
    if not table:
        raise InvalidConfiguration(f"{name} must not be empty")
    if any(v < 0 for v in table):
        raise InvalidConfiguration(f"{name} must not contain negative values")


def validate_settings(payload: PredictionSettingsIn) -> None:
    _check_table("race_points", payload.race_points)
    _check_table("quali_points", payload.quali_points)
    if payload.participation_point < 0:
        raise InvalidConfiguration("participation_point must not be negative")


def update_prediction_settings(db: Session, payload: PredictionSettingsIn) -> PredictionSettings:
    # rejected payloads never touch the stored row
    validate_settings(payload)
    try:
        stored = db.scalars(
            select(PredictionSettings).where(PredictionSettings.season == payload.season)
        ).first()
        if stored is None:
            stored = PredictionSettings(season=payload.season)
            db.add(stored)
        stored.race_points = list(payload.race_points)
        stored.quali_points = list(payload.quali_points)
        stored.participation_point = payload.participation_point
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Prediction settings updated for %s", payload.season)
    return stored


def standard_bonus_questions(season: int) -> List[BonusQuestion]:
    deadline = datetime(season, 3, 1, tzinfo=timezone.utc)
    return [
        BonusQuestion(
            id=f"bq-driver-{season}",
            season=season,
            question=f"Who will be the {season} drivers' champion?",
            points=STANDARD_QUESTION_POINTS,
            deadline=deadline,
        ),
        BonusQuestion(
            id=f"bq-const-{season}",
            season=season,
            question=f"Who will be the {season} constructors' champion?",
            points=STANDARD_QUESTION_POINTS,
            deadline=deadline,
        ),
    ]


def ensure_standard_bonus_questions(db: Session, season: int) -> int:
    """Seeds the champion questions for a season. Returns how many were added."""
    added = 0
    try:
        for q in standard_bonus_questions(season):
            if db.get(BonusQuestion, q.id) is None:
                db.add(q)
                added += 1
        db.commit()
    except Exception:
        db.rollback()
        raise
    if added:
        logger.info("Seeded %d standard bonus questions for %s", added, season)
    return added
