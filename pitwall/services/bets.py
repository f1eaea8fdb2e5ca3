import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from pitwall.core.enums import RaceFormat, SPRINT_ONLY_KINDS, SessionKind
from pitwall.core.errors import InvalidBetSubmission, UnknownSession
from pitwall.models.game import UserBet
from pitwall.services import providers, rounds
from pitwall.services.settings import get_prediction_settings

logger = logging.getLogger(__name__)


def get_user_bet(db: Session, user_id: int, event_id: int, kind: SessionKind,
                 season: Optional[int] = None) -> Optional[UserBet]:
    season = season or get_prediction_settings(db).season
    return db.scalars(
        select(UserBet).where(
            UserBet.user_id == user_id,
            UserBet.event_id == event_id,
            UserBet.kind == kind,
            UserBet.season == season,
        )
    ).first()


def list_bets(db: Session, season: int) -> List[UserBet]:
    return list(db.scalars(select(UserBet).where(UserBet.season == season).order_by(UserBet.id)))


def submit_bet(db: Session, user_id: int, event_id: int, kind: SessionKind,
               drivers: List[int], now: Optional[datetime] = None) -> UserBet:
    """Validates and stores a prediction, replacing any earlier one for the same round."""
    now = now or datetime.now(timezone.utc)
    if not kind.is_bettable:
        raise InvalidBetSubmission(f"{kind.value} sessions are not part of the game")

    event = providers.get_event(db, event_id)
    if event.format == RaceFormat.standard and kind in SPRINT_ONLY_KINDS:
        raise InvalidBetSubmission(f"{event.name} has no {kind.value} session")
    try:
        session = providers.get_event_session(db, event_id, kind)
    except UnknownSession as e:
        raise InvalidBetSubmission(e.reason) from e

    if rounds.is_betting_closed(db, event_id, kind, session.starts_at, now=now):
        raise InvalidBetSubmission("Betting is closed for this session")

    game = get_prediction_settings(db)
    slots = len(game.table_for(kind))
    if len(drivers) > slots:
        raise InvalidBetSubmission(f"At most {slots} drivers can be predicted for {kind.value}")
    if len(set(drivers)) != len(drivers):
        raise InvalidBetSubmission("A driver can only be predicted once")
    roster_ids = {d.id for d in providers.list_roster(db)}
    unknown = [d for d in drivers if d not in roster_ids]
    if unknown:
        raise InvalidBetSubmission(f"Unknown drivers: {unknown}")

    try:
        bet = get_user_bet(db, user_id, event_id, kind, season=game.season)
        if bet is None:
            bet = UserBet(user_id=user_id, event_id=event_id, kind=kind, season=game.season)
            db.add(bet)
        bet.drivers = list(drivers)
        bet.submitted_at = now
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Bet stored: user %s, event %s %s (%d picks)", user_id, event_id, kind.value, len(drivers))
    return bet
