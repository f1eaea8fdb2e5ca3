"""
Free-text bonus questions.

Answers are compared case-insensitively after trimming. Grading is
retroactive: answers are scored whenever points are read, so setting the
correct answer later scores every answer already on file.
"""
import logging
import uuid
from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from pitwall.core.errors import InvalidBetSubmission, NotFound
from pitwall.models.game import BonusQuestion, UserBonusBet
from pitwall.schemas.game import BonusQuestionIn
from pitwall.services.rounds import utc
from pitwall.services.settings import current_season

logger = logging.getLogger(__name__)


def normalize_answer(answer: Optional[str]) -> str:
    return (answer or "").strip().lower()


def answer_matches(answer: Optional[str], correct: Optional[str]) -> bool:
    if not normalize_answer(correct):
        return False
    return normalize_answer(answer) == normalize_answer(correct)


def get_bonus_question(db: Session, question_id: str) -> BonusQuestion:
    q = db.get(BonusQuestion, question_id)
    if q is None:
        raise NotFound(f"Bonus question {question_id} not found")
    return q


def list_bonus_questions(db: Session, season: int) -> List[BonusQuestion]:
    return list(db.scalars(
        select(BonusQuestion).where(BonusQuestion.season == season).order_by(BonusQuestion.deadline, BonusQuestion.id)
    ))


def _commit(db: Session) -> None:
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise


def create_bonus_question(db: Session, payload: BonusQuestionIn) -> BonusQuestion:
    q = BonusQuestion(
        id=payload.id or f"bq-{uuid.uuid4().hex[:12]}",
        season=payload.season or current_season(),
        question=payload.question,
        points=payload.points,
        deadline=utc(payload.deadline),
    )
    db.add(q)
    _commit(db)
    return q


def update_bonus_question(db: Session, question_id: str, payload: BonusQuestionIn) -> BonusQuestion:
    q = get_bonus_question(db, question_id)
    q.question = payload.question
    q.points = payload.points
    q.deadline = utc(payload.deadline)
    if payload.season:
        q.season = payload.season
    _commit(db)
    return q


def delete_bonus_question(db: Session, question_id: str) -> None:
    db.delete(get_bonus_question(db, question_id))
    _commit(db)


def submit_bonus_answer(db: Session, user_id: int, question_id: str, answer: str,
                        now: Optional[datetime] = None) -> UserBonusBet:
    now = now or datetime.now(timezone.utc)
    q = get_bonus_question(db, question_id)
    if not answer or not answer.strip():
        raise InvalidBetSubmission("Answer must not be blank")
    if utc(now) > utc(q.deadline):
        raise InvalidBetSubmission("The deadline for this question has passed")

    bet = db.scalars(
        select(UserBonusBet).where(UserBonusBet.user_id == user_id, UserBonusBet.question_id == question_id)
    ).first()
    if bet is None:
        bet = UserBonusBet(user_id=user_id, question_id=question_id)
        db.add(bet)
    bet.answer = answer.strip()
    bet.submitted_at = now
    _commit(db)
    return bet


def grade_bonus_question(db: Session, question_id: str, correct_answer: Optional[str]) -> BonusQuestion:
    """Sets (or with a blank value, clears) the correct answer."""
    q = get_bonus_question(db, question_id)
    q.correct_answer = correct_answer.strip() if correct_answer and correct_answer.strip() else None
    _commit(db)
    logger.info("Bonus question %s graded: %r", question_id, q.correct_answer)
    return q


def bonus_points_by_user(db: Session, season: int) -> Dict[int, int]:
    rows = db.execute(
        select(UserBonusBet, BonusQuestion)
        .join(BonusQuestion, BonusQuestion.id == UserBonusBet.question_id)
        .where(BonusQuestion.season == season)
    )
    points: Dict[int, int] = defaultdict(int)
    for bet, question in rows:
        if question.is_graded and answer_matches(bet.answer, question.correct_answer):
            points[bet.user_id] += question.points
    return dict(points)
