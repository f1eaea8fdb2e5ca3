from sqlalchemy import (
    Column, DateTime, Enum, ForeignKey, Integer, JSON, String, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from pitwall.core.enums import RoundStatus, SessionKind
from pitwall.db.base import Base
from pitwall.models.calendar import Event  # noqa: F401
from pitwall.models.users import User  # noqa: F401


class PredictionSettings(Base):
    __tablename__ = "prediction_settings"
    id = Column(Integer, primary_key=True, index=True)
    season = Column(Integer, nullable=False, unique=True)
    race_points = Column(JSON, nullable=False)
    quali_points = Column(JSON, nullable=False)
    participation_point = Column(Integer, nullable=False, default=1)

    def table_for(self, kind: SessionKind) -> list[int]:
        return list(self.quali_points if kind.is_qualifying else self.race_points)

class RoundState(Base):
    __tablename__ = "round_states"
    __table_args__ = (UniqueConstraint("event_id", "kind", name="unique_round_event_kind"),)
    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    kind = Column(Enum(SessionKind, native_enum=False, length=20), nullable=False)
    status = Column(Enum(RoundStatus, native_enum=False, length=10), nullable=False)

class UserBet(Base):
    __tablename__ = "user_bets"
    __table_args__ = (
        UniqueConstraint("user_id", "event_id", "kind", "season", name="unique_bet_user_event_kind_season"),
    )
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    kind = Column(Enum(SessionKind, native_enum=False, length=20), nullable=False)
    season = Column(Integer, nullable=False, index=True)
    drivers = Column(JSON, nullable=False)  # driver ids, P1..Pn
    submitted_at = Column(DateTime(timezone=True), nullable=False)

class BonusQuestion(Base):
    __tablename__ = "bonus_questions"
    id = Column(String, primary_key=True)
    season = Column(Integer, nullable=False, index=True)
    question = Column(String, nullable=False)
    points = Column(Integer, nullable=False, default=0)
    deadline = Column(DateTime(timezone=True), nullable=False)
    correct_answer = Column(String, nullable=True)  # None until graded
    answers = relationship("UserBonusBet", back_populates="question", cascade="all, delete-orphan")

    @property
    def is_graded(self) -> bool:
        return bool(self.correct_answer and self.correct_answer.strip())

class UserBonusBet(Base):
    __tablename__ = "user_bonus_bets"
    __table_args__ = (UniqueConstraint("user_id", "question_id", name="unique_bonus_user_question"),)
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    question_id = Column(String, ForeignKey("bonus_questions.id", ondelete="CASCADE"), nullable=False)
    answer = Column(String, nullable=False)
    submitted_at = Column(DateTime(timezone=True), nullable=False)
    question = relationship("BonusQuestion", back_populates="answers")
