from sqlalchemy import Column, Integer, String, DateTime, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from pitwall.core.enums import RaceFormat, SessionKind
from pitwall.db.base import Base


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (UniqueConstraint("season", "round", name="unique_events_season_round"),)
    id = Column(Integer, primary_key=True, index=True)
    season = Column(Integer, nullable=False, index=True)
    round = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    country = Column(String, nullable=True)
    format = Column(Enum(RaceFormat, native_enum=False, length=20), nullable=False, default=RaceFormat.standard)
    sessions = relationship("EventSession", back_populates="event", cascade="all, delete-orphan")

class EventSession(Base):
    __tablename__ = "event_sessions"
    __table_args__ = (UniqueConstraint("event_id", "kind", name="unique_event_session_kind"),)
    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    kind = Column(Enum(SessionKind, native_enum=False, length=20), nullable=False)
    starts_at = Column(DateTime(timezone=True), nullable=False)  # default betting deadline
    event = relationship("Event", back_populates="sessions")
