from sqlalchemy import (
    Boolean, Column, Enum, ForeignKey, Index, Integer, String, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from pitwall.core.enums import SessionKind, StandingSubject, Trend
from pitwall.db.base import Base
from pitwall.models.calendar import Event
from pitwall.models.roster import Driver, Team  # noqa: F401


class SessionResult(Base):
    __tablename__ = "session_results"
    __table_args__ = (UniqueConstraint("event_id", "kind", name="unique_result_event_kind"),)
    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    kind = Column(Enum(SessionKind, native_enum=False, length=20), nullable=False)
    distance_pct = Column(Integer, nullable=True)  # race only: 25, 50, 75, 100

    event = relationship(Event)
    entries = relationship(
        "ResultEntry",
        back_populates="result",
        cascade="all, delete-orphan",
        order_by="ResultEntry.row",
    )

class ResultEntry(Base):
    __tablename__ = "result_entries"
    __table_args__ = (
        UniqueConstraint("result_id", "row", name="unique_result_row"),
        Index("ix_result_entries_driver", "driver_id"),
    )
    id = Column(Integer, primary_key=True, index=True)
    result_id = Column(Integer, ForeignKey("session_results.id", ondelete="CASCADE"), nullable=False)
    row = Column(Integer, nullable=False)

    # driver_id is None while the pasted name is unresolved
    driver_id = Column(Integer, ForeignKey("drivers.id", ondelete="SET NULL"), nullable=True)
    driver_name_raw = Column(String, nullable=False, default="")
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True)  # snapshot at save time

    position = Column(String, nullable=False, default="")  # "1", "2", "DNF", "DNS"
    laps = Column(Integer, nullable=False, default=0)
    time = Column(String, nullable=False, default="")
    points = Column(Integer, nullable=False, default=0)
    points_override = Column(Boolean, nullable=False, default=False)
    q1 = Column(String, nullable=True)
    q2 = Column(String, nullable=True)
    q3 = Column(String, nullable=True)

    result = relationship("SessionResult", back_populates="entries")

    @property
    def resolved(self) -> bool:
        return self.driver_id is not None

class Standing(Base):
    """Derived championship table row; rebuilt wholesale on every recompute."""
    __tablename__ = "standings"
    __table_args__ = (
        UniqueConstraint("season", "subject", "subject_id", name="unique_standing_subject"),
        Index("ix_standings_season_rank", "season", "subject", "rank"),
    )
    id = Column(Integer, primary_key=True, index=True)
    season = Column(Integer, nullable=False)
    subject = Column(Enum(StandingSubject, native_enum=False, length=10), nullable=False)
    subject_id = Column(Integer, nullable=False)
    points = Column(Integer, nullable=False, default=0)
    rank = Column(Integer, nullable=False)
    trend = Column(Enum(Trend, native_enum=False, length=10), nullable=False, default=Trend.same)
