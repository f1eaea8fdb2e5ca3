from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from pitwall.db.base import Base


class Team(Base):
    __tablename__ = "teams"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    slug = Column(String, nullable=False, unique=True)
    order = Column("display_order", Integer, nullable=False, default=0)
    drivers = relationship("Driver", back_populates="team")

class Driver(Base):
    __tablename__ = "drivers"
    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True)
    code = Column(String, nullable=True)
    race_number = Column(Integer, nullable=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True)  # None = free agent
    order = Column("display_order", Integer, nullable=False, default=0)
    team = relationship("Team", back_populates="drivers")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
