from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pitwall.core.config import settings
from pitwall.core.enums import RaceFormat, SessionKind, UserRole
from pitwall.db.base import Base
from pitwall.db.session import get_db
from pitwall.main import app
from pitwall.models.calendar import Event, EventSession
from pitwall.models.roster import Driver, Team
from pitwall.models.users import User
import pitwall.models.results  # noqa: F401
import pitwall.models.game  # noqa: F401

SEASON = settings.season
FUTURE = datetime(2099, 1, 1, tzinfo=timezone.utc)
PAST = datetime(2000, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def drivers(db):
    """Five drivers over three teams, keyed by timing code."""
    mclaren = Team(name="McLaren", slug="mclaren", order=1)
    ferrari = Team(name="Ferrari", slug="ferrari", order=2)
    redbull = Team(name="Red Bull Racing", slug="red-bull-racing", order=3)
    db.add_all([mclaren, ferrari, redbull])
    db.flush()
    rows = [
        ("NOR", "Lando", "Norris", mclaren, 4),
        ("PIA", "Oscar", "Piastri", mclaren, 81),
        ("LEC", "Charles", "Leclerc", ferrari, 16),
        ("HAM", "Lewis", "Hamilton", ferrari, 44),
        ("VER", "Max", "Verstappen", redbull, 1),
    ]
    out = {}
    for order, (code, first, last, team, number) in enumerate(rows, start=1):
        d = Driver(
            first_name=first, last_name=last, slug=f"{first}-{last}".lower(),
            code=code, race_number=number, team_id=team.id, order=order,
        )
        db.add(d)
        out[code] = d
    db.commit()
    return out


@pytest.fixture
def teams(db, drivers):
    return {t.slug: t for t in db.query(Team).all()}


def make_event(db, round_no, fmt=RaceFormat.standard, starts_at=FUTURE, season=SEASON):
    kinds = [SessionKind.fp1, SessionKind.qualifying, SessionKind.race]
    if fmt == RaceFormat.sprint:
        kinds += [SessionKind.sprint_quali, SessionKind.sprint]
    event = Event(season=season, round=round_no, name=f"Round {round_no} GP", format=fmt)
    event.sessions = [EventSession(kind=k, starts_at=starts_at) for k in kinds]
    db.add(event)
    db.commit()
    return event


@pytest.fixture
def event(db):
    return make_event(db, 1)


@pytest.fixture
def sprint_event(db):
    return make_event(db, 2, fmt=RaceFormat.sprint)


@pytest.fixture
def past_event(db):
    return make_event(db, 3, starts_at=PAST)


@pytest.fixture
def users(db):
    admin = User(username="admin", avatar="", role=UserRole.admin)
    alice = User(username="alice", avatar="a.png", role=UserRole.user)
    bob = User(username="bob", avatar="b.png", role=UserRole.user)
    db.add_all([admin, alice, bob])
    db.commit()
    return {"admin": admin, "alice": alice, "bob": bob}


@pytest.fixture
def client(db):
    def override_get_db():
        yield db
    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
