"""
Seed roster and calendar data for a season from FastF1.

Teams and drivers come from the classification of the first race of the
season, events and session start times from the event schedule. Existing
rows are updated in place, so the script can be re-run as the schedule moves.
"""
import os
import re
from typing import Optional

import fastf1
import pandas as pd
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

from pitwall.core.enums import RaceFormat, SessionKind
from pitwall.models.calendar import Event, EventSession
from pitwall.models.roster import Driver, Team

# -----------------------
# Strict env-based config
# -----------------------
DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL is not set.")

SEASON_STR = os.getenv("SEASON")
if not SEASON_STR:
    raise RuntimeError("SEASON is not set.")
try:
    SEASON = int(SEASON_STR)
except ValueError:
    raise RuntimeError(f"SEASON must be an integer, got: {SEASON_STR!r}")

FASTF1_CACHE_DIR = os.getenv("FASTF1_CACHE_DIR")
if FASTF1_CACHE_DIR:
    fastf1.Cache.enable_cache(FASTF1_CACHE_DIR)

engine = create_engine(DATABASE_URL, future=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
session = SessionLocal()

# FastF1 session names -> our session kinds
SESSION_NAMES = {
    "Practice 1": SessionKind.fp1,
    "Practice 2": SessionKind.fp2,
    "Practice 3": SessionKind.fp3,
    "Qualifying": SessionKind.qualifying,
    "Sprint Shootout": SessionKind.sprint_quali,
    "Sprint Qualifying": SessionKind.sprint_quali,
    "Sprint": SessionKind.sprint,
    "Race": SessionKind.race,
}

# -----------------------
# Helpers
# -----------------------
def getv(row, *candidates, default=None):
    """Return the first present & non-null value from candidate column names in a pandas Series."""
    for c in candidates:
        if c in row and not pd.isna(row[c]):
            return row[c]
    return default

def slugify(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")

def to_opt_int(val) -> Optional[int]:
    if val is None or pd.isna(val):
        return None
    try:
        return int(val)
    except (TypeError, ValueError):
        return None

def get_or_create_team(name: str, order: int) -> Team:
    team = session.scalars(select(Team).where(Team.name == name)).first()
    if team:
        return team
    team = Team(name=name, slug=slugify(name), order=order)
    session.add(team)
    session.flush()  # ensure team.id is available
    return team

def upsert_driver(row, team: Team, order: int) -> Driver:
    first = getv(row, "FirstName", default="")
    last = getv(row, "LastName", default="")
    slug = slugify(f"{first} {last}")
    drv = session.scalars(select(Driver).where(Driver.slug == slug)).first()
    if drv is None:
        drv = Driver(first_name=first, last_name=last, slug=slug, order=order)
        session.add(drv)
    drv.code = getv(row, "Abbreviation")
    drv.race_number = to_opt_int(getv(row, "DriverNumber"))
    drv.team_id = team.id
    session.flush()
    return drv

def upsert_event(row, season: int) -> Event:
    rnd = to_opt_int(getv(row, "RoundNumber"))
    if not rnd:
        raise ValueError("Schedule row is missing 'RoundNumber'; cannot create Event.")
    event = session.scalars(select(Event).where(Event.season == season, Event.round == rnd)).first()
    if event is None:
        event = Event(season=season, round=rnd)
        session.add(event)
    event.name = getv(row, "EventName", "OfficialEventName", default=f"Round {rnd}")
    event.country = getv(row, "Country")
    fmt = str(getv(row, "EventFormat", default="conventional"))
    event.format = RaceFormat.sprint if fmt.startswith("sprint") else RaceFormat.standard
    session.flush()
    return event

def upsert_sessions(row, event: Event) -> int:
    stored = 0
    for i in range(1, 6):
        kind = SESSION_NAMES.get(getv(row, f"Session{i}", default=""))
        starts_at = getv(row, f"Session{i}DateUtc")
        if kind is None or starts_at is None:
            continue
        starts_at = pd.Timestamp(starts_at).tz_localize("UTC").to_pydatetime()
        es = next((s for s in event.sessions if s.kind == kind), None)
        if es is None:
            es = EventSession(kind=kind, starts_at=starts_at)
            event.sessions.append(es)
        es.starts_at = starts_at
        stored += 1
    return stored

# -----------------------
# Main
# -----------------------
def seed_roster(season: int):
    opener = fastf1.get_session(season, 1, "R")
    opener.load(laps=False, telemetry=False, weather=False, messages=False)
    teams_seen = {}
    for order, (_, row) in enumerate(opener.results.iterrows(), start=1):
        team_name = getv(row, "TeamName")
        if not team_name:
            continue
        if team_name not in teams_seen:
            teams_seen[team_name] = get_or_create_team(team_name, len(teams_seen) + 1)
        upsert_driver(row, teams_seen[team_name], order)
    print(f"✅ Roster: {len(teams_seen)} teams, {len(opener.results)} drivers")

def seed_calendar(season: int):
    schedule = fastf1.get_event_schedule(season, include_testing=False)
    for _, row in schedule.iterrows():
        event = upsert_event(row, season)
        n = upsert_sessions(row, event)
        print(f"✅ Round {event.round:>2} {event.name}: {n} sessions ({event.format.value})")

if __name__ == "__main__":
    try:
        seed_calendar(SEASON)
        seed_roster(SEASON)
        session.commit()
    except Exception:
        session.rollback()
        raise
    print(f"\n✅ Seed complete for {SEASON}!")
