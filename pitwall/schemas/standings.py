from typing import List
from pydantic import BaseModel
from pitwall.core.enums import Trend

class StandingRow(BaseModel):
    id: int
    name: str
    points: int
    rank: int
    trend: Trend

class StandingsResponse(BaseModel):
    season: int
    drivers: List[StandingRow]
    teams: List[StandingRow]
