from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pitwall.core.enums import RoundStatus, SessionKind

class RoundStatusIn(BaseModel):
    status: RoundStatus

class RoundStatusOut(BaseModel):
    event_id: int
    kind: SessionKind
    status: Optional[RoundStatus] = None  # None = follow the session start time
    deadline: datetime
    closed: bool

class BetIn(BaseModel):
    drivers: List[int]

class BetOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    event_id: int
    kind: SessionKind
    season: int
    drivers: List[int]
    submitted_at: datetime

class PredictionSettingsIn(BaseModel):
    season: int
    race_points: List[int]
    quali_points: List[int]
    participation_point: int = 1

class PredictionSettingsOut(PredictionSettingsIn):
    model_config = ConfigDict(from_attributes=True)

class BonusQuestionIn(BaseModel):
    id: Optional[str] = None
    season: Optional[int] = None
    question: str
    points: int = Field(ge=0)
    deadline: datetime

class BonusQuestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    season: int
    question: str
    points: int
    deadline: datetime
    correct_answer: Optional[str] = None
    is_graded: bool = False

class BonusAnswerIn(BaseModel):
    answer: str

class BonusAnswerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    question_id: str
    answer: str

class GradeIn(BaseModel):
    correct_answer: Optional[str] = None

class LeaderboardEntry(BaseModel):
    user_id: int
    username: str
    avatar: str
    points: int
    wins: int
    rank: int

class LeaderboardResponse(BaseModel):
    season: int
    count: int
    entries: List[LeaderboardEntry]
