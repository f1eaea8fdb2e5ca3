from pydantic import BaseModel, ConfigDict
from typing import Optional, List
from pitwall.core.enums import SessionKind

class ParsedRow(BaseModel):
    pos: str = ""
    car_number: str = ""
    driver_name_raw: str = ""
    team_name_raw: str = ""
    laps: str = ""
    time: str = ""
    points_raw: str = ""
    q1: str = ""
    q2: str = ""
    q3: str = ""

class ParsedTable(BaseModel):
    table_kind: str  # qualifying | race | practice | grid | unknown
    rows: List[ParsedRow]

class ResultEntryIn(BaseModel):
    driver_id: Optional[int] = None
    driver_name_raw: str = ""
    team_id: Optional[int] = None
    position: str = ""
    laps: int = 0
    time: str = ""
    points: Optional[int] = None
    # points are re-derived on save unless this is set
    points_override: bool = False
    q1: Optional[str] = None
    q2: Optional[str] = None
    q3: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self.driver_id is not None

class ResultEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    driver_id: Optional[int] = None
    driver_name_raw: str
    team_id: Optional[int] = None
    position: str
    laps: int
    time: str
    points: int
    points_override: bool
    resolved: bool
    q1: Optional[str] = None
    q2: Optional[str] = None
    q3: Optional[str] = None

class SessionResultIn(BaseModel):
    entries: List[ResultEntryIn]
    distance_pct: Optional[int] = None

class SessionResultOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    event_id: int
    kind: SessionKind
    distance_pct: Optional[int] = None
    entries: List[ResultEntryOut]

class ResultImportRequest(BaseModel):
    html: str
    distance_pct: int = 100

class ResultImport(BaseModel):
    table_kind: str
    entries: List[ResultEntryIn]
    unresolved: List[str]
