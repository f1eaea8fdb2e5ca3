from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from pitwall.api.deps import game_manager, http_error
from pitwall.core.enums import SessionKind
from pitwall.core.errors import ParseFailure, PitwallError
from pitwall.db.session import get_db
from pitwall.schemas.results import ResultImport, ResultImportRequest, SessionResultIn, SessionResultOut
from pitwall.schemas.standings import StandingsResponse
from pitwall.services import results as result_service
from pitwall.services.points import compute_points

router = APIRouter()

@router.get("/points")
def points(position: str = Query(..., description='Finishing position, e.g. "3" or "DNF"'),
           kind: SessionKind = Query(SessionKind.race),
           distance_pct: int = Query(100, ge=0, le=100)):
    return {"position": position, "kind": kind, "distance_pct": distance_pct,
            "points": compute_points(position, kind, distance_pct)}

@router.post("/results/{event_id}/{kind}/import", response_model=ResultImport,
             dependencies=[Depends(game_manager)])
def import_result(event_id: int, kind: SessionKind, body: ResultImportRequest,
                  db: Session = Depends(get_db)):
    try:
        out = result_service.import_result_table(db, event_id, kind, body.html, body.distance_pct)
    except PitwallError as e:
        raise http_error(e)
    if isinstance(out, ParseFailure):
        raise HTTPException(422, detail=out.reason)
    return out

@router.get("/results/{event_id}/{kind}", response_model=SessionResultOut)
def get_result(event_id: int, kind: SessionKind, db: Session = Depends(get_db)):
    result = result_service.get_session_result(db, event_id, kind)
    if result is None:
        raise HTTPException(404, "No result stored for this session")
    return result

@router.put("/results/{event_id}/{kind}", response_model=StandingsResponse,
            dependencies=[Depends(game_manager)])
def save_result(event_id: int, kind: SessionKind, body: SessionResultIn,
                db: Session = Depends(get_db)):
    try:
        return result_service.save_session_result(db, event_id, kind, body.entries, body.distance_pct)
    except PitwallError as e:
        raise http_error(e)

@router.delete("/results/{event_id}/{kind}", response_model=StandingsResponse,
               dependencies=[Depends(game_manager)])
def delete_result(event_id: int, kind: SessionKind, db: Session = Depends(get_db)):
    try:
        return result_service.delete_session_result(db, event_id, kind)
    except PitwallError as e:
        raise http_error(e)
