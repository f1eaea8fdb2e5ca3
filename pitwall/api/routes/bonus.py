from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pitwall.api.deps import current_user, game_manager, http_error
from pitwall.core.errors import PitwallError
from pitwall.db.session import get_db
from pitwall.models.users import User
from pitwall.schemas.game import BonusAnswerIn, BonusAnswerOut, BonusQuestionIn, BonusQuestionOut, GradeIn
from pitwall.services import bonus as bonus_service
from pitwall.services.settings import current_season, ensure_standard_bonus_questions

router = APIRouter()

@router.get("/questions", response_model=List[BonusQuestionOut])
def list_questions(season: Optional[int] = Query(None, ge=1950), db: Session = Depends(get_db)):
    season = season or current_season()
    # champion questions always exist for the running season
    if season == current_season():
        ensure_standard_bonus_questions(db, season)
    return bonus_service.list_bonus_questions(db, season)

@router.post("/questions", response_model=BonusQuestionOut, status_code=201,
             dependencies=[Depends(game_manager)])
def create_question(body: BonusQuestionIn, db: Session = Depends(get_db)):
    return bonus_service.create_bonus_question(db, body)

@router.put("/questions/{question_id}", response_model=BonusQuestionOut,
            dependencies=[Depends(game_manager)])
def update_question(question_id: str, body: BonusQuestionIn, db: Session = Depends(get_db)):
    try:
        return bonus_service.update_bonus_question(db, question_id, body)
    except PitwallError as e:
        raise http_error(e)

@router.delete("/questions/{question_id}", status_code=204,
               dependencies=[Depends(game_manager)])
def delete_question(question_id: str, db: Session = Depends(get_db)):
    try:
        bonus_service.delete_bonus_question(db, question_id)
    except PitwallError as e:
        raise http_error(e)

@router.put("/questions/{question_id}/answer", response_model=BonusAnswerOut)
def answer_question(question_id: str, body: BonusAnswerIn,
                    user: User = Depends(current_user), db: Session = Depends(get_db)):
    try:
        return bonus_service.submit_bonus_answer(db, user.id, question_id, body.answer)
    except PitwallError as e:
        raise http_error(e)

@router.put("/questions/{question_id}/grade", response_model=BonusQuestionOut,
            dependencies=[Depends(game_manager)])
def grade_question(question_id: str, body: GradeIn, db: Session = Depends(get_db)):
    try:
        return bonus_service.grade_bonus_question(db, question_id, body.correct_answer)
    except PitwallError as e:
        raise http_error(e)
