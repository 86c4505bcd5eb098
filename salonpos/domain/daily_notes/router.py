"""Daily notes router"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ..appointments.schemas import MessageResponse
from .schemas import DailyNoteResponse, DailyNoteUpsert
from .service import DailyNoteService

router = APIRouter(prefix="/api/daily-notes", tags=["Daily notes"])


def get_daily_note_service(db: Session = Depends(get_db)) -> DailyNoteService:
    return DailyNoteService(db)


@router.get("", response_model=list[DailyNoteResponse])
def get_notes(
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    service: DailyNoteService = Depends(get_daily_note_service),
):
    return service.list_notes(date_from, date_to)


@router.get("/{note_date}", response_model=DailyNoteResponse)
def get_note(note_date: str, service: DailyNoteService = Depends(get_daily_note_service)):
    return service.get_note(note_date)


@router.post("", response_model=DailyNoteResponse)
def save_note(data: DailyNoteUpsert, service: DailyNoteService = Depends(get_daily_note_service)):
    """Create the note for a day or replace its content"""
    return service.save_note(data)


@router.delete("/{note_date}", response_model=MessageResponse)
def delete_note(note_date: str, service: DailyNoteService = Depends(get_daily_note_service)):
    return service.delete_note(note_date)
