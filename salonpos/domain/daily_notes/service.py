"""Daily notes service - one free-text note per business day"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import DailyNote
from ...shared.exceptions import InternalError, NotFound
from ...shared.validators import parse_iso_date
from .repository import DailyNoteRepository
from .schemas import DailyNoteUpsert

logger = logging.getLogger(__name__)


class DailyNoteService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = DailyNoteRepository()

    def list_notes(self, date_from: Optional[str] = None, date_to: Optional[str] = None) -> list[DailyNote]:
        """Notes within [date_from, date_to]; every note when either bound is missing"""
        if date_from and date_to:
            return self.repo.get_notes(
                self.db, parse_iso_date(date_from, "from date"), parse_iso_date(date_to, "to date")
            )
        return self.repo.get_notes(self.db)

    def get_note(self, date_str: str):
        """The note for a day, or an empty one when nothing was written"""
        day = parse_iso_date(date_str)
        note = self.repo.get_note(self.db, day)
        if note is None:
            return {"date": day, "content": ""}
        return note

    def save_note(self, data: DailyNoteUpsert) -> DailyNote:
        try:
            note = self.repo.get_note(self.db, data.date)
            if note is None:
                note = self.repo.create_note(self.db, data.date, data.content)
            else:
                note.content = data.content
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error saving daily note for {data.date}: {e}")
            raise InternalError("Error saving daily note") from e

        self.db.refresh(note)
        return note

    def delete_note(self, date_str: str) -> dict:
        day = parse_iso_date(date_str)
        note = self.repo.get_note(self.db, day)
        if note is None:
            raise NotFound(f"No note found for {day.isoformat()}")

        try:
            self.repo.delete_note(self.db, note)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error deleting daily note for {day}: {e}")
            raise InternalError("Error deleting daily note") from e

        return {"message": "Daily note deleted"}
