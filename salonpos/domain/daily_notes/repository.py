"""Daily notes repository"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...models import DailyNote


class DailyNoteRepository:
    @staticmethod
    def get_notes(db: Session, date_from: Optional[date] = None, date_to: Optional[date] = None) -> list[DailyNote]:
        query = db.query(DailyNote)
        if date_from and date_to:
            query = query.filter(DailyNote.date.between(date_from, date_to))
        return query.order_by(DailyNote.date.asc()).all()

    @staticmethod
    def get_note(db: Session, day: date) -> Optional[DailyNote]:
        return db.query(DailyNote).filter(DailyNote.date == day).first()

    @staticmethod
    def create_note(db: Session, day: date, content: str) -> DailyNote:
        note = DailyNote(date=day, content=content)
        db.add(note)
        db.flush()
        return note

    @staticmethod
    def delete_note(db: Session, note: DailyNote) -> None:
        db.delete(note)
        db.flush()
