"""Cash register router"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import DailyCashReport
from .service import CashService

router = APIRouter(prefix="/api/cash", tags=["Cash"])


def get_cash_service(db: Session = Depends(get_db)) -> CashService:
    return CashService(db)


@router.get("/daily", response_model=DailyCashReport)
def get_daily_cash(
    date: Optional[str] = Query(None, description="Business day, YYYY-MM-DD"),
    service: CashService = Depends(get_cash_service),
):
    """Takings of one day by employee and payment method, with the 50/50 split"""
    return service.daily_cash_report(date)
