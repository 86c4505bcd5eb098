"""Employee router"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .repository import EmployeeRepository
from .schemas import EmployeeResponse

router = APIRouter(prefix="/api/employees", tags=["Employees"])


@router.get("", response_model=list[EmployeeResponse])
def get_employees(db: Session = Depends(get_db)):
    """Active employees ordered by name"""
    return EmployeeRepository.get_active_employees(db)
