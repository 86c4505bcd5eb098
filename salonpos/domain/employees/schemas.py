"""Employee schemas"""

from typing import Optional

from pydantic import BaseModel


class EmployeeResponse(BaseModel):
    id: int
    name: str
    color: Optional[str]
    active: bool

    class Config:
        from_attributes = True
