"""Cash register schemas - daily report views"""

from datetime import date

from pydantic import BaseModel


class MethodTotal(BaseModel):
    employee_id: int
    employee_name: str
    method: str
    total_monto: float


class EmployeeSummary(BaseModel):
    """Gross takings of one employee and the 50/50 split between employee and business"""

    employee_id: int
    employee_name: str
    total_bruto: float
    para_empleada: float
    para_local: float


class DailyCashReport(BaseModel):
    fecha: date
    totales_por_metodo: list[MethodTotal]
    resumen_por_empleada: list[EmployeeSummary]
    agrupado_por_empleada: dict[str, dict[str, float]]
    total_general: float
