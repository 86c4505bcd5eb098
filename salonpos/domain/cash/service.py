"""Cash register service - daily takings report"""

import logging
from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from sqlalchemy.orm import Session

from ...shared.timeutils import day_bounds
from ...shared.validators import parse_iso_date
from .repository import CashRepository

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
EMPLOYEE_SHARE = Decimal("0.5")


def to_money(value) -> Decimal:
    return Decimal(str(value or 0)).quantize(CENT)


def employee_share(total: Decimal) -> Decimal:
    """Employee half of ``total``, rounded half-up to the cent"""
    return (total * EMPLOYEE_SHARE).quantize(CENT, rounding=ROUND_HALF_UP)


def employee_labels(summaries) -> dict[int, str]:
    """
    Keys for the nested per-employee view: the display name, or
    ``"name (#id)"`` when two employees share it.
    """
    counts = Counter(s["employee_name"] for s in summaries)
    return {
        s["employee_id"]: s["employee_name"]
        if counts[s["employee_name"]] == 1
        else f"{s['employee_name']} (#{s['employee_id']})"
        for s in summaries
    }


class CashService:
    """Builds the daily cash report.

    Only payments of DONE appointments starting on the requested business day
    count. The per-employee summary and the nested mapping are both derived
    from the per-method rows, so the three views always add up to the same cent.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = CashRepository()

    def daily_cash_report(self, date_str: Optional[str]) -> dict:
        day = parse_iso_date(date_str)
        day_start, day_end = day_bounds(day)

        rows = self.repo.get_method_totals(self.db, day_start, day_end)

        method_totals = []
        summaries: dict[int, dict] = {}
        for employee_id, employee_name, method, total in rows:
            amount = to_money(total)
            method_totals.append(
                {
                    "employee_id": employee_id,
                    "employee_name": employee_name,
                    "method": method,
                    "total_monto": amount,
                }
            )

            summary = summaries.setdefault(
                employee_id,
                {"employee_id": employee_id, "employee_name": employee_name, "total_bruto": Decimal("0.00")},
            )
            summary["total_bruto"] += amount

        for summary in summaries.values():
            share = employee_share(summary["total_bruto"])
            summary["para_empleada"] = share
            # Business keeps the remainder so the split never gains or loses a cent
            summary["para_local"] = summary["total_bruto"] - share

        labels = employee_labels(summaries.values())
        grouped: dict[str, dict[str, float]] = {}
        for row in method_totals:
            grouped.setdefault(labels[row["employee_id"]], {})[row["method"]] = float(row["total_monto"])

        total_general = sum((row["total_monto"] for row in method_totals), Decimal("0.00"))
        logger.info(f"💵 Cash report for {day.isoformat()}: {len(summaries)} employee(s), total {total_general}")

        return {
            "fecha": day,
            "totales_por_metodo": method_totals,
            "resumen_por_empleada": list(summaries.values()),
            "agrupado_por_empleada": grouped,
            "total_general": total_general,
        }
