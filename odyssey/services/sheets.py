# odyssey/services/sheets.py

from __future__ import annotations
import io
import os
import re
import tempfile

import pandas as pd

from odyssey.core.models import Itinerary
from odyssey.services.budget import budget_usage, cost_by_category

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _itinerary_rows(itin: Itinerary) -> list[dict]:
    """One row per activity, with the day's logistics repeated on each row."""
    rows = []
    for day in itin.days:
        base = {
            "day": day.day_number,
            "date": day.date,
            "city": day.city,
            "lodging": day.lodging.name if day.lodging else "",
            "lodging_per_night": day.lodging.cost_per_night if day.lodging else None,
            "transport": day.transport.method if day.transport else "",
            "transport_cost": day.transport.cost if day.transport else None,
            "daily_total_cost": day.daily_total_cost,
            "daily_calories": day.daily_calories,
        }
        if not day.activities:
            rows.append(base)
        for act in day.activities:
            rows.append(
                {
                    **base,
                    "activity": act.name,
                    "category": act.category,
                    "location": act.location,
                    "cost": act.cost,
                    "duration_hours": act.duration_hours,
                    "calories": act.calories,
                    "notes": act.notes or "",
                }
            )
    return rows


def _write(itin: Itinerary, target) -> None:
    budget = pd.concat([cost_by_category(itin), budget_usage(itin.financials)])
    with pd.ExcelWriter(target, engine="openpyxl") as writer:
        pd.DataFrame(_itinerary_rows(itin)).to_excel(writer, sheet_name="Itinerary", index=False)
        budget.to_excel(writer, sheet_name="Budget")
        pd.DataFrame({"note": itin.audit_notes}).to_excel(writer, sheet_name="Audit", index=False)


def workbook_name(itin: Itinerary) -> str:
    first = itin.trip_dates.start_date or "trip"
    slug = re.sub(r"[^A-Za-z0-9_-]+", "-", "_".join([first] + itin.route[:1])).strip("-")
    return f"itinerary_{slug}.xlsx"


def workbook_bytes(itin: Itinerary) -> bytes:
    buf = io.BytesIO()
    _write(itin, buf)
    return buf.getvalue()


def generate_workbook(itin: Itinerary, directory: str | None = None) -> str:
    """
    Write the itinerary as an XLSX with three tabs (Itinerary, Budget, Audit).
    Returns the path of the file.
    """
    xlsx_path = os.path.join(directory or tempfile.gettempdir(), workbook_name(itin))
    _write(itin, xlsx_path)
    return xlsx_path
