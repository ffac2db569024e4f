# odyssey/services/budget.py

"""
Budget check ("Auditor") and the figures behind the financial charts.

Totals reported by Gemini are taken at face value: nothing here re-adds
activity costs to verify a daily or grand total.
"""

from typing import Union

import pandas as pd

from odyssey.core.models import Financials, Itinerary

Number = Union[int, float]

PASS_NOTE = "Budget validation passed."
WARNING_PREFIX = "WARNING"


def plain_amount(value: Number) -> str:
    """500 → '500', 500.5 → '500.5' (no thousands separator, at most 2 decimals)."""
    text = f"{round(float(value), 2):.2f}"
    return text.rstrip("0").rstrip(".")


def format_money(value: Number) -> str:
    """9500 → '$9,500', 12.5 → '$12.50'."""
    value = float(value)
    if value.is_integer():
        return f"${value:,.0f}"
    return f"${value:,.2f}"


def audit_budget(total_spent: Number, budget: Number) -> str:
    # compared in whole cents, the same rounding the note uses
    overage = round(float(total_spent) - float(budget), 2)
    if overage > 0:
        return f"{WARNING_PREFIX}: Itinerary exceeds budget by ${plain_amount(overage)}"
    return PASS_NOTE


def budget_usage(financials: Financials) -> pd.DataFrame:
    """Spent vs. remaining, indexed by label (ready for st.bar_chart)."""
    return pd.DataFrame(
        {"USD": [financials.amount_spent, financials.remaining]},
        index=pd.Index(["Spent", "Remaining"], name="Budget"),
    )


def cost_by_category(itinerary: Itinerary) -> pd.DataFrame:
    totals = {"Lodging": 0.0, "Transport": 0.0, "Food": 0.0, "Activities": 0.0}
    for day in itinerary.days:
        if day.lodging is not None:
            totals["Lodging"] += day.lodging.cost_per_night
        if day.transport is not None:
            totals["Transport"] += day.transport.cost
        for act in day.activities:
            if act.category == "food":
                totals["Food"] += act.cost
            else:
                totals["Activities"] += act.cost

    return pd.DataFrame(
        {"USD": list(totals.values())},
        index=pd.Index(list(totals.keys()), name="Category"),
    )
