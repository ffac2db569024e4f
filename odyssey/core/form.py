# odyssey/core/form.py

"""
Turn raw form values into a TripRequest.

Numeric inputs arrive as text. Anything blank or not made of digits falls
back to a safe default; duration, budget and adults also reject zero so a
request never carries an empty party or a zero budget.
"""

import math
from typing import Optional, Union

from odyssey.core.models import TripRequest

DEFAULT_TRAVEL_DATES = "Next Year"
DEFAULT_DURATION = 1
DEFAULT_BUDGET = 1000
DEFAULT_ADULTS = 1
DEFAULT_CHILDREN = 0
DEFAULT_INFANTS = 0
CALORIE_TARGET = 2000

# Pre-filled values of the Streamlit form
FORM_PRESETS = {
    "destination": "Japan",
    "travel_dates": "",
    "duration_days": "10",
    "budget": "9000",
    "adults": "2",
    "children": "0",
    "infants": "1",
}

RawNumber = Optional[Union[str, int, float]]


def parse_number(
    raw: RawNumber,
    default: int,
    allow_zero: bool = True,
    integer: bool = True,
) -> Union[int, float]:
    if isinstance(raw, bool) or raw is None:
        return default
    if isinstance(raw, (int, float)):
        if not math.isfinite(raw) or raw < 0:
            return default
        value = int(raw) if integer else raw
    else:
        text = str(raw).strip()
        if not (text.isascii() and text.isdigit()):
            return default
        value = int(text)
    if value == 0 and not allow_zero:
        return default
    return value


def build_trip_request(
    destination: str,
    travel_dates: Optional[str] = "",
    duration_days: RawNumber = None,
    budget: RawNumber = None,
    adults: RawNumber = None,
    children: RawNumber = None,
    infants: RawNumber = None,
) -> TripRequest:
    return TripRequest(
        destination=(destination or "").strip(),
        travel_dates=(travel_dates or "").strip() or DEFAULT_TRAVEL_DATES,
        duration_days=parse_number(duration_days, DEFAULT_DURATION, allow_zero=False),
        budget=parse_number(budget, DEFAULT_BUDGET, allow_zero=False, integer=False),
        adults=parse_number(adults, DEFAULT_ADULTS, allow_zero=False),
        children=parse_number(children, DEFAULT_CHILDREN),
        infants=parse_number(infants, DEFAULT_INFANTS),
        calorie_target=CALORIE_TARGET,
    )
