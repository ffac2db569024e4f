# odyssey/ai/gemini.py
# ------------------------------------------------------------------------------
import json
import logging
import math
import textwrap
from typing import Any, Callable, Optional

import google.generativeai as genai

from odyssey.core.config import TEMPERATURE, Settings
from odyssey.core.errors import (
    EmptyResponseError,
    GenerationError,
    MalformedResponseError,
    MissingCredentialError,
)
from odyssey.core.models import (
    ACTIVITY_CATEGORIES,
    Activity,
    AgentStatus,
    DayPlan,
    Financials,
    Itinerary,
    Lodging,
    Transport,
    Travelers,
    TripDates,
    TripRequest,
)
from odyssey.services.budget import audit_budget

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[AgentStatus, str], None]

# ──────────────────────────────────────────────────────────────────────────────
# Response schema (Gemini structured output)
# ──────────────────────────────────────────────────────────────────────────────
_ACTIVITY_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "name": {"type": "STRING"},
        "location": {"type": "STRING"},
        "cost": {"type": "NUMBER", "description": "Cost in USD"},
        "duration_hours": {"type": "NUMBER"},
        "type": {"type": "STRING", "enum": list(ACTIVITY_CATEGORIES)},
        "calories": {"type": "NUMBER"},
        "description": {"type": "STRING"},
        "notes": {"type": "STRING", "description": "Special notes like 'stroller friendly'"},
    },
    "required": ["name", "cost", "type", "calories", "description"],
}

_DAY_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "day_number": {"type": "NUMBER"},
        "date": {"type": "STRING"},
        "location_city": {"type": "STRING"},
        "lodging_details": {
            "type": "OBJECT",
            "properties": {
                "name": {"type": "STRING"},
                "cost_per_night": {"type": "NUMBER"},
                "type": {"type": "STRING"},
            },
        },
        "transport_details": {
            "type": "OBJECT",
            "properties": {
                "method": {"type": "STRING"},
                "cost": {"type": "NUMBER"},
                "notes": {"type": "STRING"},
            },
        },
        "activities": {"type": "ARRAY", "items": _ACTIVITY_SCHEMA},
        "daily_total_cost": {"type": "NUMBER"},
        "daily_calories": {"type": "NUMBER"},
    },
    # transport_details is required even on zero-cost days
    "required": [
        "day_number",
        "location_city",
        "lodging_details",
        "transport_details",
        "activities",
        "daily_total_cost",
    ],
}

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "trip_dates": {
            "type": "OBJECT",
            "properties": {
                "start_date": {"type": "STRING"},
                "end_date": {"type": "STRING"},
                "total_days": {"type": "NUMBER"},
            },
        },
        "route": {"type": "ARRAY", "items": {"type": "STRING"}},
        "days": {"type": "ARRAY", "items": _DAY_SCHEMA},
        "total_estimated_cost": {"type": "NUMBER"},
        "audit_notes": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Notes from the Auditor agent regarding budget or constraints",
        },
    },
}

# ──────────────────────────────────────────────────────────────────────────────
# Prompt templates
# ──────────────────────────────────────────────────────────────────────────────
_SYSTEM_TEMPLATE = textwrap.dedent(
    """\
    You are the 'Strategist' and 'Logistics' agents of Project Odyssey.

    Constraint Checklist & Confidence Score:
    1. Calorie Target: ~{calories} per adult/day? Yes.
    2. Infants: {infants} (Requires stroller friendly activities, rest stops).
    3. Budget: ${budget} (Strict limit).
    4. Duration: {days} days.
    5. Season/Dates: "{dates}".

    Goal: Create a detailed itinerary.

    Tasks:
    - Determine exact start/end dates based on preference: "{dates}". If only a year or 'next summer' is given, choose specific dates in that window.
    - Route: Choose cities logically to minimize travel time.
    - Accommodations: Pick specific hotels suitable for {adults} adults, {children} kids, {infants} infants.
    - Transport: Estimate inter-city travel costs.
    - Daily Planner: Plan meals (summing to calorie target) and activities.
    - Auditor: Ensure total cost < ${budget}.
    """
)

_PROMPT_TEMPLATE = textwrap.dedent(
    """\
    Generate a travel itinerary for:
    Destination: {destination}
    Duration: {days} days
    Travelers: {adults} Adults, {children} Children, {infants} Infants.
    Budget: ${budget} USD.
    Calorie Target: {calories} kcal/adult/day.
    Travel Dates/Season: {dates}.

    IMPORTANT:
    - Ensure daily calorie counts for food activities sum up to roughly {calories}.
    - Mark activities as 'Stroller friendly' in notes if infants > 0.
    - If the budget is tight, choose cheaper hotels.
    - Always include transport_details for every day, even if cost is 0.
    """
)


def _template_fields(req: TripRequest) -> dict:
    return dict(
        destination=req.destination,
        dates=req.travel_dates,
        days=req.duration_days,
        budget=req.budget,
        adults=req.adults,
        children=req.children,
        infants=req.infants,
        calories=req.calorie_target,
    )


def build_system_instruction(req: TripRequest) -> str:
    return _SYSTEM_TEMPLATE.format(**_template_fields(req))


def build_prompt(req: TripRequest) -> str:
    """Return the user prompt string for Gemini."""
    return _PROMPT_TEMPLATE.format(**_template_fields(req))


# ──────────────────────────────────────────────────────────────────────────────
# Helper: get a configured Gemini model
# ──────────────────────────────────────────────────────────────────────────────
def _get_model(settings: Settings, system_instruction: str):
    genai.configure(api_key=settings.api_key)
    return genai.GenerativeModel(settings.model, system_instruction=system_instruction)


def _generation_config() -> "genai.GenerationConfig":
    return genai.GenerationConfig(
        response_mime_type="application/json",
        response_schema=RESPONSE_SCHEMA,
        temperature=TEMPERATURE,
    )


def _response_text(resp: Any) -> str:
    # resp.text raises ValueError when the candidate carries no parts
    try:
        text = resp.text
    except ValueError as e:
        raise EmptyResponseError("No response from Gemini.") from e
    if not text or not text.strip():
        raise EmptyResponseError("No response from Gemini.")
    return text


# ──────────────────────────────────────────────────────────────────────────────
# Reshape the raw JSON into an Itinerary
# ──────────────────────────────────────────────────────────────────────────────
def _num(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    try:
        number = value if isinstance(value, float) else float(value)
    except (TypeError, ValueError):
        return 0
    # json.loads accepts Infinity and NaN
    return number if math.isfinite(number) else 0


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _lodging(raw: Any) -> Optional[Lodging]:
    if not isinstance(raw, dict) or not raw:
        return None
    return Lodging(
        name=_text(raw.get("name")),
        cost_per_night=_num(raw.get("cost_per_night")),
        category=_text(raw.get("type")),
    )


def _transport(raw: Any) -> Optional[Transport]:
    if not isinstance(raw, dict) or not raw:
        return None
    return Transport(
        method=_text(raw.get("method")),
        cost=_num(raw.get("cost")),
        notes=_text(raw.get("notes")),
    )


def _activity(raw: dict) -> Activity:
    return Activity(
        name=_text(raw.get("name")),
        location=_text(raw.get("location")),
        cost=_num(raw.get("cost")),
        duration_hours=_num(raw.get("duration_hours")),
        category=_text(raw.get("type")),
        calories=_num(raw.get("calories")),
        description=_text(raw.get("description")),
        notes=_text(raw.get("notes")) or None,
    )


def _day(raw: dict) -> DayPlan:
    return DayPlan(
        day_number=int(_num(raw.get("day_number"))),
        date=_text(raw.get("date")),
        city=_text(raw.get("location_city")),
        lodging=_lodging(raw.get("lodging_details")),
        transport=_transport(raw.get("transport_details")),
        activities=[_activity(a) for a in _list(raw.get("activities")) if isinstance(a, dict)],
        daily_total_cost=_num(raw.get("daily_total_cost")),
        daily_calories=_num(raw.get("daily_calories")),
    )


def parse_itinerary(raw_text: str, req: TripRequest) -> Itinerary:
    """
    Parse Gemini's JSON answer and map it onto an Itinerary.
    Reported totals are kept as-is; the only local addition is the budget
    note appended to the audit notes.
    """
    raw_json = raw_text.strip("`json \n")
    try:
        data = json.loads(raw_json)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Gemini returned invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedResponseError("Gemini returned JSON that is not an object.")

    total_spent = _num(data.get("total_estimated_cost"))
    audit_notes = [_text(n) for n in _list(data.get("audit_notes"))]
    audit_notes.append(audit_budget(total_spent, req.budget))

    dates = data.get("trip_dates")
    if not isinstance(dates, dict):
        dates = {}
    return Itinerary(
        travelers=Travelers(adults=req.adults, children=req.children, infants=req.infants),
        financials=Financials(total_budget=req.budget, amount_spent=total_spent),
        trip_dates=TripDates(
            start_date=_text(dates.get("start_date")),
            end_date=_text(dates.get("end_date")),
            total_days=int(_num(dates.get("total_days"))),
        ),
        route=[_text(r) for r in _list(data.get("route"))],
        days=[_day(d) for d in _list(data.get("days")) if isinstance(d, dict)],
        audit_notes=audit_notes,
    )


# ──────────────────────────────────────────────────────────────────────────────
# Generate itinerary (one request, four progress labels)
# ──────────────────────────────────────────────────────────────────────────────
def _noop(status: AgentStatus, message: str) -> None:
    pass


def generate_itinerary(
    req: TripRequest,
    settings: Settings,
    on_progress: Optional[ProgressCallback] = None,
    model_factory: Optional[Callable[[Settings, str], Any]] = None,
) -> Itinerary:
    progress = on_progress or _noop
    model_factory = model_factory or _get_model

    if not settings.api_key:
        raise MissingCredentialError(
            "Missing GEMINI_API_KEY. Please set GEMINI_API_KEY in your environment."
        )

    progress(AgentStatus.STRATEGIST_WORKING, "Strategist is analyzing seasonality and defining the route...")
    model = model_factory(settings, build_system_instruction(req))

    progress(AgentStatus.LOGISTICS_WORKING, "Logistics is booking accommodations and transport...")
    logger.info(
        "Requesting %s-day itinerary for %s from %s", req.duration_days, req.destination, settings.model
    )
    try:
        resp = model.generate_content(build_prompt(req), generation_config=_generation_config())
    except Exception as e:
        logger.exception("Gemini request failed")
        raise GenerationError(f"Gemini request failed: {e}") from e

    progress(AgentStatus.PLANNER_WORKING, "Daily Planner is organizing meals and activities...")
    text = _response_text(resp)

    progress(AgentStatus.AUDITOR_WORKING, "Auditor is validating budget and constraints...")
    itinerary = parse_itinerary(text, req)
    logger.info(
        "Itinerary ready: %d days, $%s of $%s",
        len(itinerary.days),
        itinerary.financials.amount_spent,
        itinerary.financials.total_budget,
    )
    return itinerary
