# odyssey/core/models.py

import enum
from dataclasses import dataclass, field, asdict
from typing import List, Optional

ACTIVITY_CATEGORIES = ("food", "sightseeing", "transport", "rest")


@dataclass
class TripRequest:
    destination: str
    travel_dates: str
    duration_days: int
    budget: float
    adults: int
    children: int
    infants: int
    calorie_target: int = 2000


@dataclass(frozen=True)
class Travelers:
    adults: int
    children: int
    infants: int


@dataclass(frozen=True)
class Financials:
    total_budget: float
    amount_spent: float
    currency: str = "USD"

    @property
    def over_budget(self) -> bool:
        return round(self.amount_spent - self.total_budget, 2) > 0

    @property
    def remaining(self) -> float:
        return max(0, self.total_budget - self.amount_spent)


@dataclass(frozen=True)
class TripDates:
    start_date: str = ""
    end_date: str = ""
    total_days: int = 0


@dataclass(frozen=True)
class Lodging:
    name: str
    cost_per_night: float
    category: str


@dataclass(frozen=True)
class Transport:
    method: str
    cost: float
    notes: str


@dataclass(frozen=True)
class Activity:
    name: str
    location: str
    cost: float
    duration_hours: float
    category: str
    calories: float
    description: str
    notes: Optional[str] = None  # e.g. "Stroller friendly"


@dataclass(frozen=True)
class DayPlan:
    day_number: int
    date: str
    city: str
    lodging: Optional[Lodging] = None
    transport: Optional[Transport] = None
    activities: List[Activity] = field(default_factory=list)
    daily_total_cost: float = 0.0
    daily_calories: float = 0.0


@dataclass(frozen=True)
class Itinerary:
    travelers: Travelers
    financials: Financials
    trip_dates: TripDates
    route: List[str] = field(default_factory=list)
    days: List[DayPlan] = field(default_factory=list)
    audit_notes: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Plain JSON-friendly representation (nested dataclasses → dicts)."""
        return asdict(self)


# ──────────────────────────────────────────────────────────────────────────────
# Progress stages
# ──────────────────────────────────────────────────────────────────────────────
class AgentStatus(str, enum.Enum):
    IDLE = "IDLE"
    STRATEGIST_WORKING = "STRATEGIST_WORKING"
    LOGISTICS_WORKING = "LOGISTICS_WORKING"
    PLANNER_WORKING = "PLANNER_WORKING"
    AUDITOR_WORKING = "AUDITOR_WORKING"
    COMPLETE = "COMPLETE"
    ERROR = "ERROR"


@dataclass(frozen=True)
class Stage:
    status: AgentStatus
    label: str
    description: str


WORKING_STAGES = (
    Stage(AgentStatus.STRATEGIST_WORKING, "Strategist", "Route Planning"),
    Stage(AgentStatus.LOGISTICS_WORKING, "Logistics", "Booking & Transport"),
    Stage(AgentStatus.PLANNER_WORKING, "Daily Planner", "Activities & Meals"),
    Stage(AgentStatus.AUDITOR_WORKING, "Auditor", "Budget Validation"),
)
