# odyssey/services/render.py

"""Text/markdown building blocks for the dashboard and the CLI."""

from typing import List, Tuple

from odyssey.core.models import WORKING_STAGES, Activity, AgentStatus, DayPlan
from odyssey.core.session import stage_index
from odyssey.services.budget import WARNING_PREFIX, format_money

ACTIVITY_ICONS = {
    "food": "🍽️",
    "sightseeing": "📸",
    "transport": "🚆",
    "rest": "🛏️",
}


def route_summary(route: List[str]) -> str:
    if len(route) > 2:
        return f"{route[0]} + {len(route) - 1} more"
    return " & ".join(route)


def is_warning(note: str) -> bool:
    return WARNING_PREFIX in note


def day_header(day: DayPlan) -> str:
    return (
        f"Day {day.day_number} — {day.city} ({day.date})"
        f"  ·  {format_money(day.daily_total_cost)}  ·  {day.daily_calories:g} kcal"
    )


def activity_markdown(act: Activity) -> str:
    icon = ACTIVITY_ICONS.get(act.category, "•")
    meta = [f"⏱ {act.duration_hours:g}h", f"📍 {act.location}"]
    if act.category == "food":
        meta.append(f"🔥 {act.calories:g} kcal")

    lines = [
        f"{icon} **{act.name}** — {format_money(act.cost)}",
        " · ".join(meta),
        "",
        act.description,
    ]
    if act.notes is not None:
        lines += ["", f"_{act.notes}_"]
    return "\n".join(lines)


def day_sections(day: DayPlan) -> List[Tuple[str, str]]:
    """
    Ordered (title, markdown) blocks for one expanded day.
    Lodging and transport blocks appear only when the day has them.
    """
    sections: List[Tuple[str, str]] = []
    if day.lodging is not None:
        sections.append(
            (
                "Accommodation",
                f"**{day.lodging.name}**  \n"
                f"{day.lodging.category} · {format_money(day.lodging.cost_per_night)}/night",
            )
        )
    if day.transport is not None:
        sections.append(("Transport", f"**{day.transport.method}**  \n{day.transport.notes}"))
    for act in day.activities:
        sections.append((act.name, activity_markdown(act)))
    return sections


def progress_steps(status: AgentStatus) -> List[Tuple[str, str, str]]:
    """(label, description, state) per stage; state is done / current / pending."""
    current = stage_index(status)
    steps = []
    for i, stage in enumerate(WORKING_STAGES):
        if i < current:
            state = "done"
        elif i == current:
            state = "current"
        else:
            state = "pending"
        steps.append((stage.label, stage.description, state))
    return steps
