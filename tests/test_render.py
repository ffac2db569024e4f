# tests/test_render.py

from odyssey.ai import gemini
from odyssey.core.models import AgentStatus, DayPlan
from odyssey.services import render
from odyssey.services.budget import format_money


def test_route_summary():
    assert render.route_summary(["Tokyo", "Kyoto", "Osaka"]) == "Tokyo + 2 more"
    assert render.route_summary(["Rome", "Florence"]) == "Rome & Florence"
    assert render.route_summary(["Lisbon"]) == "Lisbon"
    assert render.route_summary([]) == ""


def test_day_without_lodging_or_transport_omits_sections(japan_request, japan_text):
    day2 = gemini.parse_itinerary(japan_text, japan_request).days[1]
    titles = [title for title, _ in render.day_sections(day2)]
    assert titles == ["Shinkansen"]


def test_empty_day_renders_nothing():
    assert render.day_sections(DayPlan(day_number=3, date="", city="Nara")) == []
    assert render.day_header(DayPlan(day_number=3, date="", city="Nara")).startswith("Day 3 — Nara")


def test_full_day_sections(japan_request, japan_text):
    day1 = gemini.parse_itinerary(japan_text, japan_request).days[0]
    sections = render.day_sections(day1)
    assert [t for t, _ in sections] == ["Accommodation", "Transport", "Sushi breakfast", "Senso-ji"]

    lodging = dict(sections)["Accommodation"]
    assert "Hotel Gracery" in lodging and "$220/night" in lodging

    sushi = dict(sections)["Sushi breakfast"]
    assert "700 kcal" in sushi
    assert "Stroller friendly" in sushi

    temple = dict(sections)["Senso-ji"]
    assert "kcal" not in temple   # calories only shown for food


def test_day_header(japan_request, japan_text):
    day1 = gemini.parse_itinerary(japan_text, japan_request).days[0]
    assert render.day_header(day1) == "Day 1 — Tokyo (2026-04-01)  ·  $400  ·  2000 kcal"


def test_warning_detection():
    assert render.is_warning("WARNING: Itinerary exceeds budget by $500")
    assert not render.is_warning("Budget validation passed.")


def test_progress_steps():
    steps = render.progress_steps(AgentStatus.PLANNER_WORKING)
    assert [s[0] for s in steps] == ["Strategist", "Logistics", "Daily Planner", "Auditor"]
    assert [s[2] for s in steps] == ["done", "done", "current", "pending"]
    assert all(s[2] == "done" for s in render.progress_steps(AgentStatus.COMPLETE))


def test_japan_dashboard_scenario(japan_request, japan_text):
    """Japan, 10 days, $9000, 2 adults + 1 infant, Gemini reports $9500."""
    itin = gemini.parse_itinerary(japan_text, japan_request)
    fin = itin.financials
    assert format_money(fin.amount_spent) == "$9,500"
    assert format_money(fin.total_budget) == "$9,000"
    assert fin.over_budget

    warning = next(n for n in itin.audit_notes if render.is_warning(n))
    assert "exceeds budget by $500" in warning
