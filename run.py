# run.py

import argparse
import sys

from dotenv import load_dotenv

load_dotenv()   # Charge GEMINI_API_KEY depuis .env

from rich import print

from odyssey.core.config import configure_logging, load_settings
from odyssey.core.form import FORM_PRESETS, build_trip_request
from odyssey.core.models import AgentStatus
from odyssey.core import session
from odyssey.services import render, sheets as ss
from odyssey.services.budget import format_money


def _print_stage(state) -> None:
    status = state["status"]
    if status in (AgentStatus.COMPLETE, AgentStatus.ERROR):
        return
    print(f"[bold cyan]→ {state['logs']}[/]")


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Plan a trip with Project Odyssey.")
    p.add_argument("--destination", "--dest", default=FORM_PRESETS["destination"])
    p.add_argument("--when", dest="travel_dates", default="", help='e.g. "Next Summer", "Oct 2025"')
    p.add_argument("--days", default=FORM_PRESETS["duration_days"])
    p.add_argument("--budget", default=FORM_PRESETS["budget"], help="USD")
    p.add_argument("--adults", default=FORM_PRESETS["adults"])
    p.add_argument("--children", default=FORM_PRESETS["children"])
    p.add_argument("--infants", default=FORM_PRESETS["infants"])
    p.add_argument("--xlsx", metavar="DIR", help="also write the itinerary as a spreadsheet in DIR")
    args = p.parse_args(argv)

    settings = load_settings()
    configure_logging(settings.log_level)

    req = build_trip_request(
        args.destination, args.travel_dates, args.days, args.budget,
        args.adults, args.children, args.infants,
    )

    state: dict = {}
    session.init_state(state)
    if session.submit(state, req, settings, on_change=_print_stage) == AgentStatus.ERROR:
        print(f"[bold red]Generation Failed:[/] {state['error']}")
        return 1

    itin = state["itinerary"]
    print(f"\n[bold green]{' → '.join(itin.route)}[/]  "
          f"({itin.trip_dates.start_date} – {itin.trip_dates.end_date})\n")
    for day in itin.days:
        print(f"[yellow]{render.day_header(day)}[/]")
        for title, body in render.day_sections(day):
            first_line = body.splitlines()[0]
            print(f"  {title}: {first_line}" if title in ("Accommodation", "Transport") else f"  {first_line}")
        print()

    fin = itin.financials
    colour = "red" if fin.over_budget else "green"
    print(f"Total: [{colour}]{format_money(fin.amount_spent)}[/] (budget {format_money(fin.total_budget)})")
    for note in itin.audit_notes:
        print(f"[red]⚠ {note}[/]" if render.is_warning(note) else f"[dim]ℹ {note}[/]")

    if args.xlsx:
        print(f"\nSpreadsheet: {ss.generate_workbook(itin, args.xlsx)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
