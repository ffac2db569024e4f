# app.py

from dotenv import load_dotenv

load_dotenv()  # ← Must precede any import depending on .env

import streamlit as st

from odyssey.core.config import configure_logging, load_settings
from odyssey.core.form import FORM_PRESETS, build_trip_request
from odyssey.core.models import AgentStatus, Itinerary
from odyssey.core import session
from odyssey.services import budget as bsvc, render, sheets as ss

settings = load_settings()
configure_logging(settings.log_level)

# ──────────────────────────────────────────────────────────────────────────────
# 0. Streamlit configuration
# ──────────────────────────────────────────────────────────────────────────────
st.set_page_config(page_title="Project Odyssey", page_icon="🧭", layout="wide")

# ──────────────────────────────────────────────────────────────────────────────
# 1. session_state initialisation (status, logs, itinerary, error)
# ──────────────────────────────────────────────────────────────────────────────
session.init_state(st.session_state)


def _reset():
    session.reset_state(st.session_state)


# ──────────────────────────────────────────────────────────────────────────────
# 2. Progress view (redrawn on every stage change)
# ──────────────────────────────────────────────────────────────────────────────
_STEP_ICONS = {"done": "✅", "current": "⏳", "pending": "▫️"}


def draw_progress(container, state) -> None:
    status = state["status"]
    steps = render.progress_steps(status)
    with container.container():
        st.markdown("### Blackboard Architecture Status")
        done = max(session.stage_index(status), 0)
        st.progress(min(done / (len(steps) - 1), 1.0))
        cols = st.columns(len(steps))
        for col, (label, desc, state_) in zip(cols, steps):
            col.markdown(f"{_STEP_ICONS[state_]} **{label}**  \n{desc}")
        st.code(f"> {state['logs']}", language=None)


# ──────────────────────────────────────────────────────────────────────────────
# 3. Dashboard
# ──────────────────────────────────────────────────────────────────────────────
def draw_dashboard(itin: Itinerary) -> None:
    fin = itin.financials

    c1, c2, c3 = st.columns([1, 1, 2])
    if fin.over_budget:
        delta = f"{bsvc.format_money(fin.amount_spent - fin.total_budget)} over budget"
    else:
        delta = f"-{bsvc.format_money(fin.remaining)} under budget"
    c1.metric("Total Estimated Cost", bsvc.format_money(fin.amount_spent), delta, delta_color="inverse")
    c1.caption(f"Budget: {bsvc.format_money(fin.total_budget)}")

    c2.metric("Route", render.route_summary(itin.route) or "—", help=" → ".join(itin.route))
    c2.caption(f"{itin.trip_dates.total_days} Days • {itin.trip_dates.start_date}")

    with c3:
        st.markdown("**Auditor Report**")
        for note in itin.audit_notes:
            if render.is_warning(note):
                st.markdown(f":red[⚠️ {note}]")
            else:
                st.markdown(f"ℹ️ {note}")

    tab_timeline, tab_money = st.tabs(["Detailed Itinerary", "Financial Analysis"])

    with tab_timeline:
        for i, day in enumerate(itin.days):
            with st.expander(render.day_header(day), expanded=(i == 0)):
                for title, body in render.day_sections(day):
                    if title in ("Accommodation", "Transport"):
                        st.caption(title.upper())
                    st.markdown(body)

    with tab_money:
        col_a, col_b = st.columns(2)
        with col_a:
            st.markdown("#### Budget Usage")
            st.bar_chart(bsvc.budget_usage(fin))
        with col_b:
            st.markdown("#### Category Breakdown")
            st.bar_chart(bsvc.cost_by_category(itin), horizontal=True)

    st.markdown("---")
    left, right = st.columns(2)
    left.download_button(
        "📥 Download itinerary (XLSX)",
        ss.workbook_bytes(itin),
        file_name=ss.workbook_name(itin),
        mime=ss.XLSX_MIME,
    )
    right.button("Plan Another Trip", on_click=_reset)


# ──────────────────────────────────────────────────────────────────────────────
# 4. Page
# ──────────────────────────────────────────────────────────────────────────────
# A working status at the top of a run means the previous run died mid-request
session.recover_interrupted(st.session_state)
status = st.session_state["status"]

if status == AgentStatus.IDLE:
    # The whole idle view sits in one placeholder so it can be cleared on submit
    idle_area = st.empty()
    with idle_area.container():
        st.markdown("## 🧭 Your Multi-Agent Travel Team")
        st.write(
            "Project Odyssey uses a Blackboard Architecture to coordinate specialized AI agents. "
            "Watch the Strategist, Logistics, and Planner agents work together to build your perfect trip."
        )
        with st.form("odyssey_form"):
            st.markdown("### Plan Your Odyssey")
            col1, col2 = st.columns(2)
            destination = col1.text_input(
                "📍 Destination", FORM_PRESETS["destination"], placeholder="e.g. Japan, Italy"
            )
            travel_dates = col2.text_input(
                "📅 When?",
                FORM_PRESETS["travel_dates"],
                placeholder="e.g. Next Summer, 2 years from now, Oct 2025",
                help="Be specific (Month Year) or general (Next Year).",
            )
            duration = col1.text_input("📅 Duration (Days)", FORM_PRESETS["duration_days"])
            budget = col2.text_input("💲 Budget (USD)", FORM_PRESETS["budget"])

            st.markdown("**👥 Travelers**")
            a, k, i = st.columns(3)
            adults = a.text_input("Adults", FORM_PRESETS["adults"])
            children = k.text_input("Kids", FORM_PRESETS["children"])
            infants = i.text_input("Infants", FORM_PRESETS["infants"])

            submitted = st.form_submit_button("Launch Project Odyssey", use_container_width=True)

    if submitted:
        req = build_trip_request(destination, travel_dates, duration, budget, adults, children, infants)
        idle_area.empty()
        placeholder = st.empty()
        session.submit(
            st.session_state,
            req,
            settings,
            on_change=lambda state: draw_progress(placeholder, state),
        )
        st.rerun()

elif status == AgentStatus.ERROR:
    with st.container(border=True):
        st.error(f"**Generation Failed**\n\n{st.session_state['error']}")
        st.button("Try Again", on_click=_reset)

elif status == AgentStatus.COMPLETE and st.session_state["itinerary"] is not None:
    draw_dashboard(st.session_state["itinerary"])
