# odyssey/core/session.py

"""
Progress state for one planning session.

The state is any mutable mapping: ``st.session_state`` in the Streamlit app,
a plain dict in tests. The flow is linear:

    IDLE → STRATEGIST → LOGISTICS → PLANNER → AUDITOR → COMPLETE
                          (any failure) ──────────────→ ERROR

and the only way out of COMPLETE or ERROR is ``reset_state``. A working status
that outlives its script run (the run was stopped or rerun mid-request) is
turned into ERROR by ``recover_interrupted``.
"""

import logging
from typing import Callable, MutableMapping, Optional

from odyssey.ai.gemini import generate_itinerary
from odyssey.core.config import Settings
from odyssey.core.models import WORKING_STAGES, AgentStatus, TripRequest

logger = logging.getLogger(__name__)

State = MutableMapping[str, object]

DEFAULTS = {
    "status": AgentStatus.IDLE,
    "logs": "",
    "itinerary": None,
    "error": None,
}

INITIAL_LOG = "Initializing Project Odyssey Agents..."
FALLBACK_ERROR = "An unexpected error occurred while generating the itinerary."
INTERRUPTED_ERROR = "The previous request was interrupted before it finished. Please try again."

_ORDER = [stage.status for stage in WORKING_STAGES] + [AgentStatus.COMPLETE]


def init_state(state: State) -> None:
    for k, v in DEFAULTS.items():
        state.setdefault(k, v)


def reset_state(state: State) -> None:
    for k, v in DEFAULTS.items():
        state[k] = v


def is_busy(state: State) -> bool:
    return state.get("status") in {stage.status for stage in WORKING_STAGES}


def recover_interrupted(state: State) -> bool:
    """Move a working status left behind by an aborted run to ERROR."""
    if not is_busy(state):
        return False
    logger.warning("Discarding interrupted request at %s", state.get("status"))
    state["status"] = AgentStatus.ERROR
    state["itinerary"] = None
    state["error"] = INTERRUPTED_ERROR
    return True


def stage_index(status: AgentStatus) -> int:
    """Position of ``status`` in the progress bar (-1 for IDLE / ERROR)."""
    return _ORDER.index(status) if status in _ORDER else -1


def submit(
    state: State,
    req: TripRequest,
    settings: Settings,
    generate: Optional[Callable] = None,
    on_change: Optional[Callable[[State], None]] = None,
) -> AgentStatus:
    """
    Run one request through ``generate`` and leave ``state`` in COMPLETE or
    ERROR. ``on_change`` is called after every status update so a UI can
    redraw the progress view while the call is in flight.
    """
    generate = generate or generate_itinerary
    notify = on_change or (lambda _state: None)

    state["status"] = AgentStatus.STRATEGIST_WORKING
    state["logs"] = INITIAL_LOG
    state["itinerary"] = None
    state["error"] = None
    notify(state)

    def on_progress(status: AgentStatus, message: str) -> None:
        state["status"] = status
        state["logs"] = message
        notify(state)

    try:
        itinerary = generate(req, settings, on_progress)
    except Exception as e:
        logger.error("Agent workflow failed: %s", e)
        state["status"] = AgentStatus.ERROR
        state["error"] = str(e) or FALLBACK_ERROR
        notify(state)
        return AgentStatus.ERROR

    state["itinerary"] = itinerary
    state["status"] = AgentStatus.COMPLETE
    notify(state)
    return AgentStatus.COMPLETE
