# tests/test_app.py

from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from odyssey.core import session
from odyssey.core.models import AgentStatus

APP = str(Path(__file__).resolve().parent.parent / "app.py")


@pytest.fixture
def app(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    return AppTest.from_file(APP, default_timeout=30)


def test_idle_page_shows_the_form(app):
    app.run()
    assert not app.exception
    assert app.session_state["status"] == AgentStatus.IDLE
    labels = [w.label for w in app.text_input]
    assert "📍 Destination" in labels
    assert app.text_input[0].value == "Japan"


def test_stale_working_status_offers_a_way_out(app):
    app.session_state["status"] = AgentStatus.LOGISTICS_WORKING
    app.session_state["logs"] = "Logistics Agent: Booking transport..."
    app.run()

    assert not app.exception
    assert app.session_state["status"] == AgentStatus.ERROR
    assert session.INTERRUPTED_ERROR in app.error[0].value
    retry = [b for b in app.button if b.label == "Try Again"]
    assert len(retry) == 1

    retry[0].click().run()
    assert app.session_state["status"] == AgentStatus.IDLE
    assert app.session_state["error"] is None
    assert len(app.text_input) == 7
