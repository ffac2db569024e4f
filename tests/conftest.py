# tests/conftest.py

import json

import pytest

from odyssey.core.config import Settings
from odyssey.core.form import build_trip_request


class FakeResponse:
    def __init__(self, text=None, error=None):
        self._text = text
        self._error = error

    @property
    def text(self):
        if self._error is not None:
            raise self._error
        return self._text


class FakeModel:
    """Stands in for genai.GenerativeModel; records what it was asked."""

    def __init__(self, response=None, raises=None):
        self.response = response
        self.raises = raises
        self.calls = []

    def generate_content(self, prompt, generation_config=None):
        self.calls.append({"prompt": prompt, "generation_config": generation_config})
        if self.raises is not None:
            raise self.raises
        return self.response


def make_factory(model):
    created = []

    def factory(settings, system_instruction):
        created.append({"settings": settings, "system_instruction": system_instruction})
        return model

    factory.created = created
    return factory


def japan_payload(total=9500, **overrides):
    payload = {
        "trip_dates": {"start_date": "2026-04-01", "end_date": "2026-04-10", "total_days": 10},
        "route": ["Tokyo", "Kyoto", "Osaka"],
        "days": [
            {
                "day_number": 1,
                "date": "2026-04-01",
                "location_city": "Tokyo",
                "lodging_details": {"name": "Hotel Gracery", "cost_per_night": 220, "type": "Hotel"},
                "transport_details": {"method": "Narita Express", "cost": 90, "notes": "Airport transfer"},
                "activities": [
                    {
                        "name": "Sushi breakfast",
                        "location": "Tsukiji",
                        "cost": 60,
                        "duration_hours": 1,
                        "type": "food",
                        "calories": 700,
                        "description": "Fresh fish at the outer market.",
                        "notes": "Stroller friendly",
                    },
                    {
                        "name": "Senso-ji",
                        "location": "Asakusa",
                        "cost": 0,
                        "duration_hours": 2,
                        "type": "sightseeing",
                        "calories": 0,
                        "description": "Tokyo's oldest temple.",
                    },
                ],
                "daily_total_cost": 400,
                "daily_calories": 2000,
            },
            {
                "day_number": 2,
                "date": "2026-04-02",
                "location_city": "Kyoto",
                "activities": [
                    {
                        "name": "Shinkansen",
                        "location": "Tokyo Station",
                        "cost": 300,
                        "duration_hours": 2.5,
                        "type": "transport",
                        "calories": 0,
                        "description": "Bullet train to Kyoto.",
                    }
                ],
                "daily_total_cost": 999,
                "daily_calories": 1800,
            },
        ],
        "total_estimated_cost": total,
        "audit_notes": ["Cherry blossom season raises hotel prices."],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def settings():
    return Settings(api_key="test-key", model="gemini-test")


@pytest.fixture
def japan_request():
    return build_trip_request("Japan", "", "10", "9000", "2", "0", "1")


@pytest.fixture
def japan_text():
    return json.dumps(japan_payload())
