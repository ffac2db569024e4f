# main.py

from typing import Optional, Union

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel

from odyssey.ai import gemini
from odyssey.core.config import Settings, configure_logging, load_settings
from odyssey.core.errors import MissingCredentialError, OdysseyError
from odyssey.core.form import build_trip_request

# Charge les variables d'environnement (.env)
load_dotenv()
configure_logging(load_settings().log_level)

app = FastAPI(title="Project Odyssey", version="1.0.0")

Raw = Optional[Union[int, float, str]]


# Same fields as the Streamlit form; anything blank or invalid gets the form default
class ItineraryRequest(BaseModel):
    destination: str
    travel_dates: Optional[str] = ""
    duration_days: Raw = None
    budget: Raw = None
    adults: Raw = None
    children: Raw = None
    infants: Raw = None


def get_settings() -> Settings:
    return load_settings()


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/api/itinerary", response_model=dict)
def generate_itinerary_endpoint(req: ItineraryRequest, settings: Settings = Depends(get_settings)):
    trip_req = build_trip_request(
        req.destination,
        req.travel_dates,
        req.duration_days,
        req.budget,
        req.adults,
        req.children,
        req.infants,
    )
    try:
        itin = gemini.generate_itinerary(trip_req, settings)
    except MissingCredentialError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except OdysseyError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return itin.to_dict()
