"""
Park configuration records
==========================
One record per Parques Reunidos park. These are pure data: every park is served
by the same ParquesReunidosConnector, only the values below differ.

Credentials are shared by all Parques Reunidos parks and come from the
environment:

  PARQUESREUNIDOS_API_KEY   — bearer token for the Stay API (required)
  PARQUESREUNIDOS_BASE_URL  — Stay API base URL
"""

import os
from typing import Optional

from pydantic import BaseModel

API_KEY  = os.getenv("PARQUESREUNIDOS_API_KEY", "")
BASE_URL = os.getenv("PARQUESREUNIDOS_BASE_URL", "https://api-manager.stay-app.com")


class ParkConfig(BaseModel):
    name: str
    timezone: str
    culture: str
    destination_slug: str
    park_slug: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    calendar_url: str
    stay_establishment: str
    api_key: str = ""
    base_url: str = ""

    def with_credentials(self) -> "ParkConfig":
        """Fill api_key / base_url from the environment where not set explicitly."""
        return self.model_copy(update={
            "api_key":  self.api_key or API_KEY,
            "base_url": self.base_url or BASE_URL,
        })


MOVIE_PARK_GERMANY = ParkConfig(
    name="Movie Park Germany",
    timezone="Europe/Berlin",
    culture="de",
    destination_slug="movieparkgermany",
    park_slug="movieparkgermanypark",
    latitude=51.5973,
    longitude=6.8647,
    calendar_url="https://www.movieparkgermany.de/en/oeffnungszeiten-und-preise/oeffnungszeiten",
    stay_establishment="mBv6",
)

BOBBEJAANLAND = ParkConfig(
    name="Bobbejaanland",
    timezone="Europe/Brussels",
    culture="nl",
    destination_slug="bobbejaanland",
    park_slug="bobbejaanlandspark",
    latitude=51.2021,
    longitude=4.8828,
    calendar_url="https://www.bobbejaanland.be/openingsuren-en-prijzen/openingsuren",
    stay_establishment="mGvE",
)
