# weather.py
# current campus weather from Open-Meteo, only for show on the page.
# The quote math never depends on this, so every failure ends in a fallback line.

import http.client
import json
import logging
import urllib.request

logger = logging.getLogger(__name__)

CITY = "Edmonton"
WEATHER_URL = (
    "https://api.open-meteo.com/v1/forecast"
    "?latitude=53.5461&longitude=-113.4938"
    "&current=temperature_2m,wind_speed_10m"
    "&timezone=America/Edmonton"
)
UNAVAILABLE = "Weather unavailable."


def fetch_weather(url: str = WEATHER_URL, timeout: float = 5.0):
    """Call Open-Meteo and return (temperature_c, wind_kmh). Raises on failure."""
    req = urllib.request.Request(url, headers={"Accept": "application/json"}, method="GET")
    with urllib.request.urlopen(req, timeout=timeout) as response:
        data = json.loads(response.read())
    current = data["current"]
    return current["temperature_2m"], current["wind_speed_10m"]


def weather_line(url: str = WEATHER_URL, timeout: float = 5.0) -> str:
    try:
        temp, wind = fetch_weather(url, timeout)
    except (OSError, http.client.HTTPException, ValueError, KeyError, TypeError) as e:
        logger.warning("Weather lookup failed: %s", e)
        return UNAVAILABLE
    return f"{CITY}: {temp}°C • Wind {wind} km/h"
