"""
Weather box tests — urlopen is patched, nothing goes over the network.
"""

import http.client
import io
import json
import urllib.error
from unittest.mock import patch

import pytest

import weather


def _response(payload):
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
    return io.BytesIO(body)


def test_fetch_weather_reads_current_block():
    payload = {"current": {"temperature_2m": -4.2, "wind_speed_10m": 13.7}}
    with patch("urllib.request.urlopen", return_value=_response(payload)) as urlopen:
        assert weather.fetch_weather() == (-4.2, 13.7)
    req = urlopen.call_args[0][0]
    assert req.full_url == weather.WEATHER_URL
    assert req.get_method() == "GET"


def test_weather_line_format():
    payload = {"current": {"temperature_2m": 21.5, "wind_speed_10m": 8}}
    with patch("urllib.request.urlopen", return_value=_response(payload)):
        assert weather.weather_line() == "Edmonton: 21.5°C • Wind 8 km/h"


@pytest.mark.parametrize("side_effect", [
    urllib.error.URLError("no route to host"),
    TimeoutError("timed out"),
    http.client.IncompleteRead(b"{"),
    http.client.BadStatusLine("garbage"),
    http.client.RemoteDisconnected("closed"),
])
def test_network_failure_falls_back(side_effect, caplog):
    with patch("urllib.request.urlopen", side_effect=side_effect):
        assert weather.weather_line() == weather.UNAVAILABLE
    assert "Weather lookup failed" in caplog.text


@pytest.mark.parametrize("payload", [
    b"<html>not json</html>",
    {"hourly": {}},
    {"current": {"temperature_2m": 3}},
    ["current"],
])
def test_bad_body_falls_back(payload):
    with patch("urllib.request.urlopen", return_value=_response(payload)):
        assert weather.weather_line() == "Weather unavailable."


def test_fetch_weather_raises_on_bad_body():
    with patch("urllib.request.urlopen", return_value=_response({"current": {}})):
        with pytest.raises(KeyError):
            weather.fetch_weather()
