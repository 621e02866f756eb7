import json
from urllib.parse import urlsplit

import pytest
import requests

from flightmint.app import create_app
from flightmint.cache import ResponseCache
from flightmint.ingestion import OpenSkyClient
from flightmint.services import FlightSearchService

OPENSKY_URL = "https://opensky.test/api"


def make_response(status_code=200, payload=None, text=None, url=f"{OPENSKY_URL}/states/all"):
    """Build a real requests.Response carrying a JSON (or raw text) body."""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.reason = "OK" if status_code < 400 else "Error"
    response.encoding = "utf-8"
    if text is None:
        text = json.dumps(payload)
        response.headers["Content-Type"] = "application/json"
    response._content = text.encode("utf-8")
    return response


def state_vector(
    icao24="abc123",
    callsign="TEST123 ",
    origin_country="United States",
    longitude=-157.9,
    latitude=21.3,
    altitude=3657.6,
    on_ground=False,
    velocity=164.6,
    true_track=90.0,
    vertical_rate=2.0,
):
    """One raw OpenSky state array with all 17 positions."""
    return [
        icao24,
        callsign,
        origin_country,
        1714765198,  # time_position
        1714765200,  # last_contact
        longitude,
        latitude,
        altitude,
        on_ground,
        velocity,
        true_track,
        vertical_rate,
        None,  # sensors
        3700.0,  # geo_altitude
        "7000",  # squawk
        False,  # spi
        0,  # position_source
    ]


def feed(*states):
    return {"time": 1714765200, "states": list(states)}


class FakeSession:
    """
    Stand-in for requests.Session.

    Returns (or raises) the queued items in order; the last one repeats.
    """

    def __init__(self, *items):
        self.items = list(items)
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        item = self.items.pop(0) if len(self.items) > 1 else self.items[0]
        if isinstance(item, Exception):
            raise item
        return item


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FlaskSession:
    """Routes requests.Session.get calls into a Flask test client."""

    def __init__(self, test_client):
        self.test_client = test_client
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params))
        parts = urlsplit(url)
        result = self.test_client.get(parts.path, query_string=params)
        return make_response(result.status_code, text=result.get_data(as_text=True), url=url)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_opensky(clock):
    def factory(*items, ttl_seconds=60):
        session = FakeSession(*items)
        cache = ResponseCache(ttl_seconds=ttl_seconds, max_entries=8, clock=clock)
        return OpenSkyClient(base_url=OPENSKY_URL, session=session, cache=cache), session

    return factory


@pytest.fixture
def make_app(make_opensky):
    def factory(*items, ttl_seconds=60):
        client, session = make_opensky(*items, ttl_seconds=ttl_seconds)
        app = create_app(search_service=FlightSearchService(client=client))
        app.config["TESTING"] = True
        return app, session

    return factory
