"""
OpenSky Network API client.

Handles communication with the OpenSky REST API, including:
- Authentication (optional but recommended for higher rate limits)
- Response reuse within the freshness window
- Classification of upstream failures

OpenSky state vector format (array indices):
0: icao24          - ICAO24 hex address
1: callsign        - Callsign (8 chars max)
2: origin_country  - Country of registration
3: time_position   - Unix timestamp of last position update
4: last_contact    - Unix timestamp of last message
5: longitude       - WGS84 longitude
6: latitude        - WGS84 latitude
7: baro_altitude   - Barometric altitude (meters)
8: on_ground       - Boolean
9: velocity        - Ground speed (m/s)
10: true_track     - Track angle (degrees, 0=north)
11: vertical_rate  - Vertical rate (m/s)
12: sensors        - Sensor IDs (array)
13: geo_altitude   - Geometric altitude (meters)
14: squawk         - Transponder code
15: spi            - Special position indicator
16: position_source - 0=ADS-B, 1=ASTERIX, 2=MLAT, 3=FLARM
"""

import logging
from dataclasses import dataclass
from typing import Optional, List, Any

import requests
from requests.auth import HTTPBasicAuth

from flightmint.cache import ResponseCache
from flightmint.config import config
from flightmint.errors import UpstreamError

logger = logging.getLogger(__name__)


def _text(value: Any) -> Optional[str]:
    """Trimmed string, or None when absent, blank, or not a string."""
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _number(value: Any) -> Optional[float]:
    """Numeric value, or None when absent or not a number."""
    # bool is an int subclass but never a valid kinematic value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _flag(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


@dataclass
class StateVector:
    """
    Parsed state vector from OpenSky API.

    Names the raw array positions. Every field may be None if it was not
    reported by the aircraft, was null, or had the wrong type.
    """
    icao24: Optional[str]
    callsign: Optional[str]
    origin_country: Optional[str]
    time_position: Optional[int]
    last_contact: Optional[int]
    longitude: Optional[float]
    latitude: Optional[float]
    baro_altitude: Optional[float]
    on_ground: Optional[bool]
    velocity: Optional[float]
    true_track: Optional[float]
    vertical_rate: Optional[float]
    geo_altitude: Optional[float]
    squawk: Optional[str]
    spi: Optional[bool]
    position_source: Optional[int]

    @classmethod
    def from_array(cls, arr: Any) -> Optional['StateVector']:
        """
        Parse OpenSky state vector array into StateVector object.

        Returns None if the entry is not an array. Arrays shorter than the
        documented 17 positions are accepted; missing positions are None.
        """
        if not isinstance(arr, (list, tuple)):
            return None

        def at(index: int) -> Any:
            return arr[index] if index < len(arr) else None

        return cls(
            icao24=_text(at(0)),
            callsign=_text(at(1)),
            origin_country=_text(at(2)),
            time_position=_number(at(3)),
            last_contact=_number(at(4)),
            longitude=_number(at(5)),
            latitude=_number(at(6)),
            baro_altitude=_number(at(7)),
            on_ground=_flag(at(8)),
            velocity=_number(at(9)),
            true_track=_number(at(10)),
            vertical_rate=_number(at(11)),
            geo_altitude=_number(at(13)),
            squawk=_text(at(14)),
            spi=_flag(at(15)),
            position_source=_number(at(16)),
        )


def parse_states(states_raw: List[Any]) -> List[StateVector]:
    """Parse raw state arrays, skipping entries of unknown shape."""
    states = []
    for arr in states_raw:
        sv = StateVector.from_array(arr)
        if sv is None:
            logger.debug(f'Skipping malformed state vector: {arr!r}')
            continue
        states.append(sv)
    return states


class OpenSkyClient:
    """
    Client for OpenSky Network API.

    Handles:
    - GET requests to /states/all endpoint
    - Optional authentication for higher rate limits
    - Reuse of successful responses through a ResponseCache

    The HTTP session and cache are injectable so tests can substitute
    fake responses and a fake clock.
    """

    def __init__(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        base_url: str = 'https://opensky-network.org/api',
        timeout: float = 30,
        session: Optional[requests.Session] = None,
        cache: Optional[ResponseCache] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.auth = None
        if username and password:
            self.auth = HTTPBasicAuth(username, password)
            logger.info('OpenSky client initialized with authentication')
        else:
            logger.debug('OpenSky client running without authentication (lower rate limits)')

        self.session = session or requests.Session()
        self.cache = cache if cache is not None else ResponseCache()

    @classmethod
    def from_config(cls) -> 'OpenSkyClient':
        """Create client from application configuration."""
        return cls(
            username=config.opensky.username,
            password=config.opensky.password,
            base_url=config.opensky.base_url,
            timeout=config.opensky.timeout_seconds,
        )

    @property
    def states_url(self) -> str:
        return f'{self.base_url}/states/all'

    def get_states_payload(self) -> dict:
        """
        Fetch the current states snapshot as a decoded JSON object.

        Returns the cached body when one is still fresh.

        Raises:
            UpstreamError on non-success status, network error, a body
            that is not a JSON object, or ``states`` that is neither null
            nor an array.
        """
        url = self.states_url

        cached = self.cache.get(url)
        if cached is not None:
            return cached

        logger.debug(f'Fetching states: {url}')

        try:
            response = self.session.get(url, auth=self.auth, timeout=self.timeout)
            # Anything outside 2xx is a failure, including redirects that were not followed
            if not 200 <= response.status_code < 300:
                raise requests.exceptions.HTTPError(
                    f'{response.status_code} response from {url}', response=response
                )
            data = response.json()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status == 429:
                logger.warning('OpenSky rate limit exceeded')
            else:
                logger.error(f'OpenSky API error: {status}')
            raise UpstreamError(f'OpenSky API error! status: {status}', upstream_status=status) from e
        except requests.exceptions.Timeout as e:
            logger.error('OpenSky API timeout')
            raise UpstreamError(f'OpenSky API timeout: {e}') from e
        except ValueError as e:
            # requests' JSONDecodeError is both a ValueError and a RequestException
            logger.error(f'OpenSky returned a non-JSON body: {e}')
            raise UpstreamError(f'OpenSky returned a malformed body: {e}') from e
        except requests.exceptions.RequestException as e:
            logger.error(f'OpenSky request failed: {e}')
            raise UpstreamError(f'OpenSky request failed: {e}') from e

        if not isinstance(data, dict):
            logger.error(f'OpenSky returned unexpected body type {type(data).__name__}')
            raise UpstreamError('OpenSky returned a malformed body: expected a JSON object')

        states_raw = data.get('states')
        if states_raw is not None and not isinstance(states_raw, list):
            logger.error(f'OpenSky returned states of type {type(states_raw).__name__}')
            raise UpstreamError('OpenSky returned a malformed body: "states" is not an array')

        self.cache.set(url, data)
        return data

    def get_states(self) -> List[StateVector]:
        """
        Fetch and parse current state vectors.

        Returns an empty list when the snapshot has no states (OpenSky
        reports this as ``"states": null``).

        Raises:
            UpstreamError on any upstream failure.
        """
        data = self.get_states_payload()
        states_raw = data.get('states') or []

        logger.info(f'Received {len(states_raw)} state vectors from OpenSky')

        states = parse_states(states_raw)
        logger.debug(f'Parsed {len(states)} state vectors')

        return states
