"""
Flight records.

FlightRecord is the normalized projection of an OpenSky state vector with
defaults substituted for anything the aircraft did not report. FlightMatch
is the display-ready shape returned by the search endpoint and consumed by
the tracker client.
"""

import math
from dataclasses import dataclass, asdict

from flightmint.ingestion.opensky_client import StateVector

UNKNOWN = 'Unknown'

STATUS_ON_GROUND = 'On Ground'
STATUS_IN_AIR = 'In Air'


def _finite(flight: dict, key: str) -> float:
    """Numeric field of an API entry; missing or null means 0."""
    value = flight.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise TypeError(f'{key} is not a finite number: {value!r}')
    return value


@dataclass(frozen=True)
class FlightRecord:
    """
    Normalized flight telemetry.

    Every field is always present: text defaults to '', numbers to 0 and
    the ground flag to False. Numeric values are OpenSky's own units
    (meters, m/s, degrees) and are never converted.
    """
    icao24: str = ''
    callsign: str = ''
    origin_country: str = ''
    longitude: float = 0
    latitude: float = 0
    altitude: float = 0
    on_ground: bool = False
    velocity: float = 0
    true_track: float = 0
    vertical_rate: float = 0

    @classmethod
    def from_state(cls, sv: StateVector) -> 'FlightRecord':
        return cls(
            icao24=sv.icao24 or '',
            callsign=sv.callsign or '',
            origin_country=sv.origin_country or '',
            longitude=sv.longitude or 0,
            latitude=sv.latitude or 0,
            altitude=sv.baro_altitude or 0,
            on_ground=sv.on_ground or False,
            velocity=sv.velocity or 0,
            true_track=sv.true_track or 0,
            vertical_rate=sv.vertical_rate or 0,
        )

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match against callsign or ICAO24."""
        needle = term.upper()
        return needle in self.callsign.upper() or needle in self.icao24.upper()


@dataclass(frozen=True)
class FlightMatch:
    """Presentation record for one matching flight."""
    number: str
    iata: str
    status: str
    altitude: float
    latitude: float
    longitude: float
    velocity: float
    true_track: float
    vertical_rate: float
    origin_country: str
    icao24: str

    @classmethod
    def from_record(cls, record: FlightRecord) -> 'FlightMatch':
        number = record.callsign or UNKNOWN
        return cls(
            number=number,
            iata=number,
            status=STATUS_ON_GROUND if record.on_ground else STATUS_IN_AIR,
            altitude=record.altitude,
            latitude=record.latitude,
            longitude=record.longitude,
            velocity=record.velocity,
            true_track=record.true_track,
            vertical_rate=record.vertical_rate,
            origin_country=record.origin_country or UNKNOWN,
            icao24=record.icao24 or UNKNOWN,
        )

    @classmethod
    def from_dict(cls, data: dict) -> 'FlightMatch':
        """
        Build from an API response entry (``{"flight": {...}}``).

        Raises KeyError/TypeError when the entry does not have that shape,
        including numeric fields that are not finite numbers.
        """
        flight = data['flight']
        return cls(
            number=flight['number'],
            iata=flight.get('iata', flight['number']),
            status=flight['status'],
            altitude=_finite(flight, 'altitude'),
            latitude=_finite(flight, 'latitude'),
            longitude=_finite(flight, 'longitude'),
            velocity=_finite(flight, 'velocity'),
            true_track=_finite(flight, 'true_track'),
            vertical_rate=_finite(flight, 'vertical_rate'),
            origin_country=flight.get('origin_country') or UNKNOWN,
            icao24=flight.get('icao24') or UNKNOWN,
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return {'flight': asdict(self)}

    @property
    def rounded_altitude(self) -> int:
        """Altitude rounded half up to whole meters, as displayed."""
        return int(math.floor(self.altitude + 0.5))

