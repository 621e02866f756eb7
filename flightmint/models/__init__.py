"""
Flight data models for FlightMint.

Exports:
    FlightRecord  Normalized projection of an OpenSky state vector
    FlightMatch   Display-ready search result entry
"""

from flightmint.models.flight import FlightRecord, FlightMatch, STATUS_IN_AIR, STATUS_ON_GROUND, UNKNOWN

__all__ = ['FlightRecord', 'FlightMatch', 'STATUS_IN_AIR', 'STATUS_ON_GROUND', 'UNKNOWN']
