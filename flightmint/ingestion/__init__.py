"""
Data ingestion module for FlightMint.

Handles fetching the OpenSky states snapshot and parsing state vectors
into typed records.
"""

from flightmint.ingestion.opensky_client import OpenSkyClient, StateVector, parse_states

__all__ = ['OpenSkyClient', 'StateVector', 'parse_states']
