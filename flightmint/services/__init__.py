"""
Flight lookup services.

Combines the OpenSky client with normalization and filtering to answer
flight searches.
"""

from flightmint.services.flight_search import FlightSearchService

__all__ = ['FlightSearchService']
