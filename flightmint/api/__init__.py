"""
API module for FlightMint.

Provides REST endpoints for:
- Flight search by callsign or ICAO24
- Cache metrics
"""

from flightmint.api.flight import flight_bp
from flightmint.api.metrics import metrics_bp

__all__ = ['flight_bp', 'metrics_bp']
