"""
Flight search API endpoint.

Provides:
- GET /api/flight?flightNumber=<term> - Find live flights by callsign or ICAO24

Errors are raised as FlightMintError subclasses and rendered by the
application's error handler as ``{error, details}`` JSON.
"""

import logging
import time

from flask import Blueprint, jsonify, request, current_app

logger = logging.getLogger(__name__)

flight_bp = Blueprint('flight', __name__, url_prefix='/api/flight')


@flight_bp.route('', methods=['GET'])
def search_flights():
    """
    Search current flights.

    Query parameters:
    - flightNumber: required, matched case-insensitively as a substring of
      the callsign or ICAO24 address

    Responses:
    - 200 {flights: [{flight: {...}}]}
    - 400 missing search term
    - 404 no active flights, or no match
    - 500 OpenSky request failed
    """
    start_time = time.perf_counter()

    term = request.args.get('flightNumber')
    service = current_app.config['FLIGHT_SEARCH_SERVICE']

    matches = service.search(term)

    query_time_ms = (time.perf_counter() - start_time) * 1000
    logger.debug(f'Flight search {term!r} answered in {query_time_ms:.2f}ms')

    return jsonify({'flights': [m.to_dict() for m in matches]})
