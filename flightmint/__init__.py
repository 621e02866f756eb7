"""
FlightMint Package.

Live flight lookup service built with Flask and Requests, plus a client
that mints a token encoding a tracked flight's altitude.

Modules:
    api/         REST endpoints for flight search and cache metrics
    models/      Flight records and presentation shapes
    ingestion/   OpenSky Network client and state vector parsing
    services/    Flight search (validate, fetch, normalize, filter)
    client/      Search/selection state machine and mint action
    cache.py     Thread-safe TTL cache for upstream responses
    config.py    Centralized configuration from environment variables
    errors.py    Error kinds surfaced to API callers and the client
"""

__version__ = '1.0.0'
