"""
Flight search service - finds live flights by callsign or ICAO24.

Pipeline for one search:
1. Validate the search term (no network call for an empty term)
2. Fetch the OpenSky states snapshot (reused within the freshness window)
3. Normalize each state vector into a FlightRecord
4. Filter by case-insensitive substring on callsign or ICAO24
5. Shape matches into FlightMatch presentation records

Each failure mode raises its own error kind so the API layer can map
it to a status code.
"""

import logging
from typing import Optional, List

from flightmint.errors import ValidationError, NotFoundError
from flightmint.ingestion.opensky_client import OpenSkyClient
from flightmint.models import FlightRecord, FlightMatch

logger = logging.getLogger(__name__)


class FlightSearchService:
    """
    Looks up flights in the current OpenSky snapshot.

    Holds no state of its own beyond the client's response cache, so
    concurrent searches are independent.
    """

    def __init__(self, client: Optional[OpenSkyClient] = None):
        self.client = client or OpenSkyClient.from_config()

    def search(self, term: Optional[str]) -> List[FlightMatch]:
        """
        Find all flights whose callsign or ICAO24 contains ``term``.

        Returns matches in upstream order; never empty.

        Raises:
            ValidationError: term missing or empty
            NotFoundError: empty feed, or no match
            UpstreamError: OpenSky request failed
        """
        if not term:
            raise ValidationError('Flight number is required')

        states = self.client.get_states()
        if not states:
            raise NotFoundError('No active flights found')

        records = [FlightRecord.from_state(sv) for sv in states]

        logger.debug(f'Total flights in snapshot: {len(records)}')
        logger.debug(f'All flight callsigns: {[r.callsign for r in records]}')

        matches = [r for r in records if r.matches(term)]

        logger.info(f'Search {term!r}: {len(matches)} of {len(records)} flights matched')

        if not matches:
            raise NotFoundError(
                'No flights found matching your search',
                'Try searching with a different flight number or ICAO24 code',
            )

        return [FlightMatch.from_record(r) for r in matches]
