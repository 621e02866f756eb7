"""
Flight tracker client.

Drives the FlightMint search endpoint and mints flight tokens:
- search(term): GET /api/flight and resolve the state to success or error
- select(index): pick one flight of the current result
- mint(): submit the selected flight's altitude for the bound wallet

State changes go through TrackerState transitions under a lock. Network
and contract calls run outside the lock, so a mint may proceed while a
search is still loading on another thread.
"""

import logging
import threading
from typing import Any, Callable, Optional

import requests

from flightmint.client.contract import MintContract, MintRequest
from flightmint.client.state import ErrorMessage, TrackerState
from flightmint.config import config
from flightmint.errors import ContractError, StateTransitionError
from flightmint.models import FlightMatch

logger = logging.getLogger(__name__)

FETCH_FAILED = 'Failed to fetch flight data'
MINT_FAILED = 'Failed to mint NFT'
UNKNOWN_ERROR = 'An unknown error occurred'


class FlightTracker:
    """
    Client-side flight search and mint workflow.

    Args:
        api_url: Base URL of the FlightMint server
        session: requests.Session-compatible object used for searches
        contract: Object exposing mint(address, altitude)
        wallet_address: Connected wallet, if any
        timeout: Seconds to wait for the search endpoint
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        contract: Optional[MintContract] = None,
        wallet_address: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_url = (api_url or config.client.api_url).rstrip('/')
        self.session = session or requests.Session()
        self.contract = contract
        self.wallet_address = wallet_address
        self.timeout = timeout or config.client.timeout_seconds

        self._state = TrackerState()
        self._lock = threading.RLock()

    @property
    def state(self) -> TrackerState:
        with self._lock:
            return self._state

    def _update(self, transition: Callable[[TrackerState], TrackerState]) -> TrackerState:
        with self._lock:
            self._state = transition(self._state)
            return self._state

    def connect_wallet(self, address: str) -> None:
        self.wallet_address = address

    def disconnect_wallet(self) -> None:
        self.wallet_address = None

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def search(self, term: str) -> TrackerState:
        """
        Search for flights and resolve the tracker state.

        Returns the state after this search resolved. If a newer search
        started meanwhile, this response is discarded and the newer
        search's state is returned.

        Raises:
            StateTransitionError: term is empty
        """
        started = self._update(lambda s: s.begin_search(term))
        sequence = started.sequence

        logger.debug(f'Search #{sequence} for {term!r}')

        try:
            flights = self._fetch(term)
        except _SearchFailed as e:
            return self._update(lambda s: s.fail(sequence, e.message))

        return self._update(lambda s: s.succeed(sequence, flights))

    def _fetch(self, term: str) -> list:
        url = f'{self.api_url}/api/flight'
        try:
            response = self.session.get(url, params={'flightNumber': term}, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f'Flight search request failed: {e}')
            raise _SearchFailed(ErrorMessage(FETCH_FAILED, str(e) or UNKNOWN_ERROR)) from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not 200 <= response.status_code < 300:
            error = data.get('error') if isinstance(data, dict) else None
            logger.info(f'Flight search returned {response.status_code}: {error}')
            raise _SearchFailed(ErrorMessage(FETCH_FAILED, error or FETCH_FAILED))

        try:
            return [FlightMatch.from_dict(entry) for entry in data['flights']]
        except (KeyError, TypeError) as e:
            logger.error(f'Unexpected flight search response: {e!r}')
            raise _SearchFailed(ErrorMessage(FETCH_FAILED, 'Malformed flight search response')) from e

    def select(self, index: int) -> TrackerState:
        """Select a flight of the current result."""
        return self._update(lambda s: s.select(index))

    # -------------------------------------------------------------------------
    # Mint
    # -------------------------------------------------------------------------

    def mint(self) -> Optional[Any]:
        """
        Mint a token for the selected flight's altitude.

        Failures are stored as the state's mint_error rather than raised;
        the search phase is never changed.

        Returns:
            The contract call's result, or None if the mint did not succeed.

        Raises:
            StateTransitionError: no flight is selected
        """
        flight = self.state.selected_flight
        if flight is None:
            raise StateTransitionError('Select a flight before minting')

        try:
            mint_request = MintRequest.for_flight(self.wallet_address, flight)
            if self.contract is None:
                raise ContractError(MINT_FAILED, 'No mint contract configured')
        except ContractError as e:
            logger.warning(f'Mint not submitted: {e}')
            self._update(lambda s: s.mint_failed(ErrorMessage(e.title, e.details)))
            return None

        logger.info(f'Minting flight {flight.number} at altitude {mint_request.altitude} for {mint_request.address}')

        try:
            result = mint_request.submit(self.contract)
        except Exception as e:
            logger.error(f'Error minting NFT: {e}')
            self._update(lambda s: s.mint_failed(ErrorMessage(MINT_FAILED, str(e) or UNKNOWN_ERROR)))
            return None

        self._update(lambda s: s.mint_succeeded())
        return result


class _SearchFailed(Exception):
    def __init__(self, message: ErrorMessage):
        super().__init__(message.details or message.error)
        self.message = message
