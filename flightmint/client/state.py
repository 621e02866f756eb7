"""
Tracker state machine.

Search lifecycle:
    idle -> loading -> success | error

with an orthogonal selection (None or an index into the current result)
and an orthogonal mint error slot. TrackerState is immutable; every
transition returns a new value, and transitions that would produce an
inconsistent combination raise StateTransitionError.

Each search is stamped with a sequence number. A response stamped with
an older sequence than the current one is discarded, so an earlier
search resolving late never overwrites a newer one.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Sequence

from flightmint.errors import StateTransitionError
from flightmint.models import FlightMatch

logger = logging.getLogger(__name__)


class SearchPhase(str, Enum):
    """Where the current search is in its lifecycle."""
    IDLE = 'idle'
    LOADING = 'loading'
    SUCCESS = 'success'
    ERROR = 'error'


@dataclass(frozen=True)
class ErrorMessage:
    """Short title plus optional detail shown to the user."""
    error: str
    details: Optional[str] = None


NO_MATCH = ErrorMessage(
    'No flights found matching your search',
    'Try searching with a different flight number or ICAO24 code',
)


@dataclass(frozen=True)
class TrackerState:
    phase: SearchPhase = SearchPhase.IDLE
    term: str = ''
    sequence: int = 0
    flights: Tuple[FlightMatch, ...] = ()
    selected_index: Optional[int] = None
    error: Optional[ErrorMessage] = None
    mint_error: Optional[ErrorMessage] = None

    @property
    def selected_flight(self) -> Optional[FlightMatch]:
        if self.selected_index is None:
            return None
        return self.flights[self.selected_index]

    @property
    def message(self) -> Optional[ErrorMessage]:
        """The error to display, mint errors taking precedence."""
        return self.mint_error or self.error

    def begin_search(self, term: str) -> 'TrackerState':
        """Start a new search, clearing result, selection and errors."""
        if not term:
            raise StateTransitionError('Cannot search without a flight number')
        return TrackerState(
            phase=SearchPhase.LOADING,
            term=term,
            sequence=self.sequence + 1,
        )

    def _is_stale(self, sequence: int) -> bool:
        if sequence != self.sequence:
            logger.debug(f'Discarding stale response #{sequence} (current #{self.sequence})')
            return True
        if self.phase is not SearchPhase.LOADING:
            raise StateTransitionError(f'Search #{sequence} already resolved ({self.phase.value})')
        return False

    def succeed(self, sequence: int, flights: Sequence[FlightMatch]) -> 'TrackerState':
        """Resolve the current search with its matches."""
        if self._is_stale(sequence):
            return self
        if not flights:
            return self.fail(sequence, NO_MATCH)
        return replace(self, phase=SearchPhase.SUCCESS, flights=tuple(flights))

    def fail(self, sequence: int, error: ErrorMessage) -> 'TrackerState':
        """Resolve the current search with an error."""
        if self._is_stale(sequence):
            return self
        return replace(self, phase=SearchPhase.ERROR, flights=(), selected_index=None, error=error)

    def select(self, index: int) -> 'TrackerState':
        """Select one flight of the current result."""
        if self.phase is not SearchPhase.SUCCESS:
            raise StateTransitionError(f'Nothing to select while {self.phase.value}')
        if not 0 <= index < len(self.flights):
            raise StateTransitionError(f'Selection {index} outside {len(self.flights)} results')
        return replace(self, selected_index=index)

    def mint_failed(self, error: ErrorMessage) -> 'TrackerState':
        return replace(self, mint_error=error)

    def mint_succeeded(self) -> 'TrackerState':
        return replace(self, mint_error=None)
