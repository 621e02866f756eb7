"""
Error kinds for flight lookup and minting.

Every error carries a short title and an optional detail string. API
handlers render them as ``{error, details}`` JSON with the error's
HTTP status; the tracker client stores them in its state.
"""

from typing import Optional


class FlightMintError(Exception):
    """Base class for all classified FlightMint errors."""

    status_code: int = 500

    def __init__(self, title: str, details: Optional[str] = None):
        super().__init__(title if details is None else f'{title}: {details}')
        self.title = title
        self.details = details

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        body = {'error': self.title}
        if self.details is not None:
            body['details'] = self.details
        return body


class ValidationError(FlightMintError):
    """The search term is missing or empty."""
    status_code = 400


class NotFoundError(FlightMintError):
    """The feed is empty, or no record matched the search term."""
    status_code = 404


class UpstreamError(FlightMintError):
    """The flight-state feed failed (status, transport, or body)."""
    status_code = 500

    def __init__(
        self,
        details: str,
        upstream_status: Optional[int] = None,
        title: str = 'Failed to fetch flight data',
    ):
        super().__init__(title, details)
        self.upstream_status = upstream_status


class ContractError(FlightMintError):
    """Minting could not be submitted or was rejected."""


class StateTransitionError(Exception):
    """An invalid transition was requested on the tracker state."""
