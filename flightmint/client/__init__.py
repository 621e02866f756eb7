"""
Flight tracker client.

Search/selection state machine and the mint action for a connected
wallet.
"""

from flightmint.client.contract import MintContract, MintRequest
from flightmint.client.state import ErrorMessage, SearchPhase, TrackerState
from flightmint.client.tracker import FlightTracker

__all__ = [
    'ErrorMessage',
    'FlightTracker',
    'MintContract',
    'MintRequest',
    'SearchPhase',
    'TrackerState',
]
