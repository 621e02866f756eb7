"""
Mint contract collaborators.

The wallet and the deployed contract live outside this package. The
tracker only needs a wallet address and an object exposing
``mint(address, altitude)``; anything raising from that call is treated
as a rejected mint.
"""

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from flightmint.errors import ContractError
from flightmint.models import FlightMatch


class MintContract(Protocol):
    """Contract exposing ``mint(address, altitude)``."""

    def mint(self, address: str, altitude: int) -> Any:
        ...


@dataclass(frozen=True)
class MintRequest:
    """Arguments for one mint call."""
    address: str
    altitude: int

    @classmethod
    def for_flight(cls, address: Optional[str], flight: FlightMatch) -> 'MintRequest':
        """
        Build the request for a selected flight.

        Raises:
            ContractError: no wallet address is bound
        """
        if not address:
            raise ContractError('Wallet not connected', 'Please connect your wallet before minting')
        return cls(address=address, altitude=flight.rounded_altitude)

    def submit(self, contract: MintContract) -> Any:
        return contract.mint(self.address, self.altitude)
