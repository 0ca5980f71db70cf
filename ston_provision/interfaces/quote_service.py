"""Quote service protocol — off-chain liquidity provision simulation."""
from typing import Protocol

from ..models import SimulationRequest, SimulationResult


class QuoteService(Protocol):
    """Abstract interface for simulating a liquidity provision.

    Implementations raise classified ``ProvisionError`` subclasses.
    """

    async def simulate_provision(self, request: SimulationRequest) -> SimulationResult: ...
