"""Chain client protocol — blockchain RPC abstraction."""
from typing import Any, Protocol


class ChainClient(Protocol):
    """Abstract interface for read-only chain RPC calls."""

    async def run_get_method(
        self, address: str, method: str, stack: list[list[Any]]
    ) -> dict[str, Any]: ...

    async def get_wallet_address(self, jetton_master: str, owner: str) -> str: ...
