"""Wallet signer protocol."""
from typing import Any, Protocol

from ..models import TransactionRequest


class WalletSigner(Protocol):
    """Abstract interface for submitting a multi-message transaction."""

    async def send_transaction(self, request: TransactionRequest) -> Any: ...
