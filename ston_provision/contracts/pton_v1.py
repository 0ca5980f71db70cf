"""Proxy TON v1: lets native coin be sent like a jetton."""
from __future__ import annotations

import logging

from pytoniq_core import Cell

from ..interfaces.chain import ChainClient
from ..models import TxParams
from .messages import jetton_transfer_body

logger = logging.getLogger(__name__)


class ProxyTonV1:
    def __init__(
        self,
        chain_client: ChainClient,
        address: str,
        known_wallets: dict[str, str] | None = None,
    ) -> None:
        self._client = chain_client
        self._address = address
        self._wallet_cache: dict[str, str] = dict(known_wallets or {})

    @property
    def address(self) -> str:
        return self._address

    async def get_wallet_address(self, owner: str) -> str:
        """Proxy wallet of ``owner`` (with caching)."""
        if owner not in self._wallet_cache:
            self._wallet_cache[owner] = await self._client.get_wallet_address(
                self._address, owner
            )
        return self._wallet_cache[owner]

    async def ton_transfer_tx_params(
        self,
        *,
        ton_amount: int,
        destination_address: str,
        refund_address: str,
        forward_payload: Cell | None = None,
        forward_ton_amount: int = 0,
        query_id: int = 0,
    ) -> TxParams:
        """Send ``ton_amount`` to the destination's proxy wallet.

        The attached value covers both the wrapped amount and the forward gas.
        """
        to = await self.get_wallet_address(destination_address)
        body = jetton_transfer_body(
            amount=ton_amount,
            destination=destination_address,
            response_destination=refund_address,
            forward_ton_amount=forward_ton_amount,
            forward_payload=forward_payload,
            query_id=query_id,
        )
        return TxParams(to=to, value=ton_amount + forward_ton_amount, body=body)
