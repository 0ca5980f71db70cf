"""Router v1 — builds the two provide-liquidity legs."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from ..interfaces.chain import ChainClient
from ..interfaces.dex_contracts import ProxyTonContract
from ..models import TxParams
from .messages import jetton_transfer_body, provide_lp_body

logger = logging.getLogger(__name__)

_NANO = 10**9


@dataclass(frozen=True)
class GasConstants:
    provide_lp_jetton_gas: int = 300_000_000
    provide_lp_jetton_forward_gas: int = 240_000_000
    provide_lp_ton_forward_gas: int = 260_000_000


class RouterV1:
    """v1 router handle; jetton legs go through the user's jetton wallet."""

    def __init__(
        self,
        chain_client: ChainClient,
        address: str,
        gas: GasConstants | None = None,
    ) -> None:
        self._client = chain_client
        self._address = address
        self.gas = gas or GasConstants()

    @property
    def address(self) -> str:
        return self._address

    async def _router_wallet(self, token_address: str) -> str:
        return await self._client.get_wallet_address(token_address, self._address)

    async def provide_liquidity_token_tx_params(
        self,
        *,
        user_wallet_address: str,
        send_token_address: str,
        other_token_address: str,
        send_amount: int,
        min_lp_out: int,
        query_id: int = 0,
    ) -> TxParams:
        user_jetton_wallet = await self._client.get_wallet_address(
            send_token_address, user_wallet_address
        )
        router_wallet = await self._router_wallet(other_token_address)

        body = jetton_transfer_body(
            amount=send_amount,
            destination=self._address,
            response_destination=user_wallet_address,
            forward_ton_amount=self.gas.provide_lp_jetton_forward_gas,
            forward_payload=provide_lp_body(router_wallet, min_lp_out),
            query_id=query_id,
        )
        logger.debug(
            "Jetton leg: %s units of %s via %s (gas %.2f TON)",
            send_amount, send_token_address, user_jetton_wallet,
            self.gas.provide_lp_jetton_gas / _NANO,
        )
        return TxParams(
            to=user_jetton_wallet, value=self.gas.provide_lp_jetton_gas, body=body
        )

    async def provide_liquidity_native_tx_params(
        self,
        *,
        user_wallet_address: str,
        proxy_ton: ProxyTonContract,
        other_token_address: str,
        send_amount: int,
        min_lp_out: int,
        query_id: int = 0,
    ) -> TxParams:
        router_wallet = await self._router_wallet(other_token_address)

        logger.debug("Native leg: %s nanotons via proxy %s", send_amount, proxy_ton.address)
        return await proxy_ton.ton_transfer_tx_params(
            ton_amount=send_amount,
            destination_address=self._address,
            refund_address=user_wallet_address,
            forward_payload=provide_lp_body(router_wallet, min_lp_out),
            forward_ton_amount=self.gas.provide_lp_ton_forward_gas,
            query_id=query_id,
        )
