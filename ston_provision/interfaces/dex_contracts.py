"""DEX contract handles — router and wrapped-native proxy."""
from typing import Any, Protocol

from ..models import TxParams


class ProxyTonContract(Protocol):
    """Wrapped-native proxy that lets native coin travel like a jetton."""

    @property
    def address(self) -> str: ...

    async def ton_transfer_tx_params(
        self,
        *,
        ton_amount: int,
        destination_address: str,
        refund_address: str,
        forward_payload: Any = None,
        forward_ton_amount: int = 0,
        query_id: int = 0,
    ) -> TxParams: ...


class RouterContract(Protocol):
    """Router that receives both legs of a liquidity provision."""

    @property
    def address(self) -> str: ...

    async def provide_liquidity_native_tx_params(
        self,
        *,
        user_wallet_address: str,
        proxy_ton: ProxyTonContract,
        other_token_address: str,
        send_amount: int,
        min_lp_out: int,
        query_id: int = 0,
    ) -> TxParams: ...

    async def provide_liquidity_token_tx_params(
        self,
        *,
        user_wallet_address: str,
        send_token_address: str,
        other_token_address: str,
        send_amount: int,
        min_lp_out: int,
        query_id: int = 0,
    ) -> TxParams: ...
