"""Message body builders for jetton transfers and v1 liquidity provision — no I/O."""
from __future__ import annotations

from pytoniq_core import Address, Cell, begin_cell

JETTON_TRANSFER_OP = 0x0F8A7EA5
PROVIDE_LP_V1_OP = 0xFCF9E58F


def provide_lp_body(router_wallet_address: str, min_lp_out: int) -> Cell:
    """Forward payload asking the v1 router to pair the incoming jettons.

    ``router_wallet_address`` is the router's own wallet of the *other*
    token, which lets the router match both legs to the same LP account.
    """
    return (
        begin_cell()
        .store_uint(PROVIDE_LP_V1_OP, 32)
        .store_address(Address(router_wallet_address))
        .store_coins(min_lp_out)
        .end_cell()
    )


def jetton_transfer_body(
    *,
    amount: int,
    destination: str,
    response_destination: str,
    forward_ton_amount: int = 0,
    forward_payload: Cell | None = None,
    query_id: int = 0,
) -> Cell:
    """TEP-74 ``transfer`` message without a custom payload."""
    builder = (
        begin_cell()
        .store_uint(JETTON_TRANSFER_OP, 32)
        .store_uint(query_id, 64)
        .store_coins(amount)
        .store_address(Address(destination))
        .store_address(Address(response_destination))
        .store_uint(0, 1)
        .store_coins(forward_ton_amount)
    )
    if forward_payload is None:
        builder.store_uint(0, 1)
    else:
        builder.store_uint(1, 1).store_ref(forward_payload)
    return builder.end_cell()
