"""Unit tests for jetton transfer and provide-liquidity message bodies."""
from __future__ import annotations

from pytoniq_core import Address

from ston_provision.contracts.messages import (
    JETTON_TRANSFER_OP,
    PROVIDE_LP_V1_OP,
    jetton_transfer_body,
    provide_lp_body,
)

ROUTER_ADDR = "0:" + "11" * 32
USDT_MASTER_ADDR = "0:" + "33" * 32
WALLET_ADDR = "0:" + "44" * 32


class TestProvideLpBody:
    def test_layout(self) -> None:
        cs = provide_lp_body(USDT_MASTER_ADDR, 12345).begin_parse()
        assert cs.load_uint(32) == PROVIDE_LP_V1_OP
        assert cs.load_address().to_str() == Address(USDT_MASTER_ADDR).to_str()
        assert cs.load_coins() == 12345


class TestJettonTransferBody:
    def test_with_forward_payload(self) -> None:
        payload = provide_lp_body(USDT_MASTER_ADDR, 1)
        cs = jetton_transfer_body(
            amount=1_500_000,
            destination=ROUTER_ADDR,
            response_destination=WALLET_ADDR,
            forward_ton_amount=240_000_000,
            forward_payload=payload,
            query_id=7,
        ).begin_parse()

        assert cs.load_uint(32) == JETTON_TRANSFER_OP
        assert cs.load_uint(64) == 7
        assert cs.load_coins() == 1_500_000
        assert cs.load_address().to_str() == Address(ROUTER_ADDR).to_str()
        assert cs.load_address().to_str() == Address(WALLET_ADDR).to_str()
        assert cs.load_uint(1) == 0
        assert cs.load_coins() == 240_000_000
        assert cs.load_uint(1) == 1
        assert cs.load_ref().hash == payload.hash

    def test_without_forward_payload(self) -> None:
        cs = jetton_transfer_body(
            amount=1,
            destination=ROUTER_ADDR,
            response_destination=WALLET_ADDR,
        ).begin_parse()
        cs.load_uint(32 + 64)
        cs.load_coins()
        cs.load_address()
        cs.load_address()
        cs.load_uint(1)
        assert cs.load_coins() == 0
        assert cs.load_uint(1) == 0
