"""Unit tests for data models."""
from __future__ import annotations

import pytest

from ston_provision.models import (
    AmountPair,
    Asset,
    AssetKind,
    ProvisionType,
    SimulationRequest,
    TransactionRequest,
    TransferInstruction,
)


class TestAssetKind:
    def test_native(self) -> None:
        assert AssetKind.from_api("Ton") is AssetKind.NATIVE

    @pytest.mark.parametrize("value", ["Jetton", "Wton"])
    def test_contract_tokens(self, value: str) -> None:
        assert AssetKind.from_api(value) is AssetKind.CONTRACT_TOKEN

    def test_unknown_raises(self) -> None:
        with pytest.raises(ValueError, match="Unsupported asset kind"):
            AssetKind.from_api("NotAnAsset")


class TestAmountPair:
    def test_complete(self) -> None:
        assert AmountPair("1", "2").complete

    def test_blank_side_incomplete(self) -> None:
        assert not AmountPair("1", "  ").complete
        assert not AmountPair().complete


class TestSimulationRequest:
    def test_initial_params(self) -> None:
        request = SimulationRequest(
            provision_type=ProvisionType.INITIAL,
            token_a="EQa",
            token_b="EQb",
            token_a_units="100",
            token_b_units="200",
            slippage_tolerance="0.001",
        )
        assert request.to_params() == {
            "provision_type": "Initial",
            "token_a": "EQa",
            "token_b": "EQb",
            "token_a_units": "100",
            "token_b_units": "200",
            "slippage_tolerance": "0.001",
            "wallet_address": "",
        }

    def test_balanced_params_omit_leg_b(self) -> None:
        request = SimulationRequest(
            provision_type=ProvisionType.BALANCED,
            token_a="EQa",
            token_b="EQb",
            token_a_units="100",
            pool_address="EQpool",
            slippage_tolerance="0.001",
            wallet_address="EQw",
        )
        params = request.to_params()
        assert "token_b_units" not in params
        assert params["pool_address"] == "EQpool"
        assert params["provision_type"] == "Balanced"


class TestTransactionRequest:
    def test_wallet_connect_shape(self) -> None:
        request = TransactionRequest(
            valid_until=1700000300,
            messages=(
                TransferInstruction(address="EQa", amount="1", payload="te6="),
                TransferInstruction(address="EQb", amount="2"),
            ),
        )
        assert request.to_dict() == {
            "validUntil": 1700000300,
            "messages": [
                {"address": "EQa", "amount": "1", "payload": "te6="},
                {"address": "EQb", "amount": "2"},
            ],
        }

    def test_asset_immutable(self) -> None:
        asset = Asset(contract_address="EQa", kind=AssetKind.NATIVE)
        with pytest.raises(AttributeError):
            asset.decimals = 6  # type: ignore[misc]
