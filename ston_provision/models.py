"""Data models. All frozen."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class AssetKind(Enum):
    """How an asset moves on chain: native coin or contract-issued token."""

    NATIVE = "Ton"
    CONTRACT_TOKEN = "Jetton"

    @classmethod
    def from_api(cls, value: str) -> AssetKind:
        if value == "Ton":
            return cls.NATIVE
        # Wrapped TON is a regular jetton from the router's point of view
        if value in ("Jetton", "Wton"):
            return cls.CONTRACT_TOKEN
        raise ValueError(f"Unsupported asset kind: {value!r}")


class ProvisionType(Enum):
    INITIAL = "Initial"
    BALANCED = "Balanced"


@dataclass(frozen=True)
class Asset:
    """Tradable token as listed by the asset catalog."""

    contract_address: str
    kind: AssetKind
    symbol: str = ""
    display_name: str = ""
    decimals: int | None = None

    @property
    def is_native(self) -> bool:
        return self.kind is AssetKind.NATIVE


@dataclass(frozen=True)
class AmountPair:
    """Human-entered decimal amounts for leg A and leg B."""

    amount_a: str = ""
    amount_b: str = ""

    @property
    def complete(self) -> bool:
        return bool(self.amount_a.strip()) and bool(self.amount_b.strip())


@dataclass(frozen=True)
class SimulationRequest:
    """Liquidity-provision simulation query sent to the quote service."""

    provision_type: ProvisionType
    token_a: str
    token_b: str
    token_a_units: str
    slippage_tolerance: str
    wallet_address: str = ""
    token_b_units: str | None = None
    pool_address: str | None = None

    def to_params(self) -> dict[str, str]:
        params = {
            "provision_type": self.provision_type.value,
            "token_a": self.token_a,
            "token_b": self.token_b,
            "token_a_units": self.token_a_units,
            "slippage_tolerance": self.slippage_tolerance,
            "wallet_address": self.wallet_address,
        }
        if self.token_b_units is not None:
            params["token_b_units"] = self.token_b_units
        if self.pool_address is not None:
            params["pool_address"] = self.pool_address
        return params


@dataclass(frozen=True)
class SimulationResult:
    """Simulated pool state returned by the quote service."""

    provision_type: ProvisionType
    pool_address: str
    router_address: str
    token_a: str
    token_b: str
    token_a_units: str
    token_b_units: str
    lp_account_address: str
    estimated_lp_units: str
    min_lp_units: str
    price_impact: str


@dataclass(frozen=True)
class RouterMetadata:
    """Router contract and its wrapped-native (pTON) companion."""

    address: str
    major_version: int
    minor_version: int
    pton_master_address: str
    pton_wallet_address: str = ""
    router_type: str = ""


@dataclass(frozen=True)
class TxParams:
    """Resolved outbound message: recipient, attached nanotons and body."""

    to: str
    value: int
    body: Any = None


@dataclass(frozen=True)
class TransferInstruction:
    """One wallet-connect message: address, amount and base64 BOC payload."""

    address: str
    amount: str
    payload: str | None = None

    def to_dict(self) -> dict[str, str]:
        message = {"address": self.address, "amount": self.amount}
        if self.payload is not None:
            message["payload"] = self.payload
        return message


@dataclass(frozen=True)
class TransactionRequest:
    """Multi-message request handed to the wallet for signing."""

    valid_until: int
    messages: tuple[TransferInstruction, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "validUntil": self.valid_until,
            "messages": [m.to_dict() for m in self.messages],
        }
