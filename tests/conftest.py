"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any

import pytest

from ston_provision.config import (
    ApiConfig,
    AppConfig,
    ChainConfig,
    ProvisionConfig,
    WalletConfig,
)
from ston_provision.models import (
    Asset,
    AssetKind,
    ProvisionType,
    SimulationResult,
)

# Raw-form addresses (workchain:hash) so they parse without checksums.
ROUTER_ADDR = "0:" + "11" * 32
PTON_MASTER_ADDR = "0:" + "22" * 32
USDT_MASTER_ADDR = "0:" + "33" * 32
WALLET_ADDR = "0:" + "44" * 32
JETTON_MASTER_ADDR = "0:" + "55" * 32


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_app_config() -> AppConfig:
    return AppConfig(
        api=ApiConfig(base_url="https://api.example.com", timeout=5),
        chain=ChainConfig(
            rpc_endpoints=("https://rpc1.example.com", "https://rpc2.example.com"),
            api_key="test-key",
            rpc_timeout=5,
        ),
        provision=ProvisionConfig(slippage_tolerance="0.001", valid_for_seconds=300),
        wallet=WalletConfig(address=WALLET_ADDR),
    )


SAMPLE_YAML = textwrap.dedent("""\
    api:
      base_url: https://api.example.com/
      timeout: 10
    chain:
      rpc_endpoints: ["https://rpc.example.com"]
      api_key: "${TEST_TON_API_KEY}"
      rpc_timeout: 15
    provision:
      slippage_tolerance: "0.005"
      valid_for_seconds: 120
      asset_condition_tags: [tag:a, tag:b, tag:c]
    wallet:
      address: "EQWALLET"
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def ton_asset() -> Asset:
    return Asset(
        contract_address=PTON_MASTER_ADDR,
        kind=AssetKind.NATIVE,
        symbol="TON",
        decimals=9,
    )


@pytest.fixture()
def usdt_asset() -> Asset:
    return Asset(
        contract_address=USDT_MASTER_ADDR,
        kind=AssetKind.CONTRACT_TOKEN,
        symbol="USDT",
        decimals=6,
    )


@pytest.fixture()
def jetton_asset() -> Asset:
    """Jetton without declared decimals."""
    return Asset(
        contract_address=JETTON_MASTER_ADDR,
        kind=AssetKind.CONTRACT_TOKEN,
        symbol="JET",
    )


@pytest.fixture()
def sample_result() -> SimulationResult:
    return SimulationResult(
        provision_type=ProvisionType.INITIAL,
        pool_address="EQpool",
        router_address=ROUTER_ADDR,
        token_a=USDT_MASTER_ADDR,
        token_b=PTON_MASTER_ADDR,
        token_a_units="1500000",
        token_b_units="2500000000",
        lp_account_address="EQlpaccount",
        estimated_lp_units="2500000000",
        min_lp_units="2497500000",
        price_impact="0.0012",
    )


@pytest.fixture()
def simulation_payload() -> dict[str, Any]:
    return {
        "provision_type": "Balanced",
        "pool_address": "EQpool",
        "router_address": ROUTER_ADDR,
        "token_a": USDT_MASTER_ADDR,
        "token_b": PTON_MASTER_ADDR,
        "token_a_units": "1500000",
        "token_b_units": "2500000000",
        "lp_account_address": "EQlpaccount",
        "estimated_lp_units": "2500000000",
        "min_lp_units": "2497500000",
        "price_impact": "0.0012",
    }
