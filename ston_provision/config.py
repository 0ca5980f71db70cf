"""Load config.yaml, expand ${VAR} references from the environment and validate."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_ASSET_TAGS: tuple[str, ...] = (
    "asset:liquidity:very_high",
    "asset:liquidity:high",
    "asset:liquidity:medium",
)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ApiConfig:
    base_url: str = "https://api.ston.fi"
    timeout: int = 30


@dataclass(frozen=True)
class ChainConfig:
    rpc_endpoints: tuple[str, ...] = ("https://toncenter.com/api/v2/jsonRPC",)
    api_key: str = ""
    rpc_timeout: int = 30


@dataclass(frozen=True)
class ProvisionConfig:
    slippage_tolerance: str = "0.001"
    valid_for_seconds: int = 300
    asset_condition_tags: tuple[str, ...] = DEFAULT_ASSET_TAGS

    @property
    def asset_condition(self) -> str:
        """Catalog filter expression: tag disjunction joined with ``|``."""
        return " | ".join(self.asset_condition_tags)


@dataclass(frozen=True)
class WalletConfig:
    address: str = ""


@dataclass(frozen=True)
class AppConfig:
    api: ApiConfig = field(default_factory=ApiConfig)
    chain: ChainConfig = field(default_factory=ChainConfig)
    provision: ProvisionConfig = field(default_factory=ProvisionConfig)
    wallet: WalletConfig = field(default_factory=WalletConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_api(raw: dict[str, Any]) -> ApiConfig:
    return ApiConfig(
        base_url=str(raw.get("base_url", ApiConfig.base_url)).rstrip("/"),
        timeout=int(raw.get("timeout", 30)),
    )


def _build_chain(raw: dict[str, Any]) -> ChainConfig:
    endpoints = raw.get("rpc_endpoints")
    return ChainConfig(
        rpc_endpoints=(
            tuple(endpoints) if endpoints is not None else ChainConfig.rpc_endpoints
        ),
        api_key=raw.get("api_key", "") or "",
        rpc_timeout=int(raw.get("rpc_timeout", 30)),
    )


def _build_provision(raw: dict[str, Any]) -> ProvisionConfig:
    tags = raw.get("asset_condition_tags")
    return ProvisionConfig(
        slippage_tolerance=str(raw.get("slippage_tolerance", "0.001")),
        valid_for_seconds=int(raw.get("valid_for_seconds", 300)),
        asset_condition_tags=tuple(tags) if tags is not None else DEFAULT_ASSET_TAGS,
    )


def _build_wallet(raw: dict[str, Any]) -> WalletConfig:
    return WalletConfig(address=raw.get("address", "") or "")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        api=_build_api(raw.get("api") or {}),
        chain=_build_chain(raw.get("chain") or {}),
        provision=_build_provision(raw.get("provision") or {}),
        wallet=_build_wallet(raw.get("wallet") or {}),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.api.base_url:
        raise ValueError("API base_url must not be empty")

    if not cfg.chain.rpc_endpoints:
        raise ValueError("At least one chain RPC endpoint must be configured")

    if cfg.provision.valid_for_seconds <= 0:
        raise ValueError("valid_for_seconds must be positive")

    try:
        slippage = Decimal(cfg.provision.slippage_tolerance)
    except InvalidOperation:
        raise ValueError(
            f"slippage_tolerance is not a decimal: {cfg.provision.slippage_tolerance!r}"
        ) from None
    if not 0 < slippage < 1:
        raise ValueError("slippage_tolerance must be between 0 and 1")

    if not cfg.provision.asset_condition_tags:
        raise ValueError("At least one asset condition tag must be configured")
