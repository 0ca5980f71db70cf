"""DEX public REST API client — assets, simulation and router metadata."""
from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ..config import ApiConfig
from ..errors import TransportFailure, classify_api_error
from ..models import (
    Asset,
    AssetKind,
    ProvisionType,
    RouterMetadata,
    SimulationRequest,
    SimulationResult,
)

logger = logging.getLogger(__name__)


class StonApiClient:
    """HTTP client for the DEX API.

    Every failure leaves this class already classified: API rejections are
    mapped by ``classify_api_error`` and transport problems are wrapped in
    ``TransportFailure``.
    """

    def __init__(self, config: ApiConfig) -> None:
        self.base_url = config.base_url.rstrip("/")
        self.timeout = config.timeout

    async def _request(
        self, method: str, path: str, params: dict[str, str] | None = None
    ) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        logger.debug("%s %s params=%s", method, url, params)
        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.request(
                    method,
                    url,
                    params=params,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    if response.status >= 400:
                        payload = await response.text()
                        logger.warning(
                            "DEX API rejected %s %s: HTTP %s %s",
                            method, path, response.status, payload,
                        )
                        raise classify_api_error(payload, response.status)
                    return await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("DEX API request %s %s failed: %s", method, path, e)
            raise TransportFailure(str(e) or type(e).__name__) from e

    # ------------------------------------------------------------------
    # Asset catalog
    # ------------------------------------------------------------------

    async def query_assets(self, condition: str) -> list[Asset]:
        """Query assets matching a tag condition, e.g. ``"tag1 | tag2"``."""
        data = await self._request(
            "POST", "/v1/assets/query", params={"condition": condition}
        )
        assets: list[Asset] = []
        for raw in data.get("asset_list", []):
            asset = parse_asset(raw)
            if asset is not None:
                assets.append(asset)
        logger.info("Fetched %d assets for condition %r", len(assets), condition)
        return assets

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    async def simulate_provision(self, request: SimulationRequest) -> SimulationResult:
        """Simulate a liquidity provision."""
        data = await self._request(
            "POST", "/v1/liquidity_provision/simulate", params=request.to_params()
        )
        try:
            return parse_simulation(data)
        except (KeyError, ValueError) as e:
            raise TransportFailure(f"Malformed simulation response: {e}") from e

    # ------------------------------------------------------------------
    # Router metadata
    # ------------------------------------------------------------------

    async def get_router(self, router_address: str) -> RouterMetadata:
        """Fetch router metadata including its pTON companion addresses."""
        data = await self._request("GET", f"/v1/routers/{router_address}")
        try:
            return parse_router(data.get("router", data))
        except (KeyError, ValueError) as e:
            raise TransportFailure(f"Malformed router response: {e}") from e


def parse_asset(raw: dict[str, Any]) -> Asset | None:
    """Build an ``Asset`` from an API entry; unsupported kinds yield None."""
    try:
        kind = AssetKind.from_api(raw.get("kind", ""))
    except ValueError:
        logger.debug("Skipping asset %s: %s", raw.get("contract_address"), raw.get("kind"))
        return None

    meta = raw.get("meta") or {}
    decimals = meta.get("decimals")
    try:
        return Asset(
            contract_address=raw["contract_address"],
            kind=kind,
            symbol=meta.get("symbol", "") or "",
            display_name=meta.get("display_name", "") or "",
            decimals=int(decimals) if decimals is not None else None,
        )
    except (KeyError, TypeError, ValueError) as e:
        logger.debug("Skipping malformed asset entry %s: %s", raw.get("contract_address"), e)
        return None


def parse_simulation(raw: dict[str, Any]) -> SimulationResult:
    return SimulationResult(
        provision_type=ProvisionType(raw["provision_type"]),
        pool_address=raw["pool_address"],
        router_address=raw["router_address"],
        token_a=raw["token_a"],
        token_b=raw["token_b"],
        token_a_units=str(raw["token_a_units"]),
        token_b_units=str(raw["token_b_units"]),
        lp_account_address=raw.get("lp_account_address", "") or "",
        estimated_lp_units=str(raw["estimated_lp_units"]),
        min_lp_units=str(raw["min_lp_units"]),
        price_impact=str(raw.get("price_impact", "")),
    )


def parse_router(raw: dict[str, Any]) -> RouterMetadata:
    return RouterMetadata(
        address=raw["address"],
        major_version=int(raw["major_version"]),
        minor_version=int(raw.get("minor_version", 0)),
        pton_master_address=raw["pton_master_address"],
        pton_wallet_address=raw.get("pton_wallet_address", "") or "",
        router_type=raw.get("router_type", "") or "",
    )
