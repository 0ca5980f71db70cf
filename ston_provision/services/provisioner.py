"""Wires concrete collaborators into the provisioning flow."""
from __future__ import annotations

import logging
from typing import Any

from ..api import StonApiClient
from ..chains.ton import TonClient
from ..config import AppConfig
from ..contracts import dex_factory
from ..errors import ProvisionError, SubmissionFailure, ValidationError
from ..interfaces.asset_catalog import AssetCatalog
from ..interfaces.wallet import WalletSigner
from ..models import Asset, SimulationResult, TransactionRequest
from ..units import from_base_units, from_lp_base_units
from .assembler import TransactionAssembler
from .orchestrator import SimulationOrchestrator
from .session import ProvisioningSession

logger = logging.getLogger(__name__)


class Provisioner:
    """Catalog lookup, simulation and submission for one configuration."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config

        api = StonApiClient(config.api)
        self._chain = TonClient(config.chain)
        self._catalog: AssetCatalog = api
        self.orchestrator = SimulationOrchestrator(
            api, slippage_tolerance=config.provision.slippage_tolerance
        )
        self.assembler = TransactionAssembler(
            api,
            lambda metadata: dex_factory(metadata, self._chain),
            valid_for_seconds=config.provision.valid_for_seconds,
        )

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    async def load_assets(self) -> list[Asset]:
        return await self._catalog.query_assets(self._config.provision.asset_condition)

    @staticmethod
    def find_asset(assets: list[Asset], ref: str) -> Asset:
        """Look an asset up by contract address, then by symbol."""
        for asset in assets:
            if asset.contract_address == ref:
                return asset
        for asset in assets:
            if asset.symbol and asset.symbol.lower() == ref.lower():
                return asset
        raise ValidationError(f"Unknown token: {ref}")

    async def new_session(
        self,
        token_a: str | None = None,
        token_b: str | None = None,
        amount_a: str = "",
        amount_b: str = "",
    ) -> ProvisioningSession:
        assets = await self.load_assets()
        session = ProvisioningSession()
        session.select_defaults(assets)
        if token_a or token_b:
            session.select_assets(
                self.find_asset(assets, token_a) if token_a else session.asset_a,
                self.find_asset(assets, token_b) if token_b else session.asset_b,
            )
        session.set_amounts(amount_a, amount_b)
        return session

    # ------------------------------------------------------------------
    # Workflows
    # ------------------------------------------------------------------

    async def simulate(
        self, session: ProvisioningSession, wallet_address: str | None = None
    ) -> SimulationResult | None:
        wallet = self._config.wallet.address if wallet_address is None else wallet_address
        return await self.orchestrator.simulate(session, wallet)

    async def provide(
        self,
        session: ProvisioningSession,
        signer: WalletSigner,
        wallet_address: str | None = None,
    ) -> Any:
        """Assemble the session's transaction and hand it to ``signer``."""
        wallet = self._config.wallet.address if wallet_address is None else wallet_address
        request: TransactionRequest = await self.assembler.assemble(session, wallet)
        try:
            return await signer.send_transaction(request)
        except ProvisionError:
            raise
        except Exception as e:
            logger.error("Provide liquidity error: %s", e)
            raise SubmissionFailure(str(e)) from e


def format_simulation(
    result: SimulationResult, asset_a: Asset | None, asset_b: Asset | None
) -> list[tuple[str, str]]:
    """Labelled, human-readable view of a simulation result."""
    return [
        ("Provision Type", result.provision_type.value),
        ("Pool Address", result.pool_address),
        ("Router Address", result.router_address),
        ("Token A", result.token_a),
        ("Token B", result.token_b),
        ("Token A Units", from_base_units(asset_a, result.token_a_units)),
        ("Token B Units", from_base_units(asset_b, result.token_b_units)),
        ("LP Account", result.lp_account_address),
        ("Estimated LP", from_lp_base_units(result.estimated_lp_units)),
        ("Min LP", from_lp_base_units(result.min_lp_units)),
        ("Price Impact", result.price_impact),
    ]


def format_asset(asset: Asset) -> str:
    decimals = "-" if asset.decimals is None else str(asset.decimals)
    return f"{asset.symbol or 'Token':<10} {asset.kind.value:<7} {decimals:>3}  {asset.contract_address}"
