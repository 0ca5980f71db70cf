"""Two-phase liquidity provision simulation: Initial, then Balanced fallback."""
from __future__ import annotations

import logging

from ..errors import (
    ExistingPoolConflict,
    ProvisionError,
    TransportFailure,
    ValidationError,
)
from ..interfaces.quote_service import QuoteService
from ..models import ProvisionType, SimulationRequest, SimulationResult
from ..units import from_base_units, to_base_units
from .session import ProvisioningSession, SessionState

logger = logging.getLogger(__name__)


class SimulationOrchestrator:
    """Drive a session from Idle to Ready or Error.

    The first attempt assumes a brand-new pool. When the quote service
    answers that the pool already exists, exactly one Balanced attempt is
    made against the pool named in that rejection.
    """

    def __init__(
        self, quote_service: QuoteService, slippage_tolerance: str = "0.001"
    ) -> None:
        self._quotes = quote_service
        self._slippage = slippage_tolerance

    async def simulate(
        self, session: ProvisioningSession, wallet_address: str = ""
    ) -> SimulationResult | None:
        """Run one simulation; returns the result or None on error/stale run.

        Raises ``ValidationError`` before any network call when the session
        lacks assets or amounts.
        """
        generation = session.start_run()

        state = SessionState.SIMULATING_INITIAL
        pool_address: str | None = None
        while state in (SessionState.SIMULATING_INITIAL, SessionState.SIMULATING_BALANCED):
            if not session.enter(generation, state):
                logger.info("Simulation run %d superseded", generation)
                return None
            if state is SessionState.SIMULATING_INITIAL:
                state, pool_address = await self._simulate_initial(
                    session, generation, wallet_address
                )
            else:
                state = await self._simulate_balanced(
                    session, generation, wallet_address, pool_address
                )

        if state is SessionState.READY and session.is_current(generation):
            return session.result
        return None

    def build_request(
        self,
        session: ProvisioningSession,
        provision_type: ProvisionType,
        wallet_address: str = "",
        pool_address: str | None = None,
    ) -> SimulationRequest:
        asset_a, asset_b = session.asset_a, session.asset_b
        if asset_a is None or asset_b is None:
            raise ValidationError("Please select tokens for both sides.")

        if provision_type is ProvisionType.INITIAL:
            return SimulationRequest(
                provision_type=ProvisionType.INITIAL,
                token_a=asset_a.contract_address,
                token_b=asset_b.contract_address,
                token_a_units=to_base_units(asset_a, session.amounts.amount_a),
                token_b_units=to_base_units(asset_b, session.amounts.amount_b),
                slippage_tolerance=self._slippage,
                wallet_address=wallet_address or "",
            )

        if not pool_address:
            raise ValidationError("Pool address is required for Balanced provision")

        # Leg B follows from the existing pool's ratio
        return SimulationRequest(
            provision_type=ProvisionType.BALANCED,
            token_a=asset_a.contract_address,
            token_b=asset_b.contract_address,
            token_a_units=to_base_units(asset_a, session.amounts.amount_a),
            pool_address=pool_address,
            slippage_tolerance=self._slippage,
            wallet_address=wallet_address or "",
        )

    async def _simulate_initial(
        self, session: ProvisioningSession, generation: int, wallet_address: str
    ) -> tuple[SessionState, str | None]:
        request = self.build_request(session, ProvisionType.INITIAL, wallet_address)
        try:
            result = await self._quotes.simulate_provision(request)
        except ExistingPoolConflict as e:
            logger.info(
                "Pool already exists for %s/%s, retrying as Balanced on %s",
                request.token_a, request.token_b, e.pool_address,
            )
            return SessionState.SIMULATING_BALANCED, e.pool_address
        except ProvisionError as e:
            logger.warning("Initial simulation failed: %s", e.message)
            session.fail(generation, e)
            return SessionState.ERROR, None
        except Exception as e:
            logger.error("Initial simulation failed unexpectedly: %s", e)
            session.fail(generation, TransportFailure(str(e)))
            return SessionState.ERROR, None

        return self._finish(session, generation, result), None

    async def _simulate_balanced(
        self,
        session: ProvisioningSession,
        generation: int,
        wallet_address: str,
        pool_address: str | None,
    ) -> SessionState:
        try:
            request = self.build_request(
                session, ProvisionType.BALANCED, wallet_address, pool_address
            )
            result = await self._quotes.simulate_provision(request)
        except ProvisionError as e:
            # No second fallback, even for another existing-pool rejection
            logger.warning("Balanced simulation failed: %s", e.message)
            session.fail(generation, e)
            return SessionState.ERROR
        except Exception as e:
            logger.error("Balanced simulation failed unexpectedly: %s", e)
            session.fail(generation, TransportFailure(str(e)))
            return SessionState.ERROR

        return self._finish(session, generation, result)

    def _finish(
        self, session: ProvisioningSession, generation: int, result: SimulationResult
    ) -> SessionState:
        try:
            amount_b = from_base_units(session.asset_b, result.token_b_units)
        except ValueError as e:
            session.fail(generation, TransportFailure(f"Malformed simulation result: {e}"))
            return SessionState.ERROR
        if session.complete(generation, result, amount_b):
            logger.info(
                "Simulated %s provision on pool %s: min LP %s, price impact %s",
                result.provision_type.value, result.pool_address,
                result.min_lp_units, result.price_impact,
            )
        return SessionState.READY
