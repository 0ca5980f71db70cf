"""Turn a completed simulation into the two provide-liquidity messages."""
from __future__ import annotations

import asyncio
import base64
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

from ..contracts.factory import DexContracts
from ..errors import AssemblyFailure, PreconditionFailure, ProvisionError
from ..interfaces.router_metadata import RouterMetadataService
from ..models import (
    Asset,
    RouterMetadata,
    SimulationResult,
    TransactionRequest,
    TransferInstruction,
    TxParams,
)
from .session import ProvisioningSession, SessionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Leg:
    asset: Asset
    send_amount: int
    send_token_address: str
    other_token_address: str


class TransactionAssembler:
    """Build both legs of a liquidity provision, all or nothing."""

    def __init__(
        self,
        metadata_service: RouterMetadataService,
        contracts_factory: Callable[[RouterMetadata], DexContracts],
        valid_for_seconds: int = 300,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._metadata = metadata_service
        self._contracts_factory = contracts_factory
        self.valid_for_seconds = valid_for_seconds
        self._clock = clock

    @staticmethod
    def _check_preconditions(
        session: ProvisioningSession, wallet_address: str
    ) -> None:
        if session.result is None or session.state is not SessionState.READY:
            raise PreconditionFailure("Please simulate first.")
        if not wallet_address:
            raise PreconditionFailure("Please connect your wallet first.")
        if session.asset_a is None or session.asset_b is None:
            raise PreconditionFailure("Please select tokens for both sides.")

    async def build_instructions(
        self, session: ProvisioningSession, wallet_address: str
    ) -> tuple[TransferInstruction, ...]:
        """Return the leg-A and leg-B messages for the session's simulation."""
        self._check_preconditions(session, wallet_address)
        generation = session.generation

        try:
            instructions = await self._assemble(
                session.result, session.asset_a, session.asset_b, wallet_address
            )
        except AssemblyFailure:
            raise
        except ProvisionError as e:
            raise AssemblyFailure(
                f"Failed to build liquidity provision transaction: {e.message}"
            ) from e
        except Exception as e:
            raise AssemblyFailure(
                f"Failed to build liquidity provision transaction: {e}"
            ) from e

        if session.is_current(generation):
            session.instructions = instructions
        return instructions

    async def _assemble(
        self,
        result: SimulationResult,
        asset_a: Asset,
        asset_b: Asset,
        wallet_address: str,
    ) -> tuple[TransferInstruction, ...]:

        metadata = await self._metadata.get_router(result.router_address)
        contracts = self._contracts_factory(metadata)

        try:
            min_lp_out = int(result.min_lp_units)
            legs = (
                _Leg(
                    asset=asset_a,
                    send_amount=int(result.token_a_units),
                    send_token_address=result.token_a,
                    other_token_address=(
                        contracts.pton.address
                        if asset_b.is_native
                        else result.token_b
                    ),
                ),
                _Leg(
                    asset=asset_b,
                    send_amount=int(result.token_b_units),
                    send_token_address=result.token_b,
                    other_token_address=(
                        contracts.pton.address
                        if asset_a.is_native
                        else result.token_a
                    ),
                ),
            )
        except ValueError as e:
            raise AssemblyFailure(f"Malformed simulation result: {e}") from e

        params = await asyncio.gather(
            *(
                self._leg_params(contracts, leg, wallet_address, min_lp_out)
                for leg in legs
            )
        )
        return tuple(self.to_instruction(p) for p in params)

    @staticmethod
    async def _leg_params(
        contracts: DexContracts, leg: _Leg, wallet_address: str, min_lp_out: int
    ) -> TxParams:
        # Native coin travels through the proxy
        if leg.asset.is_native:
            return await contracts.router.provide_liquidity_native_tx_params(
                user_wallet_address=wallet_address,
                proxy_ton=contracts.pton,
                other_token_address=leg.other_token_address,
                send_amount=leg.send_amount,
                min_lp_out=min_lp_out,
            )
        return await contracts.router.provide_liquidity_token_tx_params(
            user_wallet_address=wallet_address,
            send_token_address=leg.send_token_address,
            other_token_address=leg.other_token_address,
            send_amount=leg.send_amount,
            min_lp_out=min_lp_out,
        )

    @staticmethod
    def to_instruction(params: TxParams) -> TransferInstruction:
        return TransferInstruction(
            address=str(params.to),
            amount=str(params.value),
            payload=_encode_body(params.body),
        )

    def build_request(
        self, instructions: tuple[TransferInstruction, ...]
    ) -> TransactionRequest:
        """Wrap messages in a request that expires ``valid_for_seconds`` from now."""
        valid_until = int(self._clock()) + self.valid_for_seconds
        return TransactionRequest(valid_until=valid_until, messages=instructions)

    async def assemble(
        self, session: ProvisioningSession, wallet_address: str
    ) -> TransactionRequest:
        instructions = await self.build_instructions(session, wallet_address)
        request = self.build_request(instructions)
        logger.info(
            "Assembled %d messages, valid until %d", len(instructions), request.valid_until
        )
        return request


def _encode_body(body: Any) -> str | None:
    if body is None:
        return None
    return base64.b64encode(body.to_boc()).decode()
