"""Provisioning session — the only mutable state in the flow."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from ..errors import ProvisionError, ValidationError
from ..models import AmountPair, Asset, SimulationResult, TransferInstruction
from ..units import to_base_units

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    SIMULATING_INITIAL = "simulating_initial"
    SIMULATING_BALANCED = "simulating_balanced"
    READY = "ready"
    ERROR = "error"


@dataclass
class ProvisioningSession:
    """Selected assets, entered amounts and the latest simulation outcome.

    ``generation`` increases on every new simulation run and every change
    of selection; writes tagged with an older generation are dropped so a
    late response can never overwrite a newer run.
    """

    asset_a: Asset | None = None
    asset_b: Asset | None = None
    amounts: AmountPair = field(default_factory=AmountPair)
    state: SessionState = SessionState.IDLE
    result: SimulationResult | None = None
    error: str = ""
    last_error: ProvisionError | None = None
    instructions: tuple[TransferInstruction, ...] = ()
    generation: int = 0

    @property
    def is_simulating(self) -> bool:
        return self.state in (
            SessionState.SIMULATING_INITIAL,
            SessionState.SIMULATING_BALANCED,
        )

    # ------------------------------------------------------------------
    # User input
    # ------------------------------------------------------------------

    def select_assets(self, asset_a: Asset | None, asset_b: Asset | None) -> None:
        self.asset_a = asset_a
        self.asset_b = asset_b
        self._reset()

    def select_defaults(self, assets: list[Asset]) -> None:
        """Pick the first two catalog entries as the initial pair."""
        self.select_assets(
            assets[0] if len(assets) > 0 else None,
            assets[1] if len(assets) > 1 else None,
        )

    def set_amounts(self, amount_a: str, amount_b: str) -> None:
        self.amounts = AmountPair(amount_a=amount_a, amount_b=amount_b)

    def validate(self) -> None:
        """Raise ``ValidationError`` unless both assets and amounts are usable."""
        if (
            self.asset_a is None
            or self.asset_b is None
            or not self.amounts.complete
        ):
            raise ValidationError(
                "Please select tokens and enter amounts for both sides."
            )
        try:
            to_base_units(self.asset_a, self.amounts.amount_a)
            to_base_units(self.asset_b, self.amounts.amount_b)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def _reset(self) -> int:
        self.generation += 1
        self.state = SessionState.IDLE
        self.result = None
        self.error = ""
        self.last_error = None
        self.instructions = ()
        return self.generation

    def start_run(self) -> int:
        """Validate input and begin a fresh run; returns its generation."""
        self.validate()
        return self._reset()

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def enter(self, generation: int, state: SessionState) -> bool:
        if not self.is_current(generation):
            return False
        logger.info("Session %d: %s -> %s", generation, self.state.value, state.value)
        self.state = state
        return True

    def complete(
        self, generation: int, result: SimulationResult, amount_b: str
    ) -> bool:
        """Store a successful result and the authoritative leg-B amount."""
        if not self.enter(generation, SessionState.READY):
            logger.debug("Discarding stale simulation result (generation %d)", generation)
            return False
        self.result = result
        self.amounts = AmountPair(amount_a=self.amounts.amount_a, amount_b=amount_b)
        return True

    def fail(self, generation: int, error: ProvisionError) -> bool:
        if not self.enter(generation, SessionState.ERROR):
            logger.debug("Discarding stale simulation error (generation %d)", generation)
            return False
        self.result = None
        self.error = error.message
        self.last_error = error
        return True
