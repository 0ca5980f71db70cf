"""Service modules"""
from .assembler import TransactionAssembler
from .orchestrator import SimulationOrchestrator
from .provisioner import Provisioner, format_asset, format_simulation
from .session import ProvisioningSession, SessionState

__all__ = [
    "Provisioner",
    "ProvisioningSession",
    "SessionState",
    "SimulationOrchestrator",
    "TransactionAssembler",
    "format_asset",
    "format_simulation",
]
