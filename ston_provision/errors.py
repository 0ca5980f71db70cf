"""Provisioning error taxonomy and API rejection classifier."""
from __future__ import annotations

import re

EXISTING_POOL_CODE = "1020: pool"
EXISTING_POOL_PHRASE = "already exists for selected type of router: ["

POOL_EXTRACTION_MESSAGE = "Failed to extract pool information from error message"

_BRACKETED_LIST_RE = re.compile(r"\[(.*?)\]")


class ProvisionError(Exception):
    """Base class for every failure surfaced by the provisioning flow."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ProvisionError):
    """Required selection or amount is missing or malformed."""


class ExistingPoolConflict(ProvisionError):
    """The pool for the pair already exists; ``pool_address`` names it."""

    def __init__(self, message: str, pool_address: str) -> None:
        super().__init__(message)
        self.pool_address = pool_address
        self.payload = message


class PoolExtractionFailure(ProvisionError):
    """An existing-pool rejection carried no usable pool address."""

    def __init__(self, payload: str = "") -> None:
        super().__init__(POOL_EXTRACTION_MESSAGE)
        self.payload = payload


class ApiRejection(ProvisionError):
    """Any other application-level rejection from the DEX API."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.payload = message
        self.status = status


class TransportFailure(ProvisionError):
    """Network, timeout or otherwise unclassified failure."""


class PreconditionFailure(ProvisionError):
    """Transaction assembly requested without a simulation or wallet."""


class AssemblyFailure(ProvisionError):
    """Router metadata or simulation data could not be turned into messages."""


class SubmissionFailure(ProvisionError):
    """The wallet rejected or the user cancelled the transaction."""


def is_existing_pool_error(payload: object) -> bool:
    """True only for the DEX API "pool already exists" rejection."""
    return (
        isinstance(payload, str)
        and EXISTING_POOL_CODE in payload
        and EXISTING_POOL_PHRASE in payload
    )


def extract_pool_address(payload: str) -> str | None:
    """Return the first address of the bracketed list in ``payload``.

    Examples:
        "... router: [EQabc, EQdef]" → "EQabc"
        "... router: []" → None
    """
    match = _BRACKETED_LIST_RE.search(payload)
    if not match or not match.group(1):
        return None
    first = match.group(1).split(",")[0].strip()
    return first or None


def classify_api_error(payload: object, status: int | None = None) -> ProvisionError:
    """Map a raw rejection payload onto the error taxonomy."""
    if not isinstance(payload, str):
        return TransportFailure(str(payload))

    if is_existing_pool_error(payload):
        pool_address = extract_pool_address(payload)
        if pool_address is None:
            return PoolExtractionFailure(payload)
        return ExistingPoolConflict(payload, pool_address)

    return ApiRejection(payload, status)
