"""Maps router metadata to versioned contract handles."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from ..errors import AssemblyFailure
from ..interfaces.chain import ChainClient
from ..interfaces.dex_contracts import ProxyTonContract, RouterContract
from ..models import RouterMetadata
from .pton_v1 import ProxyTonV1
from .router_v1 import RouterV1

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DexContracts:
    router: RouterContract
    pton: ProxyTonContract


# Registry of contract factories keyed by router major version.
_VERSION_FACTORIES: dict[int, Callable[[ChainClient, RouterMetadata], Any]] = {
    1: lambda client, meta: DexContracts(
        router=RouterV1(client, meta.address),
        pton=ProxyTonV1(
            client,
            meta.pton_master_address,
            known_wallets=(
                {meta.address: meta.pton_wallet_address}
                if meta.pton_wallet_address
                else None
            ),
        ),
    ),
}


def dex_factory(metadata: RouterMetadata, chain_client: ChainClient) -> DexContracts:
    """Create router and proxy handles for the router's contract version."""
    factory = _VERSION_FACTORIES.get(metadata.major_version)
    if factory is None:
        raise AssemblyFailure(
            f"Unsupported router version {metadata.major_version}."
            f"{metadata.minor_version} for {metadata.address}"
        )
    logger.debug(
        "Using v%d.%d contracts for router %s",
        metadata.major_version, metadata.minor_version, metadata.address,
    )
    return factory(chain_client, metadata)
