"""Protocol interfaces for the liquidity provisioning flow."""
from .asset_catalog import AssetCatalog
from .chain import ChainClient
from .dex_contracts import ProxyTonContract, RouterContract
from .quote_service import QuoteService
from .router_metadata import RouterMetadataService
from .wallet import WalletSigner

__all__ = [
    "AssetCatalog",
    "ChainClient",
    "ProxyTonContract",
    "QuoteService",
    "RouterContract",
    "RouterMetadataService",
    "WalletSigner",
]
