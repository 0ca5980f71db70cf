from .factory import DexContracts, dex_factory
from .pton_v1 import ProxyTonV1
from .router_v1 import RouterV1

__all__ = ["DexContracts", "ProxyTonV1", "RouterV1", "dex_factory"]
