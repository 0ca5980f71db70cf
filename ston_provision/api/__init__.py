from .client import StonApiClient

__all__ = ["StonApiClient"]
