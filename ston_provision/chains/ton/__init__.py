from .client import TonClient

__all__ = ["TonClient"]
