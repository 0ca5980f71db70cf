from .tonconnect import TonConnectExporter

__all__ = ["TonConnectExporter"]
