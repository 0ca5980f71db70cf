"""Liquidity provision simulation and transaction assembly for STON.fi pools."""

__version__ = "0.1.0"
