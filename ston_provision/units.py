"""Conversions between decimal amounts and integer base units."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, DecimalException, localcontext

from .models import Asset

DEFAULT_DECIMALS = 9
LP_DECIMALS = 9

_DISPLAY_QUANTUM = Decimal("0.01")

# Wide enough for 256-bit on-chain amounts
_PRECISION = 100


def decimals_of(asset: Asset | None) -> int:
    """Declared decimal precision of an asset, defaulting to 9."""
    if asset is None or asset.decimals is None:
        return DEFAULT_DECIMALS
    return asset.decimals


def _parse_decimal(amount: str) -> Decimal:
    try:
        value = Decimal(amount.strip())
    except DecimalException:
        raise ValueError(f"Invalid amount: {amount!r}") from None
    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")
    return value


def to_base_units(asset: Asset | None, amount: str) -> str:
    """Convert a human decimal amount into an integer base-unit string.

    Truncates toward zero. Returns ``"0"`` when the asset is missing or the
    amount is empty, so partially filled forms can be converted freely.

    Examples:
        to_base_units(<6 decimals>, "1.5") → "1500000"
    """
    if asset is None or not amount or not amount.strip():
        return "0"
    sign, digits, exponent = _parse_decimal(amount).as_tuple()
    coefficient = int("".join(map(str, digits)))
    shift = exponent + decimals_of(asset)

    if shift >= 0:
        if len(digits) + shift > _PRECISION:
            raise ValueError(f"Invalid amount: {amount!r} is too large")
        units = coefficient * 10**shift
    elif -shift >= len(digits):
        units = 0
    else:
        units = coefficient // 10**-shift

    return str(-units if sign and units else units)


def _format_units(base_units: str, decimals: int) -> str:
    try:
        units = int(base_units)
    except ValueError:
        raise ValueError(f"Invalid base units: {base_units!r}") from None
    with localcontext() as ctx:
        ctx.prec = max(_PRECISION, len(str(abs(units))) + 2)
        value = Decimal(units).scaleb(-decimals)
        return str(value.quantize(_DISPLAY_QUANTUM, rounding=ROUND_HALF_UP))


def from_base_units(asset: Asset | None, base_units: str) -> str:
    """Convert integer base units into a two-decimal display string.

    The display rounding is lossy: converting the result back with
    ``to_base_units`` only recovers the original for amounts with at most
    two significant fractional digits.
    """
    if asset is None or not base_units:
        return "0"
    return _format_units(base_units, decimals_of(asset))


def from_lp_base_units(base_units: str) -> str:
    """Same as ``from_base_units`` with the fixed LP token precision."""
    if not base_units:
        return "0"
    return _format_units(base_units, LP_DECIMALS)
