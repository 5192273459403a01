"""Fixed-point token amount formatting."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from freemarket_claims.models.market import TOKEN_DECIMALS


def format_tokens(amount: int, decimals: int = TOKEN_DECIMALS) -> str:
    """Format a fixed-point amount: 4 places under 0.01, 3 under 1, else 2.

    Exact ties round half up (1.025 -> "1.03").
    """
    value = Decimal(amount).scaleb(-decimals)
    if value < Decimal("0.01"):
        places = 4
    elif value < 1:
        places = 3
    else:
        places = 2
    return f"{value.quantize(Decimal(10) ** -places, rounding=ROUND_HALF_UP):.{places}f}"
