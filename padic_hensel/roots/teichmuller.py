"""Teichmueller representatives of the residue field F_p inside Z_p."""

from typing import List, Optional

from ..core.context import PrecisionContext
from ..core.padic import PAdicValue
from ..core.poly import Poly
from .newton import newton_lift


def teichmuller_polynomial(prime: int) -> Poly:
    """x^p - x, whose roots in Z_p are the Teichmueller representatives."""
    coefficients = [0] * (prime + 1)
    coefficients[1] = -1
    coefficients[prime] = 1
    return Poly(coefficients)


def teichmuller_representatives(prime: int,
                                context: Optional[PrecisionContext] = None) -> List[PAdicValue]:
    """Return omega(0), ..., omega(p-1).

    omega(i) is the unique root of x^p - x congruent to i mod p. The list
    can be passed as ``representatives`` to ``PAdicValue.to_digit_string``.

    Args:
        prime: Prime of the field
        context: Precision context

    Returns:
        List of p representatives indexed by residue
    """
    poly = teichmuller_polynomial(prime)
    return [newton_lift(poly, i, prime, context=context) for i in range(prime)]
