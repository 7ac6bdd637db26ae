"""Newton refinement of approximate roots to full p-adic precision."""

import logging
from typing import Optional, Union

from ..core.context import PrecisionContext, resolve_context
from ..core.errors import DerivativeVanishesError, FieldMismatchError
from ..core.padic import PAdicValue
from ..core.poly import Poly

logger = logging.getLogger(__name__)


def newton_lift(poly: Poly,
                seed: Union[int, PAdicValue],
                prime: int,
                context: Optional[PrecisionContext] = None,
                rounds: Optional[int] = None,
                require_simple: bool = True) -> PAdicValue:
    """Lift a root of ``poly`` from ``seed`` by Newton iteration in Q_p.

    Each round computes ``x - f(x) / f'(x)`` with p-adic division, which
    at least doubles the number of correct digits for a simple root.

    Args:
        poly: Polynomial f
        seed: Approximate root (integer or p-adic)
        prime: Prime of the field
        context: Precision context (process default if None)
        rounds: Iteration bound (defaults to the context precision)
        require_simple: Require f'(seed) to be a unit. The generalized
            Hensel search hands over seeds with f'(seed) of positive
            valuation and only requires it to be nonzero.

    Returns:
        Root of f to the working precision
    """
    context = resolve_context(context)
    derivative = poly.derivative()

    if isinstance(seed, PAdicValue):
        if seed.prime != prime:
            raise FieldMismatchError(prime, seed.prime)
        x = seed
        slope = derivative.evaluate(seed)
        vanishes = (slope.valuation > 0) if require_simple else slope.is_zero()
    else:
        x = PAdicValue.from_int(seed, prime, context)
        if require_simple:
            vanishes = derivative.evaluate(seed, prime) == 0
        else:
            vanishes = derivative.evaluate(seed) == 0
    if vanishes:
        raise DerivativeVanishesError(
            f"Derivative of {poly} vanishes at seed {seed} in Q_{prime}")

    if rounds is None:
        rounds = context.precision

    for step in range(rounds):
        value = poly.evaluate(x)
        if value.is_zero():
            logger.debug("Newton iteration for %s reached a fixed point after %d rounds",
                         poly, step)
            break
        x = x.sub(value.div(derivative.evaluate(x)))
    return x
