"""Root search in Z_p by the generalized Hensel lemma.

Only integral roots are searched: residues r with f(r) = 0 mod p^(2k+1)
are enumerated level by level. A non-monic polynomial may have roots of
negative valuation in Q_p that are reported as PROVEN_ABSENT here.

At level k a residue whose derivative has valuation exactly k satisfies
|f(r)| < |f'(r)|^2, so Newton iteration from r converges to a root.
"""

import logging
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from ..core.context import PrecisionContext, resolve_context
from ..core.errors import RootDoesNotExistError, SearchInconclusiveError
from ..core.padic import PAdicValue, is_prime
from ..core.poly import Poly
from .newton import newton_lift

logger = logging.getLogger(__name__)


class SearchStatus(Enum):
    """Terminal states of the Hensel search."""
    FOUND = "found"
    PROVEN_ABSENT = "proven_absent"
    INCONCLUSIVE = "inconclusive"


class SearchOutcome(NamedTuple):
    """Result of a root search."""
    status: SearchStatus
    poly: Poly
    prime: int
    root: Optional[PAdicValue] = None  # Lifted root (FOUND only)
    residue: Optional[int] = None  # Residue handed to Newton refinement
    level: int = -1  # Level at which the search stopped
    candidates: Tuple[int, ...] = ()  # Residues mod p^(2*level+1) at that level
    reason: str = ""

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    @property
    def proven_absent(self) -> bool:
        return self.status is SearchStatus.PROVEN_ABSENT

    @property
    def inconclusive(self) -> bool:
        return self.status is SearchStatus.INCONCLUSIVE

    def unwrap(self) -> PAdicValue:
        """Return the root or raise the error matching the outcome."""
        if self.status is SearchStatus.PROVEN_ABSENT:
            raise RootDoesNotExistError(self.poly, self.prime)
        if self.status is SearchStatus.INCONCLUSIVE:
            raise SearchInconclusiveError(self.reason)
        return self.root


class HenselConfig(NamedTuple):
    """Configuration for the generalized Hensel search."""
    max_depth: int = 10
    newton_rounds: Optional[int] = None  # None: context precision


def _refine(poly: Poly, residues: List[int], power: int, prime: int) -> List[int]:
    """Keep the lifts r + j*power of each residue that are roots mod power*prime."""
    modulus = power * prime
    lifted = []
    for r in residues:
        for j in range(prime):
            candidate = r + j * power
            if poly.evaluate(candidate, modulus) == 0:
                lifted.append(candidate)
    return lifted


def residue_roots(poly: Poly, prime: int, exponent: int = 1) -> List[int]:
    """All roots of ``poly`` modulo ``prime ** exponent``, ascending."""
    residues = [0]
    power = 1
    for _ in range(exponent):
        residues = _refine(poly, residues, power, prime)
        power *= prime
    return sorted(residues)


class GeneralizedHenselSearch:
    """Search-then-refine root finder.

    Two refinement passes per level; the residues entering the second pass
    are tested for the simple-root condition at that level.
    """

    def __init__(self,
                 config: Optional[HenselConfig] = None,
                 context: Optional[PrecisionContext] = None):
        """Initialize search.

        Args:
            config: Search configuration
            context: Precision context for the Newton refinement
        """
        self.config = config or HenselConfig()
        self.context = resolve_context(context)

    def search(self, poly: Poly, prime: int) -> SearchOutcome:
        """Find some root of ``poly`` in Z_prime.

        Args:
            poly: Integer polynomial
            prime: Prime of the field

        Returns:
            FOUND with the lifted root, PROVEN_ABSENT when every residue
            dies out (no root in Z_p), or INCONCLUSIVE when the depth
            bound runs out
        """
        if not is_prime(prime):
            raise ValueError(f"{prime} is not prime")
        if poly.is_zero():
            return SearchOutcome(SearchStatus.FOUND, poly, prime,
                                 root=PAdicValue.zero(prime, self.context),
                                 residue=0, level=0, candidates=(0,))

        derivative = poly.derivative()
        power = 1
        scale = 1
        current = [0]
        previous = current

        for level in range(self.config.max_depth + 1):
            for _ in range(2):
                previous = current
                current = _refine(poly, previous, power, prime)
                power *= prime
            logger.debug("Level %d: %d residues mod %d^%d",
                         level, len(previous), prime, 2 * level + 1)

            if not previous:
                logger.debug("No residues survive for %s in Z_%d", poly, prime)
                return SearchOutcome(SearchStatus.PROVEN_ABSENT, poly, prime,
                                     level=level,
                                     reason=f"no roots modulo {prime}^{2 * level + 1}")

            for r in previous:
                slope = derivative.evaluate(r, scale * prime)
                if slope % (scale * prime) != 0 and slope % scale == 0:
                    root = newton_lift(poly, r, prime,
                                       context=self.context,
                                       rounds=self.config.newton_rounds,
                                       require_simple=False)
                    return SearchOutcome(SearchStatus.FOUND, poly, prime,
                                         root=root, residue=r, level=level,
                                         candidates=tuple(previous))
            scale *= prime

        return SearchOutcome(SearchStatus.INCONCLUSIVE, poly, prime,
                             level=self.config.max_depth,
                             candidates=tuple(previous),
                             reason=(f"no liftable residue for {poly} in Z_{prime} "
                                     f"up to depth {self.config.max_depth}"))


def generalized_hensel(poly: Poly, depth: int, prime: int,
                       context: Optional[PrecisionContext] = None,
                       newton_rounds: Optional[int] = None) -> SearchOutcome:
    """Search for a root of ``poly`` checking levels 0..depth."""
    search = GeneralizedHenselSearch(HenselConfig(max_depth=depth,
                                                  newton_rounds=newton_rounds),
                                     context)
    return search.search(poly, prime)


def find_root(poly: Poly, prime: int, depth: Optional[int] = None,
              context: Optional[PrecisionContext] = None) -> PAdicValue:
    """Like ``generalized_hensel`` but raises instead of returning a status.

    Raises:
        RootDoesNotExistError: every residue died out
        SearchInconclusiveError: depth bound exhausted
    """
    context = resolve_context(context)
    if depth is None:
        depth = context.hensel_depth
    return generalized_hensel(poly, depth, prime, context).unwrap()


def lift_simple_roots(poly: Poly, prime: int,
                      context: Optional[PrecisionContext] = None) -> List[PAdicValue]:
    """Newton-lift every simple root of ``poly`` modulo ``prime``.

    Distinct simple residues lift to distinct roots in Z_p.
    """
    derivative = poly.derivative()
    roots = []
    for r in residue_roots(poly, prime, 1):
        if derivative.evaluate(r, prime) != 0:
            roots.append(newton_lift(poly, r, prime, context=context))
    return roots
