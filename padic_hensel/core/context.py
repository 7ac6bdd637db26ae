"""Precision bookkeeping for truncated p-adic arithmetic.

Every p-adic value carries only finitely many digits. The truncation
modulus ``prime ** precision`` ("almost zero") is the point beyond which
digits are dropped; it is cached per ``(prime, precision)`` pair so that
values over different primes can be mixed freely in one session.
"""

from typing import Dict, NamedTuple, Optional, Tuple

from .errors import InvalidPrecisionError

DEFAULT_PRECISION = 1000


class PrecisionConfig(NamedTuple):
    """Configuration for a computation session."""
    precision: int = DEFAULT_PRECISION  # Significant p-adic digits
    print_digits: int = 20  # Default width of digit strings
    hensel_depth: int = 10  # Default search bound for root finding


class PrecisionContext:
    """Holds the working precision and the truncation moduli derived from it.

    The context is shared mutable state: a single writer is assumed.
    """

    def __init__(self, precision: int = DEFAULT_PRECISION,
                 print_digits: int = 20,
                 hensel_depth: int = 10):
        """Initialize context.

        Args:
            precision: Number of significant p-adic digits
            print_digits: Default number of digits rendered by formatters
            hensel_depth: Default depth bound for the Hensel search
        """
        self._precision = _validate_precision(precision)
        self.print_digits = print_digits
        self.hensel_depth = hensel_depth
        self._moduli: Dict[Tuple[int, int], int] = {}

    @classmethod
    def from_config(cls, config: PrecisionConfig) -> 'PrecisionContext':
        return cls(precision=config.precision,
                   print_digits=config.print_digits,
                   hensel_depth=config.hensel_depth)

    def to_config(self) -> PrecisionConfig:
        return PrecisionConfig(precision=self._precision,
                               print_digits=self.print_digits,
                               hensel_depth=self.hensel_depth)

    @property
    def precision(self) -> int:
        """Number of significant p-adic digits."""
        return self._precision

    def set_precision(self, n: int):
        """Change the working precision.

        Values created earlier keep their units; only subsequent operations
        truncate at the new modulus. Moduli cached for other precisions are
        dropped.

        Args:
            n: New precision (positive)
        """
        self._precision = _validate_precision(n)
        self._moduli = {key: modulus for key, modulus in self._moduli.items()
                        if key[1] == self._precision}

    def truncation_modulus(self, prime: int) -> int:
        """Return ``prime ** precision`` for the current precision."""
        key = (prime, self._precision)
        modulus = self._moduli.get(key)
        if modulus is None:
            modulus = prime ** self._precision
            self._moduli[key] = modulus
        return modulus

    def clear_cache(self):
        self._moduli.clear()

    def __repr__(self) -> str:
        return (f"PrecisionContext(precision={self._precision}, "
                f"cached_moduli={len(self._moduli)})")


def _validate_precision(n) -> int:
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidPrecisionError(f"Precision must be an integer, got {n!r}")
    if n <= 0:
        raise InvalidPrecisionError(f"Non-positive precision: {n}")
    return n


_default_context = PrecisionContext()


def get_default_context() -> PrecisionContext:
    """Process-wide context used when none is given explicitly."""
    return _default_context


def resolve_context(context: Optional[PrecisionContext]) -> PrecisionContext:
    return context if context is not None else _default_context


def set_precision(n: int):
    """Set the precision of the process-wide context."""
    _default_context.set_precision(n)


def get_precision() -> int:
    """Precision of the process-wide context."""
    return _default_context.precision
