"""P-adic numbers with finite relative precision.

A nonzero element of Q_p is stored as ``unit * prime ** valuation`` with
``unit`` not divisible by ``prime``. Zero has unit 0 and valuation +inf.
Arithmetic truncates units modulo ``prime ** precision`` taken from the
value's PrecisionContext.
"""

import math
import warnings
from dataclasses import dataclass, field
from fractions import Fraction
from functools import lru_cache
from typing import List, Optional, Union

from .context import PrecisionContext, resolve_context
from .digits import (
    DigitExpansion,
    MAX_PRINTABLE_PRIME,
    format_compact,
    format_digits,
    parse_digits,
    representative_residues,
)
from .errors import DivisionByZeroError, FieldMismatchError

INF_VALUATION = math.inf

Valuation = Union[int, float]


@lru_cache(maxsize=256)
def is_prime(n: int) -> bool:
    """Check if n is prime."""
    if n < 2:
        return False
    for i in range(2, math.isqrt(n) + 1):
        if n % i == 0:
            return False
    return True


def _check_prime(prime: int):
    if not is_prime(prime):
        raise ValueError(f"{prime} is not prime")


@dataclass(frozen=True, eq=False)
class PAdicValue:
    """Element of Q_p, ``unit * prime ** valuation``.

    The explicit constructor trusts its arguments: ``unit`` must not be
    divisible by ``prime`` unless it is 0. Use ``from_int``, ``from_rational``
    or ``from_digits`` for normalized construction.
    """
    unit: int
    valuation: Valuation
    prime: int
    context: Optional[PrecisionContext] = field(default=None, repr=False)

    def __post_init__(self):
        if self.unit == 0:
            object.__setattr__(self, 'valuation', INF_VALUATION)
        if self.context is None:
            object.__setattr__(self, 'context', resolve_context(None))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def zero(cls, prime: int, context: Optional[PrecisionContext] = None) -> 'PAdicValue':
        return cls(0, INF_VALUATION, prime, context)

    @classmethod
    def one(cls, prime: int, context: Optional[PrecisionContext] = None) -> 'PAdicValue':
        return cls(1, 0, prime, context)

    @classmethod
    def from_int(cls, n: int, prime: int,
                 context: Optional[PrecisionContext] = None) -> 'PAdicValue':
        """Factor all powers of ``prime`` out of ``n``.

        Args:
            n: Integer value
            prime: Prime of the field

        Returns:
            Normalized p-adic value
        """
        _check_prime(prime)
        if n == 0:
            return cls.zero(prime, context)
        valuation = 0
        while n % prime == 0:
            n //= prime
            valuation += 1
        return cls(n, valuation, prime, context)

    @classmethod
    def from_rational(cls, numerator: int, denominator: int, prime: int,
                      context: Optional[PrecisionContext] = None) -> 'PAdicValue':
        """Construct numerator / denominator in Q_p."""
        return (cls.from_int(numerator, prime, context)
                .div(cls.from_int(denominator, prime, context)))

    @classmethod
    def from_fraction(cls, value: Fraction, prime: int,
                      context: Optional[PrecisionContext] = None) -> 'PAdicValue':
        return cls.from_rational(value.numerator, value.denominator, prime, context)

    @classmethod
    def from_digits(cls, text: str, prime: int,
                    context: Optional[PrecisionContext] = None) -> 'PAdicValue':
        """Parse a base-``prime`` digit string such as ``"2301.14"``."""
        _check_prime(prime)
        unit, valuation = parse_digits(text, prime)
        return cls(unit, valuation, prime, context)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.unit == 0

    def is_unit(self) -> bool:
        """True for elements of Z_p^x (valuation 0)."""
        return self.valuation == 0

    def norm(self) -> float:
        """p-adic absolute value ``p ** -valuation`` (0.0 for zero)."""
        return float(self.prime) ** (-self.valuation)

    def distance(self, other) -> float:
        """Ultrametric distance ``|self - other|_p``."""
        return self.sub(other).norm()

    def digits(self) -> DigitExpansion:
        """Base-p digits of the unit up to the working precision."""
        return DigitExpansion(self.unit, self.prime, self.context.precision)

    def _modulus(self) -> int:
        return self.context.truncation_modulus(self.prime)

    def _coerce(self, other) -> 'PAdicValue':
        if isinstance(other, PAdicValue):
            if other.prime != self.prime:
                raise FieldMismatchError(self.prime, other.prime)
            return other
        if isinstance(other, int):
            return PAdicValue.from_int(other, self.prime, self.context)
        if isinstance(other, Fraction):
            return PAdicValue.from_fraction(other, self.prime, self.context)
        raise TypeError(f"Cannot convert {type(other).__name__} to a {self.prime}-adic number")

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, other) -> 'PAdicValue':
        """Sum of two p-adic values.

        The operand with the larger valuation is scaled by p^|d| so both
        units share the smaller valuation, then the factors of p gained by
        the sum are stripped back into the valuation.
        """
        other = self._coerce(other)
        if other.is_zero():
            return self
        if self.is_zero():
            return other

        p = self.prime
        modulus = self._modulus()
        diff = self.valuation - other.valuation
        shift = pow(p, abs(diff), modulus)
        if diff < 0:
            total = self.unit + other.unit * shift
        else:
            total = other.unit + self.unit * shift
        total %= modulus
        if total == 0:
            return PAdicValue.zero(p, self.context)

        valuation = min(self.valuation, other.valuation)
        while total % p == 0:
            total //= p
            valuation += 1
        return PAdicValue(total, valuation, p, self.context)

    def mul(self, other) -> 'PAdicValue':
        """Product; valuations add and units multiply modulo p^precision."""
        other = self._coerce(other)
        if self.is_zero() or other.is_zero():
            return PAdicValue.zero(self.prime, self.context)
        unit = self.unit * other.unit % self._modulus()
        return PAdicValue(unit, self.valuation + other.valuation, self.prime, self.context)

    def neg(self) -> 'PAdicValue':
        """Additive inverse modulo p^precision."""
        if self.is_zero():
            return self
        modulus = self._modulus()
        return PAdicValue(modulus - self.unit % modulus, self.valuation,
                          self.prime, self.context)

    def sub(self, other) -> 'PAdicValue':
        return self.add(self._coerce(other).neg())

    def inv(self) -> 'PAdicValue':
        """Multiplicative inverse by Newton-Hensel lifting of the unit.

        Starts from the Fermat inverse mod p and applies
        ``u <- u * (2 - a * u)``, squaring the working modulus each round,
        until it exceeds p^precision.
        """
        if self.is_zero():
            raise DivisionByZeroError(f"Zero has no inverse in Q_{self.prime}")

        p = self.prime
        rounds = self.context.precision.bit_length()
        inverse = pow(self.unit % p, p - 2, p)
        working = p
        for _ in range(rounds):
            working *= working
            inverse = inverse * (2 - self.unit * inverse) % working

        return PAdicValue(inverse % self._modulus(), -self.valuation, p, self.context)

    def div(self, other) -> 'PAdicValue':
        other = self._coerce(other)
        if other.is_zero():
            raise DivisionByZeroError("Division by zero")
        return self.mul(other.inv())

    def pow(self, exponent: int) -> 'PAdicValue':
        """Integer power by repeated squaring; negative exponents invert."""
        if exponent < 0:
            return self.inv().pow(-exponent)
        result = PAdicValue.one(self.prime, self.context)
        base = self
        while exponent:
            if exponent & 1:
                result = result.mul(base)
            base = base.mul(base)
            exponent >>= 1
        return result

    # Operator overloads

    def __add__(self, other):
        if not isinstance(other, (PAdicValue, int, Fraction)):
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other):
        if not isinstance(other, (PAdicValue, int, Fraction)):
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other):
        if not isinstance(other, (int, Fraction)):
            return NotImplemented
        return self._coerce(other).sub(self)

    def __mul__(self, other):
        if not isinstance(other, (PAdicValue, int, Fraction)):
            return NotImplemented
        return self.mul(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if not isinstance(other, (PAdicValue, int, Fraction)):
            return NotImplemented
        return self.div(other)

    def __rtruediv__(self, other):
        if not isinstance(other, (int, Fraction)):
            return NotImplemented
        return self._coerce(other).div(self)

    def __neg__(self):
        return self.neg()

    def __pow__(self, exponent):
        if not isinstance(exponent, int):
            return NotImplemented
        return self.pow(exponent)

    def __bool__(self) -> bool:
        return not self.is_zero()

    # ------------------------------------------------------------------
    # Comparison and formatting
    # ------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        """Equality up to the coarser truncation precision of the two operands.

        Ints and Fractions compare after conversion to Q_p, so ``x == 3``
        holds for ``x = padic(3, p)``. Such comparisons are congruences, not
        identities: many integers equal the same value, and their hashes
        differ from the value's hash. Use PAdicValue keys (not ints) in
        sets and dicts.
        """
        if isinstance(other, (int, Fraction)):
            other = self._coerce(other)
        if not isinstance(other, PAdicValue):
            return NotImplemented
        if self.prime != other.prime:
            return False
        if self.is_zero() or other.is_zero():
            return self.is_zero() and other.is_zero()
        modulus = min(self._modulus(), other._modulus())
        return (self.valuation == other.valuation
                and (self.unit - other.unit) % modulus == 0)

    def __hash__(self) -> int:
        # Only the leading digit is stable under truncation.
        return hash((self.prime, self.valuation, self.unit % self.prime))

    def to_digit_string(self, digits: Optional[int] = None,
                        representatives: Optional[List['PAdicValue']] = None) -> str:
        """Render a fixed number of digits, most significant first.

        Args:
            digits: Number of digit characters (context default if None)
            representatives: Optional digit set, the i-th congruent to i mod p
                (e.g. Teichmueller representatives)

        Returns:
            Digit string with a radix point at valuation 0
        """
        if digits is None:
            digits = self.context.print_digits
        if digits > self.context.precision:
            warnings.warn(f"Requested {digits} digits but precision is "
                          f"{self.context.precision}; high digits are not significant")
        modulus = self._modulus()
        residues = None
        if representatives is not None:
            residues = representative_residues(representatives, self.prime, modulus)
        return format_digits(self.unit % modulus, self.valuation, self.prime,
                             digits, residues)

    def __str__(self) -> str:
        if self.prime > MAX_PRINTABLE_PRIME:
            return repr(self)
        return format_compact(self.unit % self._modulus(), self.valuation, self.prime)


def padic(value, prime: int, context: Optional[PrecisionContext] = None) -> PAdicValue:
    """Build a p-adic value from a digit string, int, Fraction or PAdicValue.

    Args:
        value: Source value
        prime: Prime of the field
        context: Precision context (process default if None)

    Returns:
        PAdicValue over Q_prime
    """
    if isinstance(value, PAdicValue):
        if value.prime != prime:
            raise FieldMismatchError(prime, value.prime)
        return value
    if isinstance(value, str):
        return PAdicValue.from_digits(value, prime, context)
    if isinstance(value, Fraction):
        return PAdicValue.from_fraction(value, prime, context)
    if isinstance(value, int):
        return PAdicValue.from_int(value, prime, context)
    raise TypeError(f"Cannot build a p-adic number from {type(value).__name__}")
