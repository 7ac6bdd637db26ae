"""Base-p digit strings and digit expansions.

Digits are written most significant first with at most one radix point,
using the alphabet 0-9A-Z. Expansions are produced least significant first
and reversed once when rendered.
"""

import string
from collections.abc import Sequence
from typing import List, Optional, Tuple

import numpy as np

from .errors import ParseError, UnsupportedPrimeError

DIGIT_ALPHABET = string.digits + string.ascii_uppercase
MAX_PRINTABLE_PRIME = 31
COMPACT_MAX_DIGITS = 284


def char_to_digit(char: str, text: str, prime: int) -> int:
    """Convert one digit character, validating it against the prime."""
    value = DIGIT_ALPHABET.find(char)
    if value < 0:
        raise ParseError(text, prime, f"unexpected character {char!r}")
    if value >= prime:
        raise ParseError(text, prime, f"digit {char!r} is not below {prime}")
    return value


def parse_digits(text: str, prime: int) -> Tuple[int, int]:
    """Parse a base-``prime`` digit string.

    The digit left of the radix point (or the last digit) has weight
    ``prime ** 0``. Trailing zeros raise the valuation, fractional digits
    lower it.

    Args:
        text: Digit string, e.g. ``"3401.2"``
        prime: Base of the expansion

    Returns:
        (unit, valuation); unit is 0 for an all-zero string
    """
    if text.count('.') > 1:
        raise ParseError(text, prime, "more than one radix point")
    integer_part, _, fraction_part = text.partition('.')
    values = [char_to_digit(c, text, prime) for c in integer_part + fraction_part]
    if not values:
        raise ParseError(text, prime, "no digits")

    valuation = -len(fraction_part)
    while values and values[-1] == 0:
        values.pop()
        valuation += 1
    if not values:
        return 0, 0

    unit = 0
    for value in values:
        unit = unit * prime + value
    return unit, valuation


class DigitExpansion(Sequence):
    """Lazy base-p digits of a unit, least significant first.

    Restartable: every iteration recomputes the digits from the unit.
    Negative units expand p-adically (e.g. -1 gives p-1, p-1, ...).
    """

    def __init__(self, unit: int, prime: int, length: int):
        self.unit = unit
        self.prime = prime
        self.length = length

    def __len__(self) -> int:
        return self.length

    def __iter__(self):
        remainder = self.unit
        for _ in range(self.length):
            remainder, digit = divmod(remainder, self.prime)
            yield digit

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(self.length))]
        if index < 0:
            index += self.length
        if not 0 <= index < self.length:
            raise IndexError("digit index out of range")
        return (self.unit // self.prime ** index) % self.prime

    def to_array(self) -> np.ndarray:
        """Digits as a numpy array (object dtype for primes beyond int64)."""
        if self.prime <= np.iinfo(np.int64).max:
            return np.fromiter(self, dtype=np.int64, count=self.length)
        return np.array(list(self), dtype=object)

    def __repr__(self) -> str:
        return f"DigitExpansion(prime={self.prime}, length={self.length})"


def check_printable(prime: int):
    if prime > MAX_PRINTABLE_PRIME:
        raise UnsupportedPrimeError(prime, MAX_PRINTABLE_PRIME)


def representative_residues(representatives, prime: int, modulus: int) -> List[int]:
    """Integer residues mod ``modulus`` of a set of digit representatives.

    Args:
        representatives: ``prime`` p-adic integers, the i-th congruent to i mod p
        prime: Prime of the field
        modulus: Truncation modulus

    Returns:
        List of residues indexed by digit
    """
    if len(representatives) != prime:
        raise ValueError(f"Expected {prime} representatives, got {len(representatives)}")

    residues = []
    for i, rep in enumerate(representatives):
        if rep.unit == 0:
            residue = 0
        elif rep.valuation < 0:
            raise ValueError(f"Representative {i} is not a p-adic integer")
        else:
            residue = rep.unit * pow(prime, rep.valuation, modulus) % modulus
        if residue % prime != i:
            raise ValueError(f"Representative {i} is not congruent to {i} mod {prime}")
        residues.append(residue)
    return residues


def format_digits(unit: int,
                  valuation,
                  prime: int,
                  digits: int,
                  residues: Optional[List[int]] = None) -> str:
    """Render exactly ``digits`` characters of a p-adic value.

    Positive valuations contribute low-order zeros; a radix point is placed
    between the digits of weight p^0 and p^-1.

    Args:
        unit: Unit of the value (0 for zero)
        valuation: Valuation of the value
        prime: Prime (at most 31)
        digits: Number of digit characters
        residues: Optional digit representatives (see ``representative_residues``)

    Returns:
        Digit string, most significant first
    """
    check_printable(prime)
    if unit == 0:
        return '0' * digits

    chars = []
    if valuation > 0:
        chars.extend('0' * min(valuation, digits))
    position = valuation
    remainder = unit
    for _ in range(digits - len(chars)):
        digit = remainder % prime
        subtrahend = residues[digit] if residues is not None else digit
        remainder = (remainder - subtrahend) // prime
        chars.append(DIGIT_ALPHABET[digit])
        position += 1
        if position == 0:
            chars.append('.')
    return ''.join(reversed(chars))


def format_compact(unit: int, valuation, prime: int,
                   max_digits: int = COMPACT_MAX_DIGITS) -> str:
    """Render a value without trailing padding, stopping once the unit is exhausted."""
    check_printable(prime)
    if unit == 0:
        return '0'

    chars = []
    if valuation > 0:
        chars.extend('0' * min(valuation, max_digits))
    position = valuation
    remainder = unit
    for _ in range(max_digits - len(chars)):
        remainder, digit = divmod(remainder, prime)
        chars.append(DIGIT_ALPHABET[digit])
        position += 1
        if position == 0:
            chars.append('.')
        if remainder == 0:
            if position < 0:
                chars.extend('0' * -position)
                chars.append('.')
            if position <= 0:
                chars.append('0')
            break
    return ''.join(reversed(chars))
