"""Core p-adic arithmetic primitives."""

from .errors import (
    PAdicError,
    FieldMismatchError,
    DivisionByZeroError,
    DerivativeVanishesError,
    RootDoesNotExistError,
    SearchInconclusiveError,
    InvalidPrecisionError,
    ParseError,
    UnsupportedPrimeError
)
from .context import (
    PrecisionConfig,
    PrecisionContext,
    get_default_context,
    set_precision,
    get_precision
)
from .digits import DigitExpansion, DIGIT_ALPHABET, MAX_PRINTABLE_PRIME
from .padic import PAdicValue, INF_VALUATION, padic, is_prime
from .poly import Poly

__all__ = [
    'PAdicError',
    'FieldMismatchError',
    'DivisionByZeroError',
    'DerivativeVanishesError',
    'RootDoesNotExistError',
    'SearchInconclusiveError',
    'InvalidPrecisionError',
    'ParseError',
    'UnsupportedPrimeError',
    'PrecisionConfig',
    'PrecisionContext',
    'get_default_context',
    'set_precision',
    'get_precision',
    'DigitExpansion',
    'DIGIT_ALPHABET',
    'MAX_PRINTABLE_PRIME',
    'PAdicValue',
    'INF_VALUATION',
    'padic',
    'is_prime',
    'Poly'
]
