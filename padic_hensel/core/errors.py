"""Exceptions raised by p-adic arithmetic and root finding."""


class PAdicError(Exception):
    """Base class for all p-adic errors."""


class FieldMismatchError(PAdicError, ValueError):
    """Operands live in different fields Q_p and Q_q."""

    def __init__(self, prime: int, other_prime: int):
        self.prime = prime
        self.other_prime = other_prime
        super().__init__(f"Cannot combine elements of Q_{prime} and Q_{other_prime}")


class DivisionByZeroError(PAdicError, ZeroDivisionError):
    """Inversion or division by the zero value."""


class DerivativeVanishesError(PAdicError, ArithmeticError):
    """Newton seed is a repeated root (derivative vanishes at the seed)."""


class RootDoesNotExistError(PAdicError):
    """Hensel search exhausted every residue at some level (no root in Z_p)."""

    def __init__(self, poly, prime: int):
        self.poly = poly
        self.prime = prime
        super().__init__(f"Polynomial {poly} has no roots in Z_{prime}")


class SearchInconclusiveError(PAdicError):
    """Search depth exhausted without a definitive answer."""


class InvalidPrecisionError(PAdicError, ValueError):
    """Precision must be a positive integer."""


class ParseError(PAdicError, ValueError):
    """Malformed digit string."""

    def __init__(self, text: str, prime: int, detail: str = ""):
        self.text = text
        self.prime = prime
        message = f"Cannot parse string {text!r} to a {prime}-adic number"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class UnsupportedPrimeError(PAdicError, ValueError):
    """Prime too large for the printable digit alphabet."""

    def __init__(self, prime: int, limit: int):
        self.prime = prime
        self.limit = limit
        super().__init__(f"Cannot print digits for p = {prime} (p > {limit})")
