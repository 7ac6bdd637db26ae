"""Integer polynomials Z[x] evaluated at integers or p-adic points."""

from typing import Iterable, Optional, Tuple

from .padic import PAdicValue


class Poly:
    """Polynomial with integer coefficients, ``coefficients[i]`` of x^i.

    Trailing zero coefficients are trimmed; the zero polynomial has
    degree -1.
    """

    def __init__(self, coefficients: Iterable[int]):
        coefficients = [int(c) for c in coefficients]
        while coefficients and coefficients[-1] == 0:
            coefficients.pop()
        self._coefficients: Tuple[int, ...] = tuple(coefficients)

    @property
    def coefficients(self) -> Tuple[int, ...]:
        return self._coefficients

    @property
    def degree(self) -> int:
        return len(self._coefficients) - 1

    def is_zero(self) -> bool:
        return not self._coefficients

    def evaluate(self, x, modulus: Optional[int] = None):
        """Evaluate by Horner's rule.

        Args:
            x: Integer or PAdicValue
            modulus: For integer points, reduce into [0, modulus)

        Returns:
            int for integer points, PAdicValue for p-adic points
        """
        if isinstance(x, PAdicValue):
            return self._evaluate_padic(x)

        if modulus is not None:
            x %= modulus
        result = 0
        for c in reversed(self._coefficients):
            result = result * x + c
            if modulus is not None:
                result %= modulus
        return result

    def _evaluate_padic(self, x: PAdicValue) -> PAdicValue:
        result = PAdicValue.zero(x.prime, x.context)
        for c in reversed(self._coefficients):
            result = result.mul(x).add(c)
        return result

    __call__ = evaluate

    def derivative(self) -> 'Poly':
        return Poly(i * c for i, c in enumerate(self._coefficients) if i > 0)

    def __add__(self, other: 'Poly') -> 'Poly':
        if not isinstance(other, Poly):
            return NotImplemented
        size = max(len(self._coefficients), len(other._coefficients))
        padded = self._coefficients + (0,) * (size - len(self._coefficients))
        other_padded = other._coefficients + (0,) * (size - len(other._coefficients))
        return Poly(a + b for a, b in zip(padded, other_padded))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Poly):
            return NotImplemented
        return self._coefficients == other._coefficients

    def __hash__(self) -> int:
        return hash(self._coefficients)

    def __str__(self) -> str:
        if self.is_zero():
            return "0"
        terms = []
        for i, c in enumerate(self._coefficients):
            if c == 0:
                continue
            if i == 0:
                terms.append(str(c))
            elif c == 1:
                terms.append(f"x^{i}")
            else:
                terms.append(f"{c}x^{i}")
        return " + ".join(terms)

    def __repr__(self) -> str:
        return f"Poly({list(self._coefficients)})"
