"""Tests for Newton refinement and the generalized Hensel search."""

import pytest

from padic_hensel.core.context import PrecisionContext
from padic_hensel.core.errors import (
    DerivativeVanishesError,
    FieldMismatchError,
    RootDoesNotExistError,
    SearchInconclusiveError
)
from padic_hensel.core.padic import PAdicValue
from padic_hensel.core.poly import Poly
from padic_hensel.roots.hensel import (
    GeneralizedHenselSearch,
    HenselConfig,
    SearchStatus,
    find_root,
    generalized_hensel,
    lift_simple_roots,
    residue_roots
)
from padic_hensel.roots.newton import newton_lift
from padic_hensel.roots.teichmuller import teichmuller_polynomial, teichmuller_representatives


class TestNewton:
    """Test Newton lifting of simple roots."""

    def setup_method(self):
        self.ctx = PrecisionContext(precision=40)
        self.poly = Poly([-1, 0, 1])  # x^2 - 1

    def test_lift_to_minus_one(self):
        root = newton_lift(self.poly, 4, 5, context=self.ctx)
        assert root == -1
        assert self.poly(root).is_zero()

    def test_exact_seed_is_fixed_point(self):
        root = newton_lift(self.poly, 1, 5, context=self.ctx)
        assert root == 1

    def test_square_root_of_two_in_q7(self):
        """x^2 = 2 has roots congruent to 3 and 4 mod 7."""
        poly = Poly([-2, 0, 1])
        root = newton_lift(poly, 3, 7, context=self.ctx)
        assert root * root == 2
        assert root.unit % 7 == 3

    def test_padic_seed(self):
        seed = PAdicValue.from_int(4, 5, self.ctx)
        assert newton_lift(self.poly, seed, 5, context=self.ctx) == -1
        with pytest.raises(FieldMismatchError):
            newton_lift(self.poly, seed, 7, context=self.ctx)

    def test_repeated_root_seed(self):
        """Seeds where f' vanishes mod p are rejected."""
        with pytest.raises(DerivativeVanishesError):
            newton_lift(Poly([0, 0, 1]), 0, 3, context=self.ctx)
        with pytest.raises(DerivativeVanishesError):
            newton_lift(self.poly, 1, 2, context=self.ctx)

    def test_non_simple_seed_allowed_when_requested(self):
        """Generalized hand-off only needs f'(seed) != 0."""
        poly = Poly([-17, 0, 1])
        root = newton_lift(poly, 1, 2, context=self.ctx, require_simple=False)
        assert (root * root - 17).valuation >= self.ctx.precision - 2

    def test_rounds_bound(self):
        """One round from 4 gives 17/8, which agrees with -1 mod 25."""
        root = newton_lift(self.poly, 4, 5, context=self.ctx, rounds=1)
        assert (root + 1).valuation >= 2
        assert not self.poly(root).is_zero()


class TestResidues:
    """Test enumeration of residues."""

    def test_roots_mod_five(self):
        assert residue_roots(Poly([-1, 0, 1]), 5) == [1, 4]

    def test_roots_mod_prime_power(self):
        assert residue_roots(Poly([-1, 0, 1]), 5, 2) == [1, 24]
        assert residue_roots(Poly([-17, 0, 1]), 2, 4) == [1, 7, 9, 15]

    def test_no_roots(self):
        assert residue_roots(Poly([1, 0, 1]), 3) == []


class TestHenselSearch:
    """Test the search-then-refine root finder."""

    def setup_method(self):
        self.ctx = PrecisionContext(precision=40, hensel_depth=4)

    def test_square_roots_of_one(self):
        """x^2 - 1 over Q_5: residues 1 and 4, both lift."""
        poly = Poly([-1, 0, 1])
        outcome = generalized_hensel(poly, 3, 5, context=self.ctx)

        assert outcome.status is SearchStatus.FOUND
        assert outcome.found
        assert outcome.level == 0
        assert outcome.residue == 1
        assert outcome.candidates == (1, 4)
        assert outcome.root == 1
        assert poly(outcome.root).is_zero()
        assert outcome.unwrap() is outcome.root

        roots = lift_simple_roots(poly, 5, context=self.ctx)
        assert len(roots) == 2
        assert sorted(r.unit % 5 for r in roots) == [1, 4]
        for root in roots:
            assert poly(root).is_zero()
        assert roots[1] == -1

    def test_no_root_in_q3(self):
        """x^2 + 1 has no root in Q_3."""
        poly = Poly([1, 0, 1])
        outcome = generalized_hensel(poly, 5, 3, context=self.ctx)

        assert outcome.status is SearchStatus.PROVEN_ABSENT
        assert outcome.proven_absent
        assert not outcome.inconclusive
        assert outcome.root is None
        with pytest.raises(RootDoesNotExistError):
            outcome.unwrap()
        with pytest.raises(RootDoesNotExistError):
            find_root(poly, 3, context=self.ctx)

    def test_square_root_of_minus_one_in_q5(self):
        poly = Poly([1, 0, 1])
        root = find_root(poly, 5, context=self.ctx)
        assert root * root == -1
        assert root.unit % 5 == 2

    def test_generalized_case(self):
        """sqrt(17) in Q_2 needs a residue whose derivative has valuation 1."""
        poly = Poly([-17, 0, 1])
        outcome = generalized_hensel(poly, 3, 2, context=self.ctx)

        assert outcome.found
        assert outcome.level == 1
        assert outcome.residue == 1
        assert outcome.candidates == (1, 5, 3, 7)
        root = outcome.root
        assert root.valuation == 0
        assert (root * root - 17).valuation >= self.ctx.precision - 2

    def test_inconclusive_is_not_absence(self):
        """x^2 has the double root 0, which the search cannot certify."""
        poly = Poly([0, 0, 1])
        outcome = generalized_hensel(poly, 3, 3, context=self.ctx)

        assert outcome.status is SearchStatus.INCONCLUSIVE
        assert not outcome.proven_absent
        assert outcome.reason
        assert 0 in outcome.candidates
        with pytest.raises(SearchInconclusiveError):
            outcome.unwrap()

    def test_constant_polynomial(self):
        outcome = generalized_hensel(Poly([25]), 5, 5, context=self.ctx)
        assert outcome.proven_absent
        assert outcome.level == 1

    def test_non_integral_root_not_searched(self):
        """5x - 1 has the root 1/5 in Q_5 but none in Z_5."""
        poly = Poly([-1, 5])
        outcome = generalized_hensel(poly, 4, 5, context=self.ctx)
        assert outcome.proven_absent
        assert poly(PAdicValue.from_rational(1, 5, 5, self.ctx)).is_zero()
        with pytest.raises(RootDoesNotExistError, match="Z_5"):
            outcome.unwrap()

    def test_zero_polynomial(self):
        outcome = generalized_hensel(Poly([]), 2, 5, context=self.ctx)
        assert outcome.found
        assert outcome.root.is_zero()

    def test_rational_root(self):
        """3x - 1 has the root 1/3 in Q_5."""
        root = find_root(Poly([-1, 3]), 5, context=self.ctx)
        assert root == PAdicValue.from_rational(1, 3, 5, self.ctx)

    def test_search_class(self):
        search = GeneralizedHenselSearch(HenselConfig(max_depth=2), self.ctx)
        outcome = search.search(Poly([-3, 1]), 7)
        assert outcome.found
        assert outcome.root == 3

    def test_newton_rounds_config(self):
        search = GeneralizedHenselSearch(HenselConfig(max_depth=2, newton_rounds=0), self.ctx)
        outcome = search.search(Poly([-2, 0, 1]), 7)
        assert outcome.root == 3

    def test_non_prime(self):
        with pytest.raises(ValueError):
            generalized_hensel(Poly([-1, 0, 1]), 2, 4)


class TestTeichmuller:
    """Test Teichmueller representatives."""

    def setup_method(self):
        self.ctx = PrecisionContext(precision=30)

    def test_polynomial(self):
        assert teichmuller_polynomial(3) == Poly([0, -1, 0, 1])

    def test_representatives(self):
        """omega(i)^p == omega(i) and omega(i) == i mod p."""
        p = 7
        reps = teichmuller_representatives(p, self.ctx)
        assert len(reps) == p
        assert reps[0].is_zero()
        assert reps[1] == 1
        assert reps[p - 1] == -1
        for i, rep in enumerate(reps[1:], start=1):
            assert rep ** p == rep
            assert rep.unit % p == i
            assert rep.valuation == 0


if __name__ == "__main__":
    pytest.main([__file__])
