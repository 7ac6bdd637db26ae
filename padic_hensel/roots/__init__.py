"""Polynomial root finding over Q_p."""

from .newton import newton_lift
from .hensel import (
    GeneralizedHenselSearch,
    HenselConfig,
    SearchOutcome,
    SearchStatus,
    generalized_hensel,
    find_root,
    residue_roots,
    lift_simple_roots
)
from .teichmuller import teichmuller_polynomial, teichmuller_representatives

__all__ = [
    'newton_lift',
    'GeneralizedHenselSearch',
    'HenselConfig',
    'SearchOutcome',
    'SearchStatus',
    'generalized_hensel',
    'find_root',
    'residue_roots',
    'lift_simple_roots',
    'teichmuller_polynomial',
    'teichmuller_representatives'
]
