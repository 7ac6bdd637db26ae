from .core.padic import PAdicValue, padic
from .core.poly import Poly
from .core.context import PrecisionContext, set_precision, get_precision
from .roots.newton import newton_lift
from .roots.hensel import generalized_hensel, find_root, SearchOutcome, SearchStatus

__version__ = "0.1.0"
