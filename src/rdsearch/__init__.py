"""
rdsearch

Search primitives for regression-discontinuity inference.

This package exposes the main user-facing functions at the top level, so you
can write, for example:

    from rdsearch import find_zero, discrete_minimize
"""

from .config import DiscreteSearchConfig, RootFindingConfig
from .data import (
    FuzzyRDData,
    LocalPointData,
    RDRecord,
    SharpRDData,
    check_class,
    frd_data,
    lpp_data,
    rd_data,
)
from .numerics.bracketing import BracketPolicy, find_zero, find_zero_result
from .numerics.discrete_search import (
    DiscreteSearchResult,
    discrete_minimize,
    discrete_minimize_result,
)
from .numerics.root_finding import RootResult

__all__ = [
    # Config
    "RootFindingConfig",
    "DiscreteSearchConfig",
    # Search
    "BracketPolicy",
    "RootResult",
    "find_zero",
    "find_zero_result",
    "DiscreteSearchResult",
    "discrete_minimize",
    "discrete_minimize_result",
    # Data
    "SharpRDData",
    "FuzzyRDData",
    "LocalPointData",
    "RDRecord",
    "rd_data",
    "frd_data",
    "lpp_data",
    "check_class",
]
