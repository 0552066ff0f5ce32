# src/rdsearch/numerics/__init__.py
"""
Numerical building blocks (advanced API).

Top-level package `rdsearch` exposes the everyday search API
(`find_zero`, `discrete_minimize`). This subpackage exposes the bracketed
root methods those build on; the bracket search itself lives in
`rdsearch.numerics.bracketing`.
"""

from .root_finding import (
    DEFAULT_TOL,
    NoBracketError,
    NoConvergenceError,
    NotBracketedError,
    RootFindingError,
    RootMethod,
    RootResult,
    bisection_method,
    brent_method,
    get_root_method,
)

__all__ = [
    "DEFAULT_TOL",
    "RootMethod",
    "RootResult",
    "bisection_method",
    "brent_method",
    "get_root_method",
    "RootFindingError",
    "NotBracketedError",
    "NoBracketError",
    "NoConvergenceError",
]
