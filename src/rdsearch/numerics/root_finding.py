from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
from scipy.optimize import brentq

# Absolute x-tolerance used for root refinement: eps ** 0.75.
DEFAULT_TOL = float(np.finfo(float).eps) ** 0.75

# ---------------------------
# Results + Exceptions
# ---------------------------


@dataclass(frozen=True, slots=True)
class RootResult:
    root: float
    converged: bool
    iterations: int
    method: str
    f_at_root: float
    bracket: tuple[float, float] | None = None


class RootFindingError(Exception):
    """Base class for root-finding failures."""


class NotBracketedError(RootFindingError):
    """Raised when a bracketing method is called without a valid sign change."""


class NoConvergenceError(RootFindingError):
    """Raised when the method fails to converge within max_iter."""


class NoBracketError(NotBracketedError):
    """Raised by expand_bracket when doubling never produces a sign change."""


# ---------------------------
# Root finders (unified signature)
# All root methods accept:
#   (Fn, lo, hi, *, tol_x=..., max_iter=..., **kwargs)
# and return RootResult
# ---------------------------


def bisection_method(
    Fn: Callable[[float], float],
    lo: float,
    hi: float,
    *,
    tol_f: float = 0.0,
    tol_x: float = DEFAULT_TOL,
    max_iter: int = 1000,
    **ignored_kwargs: Any,
) -> RootResult:
    a, b = (lo, hi) if lo <= hi else (hi, lo)

    fa = Fn(a)
    if abs(fa) <= tol_f:
        return RootResult(
            root=a,
            converged=True,
            iterations=0,
            method="bisection",
            f_at_root=fa,
            bracket=(a, b),
        )

    fb = Fn(b)
    if abs(fb) <= tol_f:
        return RootResult(
            root=b,
            converged=True,
            iterations=0,
            method="bisection",
            f_at_root=fb,
            bracket=(a, b),
        )

    if fa * fb > 0:
        raise NotBracketedError(
            "Bisection requires Fn(lo) and Fn(hi) to have opposite signs."
        )

    for it in range(1, max_iter + 1):
        mid = a + (b - a) / 2.0
        fmid = Fn(mid)

        if abs(fmid) <= tol_f:
            return RootResult(
                root=mid,
                converged=True,
                iterations=it,
                method="bisection",
                f_at_root=fmid,
                bracket=(a, b),
            )

        # Maintain the bracket
        if fa * fmid < 0:
            b, fb = mid, fmid
        else:
            a, fa = mid, fmid

        if (b - a) / 2.0 <= tol_x:
            root = a + (b - a) / 2.0
            return RootResult(
                root=root,
                converged=True,
                iterations=it,
                method="bisection",
                f_at_root=Fn(root),
                bracket=(a, b),
            )

    raise NoConvergenceError("Bisection did not converge within max_iter.")


def brent_method(
    Fn: Callable[[float], float],
    lo: float,
    hi: float,
    *,
    tol_x: float = DEFAULT_TOL,
    max_iter: int = 1000,
    **ignored_kwargs: Any,
) -> RootResult:
    """Brent's method on ``[lo, hi]`` via :func:`scipy.optimize.brentq`.

    Parameters
    ----------
    Fn : callable
        Scalar function whose root is sought.
    lo, hi : float
        Bracket endpoints (any order). ``Fn(lo)`` and ``Fn(hi)`` must not share
        a strict sign.
    tol_x : float, default ``eps ** 0.75``
        Absolute tolerance on the root location.
    max_iter : int, default 1000
        Iteration cap forwarded to ``brentq``.

    Returns
    -------
    RootResult

    Raises
    ------
    NotBracketedError
        If the endpoints have the same strict sign.
    NoConvergenceError
        If ``brentq`` reports non-convergence within ``max_iter``.
    """
    a, b = (lo, hi) if lo <= hi else (hi, lo)

    fa = Fn(a)
    fb = Fn(b)
    if fa * fb > 0:
        raise NotBracketedError(
            "Root not bracketed: Fn(lo) and Fn(hi) must have opposite signs."
        )

    root, info = brentq(
        Fn, a, b, xtol=tol_x, maxiter=max_iter, full_output=True, disp=False
    )
    if not info.converged:
        raise NoConvergenceError(
            f"Brent did not converge within max_iter ({info.flag})."
        )

    root = float(root)
    return RootResult(
        root=root,
        converged=True,
        iterations=int(info.iterations),
        method="brent",
        f_at_root=Fn(root),
        bracket=(a, b),
    )


# ---------------------------
# Method registry
# ---------------------------

RootMethodFn = Callable[..., RootResult]


class RootMethod(str, Enum):
    BRENT = "brent"
    BISECTION = "bisection"


_ROOT_METHODS: dict[RootMethod, RootMethodFn] = {
    RootMethod.BRENT: brent_method,
    RootMethod.BISECTION: bisection_method,
}


def get_root_method(method: RootMethod | str) -> RootMethodFn:
    try:
        return _ROOT_METHODS[RootMethod(method)]
    except ValueError:
        raise ValueError(f"Unknown root method: {method!r}") from None
