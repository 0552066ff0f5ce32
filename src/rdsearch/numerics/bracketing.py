"""Bracket search by interval doubling, followed by bracketed root refinement.

The caller only supplies a rough positive scale. The endpoint ``ival`` is doubled
until ``Fn(lower(ival))`` and ``Fn(ival)`` differ in sign, and the resulting
bracket is handed to a bracketed root method (Brent by default).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from rdsearch.config import RootFindingConfig
from rdsearch.numerics.root_finding import NoBracketError, RootResult, get_root_method
from rdsearch.typing import ScalarFn

# Ceiling on the lower endpoint for positive-only roots.
POSITIVE_LOWER_CEILING = 1e-3

_DEFAULT_CONFIG = RootFindingConfig()


class BracketPolicy(str, Enum):
    """How the lower end of the bracket is placed relative to ``ival``.

    Attributes
    ----------
    SYMMETRIC : str
        Lower endpoint ``-ival``. The root may lie on either side of zero and the
        bracket grows in both directions together.
    POSITIVE_ONLY : str
        Lower endpoint ``min(1/ival, 1e-3)``. The root is known to be strictly
        positive and may be arbitrarily close to zero.
    """

    SYMMETRIC = "symmetric"
    POSITIVE_ONLY = "positive_only"

    @classmethod
    def coerce(cls, policy: BracketPolicy | bool | str) -> BracketPolicy:
        # True/False follow the ``negative`` flag convention
        if isinstance(policy, bool):
            return cls.SYMMETRIC if policy else cls.POSITIVE_ONLY
        return cls(policy)

    def lower(self, ival: float) -> float:
        if self is BracketPolicy.SYMMETRIC:
            return -ival
        return min(1.0 / ival, POSITIVE_LOWER_CEILING)


@dataclass(frozen=True, slots=True)
class BracketResult:
    lo: float
    hi: float
    f_lo: float
    f_hi: float
    doublings: int


def _checked(Fn: ScalarFn, x: float) -> float:
    fx = float(Fn(x))
    if math.isnan(fx):
        raise NoBracketError(f"Fn returned NaN at x={x:.12g}; cannot locate a sign change.")
    return fx


def expand_bracket(
    Fn: ScalarFn,
    initial_scale: float = 1.1,
    policy: BracketPolicy | bool | str = BracketPolicy.SYMMETRIC,
    *,
    max_doublings: int | None = 1000,
) -> BracketResult:
    """
    Double ``ival`` until Fn(policy.lower(ival)) and Fn(ival) differ in sign.

    Signs are compared with ``numpy.sign``, so an exact zero at one endpoint counts
    as a sign change while zeros at both endpoints do not.

    Raises NoBracketError if no sign change appears within ``max_doublings``
    doublings, if the endpoint overflows, or if Fn returns NaN.
    """
    if not initial_scale > 0:
        raise ValueError("Require initial_scale > 0.")
    if max_doublings is not None and max_doublings < 0:
        raise ValueError("Require max_doublings >= 0.")
    policy = BracketPolicy.coerce(policy)

    ival = float(initial_scale)
    lo = policy.lower(ival)
    f_hi = _checked(Fn, ival)
    f_lo = _checked(Fn, lo)

    doublings = 0
    while np.sign(f_hi) == np.sign(f_lo):
        if max_doublings is not None and doublings >= max_doublings:
            raise NoBracketError(
                f"No sign change found after {doublings} doublings "
                f"(bracket [{lo:.6g}, {ival:.6g}], policy={policy.value}). "
                "Fn must change sign somewhere reachable by doubling."
            )
        ival *= 2.0
        if math.isinf(ival):
            raise NoBracketError(
                "No sign change found before the search interval overflowed."
            )
        lo = policy.lower(ival)
        f_hi = _checked(Fn, ival)
        f_lo = _checked(Fn, lo)
        doublings += 1

    return BracketResult(lo=lo, hi=ival, f_lo=f_lo, f_hi=f_hi, doublings=doublings)


def find_zero_result(
    Fn: ScalarFn,
    initial_scale: float = 1.1,
    policy: BracketPolicy | bool | str = BracketPolicy.SYMMETRIC,
    *,
    config: RootFindingConfig | None = None,
) -> RootResult:
    """Locate a root of ``Fn`` without a caller-supplied bracket.

    Parameters
    ----------
    Fn : callable
        Scalar function with a sign change reachable by doubling the bracket.
    initial_scale : float, default 1.1
        Starting value of the upper endpoint. Must be > 0.
    policy : BracketPolicy or bool, default ``BracketPolicy.SYMMETRIC``
        Placement of the lower endpoint. ``True`` maps to ``SYMMETRIC`` and
        ``False`` to ``POSITIVE_ONLY``.
    config : RootFindingConfig, optional
        Refinement tolerance, iteration caps and root method.

    Returns
    -------
    RootResult
        Diagnostics from the refinement step. ``bracket`` is the sign-changing
        interval found by doubling.

    Raises
    ------
    NoBracketError
        If no sign change is found (see :func:`expand_bracket`).
    NoConvergenceError
        If the refinement step does not converge.
    """
    cfg = _DEFAULT_CONFIG if config is None else config
    br = expand_bracket(
        Fn, initial_scale, policy, max_doublings=cfg.max_doublings
    )
    method = get_root_method(cfg.root_method)
    return method(Fn, br.lo, br.hi, tol_x=cfg.tol, max_iter=cfg.max_iter)


def find_zero(
    Fn: ScalarFn,
    initial_scale: float = 1.1,
    policy: BracketPolicy | bool | str = BracketPolicy.SYMMETRIC,
    *,
    config: RootFindingConfig | None = None,
) -> float:
    """Float-returning convenience wrapper around :func:`find_zero_result`."""
    return find_zero_result(Fn, initial_scale, policy, config=config).root
