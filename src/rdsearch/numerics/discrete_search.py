"""Golden-section search over a sorted, finite candidate set.

The objective is typically piecewise constant in the candidate value (for
example a coverage or length criterion evaluated on a grid of bandwidths),
which makes golden-section comparisons unreliable once plateaus dominate.
Narrowing therefore stops at a coarse window and the remainder is scanned
exhaustively.
"""

from __future__ import annotations

import math
import warnings
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from rdsearch.config import DiscreteSearchConfig

_GOLDEN_RATIO = (math.sqrt(5.0) + 1.0) / 2.0
_DEFAULT_CONFIG = DiscreteSearchConfig()


@dataclass(frozen=True, slots=True)
class DiscreteSearchResult:
    """Outcome of :func:`discrete_minimize_result`.

    Parameters
    ----------
    value : Any
        The selected candidate, taken verbatim from the input sequence.
    index : int
        Position of ``value`` in the input sequence (0-based).
    objective : float
        Objective value at ``value``.
    evaluations : int
        Number of calls made to the objective.
    narrowing_steps : int
        Number of golden-section comparisons performed before the scan.
    window : tuple[int, int]
        Inclusive index range that was scanned exhaustively.
    """

    value: Any
    index: int
    objective: float
    evaluations: int
    narrowing_steps: int
    window: tuple[int, int]


class _IndexedObjective:
    """Evaluates ``Fn`` at position ``i`` of ``xs``, counting calls and caching by index."""

    __slots__ = ("_Fn", "_xs", "_cache", "calls")

    def __init__(
        self, Fn: Callable[[Any], float], xs: Sequence[Any], memoize: bool
    ) -> None:
        self._Fn = Fn
        self._xs = _positional(xs)
        self._cache: dict[int, float] | None = {} if memoize else None
        self.calls = 0

    def __call__(self, i: int) -> float:
        if self._cache is not None and i in self._cache:
            return self._cache[i]
        self.calls += 1
        val = float(self._Fn(self._xs[i]))
        if self._cache is not None:
            self._cache[i] = val
        return val


def _positional(xs: Sequence[Any]) -> Any:
    # a Series indexes by label; candidates are always addressed by position
    return xs.iloc if isinstance(xs, pd.Series) else xs


def _interior_points(a: int, b: int) -> tuple[int, int]:
    # (b - a) / phi is irrational for b > a, so rounding never hits a tie
    c = round(b - (b - a) / _GOLDEN_RATIO)
    d = round(a + (b - a) / _GOLDEN_RATIO)
    return c, d


def _warn_if_unsorted(xs: Sequence[Any], stacklevel: int) -> None:
    try:
        arr = np.asarray(xs, dtype=float)
    except (TypeError, ValueError):
        return
    if arr.ndim == 1 and np.any(np.diff(arr) < 0):
        warnings.warn(
            "Candidates are not sorted ascending; golden-section narrowing "
            "assumes a sorted support and may return a non-optimal candidate.",
            RuntimeWarning,
            stacklevel=stacklevel,
        )


def _search(
    Fn: Callable[[Any], float],
    xs: Sequence[Any],
    config: DiscreteSearchConfig | None,
    stacklevel: int,
) -> DiscreteSearchResult:
    # stacklevel is counted from this frame, as for warnings.warn
    cfg = _DEFAULT_CONFIG if config is None else config
    n = len(xs)
    if n == 0:
        raise ValueError("xs must contain at least one candidate")
    if cfg.check_sorted and n > 1:
        _warn_if_unsorted(xs, stacklevel + 1)

    obj = _IndexedObjective(Fn, xs, cfg.memoize)

    a, b = 0, n - 1
    c, d = _interior_points(a, b)
    steps = 0
    while b - a > cfg.scan_width:
        fc, fd = obj(c), obj(d)
        if math.isnan(fc) or math.isnan(fd):
            bad = c if math.isnan(fc) else d
            raise ValueError(
                f"Objective is NaN at index {bad} while narrowing window [{a}, {b}]"
            )
        if fc < fd:
            b = d
        else:
            a = c
        c, d = _interior_points(a, b)
        steps += 1

    scores = np.array([obj(i) for i in range(a, b + 1)], dtype=float)
    if np.all(np.isnan(scores)):
        raise ValueError(
            f"Objective is NaN for every candidate in window [{a}, {b}]"
        )
    # nanargmin returns the first occurrence of the minimum
    k = int(np.nanargmin(scores))

    return DiscreteSearchResult(
        value=_positional(xs)[a + k],
        index=a + k,
        objective=float(scores[k]),
        evaluations=obj.calls,
        narrowing_steps=steps,
        window=(a, b),
    )


def discrete_minimize_result(
    Fn: Callable[[Any], float],
    xs: Sequence[Any],
    *,
    config: DiscreteSearchConfig | None = None,
) -> DiscreteSearchResult:
    """Minimize a unimodal objective over a sorted candidate sequence.

    While the index window ``[a, b]`` is wider than ``config.scan_width``, two
    interior points ``c = round(b - (b - a)/phi)`` and
    ``d = round(a + (b - a)/phi)`` are compared: if ``Fn(xs[c]) < Fn(xs[d])``
    the window becomes ``[a, d]``, otherwise ``[c, b]``. The remaining window
    is then scanned and the first candidate attaining the minimum is returned.

    Parameters
    ----------
    Fn : callable
        Objective mapping a candidate to a score (lower is better). Must be
        unimodal in index order; this is not checked.
    xs : sequence
        Non-empty candidate sequence sorted ascending. A :class:`pandas.Series`
        is read by position, whatever its index.
    config : DiscreteSearchConfig, optional
        Scan width, memoisation and sortedness check.

    Returns
    -------
    DiscreteSearchResult

    Raises
    ------
    ValueError
        If ``xs`` is empty, if ``Fn`` is NaN at either interior point during
        narrowing, or if ``Fn`` is NaN on the whole final window.

    Notes
    -----
    A NaN score never wins the final scan; it is skipped there.
    """
    return _search(Fn, xs, config, stacklevel=3)


def discrete_minimize(
    Fn: Callable[[Any], float],
    xs: Sequence[Any],
    *,
    config: DiscreteSearchConfig | None = None,
) -> Any:
    """Return the element of ``xs`` minimizing ``Fn`` (see :func:`discrete_minimize_result`)."""
    return _search(Fn, xs, config, stacklevel=3).value
