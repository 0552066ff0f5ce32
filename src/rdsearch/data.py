"""Standardized records for regression-discontinuity inputs.

Three record types cover the supported designs:

- :class:`SharpRDData`: outcome and running variable split at a cutoff
- :class:`FuzzyRDData`: outcome and treatment split at a cutoff
- :class:`LocalPointData`: a single sample recentered at a point of interest

The running variable is shifted so the cutoff (or point) sits at zero and rows
are sorted by it. Observations with ``X < 0`` go below the cutoff and
``X >= 0`` above it. Objective functions handed to :func:`rdsearch.find_zero`
or :func:`rdsearch.discrete_minimize` typically close over one of these
records.

Input is a :class:`pandas.DataFrame` or a mapping of columns, read the same
way for both: every column whose name starts with ``"sigma2"`` belongs to the
conditional-variance block (several such columns are stacked in order, and a
single one may itself hold a 2D block); the remaining columns are data columns
read by position. The running variable must be finite.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from rdsearch.exceptions import InvalidRDDataError, RDClassError
from rdsearch.typing import FloatArray, FloatDType

SIGMA2 = "sigma2"


@dataclass(frozen=True, slots=True)
class SharpRDData:
    """Sharp RD sample split at the cutoff.

    Parameters
    ----------
    y_minus, y_plus : FloatArray
        Outcomes below / above the cutoff.
    x_minus, x_plus : FloatArray
        Recentered running variable below / above the cutoff.
    orig_cutoff : float
        Cutoff in the original units of the running variable.
    var_names : tuple[str, str]
        Names of the outcome and running variable columns.
    sigma2_minus, sigma2_plus : FloatArray or None
        Conditional variance of the outcome (or an estimate of it), if given.
    """

    y_minus: FloatArray
    y_plus: FloatArray
    x_minus: FloatArray
    x_plus: FloatArray
    orig_cutoff: float
    var_names: tuple[str, ...]
    sigma2_minus: FloatArray | None = None
    sigma2_plus: FloatArray | None = None


@dataclass(frozen=True, slots=True)
class FuzzyRDData:
    """Fuzzy RD sample split at the cutoff.

    ``y_minus`` and ``y_plus`` are ``(n, 2)`` arrays holding (outcome,
    treatment). ``sigma2_minus`` and ``sigma2_plus`` are ``(n, 4)`` arrays with
    the ``[1,1], [1,2], [2,1], [2,2]`` elements of the conditional covariance
    matrix of (outcome, treatment).
    """

    y_minus: FloatArray
    y_plus: FloatArray
    x_minus: FloatArray
    x_plus: FloatArray
    orig_cutoff: float
    var_names: tuple[str, ...]
    sigma2_minus: FloatArray | None = None
    sigma2_plus: FloatArray | None = None


@dataclass(frozen=True, slots=True)
class LocalPointData:
    """Sample recentered at a point of interest ``x0`` (``x = X - x0``)."""

    y: FloatArray
    x: FloatArray
    orig_point: float
    var_names: tuple[str, ...]
    sigma2: FloatArray | None = None


type RDRecord = SharpRDData | FuzzyRDData | LocalPointData


# ---------------------------
# Input handling
# ---------------------------


def _is_sigma2(name: Any) -> bool:
    return str(name).startswith(SIGMA2)


def _columns(
    d: pd.DataFrame | Mapping[str, Any], n_cols: int, sigma2_width: int
) -> tuple[tuple[str, ...], list[FloatArray], FloatArray | None]:
    """Pull the first ``n_cols`` data columns and the optional sigma2 block.

    The last of the ``n_cols`` columns is the running variable and must be
    finite.
    """
    if isinstance(d, pd.DataFrame):
        keys = list(d.columns)

        def get(k: Any) -> FloatArray:
            return d[k].to_numpy(dtype=FloatDType)

    elif isinstance(d, Mapping):
        keys = list(d)

        def get(k: Any) -> FloatArray:
            return np.asarray(d[k], dtype=FloatDType)

    else:
        raise InvalidRDDataError(
            f"Expected a pandas DataFrame or a mapping of columns, got {type(d).__name__}"
        )

    sig_keys = [k for k in keys if _is_sigma2(k)]
    data_keys = [k for k in keys if not _is_sigma2(k)]
    if len(data_keys) < n_cols:
        raise InvalidRDDataError(
            f"Need at least {n_cols} data columns, got {len(data_keys)}"
        )
    try:
        cols = [get(k) for k in data_keys[:n_cols]]
        blocks = [get(k) for k in sig_keys]
        if not blocks:
            sigma2 = None
        elif len(blocks) == 1:
            sigma2 = blocks[0]
        else:
            sigma2 = np.column_stack(blocks)
    except (TypeError, ValueError) as exc:
        raise InvalidRDDataError(f"Invalid column: {exc}") from exc
    names = tuple(str(k) for k in data_keys[:n_cols])

    n = cols[0].shape[0] if cols[0].ndim == 1 else -1
    for name, col in zip(names, cols, strict=True):
        if col.ndim != 1 or col.shape[0] != n:
            raise InvalidRDDataError(
                f"Column {name!r} must be 1D with length {n}, got shape {col.shape}"
            )
    if not np.all(np.isfinite(cols[-1])):
        raise InvalidRDDataError(
            f"Running variable {names[-1]!r} contains NaN or infinite values"
        )

    if sigma2 is not None:
        if sigma2_width == 1 and sigma2.ndim == 2 and sigma2.shape[1] == 1:
            sigma2 = sigma2[:, 0]
        expected = (n,) if sigma2_width == 1 else (n, sigma2_width)
        if sigma2.shape != expected:
            raise InvalidRDDataError(
                f"sigma2 must have shape {expected}, got {sigma2.shape}"
            )

    return names, cols, sigma2


def _sort_by(
    key: FloatArray, cols: list[FloatArray], sigma2: FloatArray | None
) -> tuple[list[FloatArray], FloatArray | None]:
    if not np.any(np.diff(key) < 0):
        return cols, sigma2
    order = np.argsort(key, kind="stable")
    cols = [c[order] for c in cols]
    if sigma2 is not None:
        sigma2 = sigma2[order]
    return cols, sigma2


def _split(arr: FloatArray | None, below: np.ndarray) -> tuple[Any, Any]:
    if arr is None:
        return None, None
    return arr[below], arr[~below]


# ---------------------------
# Constructors
# ---------------------------


def rd_data(d: pd.DataFrame | Mapping[str, Any], cutoff: float) -> SharpRDData:
    """Build a :class:`SharpRDData` record.

    ``d`` has the outcome in its first column and the running variable in its
    second; an optional ``sigma2`` column holds conditional variances. The
    running variable is shifted by ``cutoff``.

    Examples
    --------
    >>> rec = rd_data({"y": [1.0, 2.0, 3.0], "x": [-1.0, 0.0, 1.0]}, cutoff=0.0)
    >>> rec.x_plus
    array([0., 1.])
    """
    names, (y, x), sigma2 = _columns(d, 2, sigma2_width=1)
    (y, x), sigma2 = _sort_by(x, [y, x], sigma2)

    X = x - cutoff
    below = X < 0
    s_m, s_p = _split(sigma2, below)
    return SharpRDData(
        y_minus=y[below],
        y_plus=y[~below],
        x_minus=X[below],
        x_plus=X[~below],
        orig_cutoff=float(cutoff),
        var_names=names,
        sigma2_minus=s_m,
        sigma2_plus=s_p,
    )


def frd_data(d: pd.DataFrame | Mapping[str, Any], cutoff: float) -> FuzzyRDData:
    """Build a :class:`FuzzyRDData` record.

    Columns are outcome, treatment and running variable, in that order. The
    optional ``sigma2`` block must have four columns (see :class:`FuzzyRDData`).
    """
    names, (y, t, x), sigma2 = _columns(d, 3, sigma2_width=4)
    (y, t, x), sigma2 = _sort_by(x, [y, t, x], sigma2)

    X = x - cutoff
    below = X < 0
    yt = np.column_stack([y, t])
    s_m, s_p = _split(sigma2, below)
    return FuzzyRDData(
        y_minus=yt[below],
        y_plus=yt[~below],
        x_minus=X[below],
        x_plus=X[~below],
        orig_cutoff=float(cutoff),
        var_names=names,
        sigma2_minus=s_m,
        sigma2_plus=s_p,
    )


def lpp_data(d: pd.DataFrame | Mapping[str, Any], point: float) -> LocalPointData:
    """Build a :class:`LocalPointData` record recentered at ``point``."""
    names, (y, x), sigma2 = _columns(d, 2, sigma2_width=1)
    (y, x), sigma2 = _sort_by(x, [y, x], sigma2)
    return LocalPointData(
        y=y,
        x=x - point,
        orig_point=float(point),
        var_names=names,
        sigma2=sigma2,
    )


def check_class(obj: Any, cls: type | tuple[type, ...], name: str = "Object") -> None:
    if not isinstance(obj, cls):
        expected = (
            cls.__name__
            if isinstance(cls, type)
            else " or ".join(c.__name__ for c in cls)
        )
        raise RDClassError(f"{name} needs to be an instance of {expected}!")
