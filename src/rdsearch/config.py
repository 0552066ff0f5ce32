from __future__ import annotations

from dataclasses import dataclass

from rdsearch.numerics.root_finding import DEFAULT_TOL, RootMethod


@dataclass(frozen=True, slots=True)
class RootFindingConfig:
    """Settings for :func:`rdsearch.find_zero`.

    ``max_doublings=None`` lets the bracket search double without limit, in
    which case a function without a reachable sign change is only stopped once
    the endpoint overflows.
    """

    tol: float = DEFAULT_TOL
    max_iter: int = 1000
    max_doublings: int | None = 1000
    root_method: RootMethod = RootMethod.BRENT

    def __post_init__(self) -> None:
        if self.tol <= 0:
            raise ValueError("tol must be > 0")
        if self.max_iter <= 0:
            raise ValueError("max_iter must be > 0")
        if self.max_doublings is not None and self.max_doublings < 0:
            raise ValueError("max_doublings must be >= 0 or None")


@dataclass(frozen=True, slots=True)
class DiscreteSearchConfig:
    scan_width: int = 100  # golden-section narrowing stops once b - a <= scan_width
    memoize: bool = True
    check_sorted: bool = True

    def __post_init__(self) -> None:
        if self.scan_width < 1:
            raise ValueError("scan_width must be >= 1")
