from __future__ import annotations

import math

import pytest

from rdsearch import BracketPolicy, RootFindingConfig, find_zero, find_zero_result
from rdsearch.numerics.bracketing import (
    POSITIVE_LOWER_CEILING,
    expand_bracket,
)
from rdsearch.numerics.root_finding import NoBracketError, RootMethod

# --- Bracket policy ---------------------------------------------------------


def test_symmetric_lower_endpoint_mirrors_ival() -> None:
    assert BracketPolicy.SYMMETRIC.lower(4.4) == -4.4


@pytest.mark.parametrize(
    "ival,expected",
    [(0.5, 1e-3), (1.1, 1e-3), (1000.0, 1e-3), (4000.0, 1.0 / 4000.0)],
)
def test_positive_only_lower_endpoint_is_capped(ival: float, expected: float) -> None:
    assert BracketPolicy.POSITIVE_ONLY.lower(ival) == pytest.approx(expected)
    assert BracketPolicy.POSITIVE_ONLY.lower(ival) <= POSITIVE_LOWER_CEILING


@pytest.mark.parametrize(
    "value,expected",
    [
        (True, BracketPolicy.SYMMETRIC),
        (False, BracketPolicy.POSITIVE_ONLY),
        ("positive_only", BracketPolicy.POSITIVE_ONLY),
        (BracketPolicy.SYMMETRIC, BracketPolicy.SYMMETRIC),
    ],
)
def test_policy_coercion(value, expected) -> None:
    assert BracketPolicy.coerce(value) is expected


# --- Bracket expansion ------------------------------------------------------


def test_expand_bracket_doubles_until_sign_change() -> None:
    br = expand_bracket(lambda x: x - 5.0, 1.1, BracketPolicy.POSITIVE_ONLY)

    assert br.doublings == 3
    assert br.hi == pytest.approx(8.8)
    assert br.lo == pytest.approx(1e-3)
    assert br.f_lo < 0.0 < br.f_hi


def test_expand_bracket_keeps_initial_bracket_when_valid() -> None:
    br = expand_bracket(lambda x: x, 1.1, BracketPolicy.SYMMETRIC)
    assert br.doublings == 0
    assert (br.lo, br.hi) == (-1.1, 1.1)


def test_exact_zero_at_endpoint_counts_as_sign_change() -> None:
    br = expand_bracket(lambda x: x - 1.1, 1.1, BracketPolicy.SYMMETRIC)
    assert br.doublings == 0
    assert br.f_hi == 0.0


def test_expand_bracket_rejects_non_positive_scale() -> None:
    with pytest.raises(ValueError):
        expand_bracket(lambda x: x, 0.0)
    with pytest.raises(ValueError):
        expand_bracket(lambda x: x, -1.0)


def test_doubling_cap_raises_no_bracket() -> None:
    # Even function: symmetric endpoints always share a sign
    with pytest.raises(NoBracketError, match="No sign change"):
        expand_bracket(lambda x: x * x - 2.0, 1.1, max_doublings=20)


def test_default_config_caps_one_signed_function() -> None:
    with pytest.raises(NoBracketError):
        find_zero(lambda x: 1.0)


def test_uncapped_search_stops_on_overflow() -> None:
    cfg = RootFindingConfig(max_doublings=None)
    with pytest.raises(NoBracketError, match="overflowed"):
        find_zero(lambda x: 1.0, config=cfg)


def test_nan_objective_raises_no_bracket() -> None:
    with pytest.raises(NoBracketError, match="NaN"):
        find_zero(lambda x: math.nan)


# --- find_zero --------------------------------------------------------------


def test_positive_only_converges_to_positive_root() -> None:
    assert find_zero(lambda x: x - 5.0, policy=BracketPolicy.POSITIVE_ONLY) == (
        pytest.approx(5.0, abs=1e-9)
    )


def test_symmetric_converges_to_zero_root() -> None:
    assert find_zero(lambda x: x, policy=BracketPolicy.SYMMETRIC) == pytest.approx(
        0.0, abs=1e-10
    )


def test_boolean_policy_matches_enum() -> None:
    f = lambda x: x - 5.0  # noqa: E731
    assert find_zero(f, 1.1, False) == find_zero(f, 1.1, BracketPolicy.POSITIVE_ONLY)
    assert find_zero(f, 1.1, True) == find_zero(f, 1.1, BracketPolicy.SYMMETRIC)


def test_positive_only_finds_root_of_even_function() -> None:
    assert find_zero(lambda x: x * x - 2.0, policy=False) == pytest.approx(
        math.sqrt(2.0), abs=1e-10
    )


def test_positive_only_reaches_root_near_zero() -> None:
    res = find_zero_result(lambda x: x - 1e-6, policy=BracketPolicy.POSITIVE_ONLY)

    assert res.root == pytest.approx(1e-6, abs=1e-11)
    lo, hi = res.bracket
    assert lo < 1e-6 < hi


def test_small_initial_scale_below_ceiling() -> None:
    # lower endpoint (1e-3) sits above ival here; the bracket is used reversed
    root = find_zero(lambda x: x - 5e-4, 1e-4, BracketPolicy.POSITIVE_ONLY)
    assert root == pytest.approx(5e-4, abs=5e-12)


@pytest.mark.parametrize(
    "f,r0,policy",
    [
        (lambda x: x**3 - 2.0 * x - 5.0, 2.0945514815423265, BracketPolicy.SYMMETRIC),
        (lambda x: math.tanh(x - 37.5), 37.5, BracketPolicy.SYMMETRIC),
        (lambda x: math.log(x) - 3.0, math.exp(3.0), BracketPolicy.POSITIVE_ONLY),
        (lambda x: 1.0 - 250.0 * x, 0.004, BracketPolicy.POSITIVE_ONLY),
        (lambda x: x + 123.0, -123.0, BracketPolicy.SYMMETRIC),
    ],
    ids=["cubic", "tanh-shift", "log", "decreasing", "negative-root"],
)
def test_root_validity(f, r0: float, policy: BracketPolicy) -> None:
    res = find_zero_result(f, policy=policy)

    assert res.converged is True
    assert abs(f(res.root)) < 1e-9
    assert res.root == pytest.approx(r0, rel=1e-9, abs=1e-11)


def test_bisection_config_agrees_with_brent() -> None:
    f = lambda x: x**3 - 2.0 * x - 5.0  # noqa: E731
    brent = find_zero_result(f)
    bisect = find_zero_result(f, config=RootFindingConfig(root_method=RootMethod.BISECTION))

    assert brent.method == "brent"
    assert bisect.method == "bisection"
    assert bisect.root == pytest.approx(brent.root, abs=1e-10)


def test_find_zero_is_deterministic() -> None:
    f = lambda x: math.cos(x) - x / 10.0  # noqa: E731
    roots = {find_zero(f, 2.0, BracketPolicy.SYMMETRIC) for _ in range(5)}
    assert len(roots) == 1
