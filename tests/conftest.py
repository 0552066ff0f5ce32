"""Pytest helpers for the rdsearch library."""

from __future__ import annotations

import numpy as np
import pytest


class CallCounter:
    """Wraps a scalar function and records every argument it is called with."""

    def __init__(self, fn):
        self.fn = fn
        self.calls: list = []

    def __call__(self, x):
        self.calls.append(x)
        return self.fn(x)

    @property
    def n_calls(self) -> int:
        return len(self.calls)


@pytest.fixture
def counting():
    """Factory fixture: ``counting(fn)`` returns a call-recording wrapper."""

    def _make(fn) -> CallCounter:
        return CallCounter(fn)

    return _make


@pytest.fixture
def rng():
    """Seeded RNG factory."""

    def _rng(seed: int) -> np.random.Generator:
        return np.random.default_rng(seed)

    return _rng


@pytest.fixture
def sharp_frame(rng) -> dict:
    """Small unsorted sharp-RD table with a conditional-variance column."""
    g = rng(7)
    x = g.uniform(-1.0, 1.0, size=40)
    y = 0.5 * x + (x >= 0.0) + g.normal(scale=0.1, size=40)
    return {"outcome": y, "margin": x + 0.25, "sigma2": np.full(40, 0.01)}
