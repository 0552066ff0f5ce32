from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.typing import NDArray

# typing only
type FloatArray = NDArray[np.floating]
type ScalarFn = Callable[[float], float]

# Runtime types
FloatDType = np.float64  # runtime dtype only
