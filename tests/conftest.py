from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def ramp(*shape: int, offset: float = 0.0) -> np.ndarray:
    """Distinct, easily recognisable values of the given shape."""

    size = int(np.prod(shape)) if shape else 1
    return (np.arange(size, dtype=float) + offset).reshape(shape)


@pytest.fixture
def two_unit_bundle() -> Dict[str, Any]:
    """Two unit operations with 5 time points and 2 components each."""

    return {
        "solution": {
            "SOLUTION_TIMES": np.linspace(0.0, 4.0, 5),
            "unit_000": {"SOLUTION_OUTLET": ramp(5, 2)},
            "unit_001": {"SOLUTION_OUTLET": ramp(5, 2, offset=100.0)},
        }
    }
