from __future__ import annotations
import numpy as np

def clamp(v, lo, hi):
    return lo if v < lo else hi if v > hi else v

def fade(t: np.ndarray) -> np.ndarray:
    """Perlin's quintic smootherstep, 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)

def lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + (b - a) * t
