from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from opensimplex import OpenSimplex

from meshworld.util.math import fade, lerp


@dataclass(frozen=True)
class NoiseConfig:
    mode: str = "perlin"  # "perlin" | "simplex"
    lacunarity: float = 2.0
    gain: float = 0.5


class PerlinNoise2D:
    """Improved Perlin gradient noise, vectorized over numpy arrays.

    The lattice hash is a 256-entry permutation shuffled from the seed and
    doubled so that ``perm[perm[xi] + yi + 1]`` never wraps. Output lies in
    roughly [-1, 1] and is exactly 0 on integer lattice points.
    """

    def __init__(self, seed: int) -> None:
        self.seed = int(seed)
        p = np.random.default_rng(self.seed).permutation(256).astype(np.int64)
        self._perm = np.concatenate([p, p])

    @staticmethod
    def _grad(h: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        # Ken Perlin's 3D gradient set evaluated at z = 0
        h = h & 15
        u = np.where(h < 8, x, y)
        v = np.where(h < 4, y, np.where((h == 12) | (h == 14), x, 0.0))
        return np.where((h & 1) == 0, u, -u) + np.where((h & 2) == 0, v, -v)

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        x0 = np.floor(x)
        y0 = np.floor(y)
        xi = x0.astype(np.int64) & 255
        yi = y0.astype(np.int64) & 255
        xf = x - x0
        yf = y - y0
        u = fade(xf)
        v = fade(yf)

        p = self._perm
        a = p[xi] + yi
        b = p[xi + 1] + yi
        aa, ab = p[a], p[a + 1]
        ba, bb = p[b], p[b + 1]

        x1 = lerp(self._grad(aa, xf, yf), self._grad(ba, xf - 1.0, yf), u)
        x2 = lerp(self._grad(ab, xf, yf - 1.0), self._grad(bb, xf - 1.0, yf - 1.0), u)
        return lerp(x1, x2, v)


class SimplexNoise2D:
    """OpenSimplex backend. Per-point calls, slower than the Perlin path."""

    def __init__(self, seed: int) -> None:
        self.seed = int(seed)
        self._simp = OpenSimplex(self.seed)

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        out = np.empty(x.shape, dtype=np.float64)
        flat_out = out.reshape(-1)
        for k, (xv, yv) in enumerate(zip(x.reshape(-1), y.reshape(-1))):
            flat_out[k] = self._simp.noise2(float(xv), float(yv))
        return out


class NoiseField:
    """Seeded fractal height field: world (x, y) -> height in [0, 1].

    Built once per generation pass and shared read-only between chunks, so
    chunks that touch sample identical values along their shared edge.
    """

    def __init__(self, seed: int, cfg: NoiseConfig | None = None) -> None:
        self.seed = int(seed)
        self.cfg = cfg or NoiseConfig()
        if self.cfg.mode == "perlin":
            self.base = PerlinNoise2D(self.seed)
        elif self.cfg.mode == "simplex":
            self.base = SimplexNoise2D(self.seed)
        else:
            raise ValueError(f"unknown noise mode {self.cfg.mode!r}")

    def grid(self, x: np.ndarray, y: np.ndarray, octaves: int) -> np.ndarray:
        # x, y same shape, already divided by extent / frequency
        if octaves < 1:
            raise ValueError(f"octaves must be >= 1, got {octaves}")
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        freq = 1.0
        amp = 1.0
        total = np.zeros_like(x)
        norm = 0.0
        for _ in range(int(octaves)):
            total += self.base.noise(x * freq, y * freq) * amp
            norm += amp
            freq *= self.cfg.lacunarity
            amp *= self.cfg.gain
        total = total / norm
        return np.clip(total * 0.5 + 0.5, 0.0, 1.0)

    def sample(self, x: float, y: float, octaves: int) -> float:
        xv = np.array([x], dtype=np.float64)
        yv = np.array([y], dtype=np.float64)
        return float(self.grid(xv, yv, octaves)[0])
