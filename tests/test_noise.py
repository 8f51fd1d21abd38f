"""Tests for the fractal noise field."""
import numpy as np
import pytest

from meshworld.world.noise import NoiseConfig, NoiseField, PerlinNoise2D


@pytest.fixture
def points():
    rng = np.random.default_rng(7)
    return rng.uniform(-50.0, 50.0, size=(2, 400))


class TestPerlinNoise2D:

    def test_zero_on_lattice(self):
        """Gradient noise vanishes on integer lattice points."""
        n = PerlinNoise2D(3)
        xs = np.arange(-5, 6, dtype=np.float64)
        gx, gy = np.meshgrid(xs, xs)
        np.testing.assert_allclose(n.noise(gx, gy), 0.0, atol=1e-12)

    def test_bounded(self, points):
        """Raw noise stays close to [-1, 1]."""
        v = PerlinNoise2D(11).noise(points[0], points[1])
        assert np.all(np.abs(v) <= 1.1)

    def test_not_constant(self, points):
        v = PerlinNoise2D(11).noise(points[0], points[1])
        assert np.std(v) > 0.01


class TestNoiseField:

    def test_range(self, points):
        """Samples are normalized into [0, 1]."""
        field = NoiseField(42)
        for octaves in (1, 3, 16):
            v = field.grid(points[0], points[1], octaves)
            assert v.min() >= 0.0
            assert v.max() <= 1.0

    def test_deterministic(self, points):
        """Same seed and inputs give identical output across instances."""
        a = NoiseField(42).grid(points[0], points[1], 4)
        b = NoiseField(42).grid(points[0], points[1], 4)
        assert a.tobytes() == b.tobytes()

    def test_seed_changes_field(self, points):
        a = NoiseField(42).grid(points[0], points[1], 4)
        b = NoiseField(43).grid(points[0], points[1], 4)
        assert not np.allclose(a, b)

    def test_sample_matches_grid(self, noise42):
        """Scalar sampling agrees with the vectorized path."""
        xs = np.array([0.25, -3.7, 12.1])
        ys = np.array([1.5, 8.2, -0.4])
        g = noise42.grid(xs, ys, 5)
        for k in range(3):
            assert noise42.sample(xs[k], ys[k], 5) == pytest.approx(g[k], abs=1e-12)

    def test_lattice_is_midpoint(self, noise42):
        """Integer inputs stay on the lattice at every octave, giving 0.5."""
        assert noise42.sample(3.0, -2.0, 6) == pytest.approx(0.5)

    def test_octaves_add_detail(self, noise42, points):
        one = noise42.grid(points[0], points[1], 1)
        many = noise42.grid(points[0], points[1], 8)
        assert not np.allclose(one, many)

    def test_zero_octaves_rejected(self, noise42):
        with pytest.raises(ValueError):
            noise42.sample(0.5, 0.5, 0)

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            NoiseField(1, NoiseConfig(mode="value"))


class TestSimplexBackend:

    def test_range_and_determinism(self):
        xs = np.linspace(-4.0, 4.0, 30)
        ys = np.linspace(2.0, -6.0, 30)
        a = NoiseField(9, NoiseConfig(mode="simplex")).grid(xs, ys, 3)
        b = NoiseField(9, NoiseConfig(mode="simplex")).grid(xs, ys, 3)
        assert a.shape == xs.shape
        assert np.all((a >= 0.0) & (a <= 1.0))
        np.testing.assert_array_equal(a, b)
