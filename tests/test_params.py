"""Tests for generation parameters."""
from dataclasses import FrozenInstanceError, replace

import pytest

from meshworld.world.params import GenerationParameters, WorldSizeMode


class TestGenerationParameters:

    def test_defaults_valid(self):
        assert GenerationParameters().validate() == []

    def test_frozen(self):
        p = GenerationParameters()
        with pytest.raises(FrozenInstanceError):
            p.rows = 3

    def test_chunk_span(self, grid_params):
        assert grid_params.chunk_span == (200.0, 240.0)

    def test_chunk_count(self, small_params):
        assert small_params.chunk_count == 1
        assert replace(small_params, world_size=WorldSizeMode.BOUNDED, view_distance=3).chunk_count == 49

    @pytest.mark.parametrize(
        "field,value,word",
        [
            ("frequency", 0.0, "frequency"),
            ("frequency", 65.0, "frequency"),
            ("octaves", 0, "octaves"),
            ("octaves", 17, "octaves"),
            ("rows", 0, "rows"),
            ("columns", 0, "columns"),
            ("piece_size", (0.0, 10.0), "piece size"),
            ("seed", -1, "seed"),
            ("max_height", -5.0, "max height"),
            ("thresholds", (0.7, 0.2), "thresholds"),
            ("view_distance", 0, "view distance"),
            ("noise", "value", "noise"),
            ("water_level", 1.5, "water level"),
        ],
    )
    def test_validation_flags(self, field, value, word):
        errors = replace(GenerationParameters(), **{field: value}).validate()
        assert len(errors) == 1
        assert word in errors[0]


class TestClamped:

    def test_frequency_and_octaves(self):
        p = GenerationParameters(frequency=100.0, octaves=40).clamped()
        assert p.frequency == 64.0
        assert p.octaves == 16
        p = GenerationParameters(frequency=0.0, octaves=-2).clamped()
        assert p.frequency == 0.1
        assert p.octaves == 1

    def test_counts_and_ranges(self):
        p = GenerationParameters(
            rows=0, columns=-3, seed=-7, max_height=-1.0, view_distance=0,
            world_size_multiplier=-2, water_level=4.0,
        ).clamped()
        assert (p.rows, p.columns) == (1, 1)
        assert p.seed == 0
        assert p.max_height == 0.0
        assert p.view_distance == 1
        assert p.world_size_multiplier == 0
        assert p.water_level == 1.0
        assert p.validate() == []

    def test_thresholds_ordered(self):
        p = GenerationParameters(thresholds=(0.8, -0.2)).clamped()
        assert p.thresholds == (0.0, 0.8)

    def test_valid_values_untouched(self, small_params):
        assert small_params.clamped() == small_params
