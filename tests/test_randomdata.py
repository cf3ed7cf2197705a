"""Tests for RandomValueSource."""

import uuid

import numpy as np
import pytest

from ermodel import RandomValueSource


def test_same_seed_same_values():
    first = RandomValueSource(seed=42)
    second = RandomValueSource(seed=42)
    assert [first.integer(0, 1000) for _ in range(5)] == [second.integer(0, 1000) for _ in range(5)]
    assert first.string(12) == second.string(12)
    assert first.guid() == second.guid()


def test_integer_is_inclusive(source):
    values = {source.integer(1, 2) for _ in range(200)}
    assert values == {1, 2}
    assert source.integer(5, 5) == 5
    with pytest.raises(ValueError):
        source.integer(3, 2)


def test_uniform_over_full_float_range(source):
    value = source.uniform(-1.7976931348623157e308, 1.7976931348623157e308)
    assert np.isfinite(value)
    assert 0.0 <= source.uniform(0.0, 1.0) <= 1.0


def test_guid_is_version_4(source):
    value = uuid.UUID(source.guid())
    assert value.version == 4


def test_string_and_choice(source):
    assert len(source.string(20)) == 20
    assert source.string(0) == ""
    assert source.choice(["a"]) == "a"
    with pytest.raises(ValueError):
        source.choice([])


def test_explicit_rng_is_used():
    rng = np.random.default_rng(5)
    expected = int(np.random.default_rng(5).integers(0, 10, endpoint=True))
    assert RandomValueSource(rng=rng).integer(0, 10) == expected
