"""Tests for the disctrap.config module."""

import jax.numpy as jnp
import pytest

from disctrap.config import get_degeneracy_tolerance, get_dtype, set_dtype
from disctrap.forces import trap_factor
from disctrap.orbits import particle_to_orbit
from disctrap.particles import ParticleState

pytestmark = pytest.mark.order("first")


@pytest.fixture(autouse=True)
def reset_dtype():
    """Reset dtype to float32 before and after each test."""
    set_dtype(jnp.float32)
    yield
    set_dtype(jnp.float32)


class TestGetSetDtype:
    def test_default_dtype(self):
        assert get_dtype() == jnp.float32

    def test_set_float64(self):
        set_dtype(jnp.float64)
        assert get_dtype() == jnp.float64

    def test_roundtrip(self):
        for dtype in (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64):
            set_dtype(dtype)
            assert get_dtype() == dtype

    def test_invalid_dtype_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype(jnp.int32)

    def test_invalid_dtype_string_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype("float32")


class TestDegeneracyTolerance:
    def test_float32(self):
        assert get_degeneracy_tolerance() == float(jnp.finfo(jnp.float32).tiny)

    def test_float64(self):
        set_dtype(jnp.float64)
        assert get_degeneracy_tolerance() == float(jnp.finfo(jnp.float64).tiny)

    def test_positive_and_small(self):
        assert 0.0 < get_degeneracy_tolerance() < 1e-30


class TestDtypePropagation:
    def test_trap_factor_follows_dtype(self):
        assert trap_factor(1.0, 0.2, 1.0).dtype == jnp.float32
        set_dtype(jnp.float64)
        assert trap_factor(1.0, 0.2, 1.0).dtype == jnp.float64

    def test_orbit_follows_dtype(self):
        set_dtype(jnp.float64)
        star = ParticleState.create([0.0, 0.0, 0.0], [0.0, 0.0, 0.0], 1.0)
        planet = ParticleState.create([1.0, 0.0, 0.0], [0.0, 1.0, 0.0])
        result = particle_to_orbit(1.0, planet, star)
        assert result.elements.a.dtype == jnp.float64
