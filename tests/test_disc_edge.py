"""Tests for the disc-edge migration and damping acceleration.

Tests cover:
- Zero acceleration when no timescale is set
- Pure semimajor-axis term, with and without a planet trap
- Eccentricity and inclination coupling terms
- Degenerate reference bodies
- JIT and vmap compatibility
"""

import jax
import jax.numpy as jnp
import pytest

from disctrap.forces import (
    DampingParameters,
    EdgeParameters,
    accel_disc_edge,
    trap_factor,
)
from disctrap.particles import ParticleState

_EDGE = EdgeParameters(inner_disc_edge=0.1, disc_edge_width=0.2)


def _star(mass: float = 1.0) -> ParticleState:
    return ParticleState.create([0.0, 0.0, 0.0], [0.0, 0.0, 0.0], mass)


def _circular(r: float) -> ParticleState:
    return ParticleState.create([r, 0.0, 0.0], [0.0, float(jnp.sqrt(1.0 / r)), 0.0])


class TestNoDamping:
    @pytest.mark.parametrize(
        "pos,vel",
        [
            ([1.0, 0.0, 0.0], [0.0, 1.0, 0.0]),
            ([0.05, 0.01, -0.002], [0.3, 4.1, 0.2]),
            ([-3.0, 2.0, 1.0], [0.1, -0.2, 0.3]),
        ],
    )
    def test_zero_vector(self, pos, vel):
        """No timescales set: exactly zero regardless of state."""
        planet = ParticleState.create(pos, vel)
        a = accel_disc_edge(planet, _star(), DampingParameters.create(), edge=_EDGE)
        assert a.shape == (3,)
        assert jnp.all(a == 0.0)


class TestMigration:
    def test_scenario_outside_edge(self):
        """Circular-like orbit at r = 1 with tau_a = 1e4: (0, 5e-5, 0)."""
        planet = ParticleState.create([1.0, 0.0, 0.0], [0.0, 1.0, 0.0])
        a = accel_disc_edge(planet, _star(), DampingParameters.create(tau_a=1e4), edge=_EDGE)
        assert jnp.allclose(a, jnp.array([0.0, 5e-5, 0.0]), atol=1e-18)

    def test_axis_only_matches_velocity(self):
        """Factor 1: acceleration is the relative velocity over 2 tau_a."""
        star = ParticleState.create([0.2, -0.1, 0.0], [0.01, 0.02, -0.01], 1.0)
        planet = ParticleState.create([1.2, -0.1, 0.0], [0.11, 1.07, 0.01])
        tau_a = -3.0e3
        a = accel_disc_edge(planet, star, DampingParameters.create(tau_a=tau_a), edge=_EDGE)
        dv = planet.velocity - star.velocity
        assert jnp.allclose(a, dv / (2.0 * tau_a), rtol=1e-14, atol=0.0)

    def test_no_edge_is_neutral(self):
        """Without edge parameters the factor is 1 even deep inside the edge."""
        planet = _circular(0.01)
        a = accel_disc_edge(planet, _star(), DampingParameters.create(tau_a=-1e3))
        assert jnp.allclose(a, planet.velocity / (2.0 * -1e3))

    def test_inside_edge_reverses(self):
        """Inside dedge*(1-h) the axis term is -10 times the plain one."""
        planet = _circular(0.05)
        tau = DampingParameters.create(tau_a=-1e3)
        plain = accel_disc_edge(planet, _star(), tau)
        trapped = accel_disc_edge(planet, _star(), tau, edge=_EDGE)
        assert jnp.allclose(trapped, -10.0 * plain)
        # Inward migration (a along -v) becomes outward (a along +v)
        assert float(jnp.dot(plain, planet.velocity)) < 0.0
        assert float(jnp.dot(trapped, planet.velocity)) > 0.0

    def test_in_transition_zone(self):
        """Within the zone the factor is evaluated at the semimajor axis."""
        planet = _circular(0.105)
        tau = DampingParameters.create(tau_a=-1e3)
        a = accel_disc_edge(planet, _star(), tau, edge=_EDGE)
        factor = trap_factor(0.105, _EDGE.disc_edge_width, _EDGE.inner_disc_edge)
        assert jnp.allclose(a, factor * planet.velocity / (2.0 * -1e3), rtol=1e-8)

    def test_uses_semimajor_axis_not_distance(self):
        """An eccentric orbit at r = 0.05 with a > outer edge is not trapped."""
        r = 0.05
        a_sma = 0.5
        v = float(jnp.sqrt(2.0 / r - 1.0 / a_sma))
        planet = ParticleState.create([r, 0.0, 0.0], [0.0, v, 0.0])
        tau = DampingParameters.create(tau_a=-1e3)
        a = accel_disc_edge(planet, _star(), tau, edge=_EDGE)
        assert jnp.allclose(a, planet.velocity / (2.0 * -1e3))


class TestDampingTerms:
    def test_eccentricity_term(self):
        """Radial prefactor 2 (v.r) / r^2 / tau_e along r."""
        planet = ParticleState.create([1.0, 0.0, 0.0], [0.2, 1.0, 0.0])
        a = accel_disc_edge(planet, _star(), DampingParameters.create(tau_e=-100.0))
        assert jnp.allclose(a, jnp.array([2.0 * 0.2 / -100.0, 0.0, 0.0]))

    def test_eccentricity_term_off_axis(self):
        planet = ParticleState.create([0.6, 0.8, 0.0], [0.3, 0.4, 0.0])
        a = accel_disc_edge(planet, _star(), DampingParameters.create(tau_e=-50.0))
        vdotr = 0.6 * 0.3 + 0.8 * 0.4
        expected = 2.0 * vdotr / 1.0 / -50.0 * jnp.array([0.6, 0.8, 0.0])
        assert jnp.allclose(a, expected)

    def test_inclination_term(self):
        """Only tau_inc: 2 vz / tau_inc on z, nothing radial."""
        planet = ParticleState.create([1.0, 0.0, 0.0], [0.3, 1.0, 0.1])
        a = accel_disc_edge(planet, _star(), DampingParameters.create(tau_inc=-100.0))
        assert jnp.allclose(a, jnp.array([0.0, 0.0, 2.0 * 0.1 / -100.0]))

    def test_inclination_term_includes_radial_z(self):
        """With tau_e the z component also carries prefac * dz."""
        planet = ParticleState.create([0.0, 1.0, 1.0], [0.0, 0.5, 0.2])
        a = accel_disc_edge(
            planet, _star(), DampingParameters.create(tau_e=-10.0, tau_inc=-20.0)
        )
        prefac = 2.0 * (0.5 + 0.2) / 2.0 / -10.0
        expected = jnp.array([0.0, prefac, prefac + 2.0 * 0.2 / -20.0])
        assert jnp.allclose(a, expected)

    def test_terms_superpose(self):
        planet = ParticleState.create([0.7, 0.4, 0.1], [-0.5, 0.9, 0.05])
        star = _star()
        full = accel_disc_edge(
            planet, star, DampingParameters.create(tau_a=-1e3, tau_e=-1e2, tau_inc=-5e2), edge=_EDGE
        )
        parts = (
            accel_disc_edge(planet, star, DampingParameters.create(tau_a=-1e3), edge=_EDGE)
            + accel_disc_edge(planet, star, DampingParameters.create(tau_e=-1e2), edge=_EDGE)
            + accel_disc_edge(planet, star, DampingParameters.create(tau_inc=-5e2), edge=_EDGE)
        )
        assert jnp.allclose(full, parts, rtol=1e-12)

    def test_circular_orbit_has_no_eccentricity_term(self):
        """v.r = 0 on a circular orbit."""
        planet = _circular(1.0)
        a = accel_disc_edge(planet, _star(), DampingParameters.create(tau_e=-10.0))
        assert jnp.allclose(a, 0.0)


class TestDegenerate:
    @staticmethod
    def _all():
        return DampingParameters.create(tau_a=-1e3, tau_e=-1e2, tau_inc=-1e2)

    def test_massless_source(self):
        planet = ParticleState.create([1.0, 0.0, 0.0], [0.0, 1.0, 0.1], 1e-3)
        a = accel_disc_edge(planet, _star(0.0), self._all(), edge=_EDGE)
        assert jnp.all(a == 0.0)

    def test_particle_on_source(self):
        planet = ParticleState.create([0.0, 0.0, 0.0], [0.0, 1.0, 0.1])
        a = accel_disc_edge(planet, _star(), self._all(), edge=_EDGE)
        assert jnp.all(a == 0.0)
        assert jnp.all(jnp.isfinite(a))

    def test_radial_orbit_still_migrates(self):
        """A radial orbit has a semimajor axis, so the force applies."""
        planet = ParticleState.create([1.0, 0.0, 0.0], [0.5, 0.0, 0.0])
        a = accel_disc_edge(planet, _star(), DampingParameters.create(tau_a=-1e3), edge=_EDGE)
        assert jnp.allclose(a, planet.velocity / (2.0 * -1e3))


class TestJax:
    def test_jit_compatible(self):
        planet = ParticleState.create([0.7, 0.4, 0.1], [-0.5, 0.9, 0.05])
        tau = DampingParameters.create(tau_a=-1e3, tau_e=-1e2, tau_inc=-5e2)

        @jax.jit
        def f(p, s, t):
            return accel_disc_edge(p, s, t, G=1.0, edge=_EDGE)

        a_eager = accel_disc_edge(planet, _star(), tau, edge=_EDGE)
        assert jnp.allclose(f(planet, _star(), tau), a_eager, atol=1e-15)

    def test_vmap_over_particles(self):
        planets = ParticleState(
            jnp.array([[1.0, 0.0, 0.0], [0.05, 0.0, 0.0]]),
            jnp.array([[0.0, 1.0, 0.0], [0.0, jnp.sqrt(20.0), 0.0]]),
            jnp.zeros(2),
        )
        tau = DampingParameters.stack(
            [DampingParameters.create(tau_a=-1e3), DampingParameters.create(tau_a=-1e3)]
        )
        a = jax.vmap(lambda p, t: accel_disc_edge(p, _star(), t, edge=_EDGE))(planets, tau)
        assert a.shape == (2, 3)
        assert jnp.allclose(a[0], planets.velocity[0] / -2e3)
        assert jnp.allclose(a[1], -10.0 * planets.velocity[1] / -2e3)
