"""Disc-driven migration, eccentricity and inclination damping.

Computes the extra acceleration felt by a body embedded in a gas disc,
relative to its reference body.  The forces orbit-average to exponential
evolution of the orbital elements:

- **Migration**: ``a_mig = dv / (2 tau_a)`` scaled by the planet-trap
  factor, so the semimajor axis e-folds on ``tau_a / trap_factor``.
- **Eccentricity damping**: a radial term ``2 (v.r) r / (r^2 tau_e)``.
  It keeps the angular momentum fixed, so damping ``e`` also moves ``a``
  somewhat and induces pericentre precession.
- **Inclination damping**: a vertical term ``2 vz / tau_inc``, which
  also induces nodal precession.

Negative timescales damp the corresponding element (and make migration
inward); positive timescales make it grow.

References:
    1. J. C. B. Papaloizou and J. D. Larwood, *On the orbital evolution
       and growth of protoplanets embedded in a gaseous disc*, MNRAS 315,
       2000.
    2. V. B. Kostov et al., *Kepler-1647b: the largest and longest-period
       Kepler transiting circumbinary planet*, ApJ 832, 2016.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from disctrap.config import get_dtype
from disctrap.forces.config import DampingParameters, EdgeParameters
from disctrap.forces.planet_trap import trap_factor
from disctrap.orbits.elements import particle_to_orbit
from disctrap.particles import ParticleState


def _inverse_timescale(tau: Array) -> Array:
    finite = jnp.isfinite(tau)
    return jnp.where(finite, 1.0 / jnp.where(finite, tau, 1.0), 0.0)


def accel_disc_edge(
    particle: ParticleState,
    source: ParticleState,
    damping: DampingParameters,
    G: ArrayLike = 1.0,
    edge: EdgeParameters | None = None,
) -> Array:
    """Migration and damping acceleration of one particle.

    The semimajor axis used by the planet trap is recomputed from the
    current states on every call.  If no orbit about *source* can be
    defined (massless source, or the particle sits on it) the result is
    zero.

    Args:
        particle: The perturbed particle.
        source: Its reference body, in the same frame.
        damping: Timescales of this particle; ``inf`` disables a channel.
        G: Gravitational constant.
        edge: Disc-edge geometry, or ``None`` for no planet trap.

    Returns:
        Acceleration vector, shape ``(3,)``.

    Examples:
        ```python
        from disctrap.particles import ParticleState
        from disctrap.forces import DampingParameters, accel_disc_edge
        star = ParticleState.create([0.0, 0.0, 0.0], [0.0, 0.0, 0.0], 1.0)
        planet = ParticleState.create([1.0, 0.0, 0.0], [0.0, 1.0, 0.0])
        a = accel_disc_edge(planet, star, DampingParameters.create(tau_a=-1e4))
        ```
    """
    _float = get_dtype()
    dr = jnp.asarray(particle.position, dtype=_float) - jnp.asarray(source.position, dtype=_float)
    dv = jnp.asarray(particle.velocity, dtype=_float) - jnp.asarray(source.velocity, dtype=_float)
    r2 = jnp.dot(dr, dr)

    orbit = particle_to_orbit(G, particle, source)

    tau_a, tau_e, tau_inc = (jnp.asarray(t, dtype=_float) for t in damping)

    if edge is None:
        factor = jnp.asarray(1.0, dtype=_float)
    else:
        factor = trap_factor(orbit.elements.a, edge.disc_edge_width, edge.inner_disc_edge)

    invtau_a = factor * _inverse_timescale(tau_a)
    invtau_e = _inverse_timescale(tau_e)
    invtau_inc = _inverse_timescale(tau_inc)

    accel = dv * invtau_a / 2.0

    vdotr = jnp.dot(dr, dv)
    prefac = 2.0 * vdotr / jnp.where(r2 > 0.0, r2, 1.0) * invtau_e
    coupled = prefac * dr + jnp.array([0.0, 0.0, 2.0 * dv[2] * invtau_inc], dtype=_float)
    damped = jnp.isfinite(tau_e) | jnp.isfinite(tau_inc)
    accel = accel + jnp.where(damped, coupled, 0.0)

    return jnp.where(orbit.degenerate, jnp.zeros(3, dtype=_float), accel)
