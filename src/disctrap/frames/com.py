"""Apply a pairwise perturbation in a chosen reference frame.

:func:`com_force` is the bridge between a force model that only knows
about one particle and its reference body, and a full particle set.  It
builds the reference body of every particle for the requested
:class:`~disctrap.frames.coordinates.Coordinates`, evaluates the model
for all particles at once with ``jax.vmap``, and optionally distributes
the equal and opposite reaction over the bodies that make up each
reference so that total momentum is conserved.

The frame is a Python-level value, so the branch on it is resolved at
trace time and the compiled graph contains only the selected frame.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import jax
import jax.numpy as jnp
from jax import Array

from disctrap.frames.coordinates import Coordinates
from disctrap.particles import (
    ParticleState,
    center_of_mass,
    interior_centers_of_mass,
)

AccelFn = Callable[[ParticleState, ParticleState, Any], Array]


def _broadcast(body: ParticleState, n: int) -> ParticleState:
    return jax.tree_util.tree_map(
        lambda x: jnp.broadcast_to(x, (n,) + jnp.shape(x)), body
    )


def _safe_inverse(m: Array) -> Array:
    return jnp.where(m > 0.0, 1.0 / jnp.where(m > 0.0, m, 1.0), 0.0)


def com_force(
    accel_fn: AccelFn,
    particles: ParticleState,
    params: Any,
    coordinates: Coordinates | int | str = Coordinates.JACOBI,
    back_reactions: bool = True,
    primary_index: int = 0,
) -> Array:
    """Evaluate a per-particle acceleration in the given frame.

    Args:
        accel_fn: ``accel_fn(particle, source, params_i) -> (3,)`` giving
            the extra acceleration of one particle relative to its
            reference body.
        particles: Batched particle state with ``N`` particles.
        params: Pytree of per-particle parameters, each leaf with a
            leading axis of length ``N``.
        coordinates: Reference frame.
        back_reactions: If ``True``, apply the reaction of every
            particle's force to the bodies forming its reference.
        primary_index: Index of the primary in ``PARTICLE`` mode.

    Returns:
        Extra acceleration of every particle, shape ``(N, 3)``.

    Raises:
        ValueError: If *primary_index* is out of range in ``PARTICLE`` mode.

    Examples:
        ```python
        import jax.numpy as jnp
        from disctrap.frames import com_force
        from disctrap.particles import particles_from_state
        ps = particles_from_state(jnp.array([[0.0, 0, 0, 0, 0, 0],
                                             [1.0, 0, 0, 0, 1, 0]]),
                                  jnp.array([1.0, 1e-3]))
        drag = lambda p, src, k: -k * (p.velocity - src.velocity)
        a = com_force(drag, ps, jnp.array([0.0, 1e-2]))
        ```
    """
    coordinates = Coordinates.resolve(coordinates)
    n = particles.mass.shape[0]
    m = particles.mass
    index = jnp.arange(n)

    if coordinates == Coordinates.JACOBI:
        sources = interior_centers_of_mass(particles)
        active = index > 0
    elif coordinates == Coordinates.BARYCENTRIC:
        com = center_of_mass(particles)
        sources = _broadcast(com, n)
        active = jnp.ones(n, dtype=bool)
    else:
        if not 0 <= primary_index < n:
            raise ValueError(
                f"primary_index must be in [0, {n}), got {primary_index}"
            )
        primary = jax.tree_util.tree_map(lambda x: x[primary_index], particles)
        sources = _broadcast(primary, n)
        active = index != primary_index

    accel = jax.vmap(accel_fn)(particles, sources, params)
    accel = jnp.where(active[:, None], accel, 0.0)

    if not back_reactions:
        return accel

    force = m[:, None] * accel

    if coordinates == Coordinates.JACOBI:
        # Particle j reacts to every outer particle i > j, weighted by the
        # interior mass of i.
        w = force * _safe_inverse(sources.mass)[:, None]
        outer = jnp.cumsum(w[::-1], axis=0)[::-1] - w
        return accel - outer

    if coordinates == Coordinates.BARYCENTRIC:
        reaction = jnp.sum(force, axis=0) * _safe_inverse(sources.mass[0])
        return accel - reaction[None, :]

    reaction = jnp.sum(force, axis=0) * _safe_inverse(m[primary_index])
    return accel.at[primary_index].add(-reaction)
