"""Particle state containers.

:class:`ParticleState` holds the position, velocity and mass of one body,
or of a batch of bodies when every field carries a leading particle axis.
It is a :class:`~typing.NamedTuple`, which JAX treats as a pytree, so it
passes through ``jax.jit`` and ``jax.vmap`` unchanged.

The host simulation owns particle states; everything in disctrap only
reads them.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from disctrap.config import get_dtype


class ParticleState(NamedTuple):
    """Position, velocity and mass of one particle or a batch of particles.

    Attributes:
        position: Cartesian position, shape ``(3,)`` or ``(N, 3)``.
        velocity: Cartesian velocity, shape ``(3,)`` or ``(N, 3)``.
        mass: Mass, shape ``()`` or ``(N,)``.
    """

    position: Array
    velocity: Array
    mass: Array

    @staticmethod
    def create(
        position: ArrayLike,
        velocity: ArrayLike,
        mass: ArrayLike = 0.0,
    ) -> ParticleState:
        """Build a single-particle state, coercing to the configured dtype.

        Args:
            position: Position ``[x, y, z]``.
            velocity: Velocity ``[vx, vy, vz]``.
            mass: Mass.  Defaults to a test particle.

        Returns:
            ParticleState: The particle.

        Examples:
            ```python
            from disctrap.particles import ParticleState
            star = ParticleState.create([0.0, 0.0, 0.0], [0.0, 0.0, 0.0], 1.0)
            ```
        """
        _float = get_dtype()
        return ParticleState(
            jnp.asarray(position, dtype=_float),
            jnp.asarray(velocity, dtype=_float),
            jnp.asarray(mass, dtype=_float),
        )

    @property
    def state(self) -> Array:
        """Concatenated ``[x, y, z, vx, vy, vz]`` along the last axis."""
        return jnp.concatenate([self.position, self.velocity], axis=-1)

    @property
    def num_particles(self) -> int:
        """Number of particles in the batch (1 for an unbatched state)."""
        if self.mass.ndim == 0:
            return 1
        return self.mass.shape[0]


def particles_from_state(states: ArrayLike, masses: ArrayLike) -> ParticleState:
    """Build a batched :class:`ParticleState` from stacked state vectors.

    Args:
        states: Cartesian states ``[x, y, z, vx, vy, vz]``, shape ``(N, 6)``.
        masses: Particle masses, shape ``(N,)``.

    Returns:
        ParticleState: Batch with position ``(N, 3)``, velocity ``(N, 3)``
        and mass ``(N,)``.

    Raises:
        ValueError: If the shapes are inconsistent.

    Examples:
        ```python
        import jax.numpy as jnp
        from disctrap.particles import particles_from_state
        states = jnp.array([[0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
                            [1.0, 0.0, 0.0, 0.0, 1.0, 0.0]])
        ps = particles_from_state(states, jnp.array([1.0, 1e-5]))
        ```
    """
    _float = get_dtype()
    states = jnp.asarray(states, dtype=_float)
    masses = jnp.asarray(masses, dtype=_float)
    if states.ndim != 2 or states.shape[1] != 6:
        raise ValueError(f"states must have shape (N, 6), got {states.shape}")
    if masses.shape != (states.shape[0],):
        raise ValueError(
            f"masses must have shape ({states.shape[0]},), got {masses.shape}"
        )
    return ParticleState(states[:, :3], states[:, 3:6], masses)


def center_of_mass(particles: ParticleState) -> ParticleState:
    """Combine a batch of particles into a single centre-of-mass particle.

    The result carries the total mass.  A batch with zero total mass has
    no defined centre of mass; its position and velocity are returned as
    zero and the total mass as zero, which downstream code treats as a
    degenerate reference body.

    Args:
        particles: Batched particle state.

    Returns:
        ParticleState: Centre-of-mass position, velocity and total mass.
    """
    m = particles.mass
    m_tot = jnp.sum(m)
    safe = jnp.where(m_tot > 0.0, m_tot, 1.0)
    r = jnp.sum(m[:, None] * particles.position, axis=0) / safe
    v = jnp.sum(m[:, None] * particles.velocity, axis=0) / safe
    return ParticleState(r, v, m_tot)


def interior_centers_of_mass(particles: ParticleState) -> ParticleState:
    """Centre of mass of particles ``0..i-1`` for every index ``i``.

    Entry ``i`` of the result is the Jacobi reference body of particle
    ``i``.  Entry 0 has no interior particles and is returned with zero
    mass, position and velocity.

    Args:
        particles: Batched particle state, shape ``(N, ...)``.

    Returns:
        ParticleState: Batched interior centres of mass, shape ``(N, ...)``.
    """
    m = particles.mass
    mr = jnp.cumsum(m[:, None] * particles.position, axis=0)
    mv = jnp.cumsum(m[:, None] * particles.velocity, axis=0)
    mc = jnp.cumsum(m)

    # Shift by one so entry i only sums particles 0..i-1
    mr = jnp.concatenate([jnp.zeros_like(mr[:1]), mr[:-1]], axis=0)
    mv = jnp.concatenate([jnp.zeros_like(mv[:1]), mv[:-1]], axis=0)
    mc = jnp.concatenate([jnp.zeros_like(mc[:1]), mc[:-1]], axis=0)

    safe = jnp.where(mc > 0.0, mc, 1.0)[:, None]
    return ParticleState(mr / safe, mv / safe, mc)
