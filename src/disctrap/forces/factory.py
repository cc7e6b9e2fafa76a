"""Disc-edge force factory.

Binds a :class:`~disctrap.forces.config.DiscEdgeConfig` into a
``force(particles, damping) -> accelerations`` closure that evaluates the
migration model for every particle in the configured frame.

The factory captures static configuration at Python trace time: the
frame, the edge geometry and the back-reaction switch become Python
branches resolved during ``jax.jit`` tracing, so the frame is chosen once
per compiled program and never re-checked per particle.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from disctrap.config import get_dtype
from disctrap.forces.config import DampingParameters, DiscEdgeConfig
from disctrap.forces.disc_edge import accel_disc_edge
from disctrap.frames.com import com_force
from disctrap.particles import ParticleState, particles_from_state

logger = logging.getLogger(__name__)

DiscEdgeForce = Callable[[ParticleState, DampingParameters], Array]


def _check_batch(particles: ParticleState, damping: DampingParameters) -> None:
    n = particles.mass.shape[0] if particles.mass.ndim == 1 else None
    if n is None:
        raise ValueError(
            f"particles must be a batch with mass shape (N,), got {particles.mass.shape}"
        )
    for name, tau in zip(damping._fields, damping):
        if jnp.shape(tau) != (n,):
            raise ValueError(f"{name} must have shape ({n},), got {jnp.shape(tau)}")


def create_disc_edge_force(config: DiscEdgeConfig | None = None) -> DiscEdgeForce:
    """Create the disc-edge migration force for a particle set.

    Args:
        config: Force configuration.  Defaults to
            ``DiscEdgeConfig.migration_only()``.

    Returns:
        A callable ``force(particles, damping) -> accelerations`` where:

        - *particles*: batched :class:`ParticleState` with ``N`` particles.
        - *damping*: batched :class:`DampingParameters`, each ``(N,)``.
        - *accelerations*: extra acceleration of every particle including
          back-reactions, shape ``(N, 3)``.

    Raises:
        ValueError: At call time, if the batch shapes disagree or the
            primary index is outside the particle set.

    Examples:
        ```python
        import jax.numpy as jnp
        from disctrap.forces import DampingParameters, DiscEdgeConfig, create_disc_edge_force
        from disctrap.particles import particles_from_state
        force = create_disc_edge_force(DiscEdgeConfig.pichierri_trap())
        ps = particles_from_state(jnp.array([[0.0, 0, 0, 0, 0, 0],
                                             [1.0, 0, 0, 0, 1, 0]]),
                                  jnp.array([1.0, 1e-5]))
        tau = DampingParameters.stack([None, DampingParameters.create(tau_a=-1e4)])
        a = force(ps, tau)
        ```
    """
    if config is None:
        config = DiscEdgeConfig.migration_only()

    # Capture static configuration into local variables for the closure.
    _coordinates = config.coordinates
    _edge = config.edge
    _G = config.G
    _back_reactions = config.back_reactions
    _primary_index = config.primary_index

    if _edge is None:
        logger.debug(
            "Disc-edge force: %s coordinates, no planet trap, back_reactions=%s",
            _coordinates.name.lower(), _back_reactions,
        )
    else:
        logger.debug(
            "Disc-edge force: %s coordinates, edge at %g with half-width %g "
            "(trap zone %g..%g), back_reactions=%s",
            _coordinates.name.lower(), _edge.inner_disc_edge, _edge.disc_edge_width,
            _edge.inner_radius, _edge.outer_radius, _back_reactions,
        )

    def accel_fn(particle: ParticleState, source: ParticleState, damping: DampingParameters) -> Array:
        return accel_disc_edge(particle, source, damping, G=_G, edge=_edge)

    def force(particles: ParticleState, damping: DampingParameters) -> Array:
        _check_batch(particles, damping)
        return com_force(
            accel_fn,
            particles,
            damping,
            coordinates=_coordinates,
            back_reactions=_back_reactions,
            primary_index=_primary_index,
        )

    return force


def create_disc_edge_dynamics(
    masses: ArrayLike,
    damping: DampingParameters,
    config: DiscEdgeConfig | None = None,
) -> Callable[[ArrayLike, ArrayLike], Array]:
    """Wrap the disc-edge force as an additive term for an ODE right-hand side.

    The returned ``dynamics(t, state)`` takes the flattened state of
    ``N`` particles (``N * 6`` values, ``[x, y, z, vx, vy, vz]`` per
    particle) and returns a derivative of the same shape that is zero in
    the position slots and holds the disc-edge acceleration in the
    velocity slots.  It is meant to be added to the host's gravitational
    dynamics, for example as an integrator's additive control term.

    Args:
        masses: Particle masses, shape ``(N,)``.
        damping: Batched timescales, each ``(N,)``.
        config: Force configuration.

    Returns:
        A callable ``dynamics(t, state) -> derivative``.

    Examples:
        ```python
        import jax.numpy as jnp
        from disctrap.forces import DampingParameters, create_disc_edge_dynamics
        tau = DampingParameters.stack([None, DampingParameters.create(tau_a=-1e4)])
        dyn = create_disc_edge_dynamics(jnp.array([1.0, 1e-5]), tau)
        dx = dyn(0.0, jnp.array([0.0, 0, 0, 0, 0, 0, 1.0, 0, 0, 0, 1, 0]))
        ```
    """
    _masses = jnp.asarray(masses, dtype=get_dtype())
    _damping = damping
    _force = create_disc_edge_force(config)

    def dynamics(t: ArrayLike, state: ArrayLike) -> Array:
        """Disc-edge contribution to the state derivative.

        Args:
            t: Time (unused; the force is autonomous).
            state: Flattened ``(N * 6,)`` state.

        Returns:
            jax.Array: Flattened ``(N * 6,)`` derivative.
        """
        states = jnp.reshape(jnp.asarray(state, dtype=get_dtype()), (-1, 6))
        particles = particles_from_state(states, _masses)
        accel = _force(particles, _damping)
        return jnp.concatenate([jnp.zeros_like(accel), accel], axis=1).reshape(-1)

    return dynamics
