"""Keplerian orbit relations for an arbitrary gravitational parameter.

This module provides the orbital period, mean motion and the anomaly
conversions needed to move between Keplerian elements and Cartesian
states.  Unlike a planet-specific toolkit, every function takes the
gravitational parameter ``gm`` explicitly, since the central mass of a
protoplanetary system is whatever the host simulation says it is.

All functions use JAX operations and are compatible with ``jax.jit``,
``jax.vmap``, and ``jax.grad``. Inputs are coerced to the configured
float dtype (see :func:`disctrap.config.set_dtype`).

The eccentric anomaly solver is a Newton-Raphson iteration implemented
with ``jax.lax.fori_loop`` for JAX traceability.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from disctrap.config import get_dtype

# ──────────────────────────────────────────────
# Orbital period and mean motion
# ──────────────────────────────────────────────


def orbital_period(a: ArrayLike, gm: ArrayLike) -> Array:
    """Compute the orbital period of a bound orbit.

    Args:
        a: Semi-major axis.
        gm: Gravitational parameter ``G * (m_primary + m_secondary)``.

    Returns:
        Orbital period, in the time unit implied by *gm*.

    Examples:
        ```python
        from disctrap.orbits import orbital_period
        T = orbital_period(1.0, 1.0)  # 2 pi in G = 1 units
        ```
    """
    a = jnp.asarray(a, dtype=get_dtype())
    gm = jnp.asarray(gm, dtype=get_dtype())
    return 2.0 * jnp.pi * jnp.sqrt(a**3 / gm)


def mean_motion(a: ArrayLike, gm: ArrayLike) -> Array:
    """Compute the mean motion of a bound orbit.

    Args:
        a: Semi-major axis.
        gm: Gravitational parameter.

    Returns:
        Mean motion. Units: *rad* per time unit implied by *gm*

    Examples:
        ```python
        from disctrap.orbits import mean_motion
        n = mean_motion(4.0, 1.0)  # 1/8
        ```
    """
    a = jnp.asarray(a, dtype=get_dtype())
    gm = jnp.asarray(gm, dtype=get_dtype())
    return jnp.sqrt(gm / a**3)


# ──────────────────────────────────────────────
# Anomaly conversions
# ──────────────────────────────────────────────


def anomaly_eccentric_to_mean(anm_ecc: ArrayLike, e: ArrayLike) -> Array:
    """Convert eccentric anomaly to mean anomaly.

    Applies Kepler's equation: ``M = E - e * sin(E)``.

    Args:
        anm_ecc: Eccentric anomaly. Units: *rad*
        e: Eccentricity. Dimensionless.

    Returns:
        Mean anomaly. Units: *rad*
    """
    E = jnp.asarray(anm_ecc, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    return E - e * jnp.sin(E)


def anomaly_mean_to_eccentric(anm_mean: ArrayLike, e: ArrayLike) -> Array:
    """Convert mean anomaly to eccentric anomaly.

    Solves Kepler's equation ``M = E - e * sin(E)`` for ``E`` using
    Newton-Raphson iteration implemented with ``jax.lax.fori_loop``
    for JAX traceability.

    Args:
        anm_mean: Mean anomaly. Units: *rad*
        e: Eccentricity. Dimensionless, ``0 <= e < 1``.

    Returns:
        Eccentric anomaly in ``[0, 2 pi)``. Units: *rad*

    Examples:
        ```python
        from disctrap.orbits import anomaly_mean_to_eccentric
        E = anomaly_mean_to_eccentric(1.2, 0.1)
        ```
    """
    M = jnp.asarray(anm_mean, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())

    M = M % (2.0 * jnp.pi)

    # Initial guess: M for low eccentricity, pi for high eccentricity
    E0 = jnp.where(e < 0.8, M, jnp.pi)

    def newton_step(_, E):
        f = E - e * jnp.sin(E) - M
        return E - f / (1.0 - e * jnp.cos(E))

    return jax.lax.fori_loop(0, 10, newton_step, E0)


def anomaly_true_to_eccentric(anm_true: ArrayLike, e: ArrayLike) -> Array:
    """Convert true anomaly to eccentric anomaly.

    Args:
        anm_true: True anomaly. Units: *rad*
        e: Eccentricity. Dimensionless, ``0 <= e < 1``.

    Returns:
        Eccentric anomaly. Units: *rad*
    """
    nu = jnp.asarray(anm_true, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    return jnp.arctan2(jnp.sin(nu) * jnp.sqrt(1.0 - e * e), jnp.cos(nu) + e)


def anomaly_eccentric_to_true(anm_ecc: ArrayLike, e: ArrayLike) -> Array:
    """Convert eccentric anomaly to true anomaly.

    Args:
        anm_ecc: Eccentric anomaly. Units: *rad*
        e: Eccentricity. Dimensionless, ``0 <= e < 1``.

    Returns:
        True anomaly. Units: *rad*
    """
    E = jnp.asarray(anm_ecc, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    return jnp.arctan2(jnp.sin(E) * jnp.sqrt(1.0 - e * e), jnp.cos(E) - e)
