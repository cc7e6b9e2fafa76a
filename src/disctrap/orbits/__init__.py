"""Orbital element conversions.

This sub-module provides:

- **State to elements**: :func:`particle_to_orbit`, returning an
  :class:`OrbitResult` that carries an error code alongside the elements
  so degenerate primaries can be handled inside ``jax.jit``.
- **Elements to state**: :func:`state_elements_to_cartesian` and
  :func:`orbit_to_particle`.
- **Keplerian relations**: orbital period, mean motion and the
  anomaly conversions, including a JAX-traceable Kepler equation solver.
"""

from .elements import (
    ORBIT_ERR_COINCIDENT,
    ORBIT_ERR_PRIMARY_MASS,
    ORBIT_ERR_RADIAL,
    ORBIT_OK,
    OrbitalElements,
    OrbitResult,
    orbit_to_particle,
    particle_to_orbit,
    state_elements_to_cartesian,
)
from .keplerian import (
    anomaly_eccentric_to_mean,
    anomaly_eccentric_to_true,
    anomaly_mean_to_eccentric,
    anomaly_true_to_eccentric,
    mean_motion,
    orbital_period,
)

__all__ = [
    # Elements
    "ORBIT_OK",
    "ORBIT_ERR_PRIMARY_MASS",
    "ORBIT_ERR_COINCIDENT",
    "ORBIT_ERR_RADIAL",
    "OrbitalElements",
    "OrbitResult",
    "particle_to_orbit",
    "state_elements_to_cartesian",
    "orbit_to_particle",
    # Keplerian relations
    "orbital_period",
    "mean_motion",
    "anomaly_eccentric_to_mean",
    "anomaly_mean_to_eccentric",
    "anomaly_true_to_eccentric",
    "anomaly_eccentric_to_true",
]
