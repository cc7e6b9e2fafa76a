"""
disctrap models disc-driven planetary migration, eccentricity and inclination damping, and the planet trap at an inner disc edge, as extra forces for N-body integrators, implemented in JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    G_SI,
    AU,
    GM_SUN,
    G_NATURAL,
    G_AU_MSUN_YR,
    G_AU_MSUN_DAY,
)

from .config import set_dtype, get_dtype
from .particles import ParticleState, particles_from_state, center_of_mass

from .orbits import (
    OrbitalElements,
    OrbitResult,
    particle_to_orbit,
    orbit_to_particle,
    state_elements_to_cartesian,
    orbital_period,
    mean_motion,
)

from .frames import Coordinates, com_force

from .forces import (
    trap_factor,
    accel_disc_edge,
    DampingParameters,
    EdgeParameters,
    DiscEdgeConfig,
    create_disc_edge_force,
    create_disc_edge_dynamics,
)

__all__ = [
    # Constants
    "DEG2RAD",
    "RAD2DEG",
    "G_SI",
    "AU",
    "GM_SUN",
    "G_NATURAL",
    "G_AU_MSUN_YR",
    "G_AU_MSUN_DAY",
    # Config
    "set_dtype",
    "get_dtype",
    # Particles
    "ParticleState",
    "particles_from_state",
    "center_of_mass",
    # Orbits
    "OrbitalElements",
    "OrbitResult",
    "particle_to_orbit",
    "orbit_to_particle",
    "state_elements_to_cartesian",
    "orbital_period",
    "mean_motion",
    # Frames
    "Coordinates",
    "com_force",
    # Forces
    "trap_factor",
    "accel_disc_edge",
    "DampingParameters",
    "EdgeParameters",
    "DiscEdgeConfig",
    "create_disc_edge_force",
    "create_disc_edge_dynamics",
]
