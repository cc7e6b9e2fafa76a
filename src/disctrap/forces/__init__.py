"""Disc-driven migration and damping forces.

- **Planet trap**: migration reversal factor near an inner disc edge
- **Disc edge**: migration, eccentricity and inclination damping
  acceleration of one particle relative to its reference body
- **Configuration**: edge geometry, per-particle timescales and
  force-instance settings
- **Factory**: the force evaluated for a whole particle set in the
  configured frame
"""

from .config import DampingParameters, DiscEdgeConfig, EdgeParameters
from .disc_edge import accel_disc_edge
from .factory import create_disc_edge_dynamics, create_disc_edge_force
from .planet_trap import TRAP_INNER_FACTOR, TRAP_OUTER_FACTOR, trap_factor

__all__ = [
    # Planet trap
    "TRAP_OUTER_FACTOR",
    "TRAP_INNER_FACTOR",
    "trap_factor",
    # Disc edge
    "accel_disc_edge",
    # Configuration
    "DampingParameters",
    "EdgeParameters",
    "DiscEdgeConfig",
    # Factory
    "create_disc_edge_force",
    "create_disc_edge_dynamics",
]
