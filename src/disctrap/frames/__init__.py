"""Reference frames for pairwise perturbation forces.

- **Coordinates**: the Jacobi / barycentric / single-primary frame choice.
- **com_force**: evaluates a particle-vs-reference-body acceleration for a
  whole particle set in the chosen frame, with optional back-reactions.
"""

from .com import com_force
from .coordinates import Coordinates

__all__ = [
    "Coordinates",
    "com_force",
]
