"""Reference frame selection for per-particle perturbation forces."""

from __future__ import annotations

import enum


class Coordinates(enum.IntEnum):
    """Frame in which a particle's reference body is defined.

    Attributes:
        JACOBI: Reference body of particle ``i`` is the centre of mass of
            particles ``0..i-1``.  Particle 0 feels no direct force.
        BARYCENTRIC: Reference body is the centre of mass of all particles.
        PARTICLE: Reference body is a single designated primary particle.
    """

    JACOBI = 0
    BARYCENTRIC = 1
    PARTICLE = 2

    @classmethod
    def resolve(cls, value: Coordinates | int | str) -> Coordinates:
        """Normalise a member, integer value or case-insensitive name.

        Args:
            value: ``Coordinates`` member, its integer value, or one of
                ``"jacobi"``, ``"barycentric"``, ``"particle"``.

        Returns:
            Coordinates: The matching member.

        Raises:
            ValueError: If *value* does not name a coordinate frame.

        Examples:
            ```python
            from disctrap.frames import Coordinates
            Coordinates.resolve("barycentric")
            ```
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(
                    f"coordinates must be 'jacobi', 'barycentric' or 'particle', "
                    f"got '{value}'"
                ) from None
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(
                    f"coordinates must be one of {[int(c) for c in cls]}, got {value}"
                ) from None
        raise ValueError(f"Unsupported coordinates value {value!r}")
