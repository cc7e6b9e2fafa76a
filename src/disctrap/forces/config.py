"""Configuration for the disc-edge migration force.

Provides :class:`EdgeParameters` for the disc-edge geometry,
:class:`DampingParameters` for the per-particle damping timescales and
:class:`DiscEdgeConfig` for a force instance.  Everything is validated
here, once, so the per-step computation never has to check it.

Configuration is static: the frame choice and the presence of an edge
are Python values resolved at JAX trace time.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import NamedTuple

import jax.numpy as jnp
import numpy as np
from jax import Array

from disctrap.config import get_dtype
from disctrap.frames.coordinates import Coordinates

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EdgeParameters:
    """Geometry of the inner disc edge.

    Args:
        inner_disc_edge: Radius of the inner disc edge, ``dedge``.
        disc_edge_width: Half-width of the transition zone as a fraction
            of ``dedge``, ``h``.

    Raises:
        ValueError: If either value is not a finite positive number.

    Examples:
        ```python
        from disctrap.forces.config import EdgeParameters
        edge = EdgeParameters(inner_disc_edge=0.1, disc_edge_width=0.2)
        edge.outer_radius
        ```
    """

    inner_disc_edge: float
    disc_edge_width: float

    def __post_init__(self) -> None:
        for name in ("inner_disc_edge", "disc_edge_width"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0.0:
                raise ValueError(f"{name} must be a finite positive number, got {value!r}")

    @property
    def outer_radius(self) -> float:
        """Radius outside which migration is unmodified."""
        return self.inner_disc_edge * (1.0 + self.disc_edge_width)

    @property
    def inner_radius(self) -> float:
        """Radius inside which migration is fully reversed."""
        return self.inner_disc_edge * (1.0 - self.disc_edge_width)


def _timescale(name: str, value: float | None) -> float:
    if value is None:
        return math.inf
    value = float(value)
    if math.isnan(value) or value == 0.0:
        raise ValueError(f"{name} must be non-zero and not NaN, got {value!r}")
    return value


class DampingParameters(NamedTuple):
    """Exponential damping timescales of one particle or a batch.

    An absent timescale is stored as ``+inf`` and switches its channel
    off.  Negative timescales damp (inward migration for ``tau_a``),
positive timescales give exponential growth.

    Attributes:
        tau_a: Semimajor-axis e-folding timescale.
        tau_e: Eccentricity damping timescale.
        tau_inc: Inclination damping timescale.
    """

    tau_a: Array
    tau_e: Array
    tau_inc: Array

    @staticmethod
    def create(
        tau_a: float | None = None,
        tau_e: float | None = None,
        tau_inc: float | None = None,
    ) -> DampingParameters:
        """Build the timescales of a single particle.

        Args:
            tau_a: Semimajor-axis timescale, or ``None`` for no migration.
            tau_e: Eccentricity timescale, or ``None`` for no damping.
            tau_inc: Inclination timescale, or ``None`` for no damping.

        Returns:
            DampingParameters: Scalar timescales in the configured dtype.

        Raises:
            ValueError: If a timescale is zero or NaN.

        Examples:
            ```python
            from disctrap.forces.config import DampingParameters
            tau = DampingParameters.create(tau_a=-1e4, tau_e=-1e2)
            ```
        """
        _float = get_dtype()
        return DampingParameters(
            jnp.asarray(_timescale("tau_a", tau_a), dtype=_float),
            jnp.asarray(_timescale("tau_e", tau_e), dtype=_float),
            jnp.asarray(_timescale("tau_inc", tau_inc), dtype=_float),
        )

    @staticmethod
    def stack(records: Sequence[DampingParameters | None]) -> DampingParameters:
        """Stack single-particle timescales into a batch.

        Args:
            records: One entry per particle; ``None`` means the particle
                has no damping at all.

        Returns:
            DampingParameters: Timescales with shape ``(N,)``.

        Examples:
            ```python
            from disctrap.forces.config import DampingParameters
            tau = DampingParameters.stack([None, DampingParameters.create(tau_a=-1e4)])
            tau.tau_a.shape
            ```
        """
        rows = np.full((len(records), 3), np.inf)
        for i, record in enumerate(records):
            if record is not None:
                rows[i] = [float(record.tau_a), float(record.tau_e), float(record.tau_inc)]

        active = np.isfinite(rows).sum(axis=0)
        logger.debug(
            "Stacked damping for %d particles: tau_a=%d tau_e=%d tau_inc=%d",
            len(records), active[0], active[1], active[2],
        )

        _float = get_dtype()
        return DampingParameters(
            jnp.asarray(rows[:, 0], dtype=_float),
            jnp.asarray(rows[:, 1], dtype=_float),
            jnp.asarray(rows[:, 2], dtype=_float),
        )

    @staticmethod
    def none(n: int) -> DampingParameters:
        """Batch of ``n`` particles with every channel switched off."""
        return DampingParameters.stack([None] * n)


@dataclass(frozen=True)
class DiscEdgeConfig:
    """Configuration of one disc-edge migration force instance.

    Args:
        edge: Disc-edge geometry.  ``None`` disables the planet trap and
            leaves plain exponential migration and damping.
        coordinates: Reference frame, as a :class:`Coordinates` member,
            its integer value, or ``"jacobi"``, ``"barycentric"`` or
            ``"particle"``.  Defaults to Jacobi.
        back_reactions: Apply the reaction of each particle's force to
            its reference bodies.
        primary_index: Index of the primary particle in ``particle``
            coordinates.
        G: Gravitational constant in the simulation's units.

    Examples:
        ```python
        from disctrap.forces.config import DiscEdgeConfig, EdgeParameters
        config = DiscEdgeConfig(edge=EdgeParameters(0.1, 0.2), coordinates="particle")
        config.coordinates
        ```
    """

    edge: EdgeParameters | None = None
    coordinates: Coordinates = Coordinates.JACOBI
    back_reactions: bool = True
    primary_index: int = 0
    G: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "coordinates", Coordinates.resolve(self.coordinates))
        if self.edge is not None and not isinstance(self.edge, EdgeParameters):
            raise ValueError(
                f"edge must be an EdgeParameters instance or None, got {type(self.edge).__name__}"
            )
        if not math.isfinite(self.G) or self.G <= 0.0:
            raise ValueError(f"G must be a finite positive number, got {self.G!r}")
        if self.primary_index < 0:
            raise ValueError(f"primary_index must be non-negative, got {self.primary_index}")

    @staticmethod
    def migration_only(G: float = 1.0) -> DiscEdgeConfig:
        """Preset: exponential migration and damping without a disc edge.

        Returns:
            DiscEdgeConfig: Jacobi coordinates, back-reactions on, no edge.
        """
        return DiscEdgeConfig(G=G)

    @staticmethod
    def pichierri_trap(
        inner_disc_edge: float = 0.1,
        disc_edge_width: float = 0.2,
        G: float = 1.0,
    ) -> DiscEdgeConfig:
        """Preset: planet trap at an inner disc edge.

        Defaults place the edge at 0.1 with a 20% half-width, as used for
        close-in resonant chains.

        Returns:
            DiscEdgeConfig: Jacobi coordinates with the given edge.
        """
        return DiscEdgeConfig(
            edge=EdgeParameters(inner_disc_edge, disc_edge_width),
            G=G,
        )
