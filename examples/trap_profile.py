# /// script
# requires-python = ">=3.10"
# dependencies = ["typer>=0.9.0", "disctrap"]
#
# [tool.uv.sources]
# disctrap = { path = ".." }
# ///
"""Tabulate the planet-trap factor and the resulting migration rates.

Places a chain of test planets on circular orbits across the inner disc
edge, evaluates the disc-edge force for all of them in one JIT-compiled
call, and prints the trap factor and the along-track acceleration
relative to plain migration.

Requires disctrap to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/trap_profile.py [OPTIONS]

Examples:
    # Default: edge at 0.1 with a 20% half-width
    uv run examples/trap_profile.py

    # Wider zone, more sample radii
    uv run examples/trap_profile.py --disc-edge-width 0.4 --samples 25
"""

from typing import Annotated

import jax
import jax.numpy as jnp
import typer

from disctrap import (
    DampingParameters,
    DiscEdgeConfig,
    EdgeParameters,
    ParticleState,
    create_disc_edge_force,
    set_dtype,
    trap_factor,
)

set_dtype(jnp.float64)  # Must be before any JIT compilation


def main(
    inner_disc_edge: Annotated[float, typer.Option(help="Radius of the inner disc edge")] = 0.1,
    disc_edge_width: Annotated[float, typer.Option(help="Half-width as a fraction of the edge radius")] = 0.2,
    tau_a: Annotated[float, typer.Option(help="Semimajor-axis timescale (negative migrates inward)")] = -1e4,
    samples: Annotated[int, typer.Option(help="Number of planets across the edge")] = 13,
):
    edge = EdgeParameters(inner_disc_edge, disc_edge_width)
    config = DiscEdgeConfig(edge=edge, coordinates="particle", back_reactions=False)

    radii = jnp.linspace(0.5 * edge.inner_radius, 1.5 * edge.outer_radius, samples)
    v_circ = jnp.sqrt(1.0 / radii)
    zeros = jnp.zeros_like(radii)

    # Star first, then massless planets on circular orbits
    position = jnp.concatenate([jnp.zeros((1, 3)), jnp.stack([radii, zeros, zeros], axis=1)])
    velocity = jnp.concatenate([jnp.zeros((1, 3)), jnp.stack([zeros, v_circ, zeros], axis=1)])
    mass = jnp.concatenate([jnp.ones(1), zeros])
    particles = ParticleState(position, velocity, mass)

    damping = DampingParameters.stack(
        [None] + [DampingParameters.create(tau_a=tau_a)] * samples
    )

    force = jax.jit(create_disc_edge_force(config))
    accel = force(particles, damping)[1:]

    plain = v_circ / (2.0 * tau_a)
    factor = trap_factor(radii, edge.disc_edge_width, edge.inner_disc_edge)

    typer.echo(f"Trap zone: {edge.inner_radius:.4f} .. {edge.outer_radius:.4f}")
    typer.echo(f"{'radius':>10} {'factor':>10} {'a_y/plain':>10} {'direction':>10}")
    for r, f, a_y, p in zip(radii, factor, accel[:, 1], plain):
        direction = "inward" if a_y < 0.0 else "outward"
        typer.echo(f"{float(r):10.4f} {float(f):10.3f} {float(a_y / p):10.3f} {direction:>10}")


if __name__ == "__main__":
    typer.run(main)
