"""Planet trap at the inner edge of a protoplanetary disc.

Near the inner edge of a gas disc the corotation torque changes sign and
inward type-I migration is halted, or reversed, in a narrow zone.  This
is modelled as a dimensionless factor that multiplies the inverse
semimajor-axis damping rate ``1 / tau_a``:

- outside ``dedge * (1 + h)`` the factor is 1 and migration is unchanged;
- inside ``dedge * (1 - h)`` the factor is -10, a strong outward push;
- in between it follows a raised cosine that is continuous with both
  plateaus, passing through 0 (no migration) inside the zone.

References:
    1. G. Pichierri, A. Morbidelli and A. Crida, *Capture into
       first-order resonances and long-term stability of pairs of
       equal-mass planets*, Celest. Mech. Dyn. Astr. 130, 2018.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from disctrap.config import get_dtype

TRAP_OUTER_FACTOR = 1.0
TRAP_INNER_FACTOR = -10.0


def trap_factor(r: ArrayLike, h: ArrayLike, dedge: ArrayLike) -> Array:
    """Migration reduction/reversal factor at orbital radius *r*.

    Args:
        r: Orbital radius (the semimajor axis in the migration model).
        h: Half-width of the transition zone as a fraction of *dedge*.
            Must be positive.
        dedge: Radius of the inner disc edge.  Must be positive.

    Returns:
        Factor in ``[-10, 1]``, same shape as *r*.

    Examples:
        ```python
        from disctrap.forces import trap_factor
        trap_factor(1.5, 0.2, 1.0)   # 1.0
        trap_factor(1.0, 0.2, 1.0)   # -4.5
        trap_factor(0.5, 0.2, 1.0)   # -10.0
        ```
    """
    _float = get_dtype()
    r = jnp.asarray(r, dtype=_float)
    h = jnp.asarray(h, dtype=_float)
    dedge = jnp.asarray(dedge, dtype=_float)

    outer = dedge * (1.0 + h)
    inner = dedge * (1.0 - h)

    # Cosine argument runs from 0 at the outer boundary to pi at the inner one
    phase = (outer - r) * 2.0 * jnp.pi / (4.0 * h * dedge)
    ramp = 5.5 * jnp.cos(phase) - 4.5

    return jnp.where(
        r > outer,
        TRAP_OUTER_FACTOR,
        jnp.where(r > inner, ramp, TRAP_INNER_FACTOR),
    ).astype(_float)
