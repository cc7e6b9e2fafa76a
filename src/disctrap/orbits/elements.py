"""Osculating orbital elements from particle states, and back.

:func:`particle_to_orbit` reduces the relative state of a particle with
respect to a primary to osculating Keplerian elements.  The conversion
can fail: the primary may be massless, or the particle may sit on top
of it.  Rather than raising (which is impossible inside ``jax.jit``) or
silently returning NaNs, it returns an :class:`OrbitResult` carrying
both the elements and an integer error code:

| Code | Meaning                                                  |
|------|----------------------------------------------------------|
| 0    | success                                                  |
| 1    | primary mass is not positive                             |
| 2    | particle coincides with the primary                      |
| 3    | radial orbit (zero specific angular momentum)            |

For codes 1 and 2 every element is zero.  For code 3 the size elements
(``a``, ``e``, ``P``, ``n``, ``d``, ``v``, ``h``) are valid and the angles
are zero, since no orbital plane exists.

:func:`orbit_to_particle` performs the inverse for bound orbits, using
the ``[a, e, inc, Omega, omega, M]`` element ordering.

References:
    1. C. D. Murray and S. F. Dermott, *Solar System Dynamics*, 1999,
       Sec. 2.8.
    2. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, Springer, 2012, Sec. 2.2.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from disctrap.config import get_degeneracy_tolerance, get_dtype
from disctrap.orbits.keplerian import anomaly_mean_to_eccentric
from disctrap.particles import ParticleState

ORBIT_OK = 0
ORBIT_ERR_PRIMARY_MASS = 1
ORBIT_ERR_COINCIDENT = 2
ORBIT_ERR_RADIAL = 3


class OrbitalElements(NamedTuple):
    """Osculating orbital elements of a particle about a primary.

    Angles are in radians and normalised to ``[0, 2 pi)`` (the mean
    anomaly of a hyperbolic orbit is left unwrapped).

    Attributes:
        a: Semi-major axis (negative for hyperbolic orbits).
        e: Eccentricity.
        inc: Inclination.
        Omega: Longitude of the ascending node.
        omega: Argument of pericentre.
        pomega: Longitude of pericentre.
        f: True anomaly.
        M: Mean anomaly.
        l: Mean longitude.
        theta: True longitude.
        P: Orbital period (negative for hyperbolic orbits).
        n: Mean motion (negative for hyperbolic orbits).
        h: Specific angular momentum.
        d: Distance from the primary.
        v: Speed relative to the primary.
    """

    a: Array
    e: Array
    inc: Array
    Omega: Array
    omega: Array
    pomega: Array
    f: Array
    M: Array
    l: Array
    theta: Array
    P: Array
    n: Array
    h: Array
    d: Array
    v: Array


class OrbitResult(NamedTuple):
    """Orbital elements together with the conversion error code.

    Attributes:
        elements: The osculating elements.  Zero where ``err`` is 1 or 2.
        err: Integer error code, see the module docstring.
    """

    elements: OrbitalElements
    err: Array

    @property
    def degenerate(self) -> Array:
        """``True`` where no orbit about the primary can be defined."""
        return (self.err == ORBIT_ERR_PRIMARY_MASS) | (self.err == ORBIT_ERR_COINCIDENT)


def _acos2(num: Array, denom: Array, disambiguator: Array) -> Array:
    """Arccosine of ``num / denom`` with the sign taken from *disambiguator*."""
    safe = jnp.where(denom != 0.0, denom, 1.0)
    val = jnp.arccos(jnp.clip(num / safe, -1.0, 1.0))
    return jnp.where(disambiguator < 0.0, -val, val)


def _wrap(angle: Array) -> Array:
    two_pi = 2.0 * jnp.pi
    return jnp.mod(angle + two_pi, two_pi)


def particle_to_orbit(
    G: ArrayLike,
    particle: ParticleState,
    primary: ParticleState,
) -> OrbitResult:
    """Compute the osculating orbit of *particle* about *primary*.

    The gravitational parameter is ``G * (m_particle + m_primary)``.
    Compatible with ``jax.jit`` and ``jax.vmap``.

    Args:
        G: Gravitational constant in the simulation's units.
        particle: The orbiting particle.
        primary: The reference body (a real particle or a centre of mass).

    Returns:
        OrbitResult: Elements and error code.

    Examples:
        ```python
        from disctrap.particles import ParticleState
        from disctrap.orbits import particle_to_orbit
        star = ParticleState.create([0.0, 0.0, 0.0], [0.0, 0.0, 0.0], 1.0)
        planet = ParticleState.create([1.0, 0.0, 0.0], [0.0, 1.0, 0.0])
        result = particle_to_orbit(1.0, planet, star)
        result.elements.a  # 1.0
        ```
    """
    _float = get_dtype()
    tiny = get_degeneracy_tolerance()

    G = jnp.asarray(G, dtype=_float)
    m_p = jnp.asarray(particle.mass, dtype=_float)
    m_0 = jnp.asarray(primary.mass, dtype=_float)
    dr = jnp.asarray(particle.position, dtype=_float) - jnp.asarray(primary.position, dtype=_float)
    dv = jnp.asarray(particle.velocity, dtype=_float) - jnp.asarray(primary.velocity, dtype=_float)

    d_raw = jnp.linalg.norm(dr)
    err = jnp.where(
        m_0 <= tiny,
        ORBIT_ERR_PRIMARY_MASS,
        jnp.where(d_raw <= tiny, ORBIT_ERR_COINCIDENT, ORBIT_OK),
    )
    bad = err != ORBIT_OK

    # Evaluate degenerate inputs on a unit circular orbit so nothing below
    # produces NaN; the result is zeroed at the end.
    unit_r = jnp.array([1.0, 0.0, 0.0], dtype=_float)
    unit_v = jnp.array([0.0, 1.0, 0.0], dtype=_float)
    dr = jnp.where(bad, unit_r, dr)
    dv = jnp.where(bad, unit_v, dv)
    mu = jnp.where(bad, 1.0, G * (m_p + m_0))

    d = jnp.linalg.norm(dr)
    v2 = jnp.dot(dv, dv)
    v = jnp.sqrt(v2)

    vcirc2 = mu / d
    a = -mu / (v2 - 2.0 * vcirc2)

    hvec = jnp.cross(dr, dv)
    h = jnp.linalg.norm(hvec)
    radial = h <= tiny * d * v
    err = jnp.where(~bad & radial, ORBIT_ERR_RADIAL, err)
    h_safe = jnp.where(radial, 1.0, h)

    vr = jnp.dot(dr, dv) / d
    rvr = d * vr
    evec = ((v2 - vcirc2) * dr - rvr * dv) / mu
    e = jnp.linalg.norm(evec)
    e_safe = jnp.where(e > tiny, e, 1.0)

    inc = _acos2(hvec[2], h_safe, 1.0)

    # Node vector z x h
    nx = -hvec[1]
    ny = hvec[0]
    n_node = jnp.sqrt(nx * nx + ny * ny)
    Omega = _acos2(nx, n_node, ny)

    # Mean motion and period keep the sign of a
    n = jnp.sign(a) * jnp.sqrt(jnp.abs(mu / (a * a * a)))
    P = 2.0 * jnp.pi / n

    # Eccentric (or hyperbolic) anomaly and mean anomaly
    ea_ell = _acos2(1.0 - d / a, e_safe, vr)
    M_ell = ea_ell - e * jnp.sin(ea_ell)
    ea_hyp = jnp.arccosh(jnp.maximum((1.0 - d / a) / e_safe, 1.0))
    ea_hyp = jnp.where(vr < 0.0, -ea_hyp, ea_hyp)
    M_hyp = e * jnp.sinh(ea_hyp) - ea_hyp
    M = jnp.where(e < 1.0, _wrap(M_ell), M_hyp)

    circular = e <= tiny
    equatorial = inc <= tiny
    edotr = jnp.dot(evec, dr)

    # Circular and equatorial: angles measured from the x axis
    f_ce = jnp.arctan2(dr[1], dr[0])

    # Circular and inclined: f is the argument of latitude
    f_ci = _acos2(nx * dr[0] + ny * dr[1], n_node * d, dr[2])

    # Eccentric: f measured from pericentre
    f_ecc = _acos2(edotr, e_safe * d, vr)
    omega_gen = _acos2(nx * evec[0] + ny * evec[1], n_node * e_safe, evec[2])
    pomega_eq = jnp.arctan2(evec[1], evec[0])

    Omega = jnp.where(equatorial, 0.0, Omega)
    omega = jnp.where(
        circular,
        0.0,
        jnp.where(equatorial, pomega_eq, omega_gen),
    )
    f = jnp.where(
        circular,
        jnp.where(equatorial, f_ce, f_ci),
        f_ecc,
    )
    M = jnp.where(circular, _wrap(f), M)

    pomega = _wrap(Omega + omega)
    theta = _wrap(Omega + omega + f)
    l = _wrap(pomega + M)
    Omega = _wrap(Omega)
    omega = _wrap(omega)
    f = _wrap(f)

    # No orbital plane for radial orbits
    zero = jnp.zeros_like(a)
    inc, Omega, omega, pomega, f, M, l, theta = (
        jnp.where(radial, zero, x) for x in (inc, Omega, omega, pomega, f, M, l, theta)
    )

    elements = OrbitalElements(
        a=a, e=e, inc=inc, Omega=Omega, omega=omega, pomega=pomega,
        f=f, M=M, l=l, theta=theta, P=P, n=n, h=h, d=d, v=v,
    )
    elements = OrbitalElements(*(jnp.where(bad, zero, x) for x in elements))
    return OrbitResult(elements, err)


def state_elements_to_cartesian(x_oe: ArrayLike, gm: ArrayLike) -> Array:
    """Convert bound Keplerian elements to a relative Cartesian state.

    Solves Kepler's equation to obtain the eccentric anomaly, then
    constructs position and velocity via the perifocal P and Q vectors
    (Montenbruck & Gill Eq. 2.43–2.44).

    Args:
        x_oe: Orbital elements ``[a, e, inc, Omega, omega, M]``, angles
            in radians.  Requires ``a > 0`` and ``0 <= e < 1``.
        gm: Gravitational parameter ``G * (m_primary + m_particle)``.

    Returns:
        Relative state ``[x, y, z, vx, vy, vz]``.

    Examples:
        ```python
        import jax.numpy as jnp
        from disctrap.orbits import state_elements_to_cartesian
        state = state_elements_to_cartesian(jnp.array([1.0, 0.0, 0.0, 0.0, 0.0, 0.0]), 1.0)
        ```
    """
    x_oe = jnp.asarray(x_oe, dtype=get_dtype())
    gm = jnp.asarray(gm, dtype=get_dtype())

    a = x_oe[0]
    e = x_oe[1]
    i = x_oe[2]
    raan = x_oe[3]
    omega = x_oe[4]
    M = x_oe[5]

    E = anomaly_mean_to_eccentric(M, e)

    # Perifocal unit vectors (Montenbruck & Gill Eq. 2.43)
    cos_o = jnp.cos(omega)
    sin_o = jnp.sin(omega)
    cos_R = jnp.cos(raan)
    sin_R = jnp.sin(raan)
    cos_i = jnp.cos(i)
    sin_i = jnp.sin(i)

    P = jnp.array(
        [
            cos_o * cos_R - sin_o * cos_i * sin_R,
            cos_o * sin_R + sin_o * cos_i * cos_R,
            sin_o * sin_i,
        ]
    )

    Q = jnp.array(
        [
            -sin_o * cos_R - cos_o * cos_i * sin_R,
            -sin_o * sin_R + cos_o * cos_i * cos_R,
            cos_o * sin_i,
        ]
    )

    cos_E = jnp.cos(E)
    sin_E = jnp.sin(E)
    sqrt_1me2 = jnp.sqrt(1.0 - e * e)

    r_vec = a * (cos_E - e) * P + a * sqrt_1me2 * sin_E * Q
    r_mag = jnp.linalg.norm(r_vec)
    v_vec = (jnp.sqrt(gm * a) / r_mag) * (-sin_E * P + sqrt_1me2 * cos_E * Q)

    return jnp.concatenate([r_vec, v_vec])


def orbit_to_particle(
    G: ArrayLike,
    primary: ParticleState,
    x_oe: ArrayLike,
    mass: ArrayLike = 0.0,
) -> ParticleState:
    """Place a particle of mass *mass* on the given orbit about *primary*.

    Args:
        G: Gravitational constant.
        primary: Reference body.
        x_oe: Orbital elements ``[a, e, inc, Omega, omega, M]``.
        mass: Mass of the new particle.

    Returns:
        ParticleState: The particle in the primary's frame offset by the
        primary's position and velocity.
    """
    _float = get_dtype()
    mass = jnp.asarray(mass, dtype=_float)
    gm = jnp.asarray(G, dtype=_float) * (jnp.asarray(primary.mass, dtype=_float) + mass)
    rel = state_elements_to_cartesian(x_oe, gm)
    return ParticleState(
        jnp.asarray(primary.position, dtype=_float) + rel[:3],
        jnp.asarray(primary.velocity, dtype=_float) + rel[3:],
        mass,
    )
