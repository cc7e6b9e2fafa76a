"""
The `constants` module defines the gravitational constants and unit conversions used with disctrap.
"""

from jax.numpy import pi as PI

# Mathematical Constants
"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * PI / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (PI * 2.0)

# Physical Constants
"""
Newtonian constant of gravitation. Units: *m^3/(kg s^2)*

References:

1. CODATA 2018 recommended values
"""
G_SI = 6.67430e-11

"""
Astronomical Unit. TDB-compatible value. Units: *m*

References:

1. IAU 2012 Resolution B2
"""
AU = 1.49597870700e11

"""
Nominal solar mass parameter. Units: *m^3/s^2*

References:

1. IAU 2015 Resolution B3
"""
GM_SUN = 1.3271244e20

"""
Gravitational constant in units of AU, solar masses and years/(2 pi), where
one orbit at 1 AU around one solar mass takes 2 pi time units. Units: dimensionless
"""
G_NATURAL = 1.0

"""
Gravitational constant in units of AU, solar masses and years. Equal to 4 pi^2. Units: *AU^3/(Msun yr^2)*
"""
G_AU_MSUN_YR = 4.0 * PI * PI

"""
Gravitational constant in units of AU, solar masses and days (Gaussian constant squared). Units: *AU^3/(Msun day^2)*
"""
G_AU_MSUN_DAY = 0.01720209895**2
