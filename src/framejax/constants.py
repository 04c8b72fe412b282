"""
The `constants` module defines the angular, time and Earth rotation constants used by the frame transformations.
"""

from jax.numpy import pi as PI

# Mathematical Constants
"""
Constant to convert arcseconds to radians. Equal to 2pi/(360*3600). Units: *rad/as*
"""
AS2RAD = 2.0 * PI / 360.0 / 3600.0

"""
Constant to convert radians to arcseconds. Equal to (360*3600)/(2pi). Units: *as/rad*
"""
RAD2AS = 360.0 * 3600.0 / PI / 2.0

"""
Constant to convert milliarcseconds to radians. Units: *rad/mas*
"""
MAS2RAD = AS2RAD * 1.0e-3

# Time Constants

"""
Offset between Julian Date and Modified Julian Date. Units: *days*
"""
JD_MJD_OFFSET = 2400000.5  # Offset between Julian Date and Modified Julian Date

"""
Julian Date of the J2000.0 epoch (2000-01-01 12:00:00 TT). Units: *days*
"""
JD2000 = 2451545.0

"""
Modified Julian Date of the J2000.0 epoch (2000-01-01 12:00:00 TT). Units: *days*
"""
MJD2000 = 51544.5

"""
Length of a day in SI seconds, used to scale LOD and time offsets. Units: *s*
"""
SECONDS_PER_DAY = 86400.0

"""
Constant offset TT - TAI. Units: *s*

References:

1. G. Petit and B. Luzum, *IERS Conventions (2010)*, IERS Technical Note 36, 2010
"""
TT_TAI = 32.184

# Earth Constants
"""
Earth's semi-major axis as defined by the WGS84 geodetic system. [m]

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_a = 6378137.0  # WGS-84 semi-major axis

"""
Mean angular velocity of the Earth used by the IERS. [rad/s]

References:

1. G. Petit and B. Luzum, *IERS Conventions (2010)*, IERS Technical Note 36, 2010
2. D. Vallado, *Fundamentals of Astrodynamics and Applications (4th Ed.)*, p. 222, 2010
"""
OMEGA_EARTH = 7.292115146706979e-5  # [rad/s]
