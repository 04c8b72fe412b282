"""Frame transformations.

This sub-module converts state vectors between the Geocentric Celestial
Reference System (GCRS) and the International Terrestrial Reference System
(ITRS) using the IAU 2006/2000A CIO-based model:

- **Entry points**: :func:`gcrs_to_itrs` and :func:`itrs_to_gcrs`, which
  resolve Earth orientation parameters from overrides and an EOP provider.
- **Building blocks**: :func:`compose_rotations` and the JIT-compatible
  :func:`transform_states` / :func:`untransform_states`.
"""

from ._orientation import (
    OrientationOverrides,
    OrientationParameters,
    resolve_orientation,
    resolve_ut1,
)
from .gcrs_itrs import (
    FrameRotations,
    TransformResult,
    compose_rotations,
    earth_angular_velocity,
    gcrs_to_itrs,
    itrs_to_gcrs,
    transform_states,
    untransform_states,
)

__all__ = [
    # Entry points
    "gcrs_to_itrs",
    "itrs_to_gcrs",
    "TransformResult",
    # Orientation parameters
    "OrientationOverrides",
    "OrientationParameters",
    "resolve_orientation",
    "resolve_ut1",
    # Rotation chain
    "FrameRotations",
    "compose_rotations",
    "earth_angular_velocity",
    "transform_states",
    "untransform_states",
]
