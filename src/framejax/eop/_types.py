"""Type definitions for Earth Orientation Parameters (EOP).

Provides the core data types for EOP storage and lookup:

- :class:`EOPData`: Immutable container holding sorted EOP arrays for
  JIT-compatible interpolation via ``jnp.searchsorted``.
- :class:`EOPValues`: One interpolated row of the table.
- :class:`EOPExtrapolation`: Controls behavior when querying outside the
  data range.
- :class:`EopSample`: The values an EOP provider hands to the frame
  transformations for a single epoch.

``EOPData`` is a :class:`~typing.NamedTuple`, which JAX treats as a pytree
automatically. This means it works seamlessly with ``jax.jit``,
``jax.vmap``, and ``jax.lax`` control flow primitives.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from typing import NamedTuple

from jax import Array


class EOPData(NamedTuple):
    """Earth Orientation Parameter data for JIT-compatible lookups.

    Stores EOP values as sorted JAX arrays, enabling O(log n) interpolation
    inside ``jax.jit`` via ``jnp.searchsorted``. Missing optional values
    (dX, dY, lod in prediction regions) are stored as NaN.

    Attributes:
        mjd: Sorted Modified Julian Dates (UTC), shape ``(N,)``.
        pm_x: Polar motion x-component [rad], shape ``(N,)``.
        pm_y: Polar motion y-component [rad], shape ``(N,)``.
        ut1_utc: UT1-UTC offset [seconds], shape ``(N,)``.
        dX: Celestial pole offset X [rad], shape ``(N,)``. NaN where missing.
        dY: Celestial pole offset Y [rad], shape ``(N,)``. NaN where missing.
        lod: Length of day excess [seconds], shape ``(N,)``. NaN where missing.
        mjd_min: Scalar, first MJD in the dataset.
        mjd_max: Scalar, last MJD in the dataset.
        mjd_last_lod: Scalar, last MJD with valid LOD data.
        mjd_last_dxdy: Scalar, last MJD with valid dX/dY data.
    """

    mjd: Array
    pm_x: Array
    pm_y: Array
    ut1_utc: Array
    dX: Array
    dY: Array
    lod: Array
    mjd_min: Array
    mjd_max: Array
    mjd_last_lod: Array
    mjd_last_dxdy: Array


class EOPValues(NamedTuple):
    """All EOP columns interpolated at one MJD.

    Attributes:
        pm_x: Polar motion x-component [rad].
        pm_y: Polar motion y-component [rad].
        ut1_utc: UT1-UTC [s].
        lod: Length of day excess [s].
        dX: Celestial pole offset X [rad].
        dY: Celestial pole offset Y [rad].
    """

    pm_x: Array
    pm_y: Array
    ut1_utc: Array
    lod: Array
    dX: Array
    dY: Array


class EOPExtrapolation(enum.Enum):
    """Extrapolation mode for EOP queries outside the data range.

    Resolved at trace time (Python value), not at runtime.

    Attributes:
        HOLD: Clamp to the nearest boundary value.
        ZERO: Return zero for out-of-range queries.
    """

    HOLD = "hold"
    ZERO = "zero"


class EopSample(NamedTuple):
    """Earth orientation values for one epoch, as returned by a provider.

    The pairs are kept as sequences so that the frame transformations can
    reject a provider that returns the wrong number of elements.

    Attributes:
        xpyp: Polar motion ``(xp, yp)`` [rad].
        dxdy: Celestial pole offsets ``(dX, dY)`` w.r.t. IAU 2006/2000A [rad].
        delta_t: TT-UT1 [s].
        lod: Length of day excess [s].
    """

    xpyp: Sequence[float]
    dxdy: Sequence[float]
    delta_t: float
    lod: float
