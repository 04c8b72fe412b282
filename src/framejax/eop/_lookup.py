"""Table interpolation behind :class:`~framejax.eop.EOPDataProvider`.

:func:`get_eop` is built from ``jnp.searchsorted``, indexing and
``jnp.where`` only, so it traces under ``jax.jit`` and ``jax.vmap`` with the
extrapolation mode as a static argument.

Prediction rows of an IERS finals file carry polar motion and UT1-UTC but
no LOD or dX/dY.  Under :attr:`EOPExtrapolation.HOLD` those two quantities
are read at ``min(mjd, last observed MJD)``, which holds the last observed
value instead of interpolating towards NaN.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from framejax.eop._types import EOPData, EOPExtrapolation, EOPValues


def _interpolate(
    eop: EOPData, mjd: Array, column: Array, extrapolation: EOPExtrapolation
) -> Array:
    last = eop.mjd.shape[0] - 1
    idx = jnp.searchsorted(eop.mjd, mjd, side="right")
    lo = jnp.clip(idx - 1, 0, last)
    hi = jnp.minimum(idx, last)

    # lo == hi outside the table, so span is 0 and the edge row is used
    span = eop.mjd[hi] - eop.mjd[lo]
    frac = jnp.where(span > 0.0, (mjd - eop.mjd[lo]) / span, 0.0)
    # exactly on a row the next row may be NaN
    value = jnp.where(frac > 0.0, column[lo] + frac * (column[hi] - column[lo]), column[lo])

    if extrapolation is EOPExtrapolation.ZERO:
        covered = (mjd >= eop.mjd_min) & (mjd <= eop.mjd_max)
        value = jnp.where(covered, value, 0.0)
    return value


def get_eop(
    eop: EOPData,
    mjd: ArrayLike,
    extrapolation: EOPExtrapolation = EOPExtrapolation.HOLD,
) -> EOPValues:
    """Interpolate every EOP column at a UTC MJD.

    Args:
        eop: EOP dataset.
        mjd: Modified Julian Date (UTC), scalar or traced array.
        extrapolation: Behaviour outside the table. Default: ``HOLD``.

    Returns:
        EOPValues with polar motion and dX/dY in radians, UT1-UTC and LOD in
        seconds. Under ``ZERO`` a LOD or dX/dY past the observed data may be
        NaN.

    Examples:
        ```python
        from framejax.eop import static_eop
        from framejax.eop._lookup import get_eop
        values = get_eop(static_eop(ut1_utc=0.1), 59569.0)
        values.ut1_utc  # 0.1
        ```
    """
    mjd = jnp.asarray(mjd, dtype=eop.mjd.dtype)
    if extrapolation is EOPExtrapolation.HOLD:
        mjd_lod = jnp.minimum(mjd, eop.mjd_last_lod)
        mjd_dxdy = jnp.minimum(mjd, eop.mjd_last_dxdy)
    else:
        mjd_lod = mjd_dxdy = mjd

    return EOPValues(
        pm_x=_interpolate(eop, mjd, eop.pm_x, extrapolation),
        pm_y=_interpolate(eop, mjd, eop.pm_y, extrapolation),
        ut1_utc=_interpolate(eop, mjd, eop.ut1_utc, extrapolation),
        lod=_interpolate(eop, mjd_lod, eop.lod, extrapolation),
        dX=_interpolate(eop, mjd_dxdy, eop.dX, extrapolation),
        dY=_interpolate(eop, mjd_dxdy, eop.dY, extrapolation),
    )
