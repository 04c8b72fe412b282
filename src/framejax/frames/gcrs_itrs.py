"""GCRS-ITRS state-vector transformations using the IAU 2006/2000A CIO-based model.

Converts positions, or positions and velocities, between the Geocentric
Celestial Reference System (GCRS) and the International Terrestrial
Reference System (ITRS) at a TT epoch:

- **Bias-precession-nutation** (GCRS -> CIRS) from the CIP X, Y and the CIO
  locator s, corrected by the celestial pole offsets dX, dY
- **Earth rotation** (CIRS -> TIRS) via the IAU 2000 Earth Rotation Angle
- **Polar motion** (TIRS -> ITRS) from xp, yp and the TIO locator s'

The work is split in two stages.  :func:`compose_rotations` resolves the
matrices through an :class:`~framejax.primitives.AstronomyPrimitives`
implementation (by default ``pyerfa``) and :func:`transform_states` applies
them with ``jax.numpy`` only, so it can be wrapped in ``jax.jit`` or
``jax.vmap``.  :func:`gcrs_to_itrs` and :func:`itrs_to_gcrs` run both
stages after resolving the Earth orientation parameters.

Velocities account for the rotation of the terrestrial frame about the
TIRS z-axis with rate ``OMEGA_EARTH * (1 - LOD / 86400)``.  The motion of
the CIP in the GCRS and the centrifugal effect of polar motion are not
included.

Uses routines and computations derived from software provided by SOFA
under license. Does not itself constitute software provided by and/or
endorsed by SOFA.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import NamedTuple

import jax.numpy as jnp
import numpy as np
from jax import Array
from jax.typing import ArrayLike

from framejax.config import get_dtype
from framejax.constants import OMEGA_EARTH, SECONDS_PER_DAY
from framejax.eop import EopProvider
from framejax.epoch import JulianDate, TimeScale
from framejax.errors import DateAdvisory, InvalidDimensionError
from framejax.frames._orientation import (
    OrientationOverrides,
    OrientationParameters,
    resolve_orientation,
    resolve_ut1,
)
from framejax.primitives import AstronomyPrimitives, ErfaPrimitives

logger = logging.getLogger(__name__)


class FrameRotations(NamedTuple):
    """Rotations linking the GCRS, TIRS and ITRS at one epoch.

    Attributes:
        gcrs_to_itrs: 3x3 GCRS -> ITRS matrix.
        gcrs_to_tirs: 3x3 GCRS -> TIRS matrix (no polar motion).
        polar_motion: 3x3 TIRS -> ITRS matrix.
        omega: Earth angular velocity vector in the TIRS [rad/s].
    """

    gcrs_to_itrs: Array
    gcrs_to_tirs: Array
    polar_motion: Array
    omega: Array


class TransformResult(NamedTuple):
    """Output of :func:`gcrs_to_itrs` and :func:`itrs_to_gcrs`.

    Attributes:
        states: Transformed states, same shape as the input.
        rotation_matrix: 3x3 rotation applied to the positions, or ``None``
            unless requested.
        advisories: Non-fatal date warnings raised while resolving UTC.
    """

    states: Array
    rotation_matrix: Array | None
    advisories: tuple[DateAdvisory, ...]


def _check_state_shape(shape: tuple[int, ...]) -> None:
    if len(shape) not in (1, 2) or shape[-1] not in (3, 6):
        raise InvalidDimensionError(
            f"States must have shape (3,), (6,), (N, 3) or (N, 6), got {tuple(shape)}"
        )


def _prepare_states(states: ArrayLike) -> Array:
    try:
        arr = np.asarray(states, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidDimensionError(
            "States must be a numeric array of 3- or 6-element vectors"
        ) from exc
    _check_state_shape(arr.shape)
    return jnp.asarray(arr, dtype=get_dtype())


def _tt_parts(tt: JulianDate | Sequence[float]) -> tuple[float, float]:
    """Split a TT epoch into its two Julian Date parts."""
    if isinstance(tt, JulianDate):
        if tt.scale is not TimeScale.TT:
            raise ValueError(f"Epoch must be in TT, got {tt.scale.value}")
        return float(tt.part1), float(tt.part2)

    try:
        tt1, tt2 = tt
    except (TypeError, ValueError) as exc:
        raise InvalidDimensionError(
            f"TT epoch must be a JulianDate or a (tt1, tt2) pair, got {tt!r}"
        ) from exc
    return float(tt1), float(tt2)


def earth_angular_velocity(lod: ArrayLike) -> Array:
    """Earth angular velocity vector in the TIRS.

    Args:
        lod: Length of day excess [s].

    Returns:
        ``(0, 0, w)`` with ``w = OMEGA_EARTH * (1 - lod / 86400)`` [rad/s].
    """
    w = OMEGA_EARTH * (1.0 - jnp.asarray(lod, dtype=get_dtype()) / SECONDS_PER_DAY)
    zero = jnp.zeros_like(w)
    return jnp.stack([zero, zero, w])


def compose_rotations(
    tt1: float,
    tt2: float,
    ut11: float,
    ut12: float,
    params: OrientationParameters,
    primitives: AstronomyPrimitives | None = None,
) -> FrameRotations:
    """Build the GCRS -> ITRS rotation chain at one epoch.

    Args:
        tt1: TT as 2-part Julian Date (part 1).
        tt2: TT as 2-part Julian Date (part 2).
        ut11: UT1 as 2-part Julian Date (part 1).
        ut12: UT1 as 2-part Julian Date (part 2).
        params: Resolved Earth orientation parameters.
        primitives: Astronomy primitives. Default: :class:`ErfaPrimitives`.

    Returns:
        FrameRotations for the epoch.

    Examples:
        ```python
        from framejax.frames import OrientationParameters, compose_rotations
        params = OrientationParameters(0.0, 0.0, 0.0, 0.0, 69.184, 0.0)
        rot = compose_rotations(2451545.0, 0.0, 2451545.0, -0.0008, params)
        rot.gcrs_to_itrs.shape
        ```
    """
    prims = ErfaPrimitives() if primitives is None else primitives
    dtype = get_dtype()

    # CIP coordinates corrected by the observed celestial pole offsets
    x, y, s = prims.cip_xys(tt1, tt2)
    x = x + params.dx
    y = y + params.dy
    rc2i = prims.build_c2i_matrix(x, y, s)

    era = prims.earth_rotation_angle(ut11, ut12)

    sp = prims.tio_locator(tt1, tt2)
    rpom = prims.build_polar_motion_matrix(params.xp, params.yp, sp)

    gcrs_to_itrs = prims.compose_cio_based(rc2i, era, rpom)
    gcrs_to_tirs = prims.compose_cio_based(rc2i, era, jnp.eye(3, dtype=dtype))

    return FrameRotations(
        gcrs_to_itrs=jnp.asarray(gcrs_to_itrs, dtype=dtype),
        gcrs_to_tirs=jnp.asarray(gcrs_to_tirs, dtype=dtype),
        polar_motion=jnp.asarray(rpom, dtype=dtype),
        omega=earth_angular_velocity(params.lod),
    )


def transform_states(
    rotations: FrameRotations,
    x_gcrs: ArrayLike,
    primitives: AstronomyPrimitives | None = None,
) -> Array:
    """Rotate GCRS positions or states into the ITRS.

    .. math::

        \\mathbf{r}_{\\text{ITRS}} &= R_{\\text{GCRS}\\to\\text{ITRS}}
            \\mathbf{r} \\\\
        \\mathbf{v}_{\\text{ITRS}} &= W \\left( C \\mathbf{v}
            - \\boldsymbol{\\omega} \\times C \\mathbf{r} \\right)

    where :math:`C` is GCRS -> TIRS and :math:`W` is polar motion.

    Args:
        rotations: Rotations from :func:`compose_rotations`.
        x_gcrs: ``(3,)``, ``(6,)``, ``(N, 3)`` or ``(N, 6)`` array of
            positions or ``[x, y, z, vx, vy, vz]`` states.
        primitives: Linear algebra primitives. Default: :class:`ErfaPrimitives`.

    Returns:
        ITRS states with the same shape as *x_gcrs*.

    Raises:
        InvalidDimensionError: If *x_gcrs* has an unsupported shape.
    """
    _check_state_shape(jnp.shape(x_gcrs))
    prims = ErfaPrimitives() if primitives is None else primitives
    x_gcrs = jnp.asarray(x_gcrs, dtype=get_dtype())

    r_gcrs = x_gcrs[..., :3]
    r_itrs = prims.mat_vec_multiply(rotations.gcrs_to_itrs, r_gcrs)
    if x_gcrs.shape[-1] == 3:
        return r_itrs

    v_gcrs = x_gcrs[..., 3:6]
    r_tirs = prims.mat_vec_multiply(rotations.gcrs_to_tirs, r_gcrs)
    v_tirs = prims.mat_vec_multiply(rotations.gcrs_to_tirs, v_gcrs)
    v_rot = prims.cross_product(rotations.omega, r_tirs)
    v_itrs = prims.mat_vec_multiply(rotations.polar_motion, prims.vec_subtract(v_tirs, v_rot))

    return jnp.concatenate([r_itrs, v_itrs], axis=-1)


def untransform_states(
    rotations: FrameRotations,
    x_itrs: ArrayLike,
    primitives: AstronomyPrimitives | None = None,
) -> Array:
    """Rotate ITRS positions or states into the GCRS.

    Applies the inverse of :func:`transform_states`.

    Args:
        rotations: Rotations from :func:`compose_rotations`.
        x_itrs: ``(3,)``, ``(6,)``, ``(N, 3)`` or ``(N, 6)`` array.
        primitives: Linear algebra primitives. Default: :class:`ErfaPrimitives`.

    Returns:
        GCRS states with the same shape as *x_itrs*.

    Raises:
        InvalidDimensionError: If *x_itrs* has an unsupported shape.
    """
    _check_state_shape(jnp.shape(x_itrs))
    prims = ErfaPrimitives() if primitives is None else primitives
    x_itrs = jnp.asarray(x_itrs, dtype=get_dtype())

    r_itrs = x_itrs[..., :3]
    r_gcrs = prims.mat_vec_multiply(rotations.gcrs_to_itrs.T, r_itrs)
    if x_itrs.shape[-1] == 3:
        return r_gcrs

    v_itrs = x_itrs[..., 3:6]
    r_tirs = prims.mat_vec_multiply(rotations.polar_motion.T, r_itrs)
    v_tirs = prims.mat_vec_multiply(rotations.polar_motion.T, v_itrs)
    v_tirs = v_tirs + prims.cross_product(rotations.omega, r_tirs)
    v_gcrs = prims.mat_vec_multiply(rotations.gcrs_to_tirs.T, v_tirs)

    return jnp.concatenate([r_gcrs, v_gcrs], axis=-1)


def _resolve_rotations(
    tt: JulianDate | Sequence[float],
    eop_provider: EopProvider | None,
    overrides: OrientationOverrides | None,
    primitives: AstronomyPrimitives | None,
) -> tuple[FrameRotations, tuple[DateAdvisory, ...]]:
    tt1, tt2 = _tt_parts(tt)
    if overrides is None:
        overrides = OrientationOverrides()

    params, advisories = resolve_orientation(tt1, tt2, overrides, eop_provider)
    ut11, ut12 = resolve_ut1(tt1, tt2, params.delta_t)
    logger.debug(
        "Orientation at TT (%r, %r): xp=%.6e yp=%.6e dX=%.6e dY=%.6e TT-UT1=%.6f LOD=%.6e",
        tt1,
        tt2,
        params.xp,
        params.yp,
        params.dx,
        params.dy,
        params.delta_t,
        params.lod,
    )
    return compose_rotations(tt1, tt2, ut11, ut12, params, primitives), advisories


def gcrs_to_itrs(
    states: ArrayLike,
    tt: JulianDate | Sequence[float],
    eop_provider: EopProvider | None = None,
    overrides: OrientationOverrides | None = None,
    *,
    primitives: AstronomyPrimitives | None = None,
    return_matrix: bool = False,
) -> TransformResult:
    """Transform GCRS positions or states to the ITRS at a TT epoch.

    Earth orientation parameters not given in *overrides* are taken from
    *eop_provider*, queried once at the UTC equivalent of *tt*.

    Args:
        states: ``(3,)``, ``(6,)``, ``(N, 3)`` or ``(N, 6)`` GCRS array.
            Units: m, m/s (any consistent units work).
        tt: TT epoch, a :class:`~framejax.epoch.JulianDate` or a
            ``(tt1, tt2)`` pair.
        eop_provider: Source for missing orientation parameters. May be
            ``None`` when *overrides* supplies all of them.
        overrides: Explicit orientation parameters.
        primitives: Astronomy primitives. Default: :class:`ErfaPrimitives`.
        return_matrix: Also return the GCRS -> ITRS matrix.

    Returns:
        TransformResult with the ITRS states.

    Raises:
        InvalidDimensionError: If the states or the epoch are malformed.
        ExternalProviderError: If a needed provider is missing or misbehaves.
        TimeConversionError: If TT cannot be converted to TAI.
        UnacceptableDateError: If the epoch has no UTC equivalent.

    Examples:
        ```python
        from framejax.eop import EOPDataProvider, zero_eop
        from framejax.frames import gcrs_to_itrs
        result = gcrs_to_itrs(
            [7000e3, 0.0, 0.0, 0.0, 7.5e3, 0.0],
            (2451545.0, 0.0),
            EOPDataProvider(zero_eop()),
        )
        result.states.shape
        ```
    """
    x_gcrs = _prepare_states(states)
    rotations, advisories = _resolve_rotations(tt, eop_provider, overrides, primitives)
    x_itrs = transform_states(rotations, x_gcrs, primitives)
    return TransformResult(
        states=x_itrs,
        rotation_matrix=rotations.gcrs_to_itrs if return_matrix else None,
        advisories=advisories,
    )


def itrs_to_gcrs(
    states: ArrayLike,
    tt: JulianDate | Sequence[float],
    eop_provider: EopProvider | None = None,
    overrides: OrientationOverrides | None = None,
    *,
    primitives: AstronomyPrimitives | None = None,
    return_matrix: bool = False,
) -> TransformResult:
    """Transform ITRS positions or states to the GCRS at a TT epoch.

    Inverse of :func:`gcrs_to_itrs`, with the same parameter resolution.

    Args:
        states: ``(3,)``, ``(6,)``, ``(N, 3)`` or ``(N, 6)`` ITRS array.
        tt: TT epoch, a :class:`~framejax.epoch.JulianDate` or a
            ``(tt1, tt2)`` pair.
        eop_provider: Source for missing orientation parameters.
        overrides: Explicit orientation parameters.
        primitives: Astronomy primitives. Default: :class:`ErfaPrimitives`.
        return_matrix: Also return the ITRS -> GCRS matrix.

    Returns:
        TransformResult with the GCRS states.

    Raises:
        InvalidDimensionError: If the states or the epoch are malformed.
        ExternalProviderError: If a needed provider is missing or misbehaves.
        TimeConversionError: If TT cannot be converted to TAI.
        UnacceptableDateError: If the epoch has no UTC equivalent.
    """
    x_itrs = _prepare_states(states)
    rotations, advisories = _resolve_rotations(tt, eop_provider, overrides, primitives)
    x_gcrs = untransform_states(rotations, x_itrs, primitives)
    return TransformResult(
        states=x_gcrs,
        rotation_matrix=rotations.gcrs_to_itrs.T if return_matrix else None,
        advisories=advisories,
    )
