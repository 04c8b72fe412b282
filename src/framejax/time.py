"""Time-scale conversions on two-part Julian Dates.

Dates are passed as two floats whose sum is the Julian Date.  How the date
is split is up to the caller; every conversion here keeps the split, so the
precision of the larger part is preserved.

TT, TAI and UTC are related through the SOFA routines shipped with pyerfa
(``tttai``, ``taiutc``, ``dat``), including the pre-1972 UTC drift rates and
the "dubious year" check on dates before 1960 or too far past the newest
leap second.  TT to UT1 needs only TT-UT1 and is plain arithmetic.
"""

from __future__ import annotations

import enum
import math
import warnings

import erfa
import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from .config import get_dtype
from .constants import SECONDS_PER_DAY
from .errors import TimeConversionError


class UtcStatus(enum.Enum):
    """Outcome of a conversion into UTC.

    Attributes:
        OK: TAI-UTC is known for the date.
        DUBIOUS_DATE: The result is usable but TAI-UTC may be wrong
            (before 1960, or past the horizon of the leap-second table).
        UNACCEPTABLE_DATE: UTC is not defined for the date.
    """

    OK = "ok"
    DUBIOUS_DATE = "dubious"
    UNACCEPTABLE_DATE = "unacceptable"


def _call_with_status(func, *args):
    """Call an erfa routine, turning its ``ErfaWarning`` into a status."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", erfa.ErfaWarning)
        result = func(*args)
    dubious = any(issubclass(w.category, erfa.ErfaWarning) for w in caught)
    return result, UtcStatus.DUBIOUS_DATE if dubious else UtcStatus.OK


def tt_to_tai(tt1: float, tt2: float) -> tuple[float, float]:
    """Convert TT to TAI.

    Args:
        tt1: TT as 2-part Julian Date (part 1).
        tt2: TT as 2-part Julian Date (part 2).

    Returns:
        Tuple of (tai1, tai2), TAI as a 2-part Julian Date.

    Raises:
        TimeConversionError: If the date is not finite or erfa rejects it.
    """
    tt1, tt2 = float(tt1), float(tt2)
    if not (math.isfinite(tt1) and math.isfinite(tt2)):
        raise TimeConversionError(f"Cannot convert non-finite TT date ({tt1}, {tt2}) to TAI")
    try:
        tai1, tai2 = erfa.tttai(tt1, tt2)
    except erfa.ErfaError as exc:
        raise TimeConversionError(f"Cannot convert TT ({tt1}, {tt2}) to TAI: {exc}") from exc
    return float(tai1), float(tai2)


def tai_to_utc(tai1: float, tai2: float) -> tuple[float, float, UtcStatus]:
    """Convert TAI to UTC.

    Examples:
        ```python
        from framejax.time import tai_to_utc
        utc1, utc2, status = tai_to_utc(2400000.5, 54195.500381944)
        ```

    Args:
        tai1: TAI as 2-part Julian Date (part 1).
        tai2: TAI as 2-part Julian Date (part 2).

    Returns:
        Tuple of (utc1, utc2, status). When *status* is
        ``UNACCEPTABLE_DATE`` the input date is returned unchanged.
    """
    tai1, tai2 = float(tai1), float(tai2)
    if not (math.isfinite(tai1) and math.isfinite(tai2)):
        return tai1, tai2, UtcStatus.UNACCEPTABLE_DATE
    try:
        (utc1, utc2), status = _call_with_status(erfa.taiutc, tai1, tai2)
    except erfa.ErfaError:
        return tai1, tai2, UtcStatus.UNACCEPTABLE_DATE
    return float(utc1), float(utc2), status


def tai_minus_utc(utc1: float, utc2: float) -> float:
    """TAI-UTC [s] at a UTC epoch.

    The status of the date is not reported here; :func:`tai_to_utc` is
    where a dubious date surfaces.

    Raises:
        erfa.ErfaError: If the date has no calendar equivalent.
    """
    iy, im, iday, fd = erfa.jd2cal(float(utc1), float(utc2))
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", erfa.ErfaWarning)
        return float(erfa.dat(iy, im, iday, fd))


def _shift(date1: float, date2: float, offset_days: float) -> tuple[float, float]:
    """Add *offset_days* to the smaller-magnitude part of a two-part date."""
    if abs(date1) > abs(date2):
        return date1, date2 + offset_days
    return date1 + offset_days, date2


def tt_to_ut1(tt1: float, tt2: float, delta_t: float) -> tuple[float, float]:
    """Convert TT to UT1 given TT-UT1.

    Args:
        tt1: TT as 2-part Julian Date (part 1).
        tt2: TT as 2-part Julian Date (part 2).
        delta_t: TT-UT1 [s].

    Returns:
        Tuple of (ut11, ut12), UT1 as a 2-part Julian Date.
    """
    return _shift(float(tt1), float(tt2), -float(delta_t) / SECONDS_PER_DAY)


def caldate_to_mjd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a calendar date to Modified Julian Date. Algorithm is only valid from year 1583 onward.

    Args:
        year (ArrayLike): Year of the calendar date.
        month (ArrayLike): Month of the calendar date.
        day (ArrayLike): Day of the calendar date.
        hour (ArrayLike): Hour of the calendar date. Default: ``0``
        minute (ArrayLike): Minute of the calendar date. Default: ``0``
        second (ArrayLike): Second of the calendar date. Default: ``0.0``

    Returns:
        Modified Julian Date.

    References:

        1. Montenbruck, O., & Gill, E. (2012). *Satellite Orbits: Models, Methods and Applications*. Springer Science & Business Media.
    """

    is_jan_or_feb = month <= 2
    year = jnp.where(is_jan_or_feb, year - 1, year)
    month = jnp.where(is_jan_or_feb, month + 12, month)

    B = jnp.floor(year / 400) - jnp.floor(year / 100) + jnp.floor(year / 4)

    mjd = 365 * year - 679004 + B + jnp.floor(30.6001 * (month + 1)) + day

    frac_day = (hour + (minute + second / 60.0) / 60.0) / 24.0

    return get_dtype()(jnp.floor(mjd).astype(jnp.int32)) + frac_day
