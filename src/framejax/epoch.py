"""Two-part Julian Dates tagged with their time scale.

A :class:`JulianDate` stores a date as ``part1 + part2`` days, the SOFA
convention for keeping sub-microsecond precision in double precision
arithmetic.  The split is arbitrary (``(2451545.0, 0.25)``,
``(2400000.5, 51544.75)`` and ``(2451545.25, 0.0)`` are the same date) and
every conversion in :mod:`framejax.time` preserves it.
"""

from __future__ import annotations

import enum
from typing import NamedTuple

from .constants import JD_MJD_OFFSET
from .time import caldate_to_mjd


class TimeScale(enum.Enum):
    """Time scales a :class:`JulianDate` can be expressed in."""

    TT = "TT"
    TAI = "TAI"
    UTC = "UTC"
    UT1 = "UT1"


class JulianDate(NamedTuple):
    """A Julian Date split into two parts, in a named time scale.

    Attributes:
        part1: First part of the date [days].
        part2: Second part of the date [days].
        scale: Time scale of the date.

    Examples:
        ```python
        from framejax.epoch import JulianDate, TimeScale
        tt = JulianDate(2451545.0, 0.0, TimeScale.TT)
        tt.mjd()
        ```
    """

    part1: float
    part2: float
    scale: TimeScale = TimeScale.TT

    @classmethod
    def from_jd(cls, jd: float, scale: TimeScale = TimeScale.TT) -> JulianDate:
        """Create from a single Julian Date, stored as ``(jd, 0.0)``."""
        return cls(float(jd), 0.0, scale)

    @classmethod
    def from_mjd(cls, mjd: float, scale: TimeScale = TimeScale.TT) -> JulianDate:
        """Create from a Modified Julian Date, stored as ``(2400000.5, mjd)``."""
        return cls(JD_MJD_OFFSET, float(mjd), scale)

    @classmethod
    def from_caldate(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: float = 0.0,
        scale: TimeScale = TimeScale.TT,
    ) -> JulianDate:
        """Create from a Gregorian calendar date in the given time scale.

        The whole-day MJD and the fraction of the day are kept in separate
        parts so the time of day is not rounded against the large JD value.

        Args:
            year: Year.
            month: Month.
            day: Day.
            hour: Hour. Default: 0
            minute: Minute. Default: 0
            second: Second, may include fractional part. Default: 0.0
            scale: Time scale of the calendar date. Default: TT

        Returns:
            JulianDate: ``(2400000.5 + MJD of 0h, fraction of day)``.
        """
        mjd_day = float(caldate_to_mjd(year, month, day))
        frac = (hour * 3600.0 + minute * 60.0 + second) / 86400.0
        return cls(JD_MJD_OFFSET + mjd_day, frac, scale)

    def jd(self) -> float:
        """Return the date as a single Julian Date (loses precision)."""
        return self.part1 + self.part2

    def mjd(self) -> float:
        """Return the date as a single Modified Julian Date."""
        return (self.part1 - JD_MJD_OFFSET) + self.part2
