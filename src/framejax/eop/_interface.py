"""The Earth orientation provider consumed by the frame transformations.

:class:`EopProvider` is the interface the GCRS/ITRS transforms call when the
caller does not supply every orientation parameter: it converts the TT epoch
to UTC (through TAI) and returns the EOP for that UTC epoch.
:class:`EOPDataProvider` implements it on top of an :class:`EOPData` table
and the SOFA time-scale routines wrapped in :mod:`framejax.time`.
"""

from __future__ import annotations

import logging
import math
from typing import Protocol

from framejax import time
from framejax.constants import JD_MJD_OFFSET, TT_TAI
from framejax.eop._lookup import get_eop
from framejax.eop._types import EOPData, EOPExtrapolation, EopSample
from framejax.time import UtcStatus

logger = logging.getLogger(__name__)


class EopProvider(Protocol):
    """Source of time-scale conversions and Earth orientation parameters."""

    def tt_to_tai(self, tt1: float, tt2: float) -> tuple[float, float]:
        """Convert TT to TAI; raise ``TimeConversionError`` on failure."""
        ...

    def tai_to_utc(self, tai1: float, tai2: float) -> tuple[float, float, UtcStatus]:
        """Convert TAI to UTC and report whether the date is trustworthy."""
        ...

    def get_eop(self, utc1: float, utc2: float) -> EopSample:
        """Return the Earth orientation parameters at a UTC epoch."""
        ...


class EOPDataProvider:
    """:class:`EopProvider` backed by an :class:`EOPData` table.

    TT-UT1 is derived from the tabulated UT1-UTC as
    ``TT-UT1 = (TT-TAI) + (TAI-UTC) - (UT1-UTC)``.  Optional values that are
    still NaN after the lookup (a table with no LOD or dX/dY at all) are
    reported as zero.

    Args:
        eop: EOP dataset to interpolate.
        extrapolation: Behaviour outside the table. Default: ``HOLD``.

    Examples:
        ```python
        from framejax.eop import EOPDataProvider, static_eop
        provider = EOPDataProvider(static_eop(ut1_utc=-0.1))
        sample = provider.get_eop(2400000.5, 60000.0)
        ```
    """

    def __init__(
        self,
        eop: EOPData,
        extrapolation: EOPExtrapolation = EOPExtrapolation.HOLD,
    ) -> None:
        self.eop = eop
        self.extrapolation = extrapolation

    def tt_to_tai(self, tt1: float, tt2: float) -> tuple[float, float]:
        """TT to TAI with ``erfa.tttai``."""
        return time.tt_to_tai(tt1, tt2)

    def tai_to_utc(self, tai1: float, tai2: float) -> tuple[float, float, UtcStatus]:
        """TAI to UTC with ``erfa.taiutc``; its status becomes a :class:`UtcStatus`."""
        return time.tai_to_utc(tai1, tai2)

    def get_eop(self, utc1: float, utc2: float) -> EopSample:
        """Interpolate the table at a UTC epoch.

        Args:
            utc1: UTC as 2-part Julian Date (part 1).
            utc2: UTC as 2-part Julian Date (part 2).

        Returns:
            EopSample with polar motion and pole offsets in radians and
            TT-UT1 and LOD in seconds.
        """
        mjd = (utc1 - JD_MJD_OFFSET) + utc2
        pm_x, pm_y, ut1_utc, lod, dx, dy = (
            float(v) for v in get_eop(self.eop, mjd, self.extrapolation)
        )
        tai_utc = time.tai_minus_utc(utc1, utc2)

        if math.isnan(lod):
            logger.debug("No LOD available at MJD %.5f; using 0", mjd)
            lod = 0.0
        if math.isnan(dx) or math.isnan(dy):
            logger.debug("No celestial pole offsets available at MJD %.5f; using 0", mjd)
            dx, dy = 0.0, 0.0

        return EopSample(
            xpyp=(pm_x, pm_y),
            dxdy=(dx, dy),
            delta_t=TT_TAI + tai_utc - ut1_utc,
            lod=lod,
        )
