"""Earth Orientation Parameters (EOP) for the frame transformations.

Provides JIT-compatible EOP storage and interpolation, loaders for IERS
standard files, and :class:`EOPDataProvider`, the table-backed
implementation of the :class:`EopProvider` interface used by
:func:`framejax.frames.gcrs_to_itrs`.

Typical usage::

    from framejax.eop import EOPDataProvider, load_cached_eop
    provider = EOPDataProvider(load_cached_eop())
"""

from framejax.eop._interface import EOPDataProvider, EopProvider
from framejax.eop._providers import (
    IERS_STANDARD_URL,
    download_standard_eop_file,
    load_cached_eop,
    load_eop_from_file,
    static_eop,
    zero_eop,
)
from framejax.eop._types import EOPData, EOPExtrapolation, EOPValues, EopSample

__all__ = [
    "EOPData",
    "EOPDataProvider",
    "EOPExtrapolation",
    "EOPValues",
    "EopProvider",
    "EopSample",
    "IERS_STANDARD_URL",
    "download_standard_eop_file",
    "load_cached_eop",
    "load_eop_from_file",
    "static_eop",
    "zero_eop",
]
