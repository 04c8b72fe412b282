"""
framejax converts satellite state vectors between the GCRS and the ITRS with JAX.
"""

from .constants import (
    AS2RAD,
    RAD2AS,
    MAS2RAD,
    JD_MJD_OFFSET,
    JD2000,
    MJD2000,
    TT_TAI,
    OMEGA_EARTH,
)

from .config import set_dtype, get_dtype
from .epoch import JulianDate, TimeScale
from .time import UtcStatus

from .errors import (
    FrameTransformError,
    InvalidDimensionError,
    TimeConversionError,
    UnacceptableDateError,
    ExternalProviderError,
    DateAdvisory,
)

from .primitives import AstronomyPrimitives, ErfaPrimitives

from .eop import (
    EOPData,
    EOPDataProvider,
    EopProvider,
    EopSample,
    load_cached_eop,
    load_eop_from_file,
    static_eop,
    zero_eop,
)

from .frames import (
    OrientationOverrides,
    TransformResult,
    gcrs_to_itrs,
    itrs_to_gcrs,
)

__all__ = [
    # Constants
    "AS2RAD",
    "RAD2AS",
    "MAS2RAD",
    "JD_MJD_OFFSET",
    "JD2000",
    "MJD2000",
    "TT_TAI",
    "OMEGA_EARTH",
    # Config
    "set_dtype",
    "get_dtype",
    # Time
    "JulianDate",
    "TimeScale",
    "UtcStatus",
    # Errors
    "FrameTransformError",
    "InvalidDimensionError",
    "TimeConversionError",
    "UnacceptableDateError",
    "ExternalProviderError",
    "DateAdvisory",
    # Primitives
    "AstronomyPrimitives",
    "ErfaPrimitives",
    # EOP
    "EOPData",
    "EOPDataProvider",
    "EopProvider",
    "EopSample",
    "load_cached_eop",
    "load_eop_from_file",
    "static_eop",
    "zero_eop",
    # Frames
    "OrientationOverrides",
    "TransformResult",
    "gcrs_to_itrs",
    "itrs_to_gcrs",
]
