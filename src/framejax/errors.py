"""Exceptions and advisories raised by the frame transformations.

Every fatal condition derives from :class:`FrameTransformError` so callers
can catch the whole family at once. Dubious-but-usable dates are not errors:
they are reported as :class:`DateAdvisory` values returned with the result.
"""

from __future__ import annotations

from typing import NamedTuple


class FrameTransformError(Exception):
    """Base class for all framejax transformation failures."""


class InvalidDimensionError(FrameTransformError, ValueError):
    """A state vector batch or an orientation parameter has the wrong shape."""


class TimeConversionError(FrameTransformError):
    """A time-scale conversion (e.g. TT -> TAI) could not be computed."""


class UnacceptableDateError(FrameTransformError):
    """The date lies outside the range in which UTC can be defined."""


class ExternalProviderError(FrameTransformError):
    """The Earth orientation provider is missing or returned malformed data."""


class DateAdvisory(NamedTuple):
    """Non-fatal warning about the epoch used for an EOP lookup.

    Attributes:
        message: Human readable description of the problem.
        utc1: First part of the UTC Julian Date that triggered the advisory.
        utc2: Second part of the UTC Julian Date.
    """

    message: str
    utc1: float
    utc2: float
