"""Resolution of the Earth orientation parameters for a transformation.

The caller may supply any of TT-UT1, polar motion, celestial pole offsets
and LOD through :class:`OrientationOverrides`.  Whatever is missing comes
from a single call to an :class:`~framejax.eop.EopProvider`, made at the UTC
epoch that corresponds to the TT epoch of the transformation.  Supplied
values always win, field by field.  When all four are supplied the provider
is not touched at all.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from framejax.eop import EopProvider, EopSample
from framejax.errors import (
    DateAdvisory,
    ExternalProviderError,
    InvalidDimensionError,
    UnacceptableDateError,
)
from framejax.time import UtcStatus, tt_to_ut1

logger = logging.getLogger(__name__)


def _as_pair(value, name: str, error: type[Exception]) -> tuple[float, float]:
    """Normalise a 2-element sequence, row or column vector to a tuple."""
    try:
        arr = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise error(f"{name} must contain exactly 2 numbers, got {value!r}") from exc
    if arr.size != 2 or arr.ndim not in (1, 2):
        raise error(f"{name} must contain exactly 2 elements, got shape {arr.shape}")
    first, second = arr.ravel()
    return float(first), float(second)


def _as_scalar(value, name: str, error: type[Exception]) -> float:
    try:
        arr = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise error(f"{name} must be a single number, got {value!r}") from exc
    if arr.size != 1 or arr.ndim > 2:
        raise error(f"{name} must be a single number, got shape {arr.shape}")
    return float(arr.ravel()[0])


class OrientationParameters(NamedTuple):
    """Fully resolved Earth orientation for one epoch.

    Attributes:
        xp: Polar motion x-component [rad].
        yp: Polar motion y-component [rad].
        dx: Celestial pole offset dX [rad].
        dy: Celestial pole offset dY [rad].
        delta_t: TT-UT1 [s].
        lod: Length of day excess [s].
    """

    xp: float
    yp: float
    dx: float
    dy: float
    delta_t: float
    lod: float

    @classmethod
    def from_sample(cls, sample: EopSample) -> OrientationParameters:
        """Validate a provider sample and unpack it.

        Raises:
            ExternalProviderError: If a pair does not have exactly 2
                elements or a scalar is not a single number.
        """
        try:
            xpyp, dxdy, delta_t, lod = sample.xpyp, sample.dxdy, sample.delta_t, sample.lod
        except AttributeError as exc:
            raise ExternalProviderError(f"EOP provider returned {sample!r}, not an EopSample") from exc

        xp, yp = _as_pair(xpyp, "EOP provider polar motion", ExternalProviderError)
        dx, dy = _as_pair(dxdy, "EOP provider celestial pole offsets", ExternalProviderError)
        return cls(
            xp=xp,
            yp=yp,
            dx=dx,
            dy=dy,
            delta_t=_as_scalar(delta_t, "EOP provider TT-UT1", ExternalProviderError),
            lod=_as_scalar(lod, "EOP provider LOD", ExternalProviderError),
        )


@dataclass(frozen=True)
class OrientationOverrides:
    """Caller-supplied Earth orientation parameters.

    Each field is independent; ``None`` means "take it from the EOP
    provider".  Pairs may be given as any 2-element sequence or as a
    ``(2, 1)`` / ``(1, 2)`` array and are stored as tuples of floats.

    Args:
        delta_t: TT-UT1 [s].
        xpyp: Polar motion ``(xp, yp)`` [rad].
        dxdy: Celestial pole offsets ``(dX, dY)`` [rad].
        lod: Length of day excess [s].

    Raises:
        InvalidDimensionError: If a pair does not have exactly 2 elements
            or a scalar field is not a single number.

    Examples:
        ```python
        from framejax.frames import OrientationOverrides
        overrides = OrientationOverrides(delta_t=69.184, xpyp=(1e-6, 2e-6))
        overrides.complete
        ```
    """

    delta_t: float | None = None
    xpyp: tuple[float, float] | None = None
    dxdy: tuple[float, float] | None = None
    lod: float | None = None

    def __post_init__(self) -> None:
        if self.delta_t is not None:
            object.__setattr__(
                self, "delta_t", _as_scalar(self.delta_t, "delta_t", InvalidDimensionError)
            )
        if self.xpyp is not None:
            object.__setattr__(self, "xpyp", _as_pair(self.xpyp, "xpyp", InvalidDimensionError))
        if self.dxdy is not None:
            object.__setattr__(self, "dxdy", _as_pair(self.dxdy, "dxdy", InvalidDimensionError))
        if self.lod is not None:
            object.__setattr__(self, "lod", _as_scalar(self.lod, "lod", InvalidDimensionError))

    @property
    def complete(self) -> bool:
        """True when no value needs to come from an EOP provider."""
        return None not in (self.delta_t, self.xpyp, self.dxdy, self.lod)

    def missing(self) -> list[str]:
        """Names of the fields left to the EOP provider."""
        return [
            name
            for name in ("delta_t", "xpyp", "dxdy", "lod")
            if getattr(self, name) is None
        ]

    def apply(self, defaults: OrientationParameters) -> OrientationParameters:
        """Overlay the supplied fields on *defaults*.

        Args:
            defaults: Parameters obtained from the EOP provider.

        Returns:
            *defaults* with every non-None field of this instance replacing
            the corresponding provider value.
        """
        changes: dict[str, float] = {}
        if self.delta_t is not None:
            changes["delta_t"] = self.delta_t
        if self.xpyp is not None:
            changes["xp"], changes["yp"] = self.xpyp
        if self.dxdy is not None:
            changes["dx"], changes["dy"] = self.dxdy
        if self.lod is not None:
            changes["lod"] = self.lod
        return defaults._replace(**changes)


def _utc_for_lookup(
    tt1: float, tt2: float, provider: EopProvider
) -> tuple[float, float, tuple[DateAdvisory, ...]]:
    """Convert TT to UTC through TAI using the provider's time scales."""
    tai1, tai2 = provider.tt_to_tai(tt1, tt2)
    utc1, utc2, status = provider.tai_to_utc(tai1, tai2)

    if status is UtcStatus.UNACCEPTABLE_DATE:
        raise UnacceptableDateError(
            f"Unacceptable date: TT ({tt1}, {tt2}) has no UTC equivalent"
        )
    if status is UtcStatus.DUBIOUS_DATE:
        advisory = DateAdvisory(
            message=f"Dubious date: UTC ({utc1}, {utc2}) is outside the reliable leap-second range",
            utc1=utc1,
            utc2=utc2,
        )
        logger.warning(advisory.message)
        return utc1, utc2, (advisory,)
    return utc1, utc2, ()


def resolve_orientation(
    tt1: float,
    tt2: float,
    overrides: OrientationOverrides,
    provider: EopProvider | None,
) -> tuple[OrientationParameters, tuple[DateAdvisory, ...]]:
    """Resolve the Earth orientation parameters for a TT epoch.

    Args:
        tt1: TT as 2-part Julian Date (part 1).
        tt2: TT as 2-part Julian Date (part 2).
        overrides: Caller-supplied values.
        provider: Source for the values not in *overrides*. May be ``None``
            when *overrides* is complete.

    Returns:
        Tuple of (parameters, advisories).

    Raises:
        ExternalProviderError: If a provider is needed but missing, or it
            returns malformed data.
        TimeConversionError: If the provider cannot convert TT to TAI.
        UnacceptableDateError: If the epoch has no UTC equivalent.
    """
    if overrides.complete:
        logger.debug("All orientation parameters supplied; EOP provider not consulted")
        return (
            OrientationParameters(
                xp=overrides.xpyp[0],
                yp=overrides.xpyp[1],
                dx=overrides.dxdy[0],
                dy=overrides.dxdy[1],
                delta_t=overrides.delta_t,
                lod=overrides.lod,
            ),
            (),
        )

    if provider is None:
        raise ExternalProviderError(
            f"No EOP provider given and {', '.join(overrides.missing())} not supplied"
        )

    utc1, utc2, advisories = _utc_for_lookup(tt1, tt2, provider)
    logger.debug("Querying EOP provider at UTC (%r, %r)", utc1, utc2)
    defaults = OrientationParameters.from_sample(provider.get_eop(utc1, utc2))
    return overrides.apply(defaults), advisories


def resolve_ut1(tt1: float, tt2: float, delta_t: float) -> tuple[float, float]:
    """UT1 two-part Julian Date from TT and TT-UT1 [s]."""
    return tt_to_ut1(tt1, tt2, delta_t)
