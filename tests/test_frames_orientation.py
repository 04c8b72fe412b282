"""Tests for Earth orientation parameter resolution."""

from __future__ import annotations

import logging
import math
from unittest.mock import MagicMock

import numpy as np
import pytest

from framejax.eop import EOPDataProvider, EopSample, static_eop
from framejax.errors import (
    DateAdvisory,
    ExternalProviderError,
    InvalidDimensionError,
    TimeConversionError,
    UnacceptableDateError,
)
from framejax.frames import (
    OrientationOverrides,
    OrientationParameters,
    resolve_orientation,
    resolve_ut1,
)
from framejax.time import UtcStatus, tai_to_utc, tt_to_tai

_TT = (2400000.5, 54195.500754444444444)

_PROVIDER_SAMPLE = EopSample(xpyp=(1e-6, 2e-6), dxdy=(3e-9, 4e-9), delta_t=65.0, lod=0.001)


def _mock_provider(sample=_PROVIDER_SAMPLE, status: UtcStatus | None = None) -> MagicMock:
    """EopProvider mock using the real time conversions."""
    provider = MagicMock()
    provider.tt_to_tai.side_effect = tt_to_tai
    if status is None:
        provider.tai_to_utc.side_effect = tai_to_utc
    else:
        provider.tai_to_utc.side_effect = lambda t1, t2: (t1, t2, status)
    provider.get_eop.return_value = sample
    return provider


# ---------------------------------------------------------------------------
# OrientationOverrides
# ---------------------------------------------------------------------------


class TestOrientationOverrides:
    def test_defaults_are_none(self):
        overrides = OrientationOverrides()
        assert overrides.missing() == ["delta_t", "xpyp", "dxdy", "lod"]
        assert not overrides.complete

    def test_complete(self):
        overrides = OrientationOverrides(delta_t=65.0, xpyp=(0.0, 0.0), dxdy=(0.0, 0.0), lod=0.0)
        assert overrides.complete
        assert overrides.missing() == []

    @pytest.mark.parametrize(
        "pair",
        [
            (1.0, 2.0),
            [1.0, 2.0],
            np.array([1.0, 2.0]),
            np.array([[1.0], [2.0]]),
            np.array([[1.0, 2.0]]),
        ],
    )
    def test_pair_shapes_accepted(self, pair):
        overrides = OrientationOverrides(xpyp=pair, dxdy=pair)
        assert overrides.xpyp == (1.0, 2.0)
        assert overrides.dxdy == (1.0, 2.0)

    @pytest.mark.parametrize(
        "pair",
        [(1.0,), (1.0, 2.0, 3.0), [], np.zeros((2, 2)), np.zeros((1, 1, 2)), "ab"],
    )
    def test_bad_pair_raises(self, pair):
        with pytest.raises(InvalidDimensionError):
            OrientationOverrides(xpyp=pair)
        with pytest.raises(InvalidDimensionError):
            OrientationOverrides(dxdy=pair)

    @pytest.mark.parametrize("value", [65.0, np.array(65.0), np.array([65.0]), [[65.0]]])
    def test_scalar_shapes_accepted(self, value):
        assert OrientationOverrides(delta_t=value, lod=value).delta_t == 65.0

    @pytest.mark.parametrize("value", [[1.0, 2.0], [], np.zeros(3)])
    def test_bad_scalar_raises(self, value):
        with pytest.raises(InvalidDimensionError):
            OrientationOverrides(delta_t=value)
        with pytest.raises(InvalidDimensionError):
            OrientationOverrides(lod=value)

    def test_invalid_dimension_is_value_error(self):
        with pytest.raises(ValueError):
            OrientationOverrides(xpyp=(1.0,))

    def test_frozen(self):
        overrides = OrientationOverrides(delta_t=65.0)
        with pytest.raises(AttributeError):
            overrides.delta_t = 1.0

    def test_apply_overlays_fields(self):
        defaults = OrientationParameters(1.0, 2.0, 3.0, 4.0, 5.0, 6.0)
        result = OrientationOverrides(xpyp=(10.0, 20.0), lod=60.0).apply(defaults)
        assert result == OrientationParameters(10.0, 20.0, 3.0, 4.0, 5.0, 60.0)


# ---------------------------------------------------------------------------
# resolve_orientation
# ---------------------------------------------------------------------------


class TestResolveOrientation:
    def test_all_supplied_never_calls_provider(self):
        provider = _mock_provider()
        overrides = OrientationOverrides(
            delta_t=64.0, xpyp=(5e-7, 6e-7), dxdy=(7e-10, 8e-10), lod=0.002
        )
        params, advisories = resolve_orientation(*_TT, overrides, provider)
        assert provider.mock_calls == []
        assert params == OrientationParameters(5e-7, 6e-7, 7e-10, 8e-10, 64.0, 0.002)
        assert advisories == ()

    def test_all_supplied_without_provider(self):
        overrides = OrientationOverrides(delta_t=64.0, xpyp=(0.0, 0.0), dxdy=(0.0, 0.0), lod=0.0)
        params, _ = resolve_orientation(*_TT, overrides, None)
        assert params.delta_t == 64.0

    def test_nothing_supplied_uses_provider(self):
        provider = _mock_provider()
        params, advisories = resolve_orientation(*_TT, OrientationOverrides(), provider)
        provider.get_eop.assert_called_once()
        assert params == OrientationParameters(1e-6, 2e-6, 3e-9, 4e-9, 65.0, 0.001)
        assert advisories == ()

    @pytest.mark.parametrize(
        ("overrides", "expected"),
        [
            (OrientationOverrides(delta_t=70.0), OrientationParameters(1e-6, 2e-6, 3e-9, 4e-9, 70.0, 0.001)),
            (OrientationOverrides(xpyp=(0.0, 0.0)), OrientationParameters(0.0, 0.0, 3e-9, 4e-9, 65.0, 0.001)),
            (OrientationOverrides(dxdy=(0.0, 0.0)), OrientationParameters(1e-6, 2e-6, 0.0, 0.0, 65.0, 0.001)),
            (OrientationOverrides(lod=0.0), OrientationParameters(1e-6, 2e-6, 3e-9, 4e-9, 65.0, 0.0)),
        ],
    )
    def test_explicit_value_wins(self, overrides, expected):
        provider = _mock_provider()
        params, _ = resolve_orientation(*_TT, overrides, provider)
        provider.get_eop.assert_called_once()
        assert params == expected

    def test_provider_queried_at_utc(self):
        """The lookup epoch is TT minus 32.184 s minus the leap seconds."""
        provider = _mock_provider()
        resolve_orientation(*_TT, OrientationOverrides(), provider)
        utc1, utc2 = provider.get_eop.call_args[0]
        assert utc1 == 2400000.5
        assert utc2 == pytest.approx(54195.5, abs=1e-11)

    def test_missing_provider_raises(self):
        with pytest.raises(ExternalProviderError, match="lod"):
            resolve_orientation(*_TT, OrientationOverrides(delta_t=65.0, xpyp=(0, 0), dxdy=(0, 0)), None)

    @pytest.mark.parametrize(
        "sample",
        [
            EopSample(xpyp=(1e-6,), dxdy=(0.0, 0.0), delta_t=65.0, lod=0.0),
            EopSample(xpyp=(1e-6, 2e-6), dxdy=(0.0, 0.0, 0.0), delta_t=65.0, lod=0.0),
            EopSample(xpyp=(1e-6, 2e-6), dxdy=(0.0, 0.0), delta_t=[65.0, 1.0], lod=0.0),
            EopSample(xpyp=(1e-6, 2e-6), dxdy=(0.0, 0.0), delta_t=65.0, lod=[]),
            (1e-6, 2e-6),
        ],
    )
    def test_malformed_provider_output_raises(self, sample):
        with pytest.raises(ExternalProviderError):
            resolve_orientation(*_TT, OrientationOverrides(), _mock_provider(sample))

    def test_time_conversion_error_propagates(self):
        provider = _mock_provider()
        with pytest.raises(TimeConversionError):
            resolve_orientation(math.nan, 0.0, OrientationOverrides(), provider)
        provider.get_eop.assert_not_called()

    def test_unacceptable_date_raises(self):
        provider = _mock_provider(status=UtcStatus.UNACCEPTABLE_DATE)
        with pytest.raises(UnacceptableDateError):
            resolve_orientation(*_TT, OrientationOverrides(), provider)
        provider.get_eop.assert_not_called()

    def test_dubious_date_advisory(self, caplog):
        provider = _mock_provider(status=UtcStatus.DUBIOUS_DATE)
        with caplog.at_level(logging.WARNING, logger="framejax.frames._orientation"):
            params, advisories = resolve_orientation(*_TT, OrientationOverrides(), provider)

        assert len(advisories) == 1
        assert isinstance(advisories[0], DateAdvisory)
        assert "Dubious date" in advisories[0].message
        assert "Dubious date" in caplog.text
        provider.get_eop.assert_called_once()
        assert params.delta_t == 65.0

    def test_dubious_date_with_real_provider(self):
        """Dates beyond the leap-second horizon are flagged but transformed."""
        provider = EOPDataProvider(static_eop())
        _, advisories = resolve_orientation(2400000.5, 80000.0, OrientationOverrides(), provider)
        assert len(advisories) == 1


class TestResolveUT1:
    def test_uses_delta_t_only(self):
        ut11, ut12 = resolve_ut1(2400000.5, 54195.500754444444444, 65.256073685)
        assert ut11 == 2400000.5
        assert ut12 == pytest.approx(54195.499999165813831, abs=1e-11)
