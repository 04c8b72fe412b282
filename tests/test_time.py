import math

import erfa
import jax
import jax.numpy as jnp
import pytest

from framejax.errors import TimeConversionError
from framejax.time import (
    UtcStatus,
    caldate_to_mjd,
    tai_minus_utc,
    tai_to_utc,
    tt_to_tai,
    tt_to_ut1,
)

_TT_TAI_DAYS = 32.184 / 86400.0


def test_caldate_to_mjd():
    assert caldate_to_mjd(2000, 1, 1, 12, 0, 0) == pytest.approx(51544.5, abs=1e-9)


def test_caldate_to_mjd_february():
    assert caldate_to_mjd(2024, 2, 29) == pytest.approx(60369.0, abs=1e-9)


def test_caldate_to_mjd_jit():
    f = jax.jit(caldate_to_mjd)
    assert float(f(2007, 4, 5, 12, 0, 0.0)) == pytest.approx(54195.5, abs=1e-9)


def test_caldate_to_mjd_vmap():
    years = jnp.array([2000, 2007, 2017])
    months = jnp.array([1, 4, 1])
    days = jnp.array([1, 5, 1])
    mjd = jax.vmap(caldate_to_mjd)(years, months, days)
    assert jnp.allclose(mjd, jnp.array([51544.0, 54195.0, 57754.0]))


class TestTTTAI:
    def test_offset_applied_to_smaller_part(self):
        """The TT-TAI offset goes into the small part, leaving the large one untouched."""
        tai1, tai2 = tt_to_tai(2451545.0, 0.25)
        assert tai1 == 2451545.0
        assert tai2 == pytest.approx(0.25 - _TT_TAI_DAYS, abs=1e-15)

    def test_split_preserved_when_first_part_small(self):
        tai1, tai2 = tt_to_tai(0.25, 2451545.0)
        assert tai2 == 2451545.0
        assert tai1 == pytest.approx(0.25 - _TT_TAI_DAYS, abs=1e-15)

    def test_matches_erfa(self):
        expected = erfa.tttai(2400000.5, 54195.50075444)
        assert tt_to_tai(2400000.5, 54195.50075444) == (float(expected[0]), float(expected[1]))

    @pytest.mark.parametrize("tt", [(math.nan, 0.0), (2451545.0, math.inf)])
    def test_non_finite_raises(self, tt):
        with pytest.raises(TimeConversionError):
            tt_to_tai(*tt)


class TestTAIUTC:
    def test_2007(self):
        utc1, utc2, status = tai_to_utc(2400000.5, 54195.5 + 33.0 / 86400.0)
        assert status is UtcStatus.OK
        assert utc1 == 2400000.5
        assert utc2 == pytest.approx(54195.5, abs=1e-12)

    def test_preserves_part_order(self):
        utc1, utc2, _ = tai_to_utc(0.5 + 33.0 / 86400.0, 2454195.0)
        assert utc2 == 2454195.0
        assert utc1 == pytest.approx(0.5, abs=1e-12)

    def test_across_leap_second(self):
        """Just after 2017-01-01 0h UTC the 37 s offset applies."""
        utc1, utc2, status = tai_to_utc(2400000.5, 57754.25 + 37.0 / 86400.0)
        assert status is UtcStatus.OK
        assert (utc1 - 2400000.5) + utc2 == pytest.approx(57754.25, abs=1e-12)

    def test_1965_uses_drift_formula(self):
        """Between 1960 and 1972 TAI-UTC drifts; the date is not dubious."""
        utc1, utc2, status = tai_to_utc(2400000.5, 39000.0)
        assert status is UtcStatus.OK
        expected1, expected2 = erfa.taiutc(2400000.5, 39000.0)
        assert utc1 == float(expected1)
        assert utc2 == pytest.approx(float(expected2), abs=1e-14)
        tai_utc = ((2400000.5 - utc1) + (39000.0 - utc2)) * 86400.0
        assert tai_utc == pytest.approx(4.049874, abs=1e-5)

    def test_before_1960_is_dubious(self):
        _, _, status = tai_to_utc(2400000.5, 30000.0)
        assert status is UtcStatus.DUBIOUS_DATE

    @pytest.mark.parametrize("tai", [(-1e6, 0.0), (math.nan, 0.0)])
    def test_unacceptable_returns_input(self, tai):
        tai1, tai2, status = tai_to_utc(*tai)
        assert status is UtcStatus.UNACCEPTABLE_DATE
        assert tai2 == 0.0


class TestTAIMinusUTC:
    def test_2007(self):
        assert tai_minus_utc(2400000.5, 54195.5) == 33.0

    def test_after_2017_leap_second(self):
        assert tai_minus_utc(2400000.5, 57754.0) == 37.0
        assert tai_minus_utc(2400000.5, 57753.5) == 36.0

    def test_1965(self):
        assert tai_minus_utc(2400000.5, 39000.0) == pytest.approx(4.049874, abs=1e-5)

    def test_dubious_date_does_not_warn(self, recwarn):
        tai_minus_utc(2400000.5, 30000.0)
        assert not [w for w in recwarn if issubclass(w.category, erfa.ErfaWarning)]


class TestTTUT1:
    def test_offset(self):
        ut11, ut12 = tt_to_ut1(2451545.0, 0.0, 64.184)
        assert ut11 == 2451545.0
        assert ut12 == pytest.approx(-64.184 / 86400.0, abs=1e-15)

    def test_zero_delta_t_is_identity(self):
        assert tt_to_ut1(2400000.5, 54195.5, 0.0) == (2400000.5, 54195.5)
