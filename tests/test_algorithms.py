"""
Tests for the calculation algorithms.

Covers the thermal estimators, Hargreaves-Samani ETo with the crop
coefficient curve, the statistics helpers and the daily metric deriver.
"""

import math
from datetime import date

import pytest  # type: ignore

from src.pistachio_climate.algorithms import (
    DailyMetricDeriver,
    EvapotranspirationCalculator,
    stats,
    thermal,
)
from src.pistachio_climate.models import CropParameters, DailyWeatherRecord


class TestThermalIndices:
    """Test cases for chill hours, frost hours and GDD."""

    def test_all_day_below_threshold(self):
        """Tmax at or below the threshold means the whole day counts."""
        assert thermal.chill_hours(5.0, -2.0) == 24.0
        assert thermal.chill_hours(7.2, 0.0) == 24.0

    def test_all_day_above_threshold(self):
        """Tmin at or above the threshold means no hours."""
        assert thermal.chill_hours(30.0, 10.0) == 0.0
        assert thermal.frost_hours(10.0, 0.0) == 0.0

    def test_linear_interpolation(self):
        """Partial days are interpolated between Tmin and Tmax."""
        assert thermal.chill_hours(10.0, 0.0) == pytest.approx(17.28)
        assert thermal.frost_hours(5.0, -5.0) == pytest.approx(12.0)

    def test_constant_temperature(self):
        """Tmax == Tmin is resolved by direct comparison, never NaN."""
        assert thermal.hours_below_threshold(3.0, 3.0, 7.2) == 24.0
        assert thermal.hours_below_threshold(9.0, 9.0, 7.2) == 0.0

    def test_non_finite_inputs(self):
        """NaN temperatures are treated as 0 °C."""
        hours = thermal.frost_hours(float("nan"), float("nan"))
        assert not math.isnan(hours)
        assert 0.0 <= hours <= 24.0

    def test_growing_degree_days(self):
        """GDD uses base 7 °C and is never negative."""
        assert thermal.growing_degree_days(20.0, 10.0) == pytest.approx(8.0)
        assert thermal.growing_degree_days(5.0, 3.0) == 0.0
        assert thermal.growing_degree_days(20.0, 10.0, base_temperature=10.0) == pytest.approx(5.0)


class TestEvapotranspiration:
    """Test cases for ETo and the crop coefficient."""

    @pytest.fixture
    def calculator(self):
        """Create calculator instance."""
        return EvapotranspirationCalculator()

    def test_solar_declination_solstices(self):
        """Declination is about +0.409 rad in June and -0.409 rad in December."""
        summer = EvapotranspirationCalculator._calculate_solar_declination(172)
        winter = EvapotranspirationCalculator._calculate_solar_declination(355)
        assert 0.35 < summer < 0.45
        assert -0.45 < winter < -0.35

    def test_extraterrestrial_radiation_mid_latitude(self):
        """Ra at 37.5° is larger in summer than in winter."""
        ra_summer, _ = EvapotranspirationCalculator._calculate_extraterrestrial_radiation(37.5, 172)
        ra_winter, _ = EvapotranspirationCalculator._calculate_extraterrestrial_radiation(37.5, 355)
        assert 35 < ra_summer < 45
        assert 10 < ra_winter < 20

    def test_polar_night(self):
        """Polar night gives zero radiation and zero ETo instead of a math error."""
        ra, omega_s = EvapotranspirationCalculator._calculate_extraterrestrial_radiation(80.0, 355)
        assert omega_s == 0.0
        assert ra == 0.0
        assert EvapotranspirationCalculator.calculate_eto(5.0, -5.0, 80.0, 355) == 0.0

    def test_polar_day(self):
        """Polar day clamps the sunset hour angle to pi."""
        ra, omega_s = EvapotranspirationCalculator._calculate_extraterrestrial_radiation(80.0, 172)
        assert omega_s == pytest.approx(math.pi)
        assert ra > 0

    def test_eto_hargreaves(self):
        """ETo follows 0.0023·(Tmean+17.8)·sqrt(ΔT)·Ra."""
        ra, _ = EvapotranspirationCalculator._calculate_extraterrestrial_radiation(37.5, 196)
        expected = 0.0023 * (20.0 + 17.8) * math.sqrt(20.0) * ra
        eto = EvapotranspirationCalculator.calculate_eto(30.0, 10.0, 37.5, 196)
        assert eto == pytest.approx(expected)
        assert 0 < eto <= 20

    def test_eto_never_negative(self):
        """Very cold days clamp ETo at 0."""
        assert EvapotranspirationCalculator.calculate_eto(-30.0, -40.0, 37.5, 15) == 0.0

    def test_crop_coefficient_curve(self, calculator):
        """Kc is flat before bud-break, ramps between stages and is flat after harvest."""
        assert calculator.crop_coefficient(1) == pytest.approx(0.45)
        assert calculator.crop_coefficient(90) == pytest.approx(0.45)
        assert calculator.crop_coefficient(120) == pytest.approx(0.75)
        assert calculator.crop_coefficient(150) == pytest.approx(0.925)
        assert calculator.crop_coefficient(180) == pytest.approx(1.10)
        assert calculator.crop_coefficient(270) == pytest.approx(0.85)
        assert calculator.crop_coefficient(330) == pytest.approx(0.85)

    def test_custom_crop_parameters(self):
        """The curve follows the configured crop parameters."""
        calculator = EvapotranspirationCalculator(CropParameters(kc_mid=1.2))
        assert calculator.crop_coefficient(180) == pytest.approx(1.2)

    def test_components(self, calculator):
        """ETc equals ETo times Kc."""
        components = calculator.calculate_with_components(30.0, 10.0, 37.5, 196)
        assert components.etc == pytest.approx(components.eto * components.kc)
        assert components.temperature_range == pytest.approx(20.0)


class TestStats:
    """Test cases for the statistics helpers."""

    def test_percentile_interpolates(self):
        """R-7 percentile interpolates between ranks."""
        assert stats.percentile([500, 900, 1400], 0.10) == pytest.approx(580.0)
        assert stats.percentile([2, 10, 20], 0.90) == pytest.approx(18.0)

    def test_percentile_direction(self):
        """P10 is not above the mean and P90 is not below it."""
        chill = [500, 900, 1400]
        frost = [2, 10, 20]
        assert stats.percentile(chill, 0.10) <= stats.mean(chill)
        assert stats.percentile(frost, 0.90) >= stats.mean(frost)

    def test_percentile_edge_cases(self):
        """Empty series give 0 and single values return themselves."""
        assert stats.percentile([], 0.5) == 0.0
        assert stats.percentile([42.0], 0.9) == 42.0

    def test_linear_trend(self):
        """Slope per step of a least-squares line."""
        assert stats.linear_trend([1.0, 2.0, 3.0]) == pytest.approx(1.0)
        assert stats.linear_trend([5.0, 5.0, 5.0]) == pytest.approx(0.0)
        assert stats.linear_trend([5.0]) == 0.0

    def test_coefficient_of_variation(self):
        """Population CV in percent; 0 for a zero mean."""
        assert stats.coefficient_of_variation([10.0, 10.0]) == 0.0
        assert stats.coefficient_of_variation([9.0, 11.0]) == pytest.approx(10.0)
        assert stats.coefficient_of_variation([0.0, 0.0]) == 0.0

    def test_complete_periods(self):
        """Partial periods are dropped only when a complete one exists."""
        values = {2021: 300.0, 2022: 900.0, 2023: 400.0}
        days = {2021: 59, 2022: 120, 2023: 61}
        assert stats.complete_periods(values, days, 120, 0.8) == {2022: 900.0}

        partial_only = {2021: 59, 2022: 60, 2023: 61}
        assert stats.complete_periods(values, partial_only, 120, 0.8) == values

    def test_complete_or_merged_periods(self):
        """Fragments are summed into the latest period when none is complete."""
        values = {2023: 590.0, 2024: 610.0}
        assert stats.complete_or_merged_periods(values, {2023: 59, 2024: 61}, 120, 0.8) == {2024: 1200.0}
        assert stats.complete_or_merged_periods(values, {2023: 59, 2024: 120}, 120, 0.8) == {2024: 610.0}
        assert stats.complete_or_merged_periods({}, {}, 120, 0.8) == {}


class TestDailyMetricDeriver:
    """Test cases for the daily metric deriver."""

    @pytest.fixture
    def deriver(self):
        """Create deriver instance."""
        return DailyMetricDeriver()

    def test_non_negativity(self, deriver):
        """Derived values are never negative, even for garbage input."""
        record = DailyWeatherRecord(
            date="2023-01-10",
            temperature_max=float("nan"),
            temperature_min=-50.0,
            precipitation=-3.0,
            eto=-1.0,
            etc=float("inf"),
        )
        enriched = deriver.derive(record, 37.5)

        for value in (enriched.eto, enriched.etc, enriched.gdd, enriched.chill_hours,
                      enriched.frost_hours, enriched.precipitation):
            assert value >= 0
            assert math.isfinite(value)

    def test_chill_only_in_winter_window(self, deriver):
        """A cold June day keeps its frost hours but has no chill hours."""
        record = DailyWeatherRecord(date="2023-06-10", temperature_max=5.0, temperature_min=-2.0)
        enriched = deriver.derive(record, 37.5)

        assert enriched.chill_hours == 0.0
        assert enriched.frost_hours > 0

    def test_winter_day_estimates(self, deriver):
        """A cold January day gets full chill and interpolated frost hours."""
        record = DailyWeatherRecord(date="2023-01-10", temperature_max=5.0, temperature_min=-2.0)
        enriched = deriver.derive(record, 37.5)

        assert enriched.chill_hours == 24.0
        assert enriched.frost_hours == pytest.approx(24 * 2 / 7)
        assert enriched.gdd == 0.0
        assert enriched.day == date(2023, 1, 10)

    def test_precomputed_values_kept(self, deriver):
        """Precomputed thermal indices are only clamped, never re-estimated."""
        record = DailyWeatherRecord(
            date="2023-01-10",
            temperature_max=20.0,
            temperature_min=10.0,
            gdd=3.0,
            chill_hours=10.0,
            frost_hours=-2.0,
            precomputed=True,
        )
        enriched = deriver.derive(record, 37.5)

        assert enriched.gdd == 3.0
        assert enriched.chill_hours == 10.0
        assert enriched.frost_hours == 0.0

    def test_precomputed_chill_zeroed_outside_window(self, deriver):
        """Precomputed chill in summer is still gated by the window."""
        record = DailyWeatherRecord(date="2023-07-10", chill_hours=6.0, precomputed=True)
        assert deriver.derive(record, 37.5).chill_hours == 0.0

    def test_incoming_eto_kept(self, deriver):
        """A positive incoming ETo is used; ETc is derived from it."""
        record = DailyWeatherRecord(date="2023-07-10", temperature_max=30.0, temperature_min=10.0, eto=4.2)
        enriched = deriver.derive(record, 37.5)

        assert enriched.eto == pytest.approx(4.2)
        assert enriched.etc == pytest.approx(4.2 * enriched.kc)

    def test_daily_et_capped(self, deriver):
        """Daily ET is capped to 20 mm."""
        record = DailyWeatherRecord(date="2023-07-10", eto=35.0, etc=50.0)
        enriched = deriver.derive(record, 37.5)

        assert enriched.eto == 20.0
        assert enriched.etc == 20.0

    def test_unparseable_date(self, deriver):
        """Records with a bad date are skipped, not raised."""
        assert deriver.derive(DailyWeatherRecord(date="not-a-date"), 37.5) is None

        records = [
            DailyWeatherRecord(date="2023-03-01", temperature_max=15.0, temperature_min=5.0),
            DailyWeatherRecord(date="2023-13-45"),
            DailyWeatherRecord(date="2023-03-02T00:00:00", temperature_max=15.0, temperature_min=5.0),
        ]
        enriched = deriver.derive_all(records, 37.5)
        assert [r.date for r in enriched] == ["2023-03-01", "2023-03-02"]

    def test_input_not_mutated(self, deriver):
        """Deriving leaves the input record untouched."""
        record = DailyWeatherRecord(date="2023-07-10", temperature_max=30.0, temperature_min=10.0)
        before = record.to_dict()
        deriver.derive(record, 37.5)
        assert record.to_dict() == before
