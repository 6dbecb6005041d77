"""
Tests for historical trends, climate stability and irrigation planning.
"""

from datetime import date

import pytest  # type: ignore

from conftest import daterange
from src.pistachio_climate.models import ClimateStability, HistoricalTrends, SeasonalSummary
from src.pistachio_climate.scoring import HistoricalTrendAnalyzer


@pytest.fixture
def analyzer():
    """Create trend analyzer instance."""
    return HistoricalTrendAnalyzer()


def summary_with_deficit(deficit: float) -> SeasonalSummary:
    return SeasonalSummary(
        total_days=365,
        avg_temperature=16.0,
        total_gdd=2500.0,
        total_chill_hours=900.0,
        total_frost_hours=10.0,
        frost_days=3,
        total_eto=1200.0,
        total_etc=deficit + 400.0,
        total_precipitation=400.0,
        water_deficit=deficit,
    )


class TestHistoricalTrends:
    """Test cases for per-year trend fitting."""

    def test_warming_series(self, analyzer, enriched_day):
        records = []
        for offset, year in enumerate((2021, 2022, 2023)):
            records += [
                enriched_day(day, temperature_avg=15.0 + offset, precipitation=1.0)
                for day in daterange(date(year, 1, 1), date(year, 12, 31))
            ]

        trends = analyzer.analyze(records)

        assert trends.total_years == 3
        assert list(trends.yearly_summaries) == [2021, 2022, 2023]
        assert trends.temperature_trend == pytest.approx(1.0)
        assert trends.precipitation_trend == pytest.approx(0.0)
        assert trends.climate_stability.temperature_variability == pytest.approx(5.1)

    def test_chill_trend_per_campaign(self, analyzer, enriched_day):
        """Chill is fitted per winter campaign; the half winters at each end are left out."""
        chill_per_day = {2021: 20.0, 2022: 10.0, 2023: 8.0, 2024: 20.0}
        records = []
        for day in daterange(date(2021, 1, 1), date(2023, 12, 31)):
            values = {}
            if day.month in (11, 12, 1, 2):
                campaign = day.year + 1 if day.month >= 11 else day.year
                values["chill_hours"] = chill_per_day[campaign]
            records.append(enriched_day(day, **values))

        trends = analyzer.analyze(records)

        assert trends.chill_by_campaign == {2022: 1200.0, 2023: 960.0}
        assert trends.chill_hours_trend == pytest.approx(-240.0)

    def test_single_year(self, analyzer, enriched_day):
        records = [enriched_day(day) for day in daterange(date(2023, 1, 1), date(2023, 3, 31))]
        trends = analyzer.analyze(records)

        assert trends.total_years == 1
        assert trends.temperature_trend == 0.0
        assert trends.climate_stability.stability_score == 50.0


class TestClimateStability:
    """Test cases for the stability score."""

    def test_too_few_years(self):
        assert HistoricalTrendAnalyzer.assess_stability([15.0, 16.0], [400.0, 500.0]) == ClimateStability()

    def test_perfectly_stable(self):
        stability = HistoricalTrendAnalyzer.assess_stability([20.0] * 3, [500.0] * 3)

        assert stability.stability_score == 100.0
        assert stability.temperature_variability == 0.0

    def test_score_floor(self):
        stability = HistoricalTrendAnalyzer.assess_stability([15.0, 16.0, 17.0], [100.0, 500.0, 900.0])
        assert stability.stability_score == 0.0


class TestIrrigationPlan:
    """Test cases for irrigation advice."""

    def test_adverse_trends(self, analyzer):
        trends = HistoricalTrends(
            temperature_trend=0.2,
            precipitation_trend=-6.0,
            chill_hours_trend=-12.0,
            climate_stability=ClimateStability(stability_score=40.0),
        )
        plan = analyzer.irrigation_plan(trends, summary_with_deficit(320.0))

        assert any(r.startswith("Tendencia al calentamiento (+0.2°C/año)") for r in plan.recommendations)
        assert any(w.startswith("Tendencia a menor precipitación (-6mm/año)") for w in plan.warnings)
        assert any(w.startswith("Reducción de horas frío (-12 horas/año)") for w in plan.warnings)
        assert any("Alta variabilidad climática" in w for w in plan.warnings)
        assert any("aproximadamente 13 riegos suplementarios" in r for r in plan.recommendations)
        assert plan.schedule[1].amount == "35-40mm por riego"

    def test_water_balance(self, analyzer):
        plan = analyzer.irrigation_plan(HistoricalTrends(), summary_with_deficit(500.0))

        assert plan.annual_need == 900.0
        assert plan.natural_supply == 400.0
        assert plan.irrigation_need == 500.0

    def test_neutral_trends(self, analyzer):
        stable = HistoricalTrends(climate_stability=ClimateStability(stability_score=80.0))
        plan = analyzer.irrigation_plan(stable, summary_with_deficit(100.0))

        assert plan.recommendations == []
        assert plan.warnings == []
        assert len(plan.schedule) == 3
        assert plan.schedule[1].amount == "30-35mm por riego"
