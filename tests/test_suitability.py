"""
Tests for site suitability scoring.
"""

import pytest  # type: ignore

from src.pistachio_climate.models import SeasonalSummary
from src.pistachio_climate.scoring import SuitabilityScorer
from src.pistachio_climate.scoring.suitability import format_number


def make_summary(**overrides) -> SeasonalSummary:
    """Summary that meets every requirement unless overridden."""
    values = dict(
        total_days=365,
        avg_temperature=16.0,
        total_gdd=2500.0,
        total_chill_hours=1000.0,
        total_frost_hours=10.0,
        frost_days=2,
        total_eto=1100.0,
        total_etc=900.0,
        total_precipitation=700.0,
        water_deficit=200.0,
    )
    values.update(overrides)
    return SeasonalSummary(**values)


@pytest.fixture
def scorer():
    """Create scorer instance."""
    return SuitabilityScorer()


class TestSuitabilityScore:
    """Test cases for the penalty-based score."""

    def test_ideal_site(self, scorer):
        result = scorer.score(make_summary())

        assert result.score == 100
        assert result.warnings == []
        assert "Horas frío adecuadas para el cultivo de pistacho" in result.recommendations
        assert "Acumulación térmica adecuada (Abr–Oct)" in result.recommendations

    def test_low_chill(self, scorer):
        result = scorer.score(make_summary(total_chill_hours=400.0))

        assert result.score == 70
        assert "Insuficientes horas frío para una buena producción de pistacho" in result.warnings

    def test_excess_chill(self, scorer):
        result = scorer.score(make_summary(total_chill_hours=1600.0))

        assert result.score == 70
        assert "Exceso de horas frío puede retrasar la brotación" in result.warnings

    def test_low_gdd(self, scorer):
        result = scorer.score(make_summary(total_gdd=1200.0))

        assert result.score == 75
        assert any("Insuficientes grados día" in w for w in result.warnings)

    def test_high_gdd_warning_only(self, scorer):
        """Between 3200 and 3400 GDD there is a warning but no penalty."""
        result = scorer.score(make_summary(total_gdd=3300.0))

        assert result.score == 100
        assert any("Calor acumulado alto" in w for w in result.warnings)

    def test_excess_gdd(self, scorer):
        assert scorer.score(make_summary(total_gdd=3500.0)).score == 92

    def test_frost_days(self, scorer):
        result = scorer.score(make_summary(frost_days=12))

        assert result.score == 76
        assert "12 días de helada pueden dañar la floración" in result.warnings

    def test_frost_days_at_limit(self, scorer):
        assert scorer.score(make_summary(frost_days=10)).score == 100

    def test_frost_monotonicity(self, scorer):
        """More frost days never raise the score."""
        scores = [scorer.score(make_summary(frost_days=d)).score for d in range(0, 60)]
        assert all(a >= b for a, b in zip(scores, scores[1:]))

    def test_water_deficit_penalty(self, scorer):
        result = scorer.score(make_summary(water_deficit=900.0))

        assert result.score == 90
        assert "Déficit hídrico de 900mm: requiere riego suplementario" in result.recommendations

    def test_water_deficit_penalty_capped(self, scorer):
        assert scorer.score(make_summary(water_deficit=2000.0)).score == 75

    def test_irrigation_note_without_penalty(self, scorer):
        result = scorer.score(make_summary(water_deficit=301.0))

        assert result.score == 100
        assert "Déficit hídrico de 301mm: requiere riego suplementario" in result.recommendations

    def test_half_up_rounding(self, scorer):
        """98.5 rounds to 99, not to the even 98."""
        assert scorer.score(make_summary(water_deficit=560.0)).score == 99

    def test_clamped_to_zero(self, scorer):
        summary = make_summary(
            total_chill_hours=100.0, total_gdd=100.0, frost_days=40, water_deficit=5000.0
        )
        assert scorer.score(summary).score == 0

    def test_annualized_note(self, scorer):
        result = scorer.score(make_summary(years_count=5, is_annualized=True))

        assert result.score == 100
        assert "Índices anualizados sobre 5 años/campañas" in result.recommendations

    def test_score_is_int(self, scorer):
        assert isinstance(scorer.score(make_summary(total_gdd=3500.0)).score, int)


class TestFormatNumber:
    def test_integral_values(self):
        assert format_number(301.0) == "301"
        assert format_number(12) == "12"

    def test_fractional_values(self):
        assert format_number(301.5) == "301.5"
