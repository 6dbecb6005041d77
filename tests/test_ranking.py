"""
Tests for the cultivar catalog, ranking engine and detailed report.
"""

import dataclasses
import json

import pytest  # type: ignore

from src.pistachio_climate import catalog
from src.pistachio_climate.models import ClimateProfile, Location, PistachioVariety
from src.pistachio_climate.scoring import VarietyRankingEngine, generate_detailed_report
from src.pistachio_climate.scoring.ranking import MORE_DATA_RECOMMENDATION, POLLINATION_RISK
from src.pistachio_climate.scoring.report import assess_overall_risk, general_recommendations

SITE = Location(latitude=37.5, longitude=-3.0)


def make_profile(**overrides) -> ClimateProfile:
    """Profile of a comfortable pistachio site unless overridden."""
    values = dict(
        avg_temperature=16.0,
        min_temperature=-5.0,
        max_temperature=40.0,
        total_chill_hours=1000,
        total_gdd=2500,
        frost_days=2,
        total_frost_hours=8,
        total_precipitation=450,
        water_deficit=200,
        heat_stress_days=0,
        extreme_cold_days=0,
        total_days=1095,
    )
    values.update(overrides)
    return ClimateProfile(**values)


def variety_data(**overrides):
    """Minimal JSON object for a female cultivar."""
    data = {
        "id": "test-female",
        "name": "Test",
        "origin": "Test",
        "type": "female",
        "chill_hours_min": 900,
        "chill_hours_max": 1400,
        "heat_tolerance": 8,
        "drought_tolerance": 8,
        "frost_tolerance": 6,
        "min_winter_temp": -12,
        "max_summer_temp": 45,
        "optimal_temp_range": [15, 35],
        "annual_water_need": 800,
        "pollinizers": ["test-male"],
    }
    data.update(overrides)
    return data


@pytest.fixture
def engine():
    """Create ranking engine over the built-in catalog."""
    return VarietyRankingEngine()


class TestCatalog:
    """Test cases for the built-in catalog and catalog loading."""

    def test_lookup(self):
        assert catalog.get_variety_by_id("kerman").name == "Kerman"
        assert catalog.get_variety_by_id("pistachio-x") is None

    def test_female_and_male(self):
        assert [v.id for v in catalog.female_varieties()] == ["kerman", "sirora", "larnaka", "aegina"]
        assert [v.id for v in catalog.male_varieties()] == ["peters", "randy"]

    def test_unknown_pollinizers_skipped(self):
        larnaka = catalog.get_variety_by_id("larnaka")
        assert [p.id for p in catalog.pollinizers_for(larnaka)] == ["peters"]

    def test_catalog_is_immutable(self):
        kerman = catalog.get_variety_by_id("kerman")
        with pytest.raises(dataclasses.FrozenInstanceError):
            kerman.chill_hours_min = 0

    def test_load_catalog(self, tmp_path):
        path = tmp_path / "catalog.json"
        male = variety_data(id="test-male", type="male", pollinizers=[])
        path.write_text(json.dumps({"varieties": [variety_data(), male]}), encoding="utf-8")

        loaded = catalog.load_catalog(str(path))

        assert [v.id for v in loaded] == ["test-female", "test-male"]
        assert loaded[0].optimal_temp_range == (15, 35)
        assert loaded[0].pollinizers == ("test-male",)

    def test_load_catalog_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            catalog.load_catalog(str(tmp_path / "missing.json"))

    @pytest.mark.parametrize("content", [
        [variety_data(), variety_data()],
        [variety_data(colour="green")],
        [variety_data(type="hermaphrodite")],
        [variety_data(chill_hours_min=0)],
        [],
    ])
    def test_load_catalog_invalid(self, tmp_path, content):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(content), encoding="utf-8")

        with pytest.raises(ValueError):
            catalog.load_catalog(str(path))


class TestVarietyRanking:
    """Test cases for cultivar scoring and ranking."""

    def test_only_females_ranked(self, engine):
        ranked = engine.rank(catalog.VARIETIES, make_profile(), SITE)

        assert {r.variety.id for r in ranked} == {"kerman", "sirora", "larnaka", "aegina"}

    def test_sorted_best_first(self, engine):
        ranked = engine.rank(catalog.VARIETIES, make_profile(), SITE)
        scores = [r.score for r in ranked]

        assert scores == sorted(scores, reverse=True)
        assert ranked[0].score == 100.0
        assert ranked[-1].variety.id == "larnaka"
        assert ranked[-1].score == pytest.approx(96.1)

    def test_scores_bounded(self, engine):
        harsh = make_profile(
            total_chill_hours=50, total_gdd=500, min_temperature=-25.0, max_temperature=52.0,
            water_deficit=2000, frost_days=30, heat_stress_days=60,
        )
        for r in engine.rank(catalog.VARIETIES, harsh, SITE):
            assert 0.0 <= r.score <= 100.0
            assert r.concerns

    def test_insufficient_profile(self, engine):
        profile = ClimateProfile(total_days=120, is_sufficient=False, data_warning="Datos insuficientes")
        ranked = engine.rank(catalog.VARIETIES, profile, SITE)

        assert len(ranked) == 4
        for r in ranked:
            assert r.score == 0.0
            assert r.concerns == ["Datos insuficientes"]
            assert r.recommendations == [MORE_DATA_RECOMMENDATION]

    def test_pollinizer_penalty(self):
        """A cultivar whose only pollinizer lacks chill loses 15 points."""
        female = catalog.variety_from_dict(variety_data())
        male = catalog.variety_from_dict(
            variety_data(id="test-male", type="male", chill_hours_min=1000, pollinizers=[])
        )
        profile = make_profile(total_chill_hours=700)

        checked = VarietyRankingEngine(catalog=[female, male]).evaluate(female, profile)
        unchecked = VarietyRankingEngine(catalog=[female, male], validate_pollinizers=False).evaluate(
            female, profile
        )

        assert POLLINATION_RISK in checked.concerns
        assert POLLINATION_RISK not in unchecked.concerns
        assert checked.score == pytest.approx(unchecked.score - 15, abs=0.11)

    def test_viable_pollinizer_no_penalty(self, engine):
        kerman = catalog.get_variety_by_id("kerman")
        recommendation = engine.evaluate(kerman, make_profile())

        assert POLLINATION_RISK not in recommendation.concerns
        assert [p.id for p in recommendation.pollinizers] == ["peters", "randy"]

    def test_chill_deficit_concern(self, engine):
        kerman = catalog.get_variety_by_id("kerman")
        recommendation = engine.evaluate(kerman, make_profile(total_chill_hours=600))

        assert "Déficit de horas frío (año desfavorable): 200 h por debajo del mínimo" in recommendation.concerns

    def test_specific_recommendations(self, engine):
        kerman = catalog.get_variety_by_id("kerman")
        sirora = catalog.get_variety_by_id("sirora")
        profile = make_profile(min_temperature=-10.0, total_chill_hours=500, water_deficit=400)

        kerman_recs = engine.specific_recommendations(kerman, profile)
        sirora_recs = engine.specific_recommendations(sirora, profile)

        assert "Considerar portainjertos resistentes al frío" in kerman_recs
        assert "Plantar polinizadores: peters, randy (ratio 1:8-10)" in kerman_recs
        assert "Implementar sistema de riego por goteo de alta eficiencia" in kerman_recs
        assert "Variedad ideal para zonas con pocas horas frío (año desfavorable)" in sirora_recs


class TestDetailedReport:
    """Test cases for the report built from a ranking."""

    def test_report_summary(self, engine):
        profile = make_profile()
        ranked = engine.rank(catalog.VARIETIES, profile, SITE)
        report = generate_detailed_report(ranked, profile, SITE)

        assert report.summary.total_varieties_evaluated == 4
        assert report.summary.suitable_count == 4
        assert report.summary.best_variety == "Kerman"
        assert report.summary.best_score == 100.0
        assert len(report.top_recommendations) == 3
        assert report.planting_strategy.pollinizers == ["Peters", "Randy"]
        assert report.planting_strategy.expected_production == "Primera cosecha: año 5, Producción plena: año 10"

    def test_empty_report(self):
        report = generate_detailed_report([], make_profile(), SITE)

        assert report.summary.best_variety == "Ninguna"
        assert report.planting_strategy.primary_variety == "No recomendada"

    def test_insufficient_profile_report(self, engine):
        """A profile built from too little data gives no cultivar and no risk level."""
        profile = ClimateProfile(total_days=90, is_sufficient=False, data_warning="Datos insuficientes")
        ranked = engine.rank(catalog.VARIETIES, profile, SITE)
        report = generate_detailed_report(ranked, profile, SITE)

        assert report.summary.total_varieties_evaluated == len(ranked)
        assert report.summary.best_variety == "Ninguna"
        assert report.summary.suitable_count == 0
        assert report.top_recommendations == []
        assert report.risk_assessment.level == "Indeterminado"
        assert report.planting_strategy.primary_variety == "No recomendada"
        assert report.planting_strategy.timeline == ["Datos insuficientes"]
        assert len(report.general_recommendations) == 1
        assert "campaña completa" in report.general_recommendations[0]

    def test_risk_levels(self):
        assert assess_overall_risk(make_profile()).level == "Bajo"
        assert assess_overall_risk(make_profile(heat_stress_days=30)).level == "Bajo"
        assert assess_overall_risk(make_profile(frost_days=20)).level == "Moderado"

        severe = assess_overall_risk(
            make_profile(frost_days=20, heat_stress_days=30, water_deficit=600, extreme_cold_days=6)
        )
        assert severe.score == 80
        assert severe.level == "Muy Alto"
        assert len(severe.mitigation) == 4

    def test_general_recommendations_by_latitude(self):
        north = general_recommendations(make_profile(), Location(latitude=45.0, longitude=0.0))
        tropical = general_recommendations(make_profile(), Location(latitude=-20.0, longitude=0.0))

        assert "Zona de latitud alta: priorizar variedades resistentes al frío" in north
        assert any(r.startswith("Zona tropical/subtropical") for r in tropical)
