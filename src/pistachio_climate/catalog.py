"""
Pistachio cultivar catalog.

Static reference data: an immutable tuple of frozen PistachioVariety records.
An alternative catalog can be loaded from a JSON file with ``load_catalog``.
"""

import json
import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

from .models.variety import PistachioVariety

logger = logging.getLogger(__name__)

VARIETIES: Tuple[PistachioVariety, ...] = (
    PistachioVariety(
        id="kerman",
        name="Kerman",
        origin="Irán",
        type="female",
        chill_hours_min=800,
        chill_hours_max=1200,
        heat_tolerance=8,
        drought_tolerance=9,
        frost_tolerance=6,
        min_winter_temp=-12,
        max_summer_temp=45,
        optimal_temp_range=(15, 35),
        annual_water_need=800,
        critical_water_periods=("Floración (Abril)", "Desarrollo fruto (Junio-Agosto)"),
        production_start=5,
        peak_production=10,
        lifespan=80,
        pollinizers=("peters", "randy"),
        description="Variedad principal comercial, fruto grande y alta calidad",
    ),
    PistachioVariety(
        id="peters",
        name="Peters",
        origin="Estados Unidos",
        type="male",
        chill_hours_min=700,
        chill_hours_max=1100,
        heat_tolerance=8,
        drought_tolerance=8,
        frost_tolerance=7,
        min_winter_temp=-10,
        max_summer_temp=43,
        optimal_temp_range=(12, 33),
        annual_water_need=700,
        critical_water_periods=("Floración (Marzo-Abril)",),
        production_start=3,
        peak_production=6,
        lifespan=80,
        description="Polinizador principal para Kerman, floración sincronizada",
    ),
    PistachioVariety(
        id="sirora",
        name="Sirora",
        origin="Australia",
        type="female",
        chill_hours_min=600,
        chill_hours_max=1000,
        heat_tolerance=9,
        drought_tolerance=8,
        frost_tolerance=5,
        min_winter_temp=-8,
        max_summer_temp=48,
        optimal_temp_range=(18, 38),
        annual_water_need=750,
        critical_water_periods=("Floración (Abril)", "Llenado fruto (Julio-Agosto)"),
        production_start=4,
        peak_production=8,
        lifespan=75,
        pollinizers=("peters", "randy"),
        description="Variedad australiana adaptada a climas cálidos",
    ),
    PistachioVariety(
        id="larnaka",
        name="Larnaka",
        origin="Chipre",
        type="female",
        chill_hours_min=500,
        chill_hours_max=900,
        heat_tolerance=9,
        drought_tolerance=9,
        frost_tolerance=4,
        min_winter_temp=-5,
        max_summer_temp=50,
        optimal_temp_range=(20, 40),
        annual_water_need=650,
        critical_water_periods=("Floración (Abril-Mayo)", "Desarrollo inicial (Junio)"),
        production_start=4,
        peak_production=9,
        lifespan=70,
        # "c-special" is not in the catalog and resolves to nothing
        pollinizers=("peters", "c-special"),
        description="Variedad mediterránea para climas muy cálidos y secos",
    ),
    PistachioVariety(
        id="aegina",
        name="Aegina",
        origin="Grecia",
        type="female",
        chill_hours_min=700,
        chill_hours_max=1100,
        heat_tolerance=7,
        drought_tolerance=8,
        frost_tolerance=7,
        min_winter_temp=-10,
        max_summer_temp=42,
        optimal_temp_range=(14, 32),
        annual_water_need=750,
        critical_water_periods=("Floración (Abril)", "Desarrollo fruto (Junio-Julio)"),
        production_start=5,
        peak_production=12,
        lifespan=85,
        pollinizers=("peters", "male-aegina"),
        description="Variedad griega tradicional, fruto pequeño pero muy sabroso",
    ),
    PistachioVariety(
        id="randy",
        name="Randy",
        origin="Estados Unidos",
        type="male",
        chill_hours_min=750,
        chill_hours_max=1150,
        heat_tolerance=8,
        drought_tolerance=8,
        frost_tolerance=8,
        min_winter_temp=-12,
        max_summer_temp=44,
        optimal_temp_range=(13, 34),
        annual_water_need=700,
        critical_water_periods=("Floración (Marzo-Abril)",),
        production_start=3,
        peak_production=6,
        lifespan=80,
        description="Polinizador alternativo, floración extendida",
    ),
)


def get_variety_by_id(
    variety_id: str,
    catalog: Sequence[PistachioVariety] = VARIETIES
) -> Optional[PistachioVariety]:
    for variety in catalog:
        if variety.id == variety_id:
            return variety
    return None


def female_varieties(catalog: Sequence[PistachioVariety] = VARIETIES) -> Tuple[PistachioVariety, ...]:
    return tuple(v for v in catalog if v.is_female)


def male_varieties(catalog: Sequence[PistachioVariety] = VARIETIES) -> Tuple[PistachioVariety, ...]:
    return tuple(v for v in catalog if v.type == "male")


def pollinizers_for(
    variety: PistachioVariety,
    catalog: Sequence[PistachioVariety] = VARIETIES
) -> Tuple[PistachioVariety, ...]:
    """Resolve a cultivar's pollinizer ids; unknown ids are skipped."""
    resolved = []
    for pollinizer_id in variety.pollinizers:
        pollinizer = get_variety_by_id(pollinizer_id, catalog)
        if pollinizer is None:
            logger.debug(f"Pollinizer '{pollinizer_id}' of {variety.id} not in catalog")
            continue
        resolved.append(pollinizer)
    return tuple(resolved)


def variety_from_dict(data: Dict[str, Any]) -> PistachioVariety:
    """
    Build a PistachioVariety from a JSON object with snake_case keys.

    Raises:
        ValueError: If required fields are missing or unknown fields are present
    """
    known = {f.name for f in fields(PistachioVariety)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown variety fields: {', '.join(sorted(unknown))}")

    values = dict(data)
    for key in ("optimal_temp_range", "critical_water_periods", "pollinizers"):
        if key in values:
            values[key] = tuple(values[key])

    try:
        variety = PistachioVariety(**values)
    except TypeError as e:
        raise ValueError(f"Invalid variety {data.get('id', '?')}: {e}")

    if variety.type not in ("female", "male"):
        raise ValueError(f"Invalid type for {variety.id}: {variety.type} (must be female or male)")
    for key in ("chill_hours_min", "chill_hours_max", "annual_water_need"):
        if getattr(variety, key) <= 0:
            raise ValueError(f"Invalid {key} for {variety.id}: must be positive")

    return variety


def load_catalog(path: str) -> Tuple[PistachioVariety, ...]:
    """
    Load a cultivar catalog from a JSON file.

    The file holds a list of variety objects, or ``{"varieties": [...]}``.

    Args:
        path: Path to the JSON file

    Returns:
        Immutable catalog

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the content is not a valid catalog
    """
    catalog_path = Path(path)
    if not catalog_path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    with open(catalog_path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in catalog file: {e}")

    if isinstance(data, dict):
        data = data.get("varieties")
    if not isinstance(data, list) or not data:
        raise ValueError(f"Catalog file {path} must contain a non-empty list of varieties")

    catalog = tuple(variety_from_dict(item) for item in data)

    ids = [v.id for v in catalog]
    if len(set(ids)) != len(ids):
        raise ValueError(f"Duplicate variety ids in catalog: {ids}")

    logger.info(f"Loaded {len(catalog)} varieties from {path}")
    return catalog
