"""
Crop and disease catalogue.

Crop profiles are fixed configuration. The disease catalogue is loaded from
raw JSON-like records; localized fields are normalized here so advisors
never branch on their shape.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .core import constants
from .core.i18n import LocalizedText, LocalizedList
from .models import CropProfile, Disease, DiseaseRule, NPK, PriceBand, ZonePreset


logger = logging.getLogger(__name__)

# Keys used by earlier versions of the stored forms
CROP_ALIASES = {
    "fraise": "strawberry",
    "framboise": "raspberry",
    "avocat": "avocado",
}


def _zones(*presets: ZonePreset) -> Dict[str, ZonePreset]:
    return {preset.name: preset for preset in presets}


CROP_PROFILES: Dict[str, CropProfile] = {
    "strawberry": CropProfile(
        key="strawberry",
        name=LocalizedText({"ar": "فراولة", "fr": "Fraise", "en": "Strawberry"}),
        demand_per_m2=2.5,
        demand_per_plant=4.0,
        fertilization_target=NPK(n=6.0, p=3.0, k=6.0),
        price_band=PriceBand(min=8.0, avg=12.0, max=18.0),
        kg_per_box=5.0,
        tip=LocalizedText({
            "ar": "سقي خفيف ومتكرر للفراولة لتفادي تعفن الجذور.",
            "fr": "Arrosages légers et fréquents pour éviter la pourriture des racines.",
            "en": "Light, frequent watering to avoid root rot.",
        }),
        zones=_zones(
            ZonePreset("Zone A (100 m²)", area_m2=100, plants=400, emitters_per_plant=4, emitter_flow_lph=2),
            ZonePreset("Zone B (250 m²)", area_m2=250, plants=900, emitters_per_plant=4, emitter_flow_lph=2),
        ),
    ),
    "raspberry": CropProfile(
        key="raspberry",
        name=LocalizedText({"ar": "فرامبواز", "fr": "Framboise", "en": "Raspberry"}),
        demand_per_m2=3.0,
        demand_per_plant=5.0,
        fertilization_target=NPK(n=5.0, p=2.0, k=6.0),
        price_band=PriceBand(min=35.0, avg=50.0, max=70.0),
        kg_per_box=2.0,
        tip=LocalizedText({
            "ar": "حافظ على توازن الماء وصرف جيد للجذور.",
            "fr": "Garder un apport d'eau régulier et un bon drainage des racines.",
            "en": "Keep water balanced and roots well drained.",
        }),
        zones=_zones(
            ZonePreset("Zone A (100 m²)", area_m2=100, plants=250, emitters_per_plant=2, emitter_flow_lph=2),
            ZonePreset("Zone B (250 m²)", area_m2=250, plants=600, emitters_per_plant=2, emitter_flow_lph=2),
        ),
    ),
    "avocado": CropProfile(
        key="avocado",
        name=LocalizedText({"ar": "أفوكادو", "fr": "Avocat", "en": "Avocado"}),
        demand_per_m2=4.5,
        demand_per_plant=18.0,
        fertilization_target=NPK(n=8.0, p=3.0, k=8.0),
        price_band=PriceBand(min=10.0, avg=16.0, max=24.0),
        kg_per_box=10.0,
        tip=LocalizedText({
            "ar": "الأفوكا كيبغي سقي عميق وبعيد بين الدورات.",
            "fr": "L'avocatier préfère des arrosages profonds et espacés.",
            "en": "Avocado prefers deep watering with long intervals.",
        }),
        zones=_zones(
            ZonePreset("Zone A (100 m²)", area_m2=100, plants=40, emitters_per_plant=8, emitter_flow_lph=4),
            ZonePreset("Zone B (250 m²)", area_m2=250, plants=90, emitters_per_plant=8, emitter_flow_lph=4),
        ),
    ),
}


DEFAULT_DISEASES: List[Dict[str, Any]] = [
    {
        "id": "straw-botrytis",
        "crop": "strawberry",
        "name": {"ar": "Botrytis (العفن الرمادي)", "fr": "Botrytis (pourriture grise)", "en": "Botrytis (gray mold)"},
        "causes": {
            "ar": ["رطوبة عالية", "بلل طويل للأوراق/الثمار"],
            "fr": ["Humidité élevée", "Feuillage/fruits mouillés longtemps"],
            "en": ["High humidity", "Leaves/fruits wet for long periods"],
        },
        "actions": {
            "ar": ["تحسين التهوية", "إزالة الأجزاء المصابة", "وقاية عند الذروة"],
            "fr": ["Améliorer l'aération", "Enlever parties atteintes", "Traitement préventif au pic"],
            "en": ["Improve ventilation", "Remove infected parts", "Preventive treatment at peak"],
        },
        "riskRules": {"tempMin": 10, "tempMax": 22, "humidityMin": 85, "rainProbMin": 40},
    },
    {
        "id": "straw-powdery-mildew",
        "crop": "strawberry",
        "name": {"ar": "البياض الدقيقي", "fr": "Oïdium", "en": "Powdery mildew"},
        "causes": {
            "ar": ["جو دافئ", "رطوبة متوسطة بلا شتا"],
            "fr": ["Temps doux", "Humidité moyenne sans pluie"],
            "en": ["Mild weather", "Moderate humidity without rain"],
        },
        "actions": {
            "ar": ["تهوية الخيام", "رش الكبريت وقائياً"],
            "fr": ["Aérer les tunnels", "Soufre en préventif"],
            "en": ["Ventilate tunnels", "Preventive sulfur spray"],
        },
        "riskRules": {"tempMin": 15, "tempMax": 27, "humidityMin": 60, "humidityMax": 90},
    },
    {
        "id": "straw-root-rot",
        "crop": "strawberry",
        "name": {"ar": "تعفن الجذور", "fr": "Pourriture des racines", "en": "Root rot"},
        "causes": {
            "ar": ["تربة مشبعة بالماء"],
            "fr": ["Sol saturé en eau"],
            "en": ["Waterlogged soil"],
        },
        "actions": {
            "ar": ["نقص السقي", "تحسين الصرف"],
            "fr": ["Réduire l'irrigation", "Améliorer le drainage"],
            "en": ["Reduce irrigation", "Improve drainage"],
        },
        "riskRules": {"tempMin": 12, "soilWetFlag": True},
    },
    {
        "id": "rasp-cane-botrytis",
        "crop": "raspberry",
        "name": {"ar": "العفن الرمادي", "fr": "Botrytis des cannes", "en": "Cane botrytis"},
        "causes": {
            "ar": ["رطوبة عالية", "شتا متكرر"],
            "fr": ["Humidité élevée", "Pluies fréquentes"],
            "en": ["High humidity", "Frequent rain"],
        },
        "actions": {
            "ar": ["تقليم للتهوية", "جمع الثمار المصابة"],
            "fr": ["Tailler pour aérer", "Retirer les fruits atteints"],
            "en": ["Prune for airflow", "Remove infected fruit"],
        },
        "riskRules": {"tempMin": 12, "tempMax": 25, "humidityMin": 80, "rainProbMin": 50},
    },
    {
        "id": "rasp-phytophthora",
        "crop": "raspberry",
        "name": {"ar": "فيتوفتورا الجذور", "fr": "Phytophthora racinaire", "en": "Phytophthora root rot"},
        "riskRules": {"tempMin": 10, "rainProbMin": 60, "soilWetFlag": True},
    },
    {
        "id": "avo-phytophthora",
        "crop": "avocado",
        "name": {"ar": "فيتوفتورا الجذور", "fr": "Phytophthora racinaire", "en": "Phytophthora root rot"},
        "causes": {
            "ar": ["تربة مشبعة", "حرارة التربة فوق 15°C"],
            "fr": ["Sol saturé", "Sol au-dessus de 15°C"],
            "en": ["Saturated soil", "Soil above 15°C"],
        },
        "actions": {
            "ar": ["تباعد السقي", "تغطية عضوية", "صرف جيد"],
            "fr": ["Espacer les irrigations", "Paillage organique", "Bon drainage"],
            "en": ["Space out irrigations", "Organic mulch", "Good drainage"],
        },
        "riskRules": {"tempMin": 15, "tempMax": 30, "soilWetFlag": True},
    },
    {
        "id": "avo-anthracnose",
        "crop": "avocado",
        "name": {"ar": "الأنثراكنوز", "fr": "Anthracnose", "en": "Anthracnose"},
        "riskRules": {"tempMin": 20, "tempMax": 30, "humidityMin": 80, "rainProbMin": 50},
    },
]


def normalize_crop_key(key: Optional[str]) -> str:
    """Map a stored or user-supplied crop key onto the closed crop set."""
    if not key:
        return constants.DEFAULT_CROP
    key = str(key).strip().lower()
    key = CROP_ALIASES.get(key, key)
    if key not in CROP_PROFILES:
        logger.debug(f"Unknown crop key {key!r}, using {constants.DEFAULT_CROP}")
        return constants.DEFAULT_CROP
    return key


def get_crop(key: Optional[str]) -> CropProfile:
    """Look up a crop profile; unknown keys fall back to strawberry."""
    return CROP_PROFILES[normalize_crop_key(key)]


def load_disease_catalogue(records: Iterable[Dict[str, Any]]) -> Tuple[Disease, ...]:
    """
    Normalize raw disease records.

    Records missing an id or crop, or that are not mappings, are skipped.

    Args:
        records: Raw records with id, crop, name, causes, actions and riskRules

    Returns:
        Tuple of Disease entries
    """
    diseases = []
    for record in records:
        if not isinstance(record, dict) or not record.get("id") or not record.get("crop"):
            logger.warning(f"Skipping malformed disease record: {record!r}")
            continue
        diseases.append(Disease(
            id=str(record["id"]),
            crop=normalize_crop_key(record["crop"]),
            name=LocalizedText.from_raw(record.get("name")),
            rule=DiseaseRule.from_dict(record.get("riskRules")),
            causes=LocalizedList.from_raw(record.get("causes")),
            actions=LocalizedList.from_raw(record.get("actions")),
        ))
    return tuple(diseases)


def load_disease_file(path: str) -> Tuple[Disease, ...]:
    """
    Load the disease catalogue from a JSON file.

    An empty or unreadable file yields the built-in catalogue.
    """
    try:
        with open(Path(path), "r", encoding="utf-8") as f:
            records = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read disease catalogue {path}: {e}")
        records = None

    if not isinstance(records, list) or not records:
        return DISEASES
    return load_disease_catalogue(records)


DISEASES: Tuple[Disease, ...] = load_disease_catalogue(DEFAULT_DISEASES)


def diseases_for(crop_key: str, catalogue: Optional[Iterable[Disease]] = None) -> List[Disease]:
    """Return the catalogue entries scoped to a crop."""
    crop_key = normalize_crop_key(crop_key)
    source = DISEASES if catalogue is None else catalogue
    return [disease for disease in source if disease.crop == crop_key]
