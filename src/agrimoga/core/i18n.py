"""
Localization helpers.

Text that differs per language is held in LocalizedText / LocalizedList and
resolved with a LocaleContext that callers pass explicitly. Raw catalogue
values (plain string, per-language map, list or per-language list map) are
normalized once, when the catalogue is loaded.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from . import constants


@dataclass(frozen=True)
class LocalizedText:
    """A string available in one or more languages."""

    values: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: Any) -> "LocalizedText":
        """Normalize a plain string or a {lang: text} mapping."""
        if raw is None:
            return cls({})
        if isinstance(raw, str):
            return cls({constants.DEFAULT_LANGUAGE: raw})
        if isinstance(raw, Mapping):
            return cls({str(k): str(v) for k, v in raw.items() if v})
        return cls({constants.DEFAULT_LANGUAGE: str(raw)})

    def resolve(self, lang: str) -> str:
        """Return the text for lang, falling back to Arabic then any language."""
        if not self.values:
            return ""
        return (
            self.values.get(lang)
            or self.values.get(constants.DEFAULT_LANGUAGE)
            or next(iter(self.values.values()))
        )


@dataclass(frozen=True)
class LocalizedList:
    """A list of strings available in one or more languages."""

    values: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: Any) -> "LocalizedList":
        """Normalize a plain list or a {lang: [items]} mapping."""
        if raw is None:
            return cls({})
        if isinstance(raw, (list, tuple)):
            return cls({constants.DEFAULT_LANGUAGE: [str(item) for item in raw]})
        if isinstance(raw, Mapping):
            return cls({
                str(k): [str(item) for item in v]
                for k, v in raw.items()
                if isinstance(v, (list, tuple))
            })
        return cls({})

    def resolve(self, lang: str) -> List[str]:
        return list(self.values.get(lang) or self.values.get(constants.DEFAULT_LANGUAGE) or [])


# (thousands separator, decimal separator)
_SEPARATORS = {
    "ar": (".", ","),
    "fr": ("\u202f", ","),
    "en": (",", "."),
}

MESSAGES: Dict[str, Dict[str, str]] = {
    "decision.postpone.title": {
        "ar": "ماتسقيش اليوم",
        "fr": "Reporter l'irrigation",
        "en": "Postpone watering",
    },
    "decision.postpone.reason": {
        "ar": "غداً متوقع الشتا، أجّل إلا ما كاينش عطش واضح.",
        "fr": "Pluie prévue demain : reporter sauf stress hydrique visible.",
        "en": "Rain expected tomorrow: postpone unless plants show clear stress.",
    },
    "decision.light.title": {
        "ar": "سقي خفيف",
        "fr": "Irrigation légère",
        "en": "Light watering",
    },
    "decision.light.reason": {
        "ar": "الرطوبة/الجو كافي نسبياً اليوم.",
        "fr": "Humidité et météo relativement suffisantes aujourd'hui.",
        "en": "Humidity and weather are fairly sufficient today.",
    },
    "decision.light.empty": {
        "ar": "ما كايناش مساحة ولا نباتات للسقي.",
        "fr": "Aucune surface ni plante à irriguer.",
        "en": "No area or plants to water.",
    },
    "decision.normal.title": {
        "ar": "سقي عادي",
        "fr": "Irrigation normale",
        "en": "Normal watering",
    },
    "decision.normal.reason": {
        "ar": "ظروف متوسطة.",
        "fr": "Conditions moyennes.",
        "en": "Average conditions.",
    },
    "decision.heavy.title": {
        "ar": "سقي قوي",
        "fr": "Irrigation abondante",
        "en": "Heavy watering",
    },
    "decision.heavy.reason": {
        "ar": "الحرارة/الريح كيزيدو الطلب على الماء.",
        "fr": "Chaleur et vent augmentent la demande en eau.",
        "en": "Heat and wind are raising water demand.",
    },
    "tier.low": {"ar": "منخفض", "fr": "faible", "en": "low"},
    "tier.medium": {"ar": "متوسط", "fr": "moyen", "en": "medium"},
    "tier.high": {"ar": "مرتفع", "fr": "élevé", "en": "high"},
    "sc.min": {"ar": "سعر أدنى", "fr": "Prix bas", "en": "Low price"},
    "sc.avg": {"ar": "سعر متوسط", "fr": "Prix moyen", "en": "Average price"},
    "sc.max": {"ar": "سعر أعلى", "fr": "Prix haut", "en": "High price"},
    "warning.missing_api_key": {
        "ar": "مفتاح الطقس غير مضاف (OWM_API_KEY)",
        "fr": "Clé météo absente (OWM_API_KEY)",
        "en": "Weather API key missing (OWM_API_KEY)",
    },
    "warning.fetch_failed": {
        "ar": "تعذّر جلب الطقس",
        "fr": "Impossible de récupérer la météo",
        "en": "Could not fetch the weather",
    },
    "warning.empty_forecast": {
        "ar": "ما وصلاتش معطيات الطقس",
        "fr": "Aucune donnée météo reçue",
        "en": "No weather data received",
    },
    "warning.place_not_found": {
        "ar": "المكان ما تلقاش",
        "fr": "Lieu introuvable",
        "en": "Place not found",
    },
    "share.irrigation.header": {
        "ar": "💧 توصية السقي (Agrimoga)",
        "fr": "💧 Conseil d'irrigation (Agrimoga)",
        "en": "💧 Irrigation advice (Agrimoga)",
    },
    "share.crop": {"ar": "المحصول", "fr": "Culture", "en": "Crop"},
    "share.zone": {"ar": "الزون", "fr": "Zone", "en": "Zone"},
    "share.place": {"ar": "المكان", "fr": "Lieu", "en": "Place"},
    "share.place.unknown": {"ar": "غير محدد", "fr": "non précisé", "en": "not set"},
    "share.weather": {"ar": "الطقس", "fr": "Météo", "en": "Weather"},
    "share.temperature": {"ar": "حرارة", "fr": "température", "en": "temperature"},
    "share.wind": {"ar": "ريح", "fr": "vent", "en": "wind"},
    "share.rain": {"ar": "رطوبة/مطر", "fr": "humidité/pluie", "en": "humidity/rain"},
    "share.quantity": {"ar": "الكمية", "fr": "Quantité", "en": "Quantity"},
    "share.duration": {"ar": "المدة", "fr": "Durée", "en": "Duration"},
    "tab.prices": {"ar": "الأثمنة", "fr": "Prix", "en": "Prices"},
    "prices.crop": {"ar": "المحصول", "fr": "Culture", "en": "Crop"},
    "prices.pricePerKg": {"ar": "الثمن/كغ", "fr": "Prix/kg", "en": "Price/kg"},
    "prices.res.sellable": {"ar": "الكمية القابلة للبيع", "fr": "Quantité vendable", "en": "Sellable quantity"},
    "prices.res.net": {"ar": "الربح الصافي", "fr": "Bénéfice net", "en": "Net profit"},
    "prices.res.breakeven": {"ar": "ثمن التعادل", "fr": "Prix d'équilibre", "en": "Break-even price"},
    "units.liters": {"ar": "لتر", "fr": "L", "en": "L"},
    "units.minutes": {"ar": "د", "fr": "min", "en": "min"},
    "units.kmh": {"ar": "كم/س", "fr": "km/h", "en": "km/h"},
}


def translate(key: str, lang: str) -> str:
    """Look up a catalogue message, falling back to Arabic then to the key."""
    entry = MESSAGES.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get(constants.DEFAULT_LANGUAGE) or key


@dataclass(frozen=True)
class LocaleContext:
    """Explicit language context for text selection and number formatting."""

    lang: str = constants.DEFAULT_LANGUAGE

    def __post_init__(self):
        if self.lang not in constants.SUPPORTED_LANGUAGES:
            object.__setattr__(self, "lang", constants.DEFAULT_LANGUAGE)

    @property
    def direction(self) -> str:
        return "rtl" if self.lang == "ar" else "ltr"

    def t(self, key: str) -> str:
        return translate(key, self.lang)

    def text(self, value: LocalizedText) -> str:
        return value.resolve(self.lang)

    def format_number(self, value: float, decimals: int = 0) -> str:
        """
        Format a number with the language's grouping and decimal separators.

        Non-finite values are shown as zero.
        """
        try:
            number = float(value)
        except (TypeError, ValueError):
            number = 0.0
        if not math.isfinite(number):
            number = 0.0

        thousands, decimal = _SEPARATORS[self.lang]
        formatted = f"{number:,.{decimals}f}"
        return formatted.replace(",", "\x00").replace(".", decimal).replace("\x00", thousands)
