"""
Share-message builders.

Produces the plain-text summaries farmers forward over WhatsApp and the
wa.me links that carry them.
"""

import logging
import webbrowser
from typing import Optional
from urllib.parse import quote

from ..core import constants
from ..core.i18n import LocaleContext
from ..models import AdvisoryDecision, CropProfile, PricingResult, WeatherReading


logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves unescaped beyond quote()'s defaults
_URI_SAFE = "!*'()"


def whatsapp_url(text: str) -> str:
    """Build a wa.me link carrying text."""
    return f"{constants.SHARE_BASE_URL}?text={quote(text, safe=_URI_SAFE)}"


def build_irrigation_message(
    crop: CropProfile,
    decision: AdvisoryDecision,
    reading: WeatherReading,
    locale: LocaleContext,
    zone: Optional[str] = None,
    place: Optional[str] = None
) -> str:
    """
    Compose the irrigation advice summary.

    Args:
        crop: Advised crop
        decision: Advice to share
        reading: Reading the advice was computed from
        locale: Output language
        zone: Zone preset name, if any
        place: Place label, if known

    Returns:
        Multi-line message
    """
    t = locale.t
    weather = (
        f"{t('share.temperature')} {reading.temperature_c:.0f}°C • "
        f"{t('share.wind')} {reading.wind_kmh:.0f} {t('units.kmh')} • "
        f"{t('share.rain')} {reading.rain_or_humidity_pct:.0f}%"
    )
    quantity = f"{locale.format_number(decision.quantity)} {t('units.liters')}"
    if decision.duration_minutes:
        quantity += f" • {t('share.duration')} ~ {decision.duration_minutes} {t('units.minutes')}"

    lines = [
        t("share.irrigation.header"),
        f"• {t('share.crop')}: {locale.text(crop.name)}",
    ]
    if zone:
        lines.append(f"• {t('share.zone')}: {zone}")
    lines.extend([
        f"• {t('share.place')}: {place or t('share.place.unknown')}",
        f"• {t('share.weather')}: {weather}",
        f"• {t('share.quantity')}: {quantity}",
    ])
    return "\n".join(lines)


def build_pricing_message(
    crop: CropProfile,
    price_per_kg: float,
    result: PricingResult,
    locale: LocaleContext
) -> str:
    """Compose the sales-estimate summary."""
    t = locale.t
    return "\n".join([
        f"{t('tab.prices').upper()} - AGRIMOGA",
        f"{t('prices.crop')}: {locale.text(crop.name)}",
        f"{t('prices.pricePerKg')}: {locale.format_number(price_per_kg, 2)} MAD/kg",
        f"{t('prices.res.sellable')}: {locale.format_number(result.sellable_kg)} kg",
        f"{t('prices.res.net')}: {locale.format_number(result.net)} MAD",
        f"({t('prices.res.breakeven')}: {result.break_even_price_per_kg:.2f} MAD/kg)",
    ])


def open_share_link(url: str) -> bool:
    """
    Open a share link in the user's browser.

    Returns:
        True if a browser accepted the link
    """
    try:
        opened = webbrowser.open(url, new=2)
    except webbrowser.Error as e:
        logger.warning(f"Could not open share link: {e}")
        return False
    if not opened:
        logger.info("No browser available to open share link")
    return bool(opened)
