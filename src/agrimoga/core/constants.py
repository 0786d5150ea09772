"""
Application-wide constants for the Agrimoga advisory engine.

This module defines default values, physical input limits and the advisory
thresholds shared across advisors. Crop-specific values live in the catalogue.
"""

# Input limits (min, max), applied before any computation
TEMPERATURE_LIMITS = (-5.0, 50.0)  # °C
WIND_LIMITS = (0.0, 90.0)  # km/h
PERCENT_LIMITS = (0.0, 100.0)  # %
EMITTERS_LIMITS = (0.0, 16.0)  # emitters per m² or per plant
EMITTER_FLOW_LIMITS = (0.0, 16.0)  # L/h
PUMP_FLOW_LIMITS = (0.0, 50000.0)  # L/h

# Irrigation adjustment chain
HOT_TEMPERATURE_C = 35.0
HOT_MULTIPLIER = 1.4
WARM_TEMPERATURE_C = 30.0
WARM_MULTIPLIER = 1.2
COLD_TEMPERATURE_C = 10.0
COLD_MULTIPLIER = 0.8
WINDY_KMH = 35.0
WIND_MULTIPLIER = 1.15
HEAVY_RAIN_PCT = 60.0
HEAVY_RAIN_MULTIPLIER = 0.3
MODERATE_RAIN_PCT = 30.0
MODERATE_RAIN_MULTIPLIER = 0.6
POSTPONE_MAX_RAIN_PCT = 20.0

# Decision classification
LIGHT_FRACTION = 0.5  # capped volume below this share of demand is "light"
HEAVY_THRESHOLD_LITERS = 2000.0

# Disease tiers
HIGH_RISK_SCORE = 4
MEDIUM_RISK_SCORE = 2
SOIL_WET_WEIGHT = 2

# Fertilization
MIN_DOSE_INTERVAL_DAYS = 3

# Forecast summarization (3-hour samples)
SAMPLES_PER_DAY = 8
RAINY_TOMORROW_POP_PCT = 30.0
MS_TO_KMH = 3.6

# Boundary calls
DEFAULT_TIMEOUT = 12  # seconds
DEFAULT_MAX_RETRIES = 2

# Persistence
DEFAULT_LOG_MAX_ENTRIES = 200
MIN_LOG_MAX_ENTRIES = 50
KEY_IRRIGATION_FORM = "agrimoga:irrig:form"
KEY_IRRIGATION_LOG = "agrimoga:irrig:log"
KEY_LAST_ADVICE = "agrimoga:lastAdvice"
KEY_DISEASE_FORM = "agrimoga:diseases"
KEY_DISEASE_RISK = "agrimoga:diseaseRisk"
KEY_FERTILIZATION_FORM = "agrimoga:fert"
KEY_HARVEST_FORM = "agrimoga:harvest"
KEY_PRICES_FORM = "agrimoga:prices:v2"
KEY_LANGUAGE = "agrimoga:lang"

# Localization
SUPPORTED_LANGUAGES = ("ar", "fr", "en")
DEFAULT_LANGUAGE = "ar"
DEFAULT_CROP = "strawberry"

SHARE_BASE_URL = "https://wa.me/"
