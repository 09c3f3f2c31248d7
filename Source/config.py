"""
Centralized configuration for Dinner Debt with environment
"""

import os
from decimal import Decimal

# Bill defaults
DEFAULT_TIP = float(os.getenv("DINNER_DEBT_DEFAULT_TIP", "20"))
DEFAULT_TIP_IS_RATE = os.getenv("DINNER_DEBT_DEFAULT_TIP_IS_RATE", "true").lower() == "true"
CURRENCY_QUANTUM = Decimal(os.getenv("DINNER_DEBT_CURRENCY_QUANTUM", "0.01"))

# Sharing and payment handoff
SHARE_QUERY_PARAM = os.getenv("DINNER_DEBT_SHARE_PARAM", "data")
VENMO_NOTE = os.getenv("DINNER_DEBT_VENMO_NOTE", "dinner-debt")

# OCR settings
OCR_PSM = int(os.getenv("DINNER_DEBT_OCR_PSM", "6"))
OCR_LANGUAGES = os.getenv("DINNER_DEBT_OCR_LANGUAGES", "eng")

# Runtime settings
DEFAULT_MAX_WORKERS = int(os.getenv("DINNER_DEBT_MAX_WORKERS", "4"))
WORKERS_MIN = int(os.getenv("DINNER_DEBT_WORKERS_MIN", "1"))
WORKERS_MAX = int(os.getenv("DINNER_DEBT_WORKERS_MAX", "16"))
LOG_LEVEL = os.getenv("DINNER_DEBT_LOG_LEVEL", "WARNING").upper()

# Receipt images
MAX_IMAGE_SIZE_BYTES = int(os.getenv("DINNER_DEBT_MAX_IMAGE_SIZE_BYTES", str(50 * 1024 * 1024)))
MAX_IMAGE_DIMENSION = int(os.getenv("DINNER_DEBT_MAX_IMAGE_DIMENSION", "2048"))
IMAGE_REGION_OVERLAP_PX = int(os.getenv("DINNER_DEBT_IMAGE_OVERLAP", "50"))
DUPLICATE_SIMILARITY_THRESHOLD = float(os.getenv("DINNER_DEBT_DUP_SIMILARITY", "0.95"))

# Receipt price normalization
ITEM_PRICE_MIN = float(os.getenv("DINNER_DEBT_ITEM_PRICE_MIN", "0.01"))
ITEM_PRICE_MAX = float(os.getenv("DINNER_DEBT_ITEM_PRICE_MAX", "10000"))

# User settings file
SETTINGS_PATH = os.getenv(
    "DINNER_DEBT_SETTINGS_PATH",
    os.path.join(os.path.expanduser("~"), ".dinner_debt.json"),
)
