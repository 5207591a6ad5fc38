"""
Pricebook — Configuration: paths, reference-list defaults, engine constants.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: override with PRICEBOOK_DATA_DIR env var for deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("PRICEBOOK_DATA_DIR", str(Path.cwd() / "data")))
BASE_FOLDER = _data_dir
RECEIPTS_FOLDER = _data_dir / "receipts"
STORES_FOLDER = _data_dir / "stores"
UNITS_FOLDER = _data_dir / "units"
REPORTS_FOLDER = _data_dir / "reports"

RECEIPTS_FILE = "receipts_data.json"
STORES_FILE = "stores_data.json"
UNITS_FILE = "units_data.json"

# ---------------------------------------------------------------------------
# Reference-list defaults (seeded by the catalog loader when files are absent)
# ---------------------------------------------------------------------------
DEFAULT_STORES = ["Walmart", "Target", "Costco", "Whole Foods", "Kroger"]
DEFAULT_UNITS = ["g", "kg", "oz", "lb", "lbs", "ml", "l", "ea", "pcs", "ct"]

# ---------------------------------------------------------------------------
# Reconciliation engine constants (fixed, not user-tunable)
# ---------------------------------------------------------------------------
# Two prices at the same store closer than this are the same price
PRICE_TOLERANCE = 0.01

# |percent change| at or below this is reported as "stable"
TREND_DEADBAND_PCT = 5.0

# ---------------------------------------------------------------------------
# Chart colors: known chains get brand colors (substring, case-insensitive),
# everything else cycles through the palette by first-seen index
# ---------------------------------------------------------------------------
STORE_BRAND_COLORS = [
    ("walmart", "#0071CE"),
    ("target", "#CC0000"),
    ("costco", "#0066B2"),
    ("whole foods", "#00A652"),
    ("kroger", "#E32D1C"),
]

STORE_PALETTE = [
    "#D4AF37",  # golden
    "#2E7D32",  # green
    "#1976D2",  # blue
    "#D32F2F",  # red
    "#7B1FA2",  # purple
    "#F57C00",  # orange
    "#0097A7",  # cyan
    "#C2185B",  # pink
]

# ---------------------------------------------------------------------------
# Receipt export
# ---------------------------------------------------------------------------
EXPORT_CSV_COLUMNS = ["ID", "Store", "Billing Date", "Upload Date", "Total", "Items Count"]
