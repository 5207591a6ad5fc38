"""
Single source of truth for price-book colors, fonts, fills, borders, alignments.
"""
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

# ---------------------------------------------------------------------------
# Color constants
# ---------------------------------------------------------------------------
GOLDEN = "D4AF37"
DARK_GOLD = "8C6D1F"
LIGHT_GOLD = "FFF8DC"
INK = "1A1A1A"
WHITE = "FFFFFF"
ALTERNATE_ROW = "F7F5EF"
GREEN = "2E7D32"
LIGHT_GREEN = "E8F5E9"
RED = "D32F2F"
LIGHT_RED = "FFEBEE"
GRAY_666 = "666666"

# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------
TITLE_FONT = Font(name="Calibri", size=24, bold=True, color=INK)
SUBTITLE_FONT = Font(name="Calibri", size=12, italic=True, color=GRAY_666)
HEADER_FONT = Font(name="Calibri", size=11, bold=True, color=WHITE)
DATA_FONT = Font(name="Calibri", size=10, color=INK)
SECTION_FONT = Font(name="Calibri", size=14, bold=True, color=DARK_GOLD)
KPI_VALUE_FONT = Font(name="Calibri", size=28, bold=True, color=INK)
KPI_LABEL_FONT = Font(name="Calibri", size=10, color=GRAY_666)
INSIGHT_TITLE_FONT = Font(name="Calibri", size=11, bold=True)
INSIGHT_BODY_FONT = Font(name="Calibri", size=10, italic=True)

# ---------------------------------------------------------------------------
# Fills
# ---------------------------------------------------------------------------
HEADER_FILL = PatternFill(start_color=INK, end_color=INK, fill_type="solid")
ALTERNATE_FILL = PatternFill(start_color=ALTERNATE_ROW, end_color=ALTERNATE_ROW, fill_type="solid")
GOLD_FILL = PatternFill(start_color=LIGHT_GOLD, end_color=LIGHT_GOLD, fill_type="solid")
PRICE_UP_FILL = PatternFill(start_color=LIGHT_RED, end_color=LIGHT_RED, fill_type="solid")
PRICE_DOWN_FILL = PatternFill(start_color=LIGHT_GREEN, end_color=LIGHT_GREEN, fill_type="solid")

# ---------------------------------------------------------------------------
# Borders
# ---------------------------------------------------------------------------
THIN_BORDER = Border(
    left=Side(style="thin", color="CCCCCC"),
    right=Side(style="thin", color="CCCCCC"),
    top=Side(style="thin", color="CCCCCC"),
    bottom=Side(style="thin", color="CCCCCC"),
)
HEADER_BORDER = Border(
    left=Side(style="thin", color=INK),
    right=Side(style="thin", color=INK),
    top=Side(style="thin", color=INK),
    bottom=Side(style="medium", color=GOLDEN),
)

# ---------------------------------------------------------------------------
# Alignments
# ---------------------------------------------------------------------------
CENTER = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")

# ---------------------------------------------------------------------------
# Highlight name -> fill mapping (trend coloring in item tables)
# ---------------------------------------------------------------------------
HIGHLIGHT_FILLS = {
    "up": PRICE_UP_FILL,
    "down": PRICE_DOWN_FILL,
    "gold": GOLD_FILL,
}
