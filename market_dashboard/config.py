"""
Configuration constants for the market dashboard filter presets.
"""

from typing import Dict, Literal, Tuple

# ======================================================
#  DATASET CONSTANTS
# ======================================================
# Roll-up row covering every geography; never a selectable unit.
GLOBAL_GEOGRAPHY: Literal["Global"] = "Global"

ViewMode = Literal["segment-mode", "geography-mode", "matrix"]
DataType = Literal["value", "volume"]

# Label used when a dataset carries no segmentation axis at all
DEFAULT_SEGMENT_TYPE: str = "By Drug Class"

# ======================================================
#  DATA FILES
# ======================================================
DATA_DIR_ENV: str = "MARKET_DATA_DIR"
DATASET_FILE: str = "dataset.json"

# Split payload written by the upstream processor
VALUE_FILE: str = "value.json"
VOLUME_FILE: str = "volume.json"
SEGMENTATION_FILE: str = "segmentation_analysis.json"

# ======================================================
#  PRESET DEFAULTS
# ======================================================
PRESET_VIEW_MODE: ViewMode = "geography-mode"
PRESET_DATA_TYPE: DataType = "value"
PRESET_SEGMENT_FALLBACK_COUNT: int = 3

# preset id -> (label, top N geographies, year range)
PRESET_PARAMETERS: Dict[str, Tuple[str, int, Tuple[int, int]]] = {
    "top-market": ("Top Market", 3, (2024, 2028)),
    "growth-leaders": ("Growth Leaders", 2, (2024, 2032)),
    "emerging-markets": ("Emerging Markets", 5, (2024, 2032)),
}

# Year evaluated by the Top Market ranking
TOP_MARKET_YEAR: int = 2024

# ======================================================
#  FILTER STATE DEFAULTS
# ======================================================
DEFAULT_VIEW_MODE: ViewMode = "segment-mode"
DEFAULT_DATA_TYPE: DataType = "value"
DEFAULT_YEAR_RANGE: Tuple[int, int] = (2024, 2032)
