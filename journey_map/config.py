import os
from typing import List, Tuple

from dotenv import load_dotenv

load_dotenv()

# Input data
JOURNEYS_PATH: str = os.getenv("JOURNEYS_PATH", "data/output.json")
# Only the first N journeys are rendered on the page
MAX_JOURNEYS: int = 10000

# Minimum score considered anomalous (strict >)
ANOMALY_THRESHOLD: float = float(os.getenv("ANOMALY_THRESHOLD", "0.76"))

# Map surface (passed through to pydeck unchanged)
MAPBOX_API_KEY: str = os.getenv("MAPBOX_API_KEY", "")
MAP_PROVIDER: str = "mapbox" if MAPBOX_API_KEY else "carto"
MAP_STYLE: str = os.getenv(
    "MAP_STYLE",
    "mapbox://styles/mapbox/dark-v11" if MAPBOX_API_KEY
    else "https://basemaps.cartocdn.com/gl/dark-matter-gl-style/style.json",
)
MAP_CENTER: Tuple[float, float] = (-0.1276, 51.5072)  # London (lon, lat)
MAP_ZOOM: float = 10

# Colours (RGBA)
ALERT_COLOR: List[int] = [255, 68, 68, 255]
NORMAL_COLOR: List[int] = [0, 255, 136, 255]
WARNING_COLOR: List[int] = [255, 165, 0, 255]
MARKER_NORMAL_COLOR: List[int] = [100, 149, 237, 255]
BASE_COLOR: List[int] = [0, 0, 255, 128]

# Widths / sizes
NORMAL_LINE_WIDTH: float = 1
ALERT_LINE_WIDTH: float = 2
BASE_POINT_RADIUS: float = 5
MARKER_RADIUS: float = 60
HEAT_OPACITY: float = 0.25
