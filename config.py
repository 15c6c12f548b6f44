import os
from dotenv import load_dotenv

load_dotenv()

# ── Dataset ───────────────────────────────────────────────────────────────────
DATASET_URL = os.getenv(
    "DATASET_URL",
    "https://raw.githubusercontent.com/freeCodeCamp/ProjectReferenceData/master/global-temperature.json",
)
FETCH_TIMEOUT_SECONDS = float(os.getenv("FETCH_TIMEOUT_SECONDS", "30"))
USER_AGENT = "AnomalyHeatmap/1.0 (temperature-heatmap)"

# ── Output ────────────────────────────────────────────────────────────────────
OUTPUT_SVG_PATH = os.getenv("OUTPUT_SVG_PATH", "output/heatmap.svg")
OUTPUT_HTML_PATH = os.getenv("OUTPUT_HTML_PATH", "output/heatmap.html")

# ── Plot geometry ─────────────────────────────────────────────────────────────
# SVG viewBox is 0 0 PLOT_WIDTH PLOT_HEIGHT
PLOT_WIDTH = 1000
PLOT_HEIGHT = 500
PLOT_PADDING = 60
PLOT_BOTTOM_PADDING = 100
CELL_WIDTH = 4  # px per monthly cell
YEAR_TICK_COUNT = 10  # approximate; actual ticks snap to 1/2/5 x 10^n years

# ── Legend ────────────────────────────────────────────────────────────────────
LEGEND_CELL_SIZE = 25
LEGEND_BUCKETS = 9

# ── Colors ────────────────────────────────────────────────────────────────────
# matplotlib colormap name; domain is reversed so high variance lands on red
COLOR_SCHEME = "RdYlBu"

# ── Tooltip ───────────────────────────────────────────────────────────────────
TOOLTIP_OFFSET_PX = 10
