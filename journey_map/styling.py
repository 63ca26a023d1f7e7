"""
Threshold-based rendering rules: line colour/width, marker placement and
popup content for each journey.
"""

from dataclasses import dataclass, field
from enum import Enum
from html import escape
from typing import List, Optional, Tuple

from . import config
from .models import Coords, Journey


class Classification(Enum):
    UNSCORED = "unscored"
    NORMAL = "normal"
    ALERT = "alert"


@dataclass(frozen=True)
class RenderOptions:
    """The whole styling rule-set for one render pass."""
    threshold: float = config.ANOMALY_THRESHOLD
    # Skip lines for journeys with no score
    require_score_for_line: bool = False
    # Only draw per-journey lines for alert journeys
    flagged_lines_only: bool = False
    # Also place a marker at the end coordinate
    marker_at_end: bool = False
    heat_opacity: float = config.HEAT_OPACITY
    alert_color: List[int] = field(default_factory=lambda: list(config.ALERT_COLOR))
    normal_color: List[int] = field(default_factory=lambda: list(config.NORMAL_COLOR))
    warning_color: List[int] = field(default_factory=lambda: list(config.WARNING_COLOR))
    marker_normal_color: List[int] = field(default_factory=lambda: list(config.MARKER_NORMAL_COLOR))
    alert_line_width: float = config.ALERT_LINE_WIDTH
    normal_line_width: float = config.NORMAL_LINE_WIDTH
    marker_radius: float = config.MARKER_RADIUS


@dataclass(frozen=True)
class LineStyle:
    color: List[int]
    width: float


def classify(journey: Journey, threshold: float) -> Classification:
    """Strict comparison: a score equal to the threshold is not an alert."""
    if journey.score is None:
        return Classification.UNSCORED
    if journey.score > threshold:
        return Classification.ALERT
    return Classification.NORMAL


def is_alert(journey: Journey, threshold: float) -> bool:
    return classify(journey, threshold) is Classification.ALERT


def line_style(journey: Journey, options: RenderOptions) -> Optional[LineStyle]:
    """Colour and width of the journey's line, or None if it is not drawn."""
    if not journey.has_path:
        return None

    kind = classify(journey, options.threshold)
    if kind is Classification.UNSCORED and options.require_score_for_line:
        return None
    if kind is not Classification.ALERT and options.flagged_lines_only:
        return None

    if kind is Classification.ALERT:
        return LineStyle(options.alert_color, options.alert_line_width)
    if kind is Classification.UNSCORED:
        return LineStyle(options.warning_color, options.normal_line_width)
    return LineStyle(options.normal_color, options.normal_line_width)


def marker_color(journey: Journey, options: RenderOptions) -> List[int]:
    if is_alert(journey, options.threshold):
        return options.alert_color
    return options.marker_normal_color


def marker_positions(journey: Journey, options: RenderOptions) -> List[Coords]:
    """Where to place markers; empty unless the journey is an alert with a path."""
    if not journey.has_path or not is_alert(journey, options.threshold):
        return []
    positions = [journey.start_coords]
    if options.marker_at_end:
        positions.append(journey.end_coords)
    return positions


def journey_key(journey: Journey) -> Tuple[str, str, Optional[float], float]:
    """Descriptive key; two journeys with equal fields share it."""
    return (journey.start_station, journey.end_station, journey.score, journey.duration_seconds)


def line_layer_id(index: int) -> str:
    return f"journey-{index}-line"


def marker_id(index: int, role: str) -> str:
    return f"journey-{index}-{role}-marker"


def popup_html(journey: Journey, explanation: str) -> str:
    """Popup body for a flagged journey."""
    score = "n/a" if journey.score is None else journey.score
    return (
        f"<p>Start: {escape(journey.start_station)}</p>"
        f"<p>End: {escape(journey.end_station)}</p>"
        f"<p>Duration: {escape(journey.total_duration)}</p>"
        f"<p>Score: {score}</p>"
        "<p>Explanation:</p>"
        f"{explanation}"
    )
