"""
Rendering Decision Pipeline
Attaches the density layer, base layer, per-journey lines and markers to a
map surface, once, after the surface signals it is ready.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from . import config
from .features import build_features, point_positions
from .log import log
from .models import JourneyStore
from .stats import Aggregator, ScanAggregator
from .styling import (
    RenderOptions,
    journey_key,
    line_layer_id,
    line_style,
    marker_color,
    marker_id,
    marker_positions,
    popup_html,
)
from .surface import LayerSpec, MapSurface, Marker

SOURCE_ID = "journeys"
HEAT_LAYER_ID = "journeys-heat"
BASE_LAYER_ID = "journeys-base"


class PipelineState(Enum):
    UNBUILT = "unbuilt"
    BUILT = "built"


@dataclass
class RenderSummary:
    journeys: int = 0
    features: int = 0
    lines: int = 0
    markers: int = 0
    completed: bool = False


class RenderPipeline:
    """
    Builds the map for one journey store on one surface.

    The build runs at most once per pipeline; a new surface and a new
    pipeline are needed to render again.
    """

    def __init__(
        self,
        store: JourneyStore,
        surface: MapSurface,
        options: Optional[RenderOptions] = None,
        aggregator: Optional[Aggregator] = None,
    ):
        self.store = store
        self.surface = surface
        self.options = options or RenderOptions()
        self.aggregator = aggregator or ScanAggregator(store.journeys)
        self.state = PipelineState.UNBUILT
        self.summary = RenderSummary(journeys=len(store))

    @property
    def is_built(self) -> bool:
        return self.state is PipelineState.BUILT

    def attach(self) -> None:
        """Build as soon as the surface is ready."""
        self.surface.on_ready(self.build)

    def build(self) -> None:
        if self.state is PipelineState.BUILT:
            return
        if not self.surface.is_ready:
            log("render", f"Surface is {self.surface.state.value}; not building")
            return
        self.state = PipelineState.BUILT

        log("render", f"Rendering {len(self.store)} journeys...")
        collection = build_features(self.store)
        self.summary.features = len(collection["features"])

        if not self._add_density_layers(collection):
            return
        if not self._add_journey_lines():
            return
        if not self._add_markers():
            return

        self.summary.completed = True
        log(
            "render",
            f"Attached {self.summary.lines} lines and {self.summary.markers} markers "
            f"(threshold {self.options.threshold})",
        )

    def _live(self) -> bool:
        if self.surface.is_ready:
            return True
        log("render", "Surface went away mid-build; stopping")
        return False

    def _add_density_layers(self, collection: dict) -> bool:
        if not self._live():
            return False
        self.surface.add_source(SOURCE_ID, collection)

        heat_data = [{"position": list(p)} for p in point_positions(collection)]
        if not self._live():
            return False
        self.surface.add_layer(
            LayerSpec(
                id=HEAT_LAYER_ID,
                type="HeatmapLayer",
                data=heat_data,
                props={
                    "get_position": "position",
                    "opacity": self.options.heat_opacity,
                    "aggregation": "SUM",
                },
            )
        )

        if not self._live():
            return False
        self.surface.add_layer(
            LayerSpec(
                id=BASE_LAYER_ID,
                type="GeoJsonLayer",
                source=SOURCE_ID,
                props={
                    "point_type": "circle",
                    "filled": True,
                    "stroked": True,
                    "get_fill_color": config.BASE_COLOR,
                    "get_line_color": config.BASE_COLOR,
                    "get_point_radius": config.BASE_POINT_RADIUS,
                    "point_radius_units": "pixels",
                    "line_width_min_pixels": 1,
                    "opacity": 0.5,
                },
            )
        )
        return True

    def _add_journey_lines(self) -> bool:
        for index, journey in enumerate(self.store):
            style = line_style(journey, self.options)
            if style is None:
                continue
            if not self._live():
                return False
            start, end, score, seconds = journey_key(journey)
            self.surface.add_layer(
                LayerSpec(
                    id=line_layer_id(index),
                    type="PathLayer",
                    data=[{
                        "path": [list(journey.start_coords), list(journey.end_coords)],
                        "start": start,
                        "end": end,
                        "score": score,
                        "duration_seconds": seconds,
                    }],
                    props={
                        "get_path": "path",
                        "get_color": style.color,
                        "get_width": style.width,
                        "width_units": "pixels",
                        "joint_rounded": True,
                        "cap_rounded": True,
                    },
                )
            )
            self.summary.lines += 1
        return True

    def _add_markers(self) -> bool:
        for index, journey in enumerate(self.store):
            positions = marker_positions(journey, self.options)
            if not positions:
                continue
            popup = popup_html(journey, self.aggregator.explain(journey))
            color = marker_color(journey, self.options)
            for role, position in zip(("start", "end"), positions):
                if not self._live():
                    return False
                self.surface.add_marker(
                    Marker(
                        id=marker_id(index, role),
                        position=position,
                        color=color,
                        radius=self.options.marker_radius,
                        popup_html=popup,
                    )
                )
                self.summary.markers += 1
        return True


def render(
    store: JourneyStore,
    surface: MapSurface,
    options: Optional[RenderOptions] = None,
    aggregator: Optional[Aggregator] = None,
) -> RenderPipeline:
    """Create a pipeline for ``store`` and build it when ``surface`` is ready."""
    pipeline = RenderPipeline(store, surface, options, aggregator)
    pipeline.attach()
    return pipeline
