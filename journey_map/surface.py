"""
Map Surface
State holder around a pydeck Deck. Sources, layers and markers can only be
attached while the surface is READY; once disposed nothing can be attached.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

import pydeck as pdk

from . import config
from .errors import SurfaceStateError
from .log import log
from .models import Coords


class SurfaceState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    DISPOSED = "disposed"


@dataclass(frozen=True)
class MapConfig:
    """Opaque map settings passed through to pydeck."""
    style: str = config.MAP_STYLE
    center: Tuple[float, float] = config.MAP_CENTER  # (lon, lat)
    zoom: float = config.MAP_ZOOM
    provider: str = config.MAP_PROVIDER
    api_key: str = config.MAPBOX_API_KEY


@dataclass
class LayerSpec:
    id: str
    type: str
    data: Any = None
    source: Optional[str] = None  # id of a source added with add_source
    props: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Marker:
    id: str
    position: Coords
    color: List[int]
    radius: float
    popup_html: str = ""


TOOLTIP_STYLE = {
    "backgroundColor": "#111111",
    "color": "white",
    "border": "1px solid #333",
    "borderRadius": "8px",
    "padding": "8px 12px",
}


class MapSurface:
    def __init__(self, map_config: Optional[MapConfig] = None):
        self.map_config = map_config or MapConfig()
        self._state = SurfaceState.UNINITIALIZED
        self._ready_callbacks: List[Callable[[], None]] = []
        self._sources: Dict[str, Any] = {}
        self._layers: List[LayerSpec] = []
        self._layer_ids: set = set()
        self._markers: List[Marker] = []

    @property
    def state(self) -> SurfaceState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is SurfaceState.READY

    @property
    def layers(self) -> List[LayerSpec]:
        return list(self._layers)

    @property
    def markers(self) -> List[Marker]:
        return list(self._markers)

    @property
    def sources(self) -> Dict[str, Any]:
        return dict(self._sources)

    def layer_ids(self) -> List[str]:
        return [layer.id for layer in self._layers]

    # -- lifecycle -----------------------------------------------------------

    def on_ready(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` once the surface is ready (now, if it already is)."""
        if self._state is SurfaceState.DISPOSED:
            return
        if self._state is SurfaceState.READY:
            callback()
            return
        self._ready_callbacks.append(callback)

    def mark_ready(self) -> None:
        if self._state is not SurfaceState.UNINITIALIZED:
            return
        self._state = SurfaceState.READY
        callbacks, self._ready_callbacks = self._ready_callbacks, []
        for callback in callbacks:
            # A callback may dispose the surface
            if self._state is not SurfaceState.READY:
                break
            callback()

    def dispose(self) -> None:
        self._state = SurfaceState.DISPOSED
        self._ready_callbacks.clear()
        self._sources.clear()
        self._layers.clear()
        self._layer_ids.clear()
        self._markers.clear()

    # -- attachment ----------------------------------------------------------

    def _require_ready(self, action: str) -> None:
        if self._state is not SurfaceState.READY:
            raise SurfaceStateError(f"Cannot {action}: map surface is {self._state.value}")

    def add_source(self, source_id: str, data: Any) -> None:
        self._require_ready(f"add source {source_id!r}")
        if source_id in self._sources:
            raise ValueError(f"Source {source_id!r} already exists")
        self._sources[source_id] = data

    def add_layer(self, layer: LayerSpec) -> None:
        self._require_ready(f"add layer {layer.id!r}")
        if layer.id in self._layer_ids:
            raise ValueError(f"Layer {layer.id!r} already exists")
        if layer.source is not None and layer.source not in self._sources:
            raise ValueError(f"Layer {layer.id!r} references unknown source {layer.source!r}")
        self._layers.append(layer)
        self._layer_ids.add(layer.id)

    def add_marker(self, marker: Marker) -> None:
        self._require_ready(f"add marker {marker.id!r}")
        self._markers.append(marker)

    # -- rendering -----------------------------------------------------------

    def _layer_data(self, layer: LayerSpec) -> Any:
        if layer.source is not None:
            return self._sources[layer.source]
        return layer.data

    def _marker_layer(self) -> pdk.Layer:
        data = [
            {
                "id": m.id,
                "position": list(m.position),
                "color": m.color,
                "radius": m.radius,
                "popup": m.popup_html,
            }
            for m in self._markers
        ]
        return pdk.Layer(
            "ScatterplotLayer",
            data=data,
            id="journey-markers",
            get_position="position",
            get_fill_color="color",
            get_radius="radius",
            radius_min_pixels=6,
            stroked=True,
            get_line_color=[255, 255, 255, 255],
            line_width_min_pixels=1,
            pickable=True,
        )

    def to_deck(self) -> pdk.Deck:
        """Compose attached layers (in order) with markers on top."""
        if self._state is SurfaceState.DISPOSED:
            raise SurfaceStateError("Cannot render a disposed map surface")

        layers = [
            pdk.Layer(layer.type, data=self._layer_data(layer), id=layer.id, **layer.props)
            for layer in self._layers
        ]
        if self._markers:
            layers.append(self._marker_layer())

        lon, lat = self.map_config.center
        view_state = pdk.ViewState(
            latitude=lat,
            longitude=lon,
            zoom=self.map_config.zoom,
            pitch=0,
            bearing=0,
        )
        log("surface", f"Composing deck with {len(layers)} layers and {len(self._markers)} markers")
        return pdk.Deck(
            layers=layers,
            initial_view_state=view_state,
            map_style=self.map_config.style,
            map_provider=self.map_config.provider,
            api_keys={"mapbox": self.map_config.api_key} if self.map_config.api_key else None,
            tooltip={"html": "{popup}", "style": TOOLTIP_STYLE},
        )
