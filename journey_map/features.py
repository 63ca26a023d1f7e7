"""
Feature Builder
Turns journeys into GeoJSON points (endpoints) and lines (start -> end).
"""

from typing import Any, Dict, Iterable, List

from .models import Coords, Journey

Feature = Dict[str, Any]


def _feature(geometry_type: str, coordinates, index: int, role: str, journey: Journey) -> Feature:
    return {
        "type": "Feature",
        "properties": {
            "index": index,
            "role": role,
            "score": journey.score,
        },
        "geometry": {
            "type": geometry_type,
            "coordinates": coordinates,
        },
    }


def journey_features(index: int, journey: Journey) -> List[Feature]:
    """Features for a single journey, in start, end, path order."""
    features = []
    if journey.start_coords is not None:
        features.append(_feature("Point", list(journey.start_coords), index, "start", journey))
    if journey.end_coords is not None:
        features.append(_feature("Point", list(journey.end_coords), index, "end", journey))
    if journey.has_path:
        path = [list(journey.start_coords), list(journey.end_coords)]
        features.append(_feature("LineString", path, index, "path", journey))
    return features


def build_features(journeys: Iterable[Journey]) -> Dict[str, Any]:
    """
    Build a FeatureCollection for the whole collection.

    Coincident points are kept so that busy stations weigh more in the
    density layer.
    """
    features: List[Feature] = []
    for index, journey in enumerate(journeys):
        features.extend(journey_features(index, journey))
    return {"type": "FeatureCollection", "features": features}


def point_positions(collection: Dict[str, Any]) -> List[Coords]:
    """Coordinates of every Point feature, in collection order."""
    return [
        tuple(f["geometry"]["coordinates"])
        for f in collection["features"]
        if f["geometry"]["type"] == "Point"
    ]
