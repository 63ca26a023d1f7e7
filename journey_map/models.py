import math
from typing import Iterator, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# (longitude, latitude)
Coords = Tuple[float, float]


class Journey(BaseModel):
    """One scored bike-share trip between two stations."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    start_station: str = Field(alias="startStation", min_length=1)
    start_coords: Optional[Coords] = Field(alias="startCoords")
    end_station: str = Field(alias="endStation", min_length=1)
    end_coords: Optional[Coords] = Field(alias="endCoords")
    total_duration: str = Field(alias="totalDuration")
    duration_seconds: float = Field(alias="durationSeconds", ge=0)
    score: Optional[float]  # None = not scored, distinct from a low score

    @field_validator("start_coords", "end_coords")
    @classmethod
    def _finite_coords(cls, value: Optional[Coords]) -> Optional[Coords]:
        if value is not None and not all(math.isfinite(v) for v in value):
            raise ValueError("coordinates must be finite")
        return value

    @property
    def has_path(self) -> bool:
        return self.start_coords is not None and self.end_coords is not None


class JourneyStore:
    """Read-only snapshot of the journeys for one render pass."""

    def __init__(self, journeys: Sequence[Journey] = ()):
        self._journeys: Tuple[Journey, ...] = tuple(journeys)

    @property
    def journeys(self) -> Tuple[Journey, ...]:
        return self._journeys

    def head(self, n: int) -> "JourneyStore":
        if n >= len(self._journeys):
            return self
        return JourneyStore(self._journeys[:n])

    def __len__(self) -> int:
        return len(self._journeys)

    def __iter__(self) -> Iterator[Journey]:
        return iter(self._journeys)

    def __getitem__(self, index: int) -> Journey:
        return self._journeys[index]

    def __repr__(self) -> str:
        return f"JourneyStore({len(self._journeys)} journeys)"
