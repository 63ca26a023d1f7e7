"""
Collection-wide insights: extreme durations and busiest/quietest stations.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import pandas as pd

from .models import Journey
from .styling import is_alert

SECONDS_PER_DAY = 86400

StationCount = Tuple[str, int]


@dataclass
class CollectionInsights:
    journey_count: int = 0
    shortest: Optional[Journey] = None
    longest: Optional[Journey] = None
    most_common_start: Optional[StationCount] = None
    least_common_start: Optional[StationCount] = None
    most_common_end: Optional[StationCount] = None
    least_common_end: Optional[StationCount] = None
    scored_count: int = 0
    flagged_count: int = 0

    @property
    def longest_days(self) -> Optional[float]:
        if self.longest is None:
            return None
        return self.longest.duration_seconds / SECONDS_PER_DAY


def journeys_frame(journeys: Iterable[Journey]) -> pd.DataFrame:
    """One row per journey, with snake_case columns."""
    rows = [j.model_dump() for j in journeys]
    columns = list(Journey.model_fields)
    return pd.DataFrame(rows, columns=columns)


def _most_and_least(counts: pd.Series) -> Tuple[StationCount, StationCount]:
    # counts are sorted descending
    most = (str(counts.index[0]), int(counts.iloc[0]))
    least = (str(counts.index[-1]), int(counts.iloc[-1]))
    return most, least


def summarise(journeys: Iterable[Journey], threshold: Optional[float] = None) -> CollectionInsights:
    """
    Summarise a journey collection.

    Args:
        journeys: Journeys to summarise
        threshold: Anomaly threshold used for ``flagged_count`` (skipped if None)

    Returns:
        CollectionInsights; every field is empty for an empty collection
    """
    journeys = list(journeys)
    if not journeys:
        return CollectionInsights()

    df = journeys_frame(journeys)
    most_start, least_start = _most_and_least(df["start_station"].value_counts(sort=True))
    most_end, least_end = _most_and_least(df["end_station"].value_counts(sort=True))

    flagged = 0
    if threshold is not None:
        flagged = sum(1 for j in journeys if is_alert(j, threshold))

    return CollectionInsights(
        journey_count=len(journeys),
        shortest=journeys[int(df["duration_seconds"].idxmin())],
        longest=journeys[int(df["duration_seconds"].idxmax())],
        most_common_start=most_start,
        least_common_start=least_start,
        most_common_end=most_end,
        least_common_end=least_end,
        scored_count=int(df["score"].notna().sum()),
        flagged_count=flagged,
    )
