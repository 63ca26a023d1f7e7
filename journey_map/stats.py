"""
Aggregation Engine
Explains a journey by comparing it with every other journey that shares
its start station, its end station, or both.
"""

from dataclasses import dataclass
from html import escape
from typing import Dict, Iterable, Optional, Protocol, Sequence, Tuple

import pandas as pd

from .models import Journey

SECONDS_PER_HOUR = 3600


@dataclass(frozen=True)
class StationStats:
    """Count and mean duration of one subset of journeys."""
    count: int
    average_seconds: Optional[float]  # None when count == 0

    @property
    def average_hours(self) -> Optional[float]:
        if self.average_seconds is None:
            return None
        return self.average_seconds / SECONDS_PER_HOUR


@dataclass(frozen=True)
class JourneyStats:
    """Statistics for one journey against a whole collection."""
    start: StationStats
    end: StationStats
    pair: StationStats

    @property
    def start_count(self) -> int:
        return self.start.count

    @property
    def end_count(self) -> int:
        return self.end.count

    @property
    def pair_count(self) -> int:
        return self.pair.count

    @property
    def avg_start_duration(self) -> Optional[float]:
        return self.start.average_seconds

    @property
    def avg_end_duration(self) -> Optional[float]:
        return self.end.average_seconds

    @property
    def avg_pair_duration(self) -> Optional[float]:
        return self.pair.average_seconds


def _station_stats(count: int, total_seconds: float) -> StationStats:
    if count == 0:
        return StationStats(0, None)
    return StationStats(count, total_seconds / count)


def journey_stats(journeys: Iterable[Journey], journey: Journey) -> JourneyStats:
    """
    Compute start/end/pair statistics for a journey by scanning the collection.

    Args:
        journeys: Collection to compare against (need not contain ``journey``)
        journey: Journey being explained

    Returns:
        JourneyStats, with undefined averages as None
    """
    start_n = end_n = pair_n = 0
    start_total = end_total = pair_total = 0.0

    for j in journeys:
        same_start = j.start_station == journey.start_station
        same_end = j.end_station == journey.end_station
        if same_start:
            start_n += 1
            start_total += j.duration_seconds
        if same_end:
            end_n += 1
            end_total += j.duration_seconds
        if same_start and same_end:
            pair_n += 1
            pair_total += j.duration_seconds

    return JourneyStats(
        start=_station_stats(start_n, start_total),
        end=_station_stats(end_n, end_total),
        pair=_station_stats(pair_n, pair_total),
    )


def format_hours(stats: StationStats) -> str:
    hours = stats.average_hours
    if hours is None:
        return "n/a"
    return f"{round(hours, 4)} hours"


def explanation_html(journey: Journey, stats: JourneyStats) -> str:
    """Render the three statistics as an HTML ordered list."""
    start = escape(journey.start_station)
    end = escape(journey.end_station)
    return (
        "<ol>"
        f"<li>This journey is 1 of {stats.pair_count} journeys from {start} to {end}"
        f" with an average duration of {format_hours(stats.pair)}.</li>"
        f"<li>There are {stats.start_count} journeys starting at {start}"
        f" with an average duration of {format_hours(stats.start)}.</li>"
        f"<li>There are {stats.end_count} journeys ending at {end}"
        f" with an average duration of {format_hours(stats.end)}.</li>"
        "</ol>"
    )


def explain(journeys: Iterable[Journey], journey: Journey) -> str:
    return explanation_html(journey, journey_stats(journeys, journey))


class Aggregator(Protocol):
    """Anything that can explain journeys against a fixed collection."""

    def stats_for(self, journey: Journey) -> JourneyStats: ...

    def explain(self, journey: Journey) -> str: ...


class ScanAggregator:
    """Rescans the whole collection for every journey (O(n) per call)."""

    def __init__(self, journeys: Sequence[Journey]):
        self.journeys = journeys

    def stats_for(self, journey: Journey) -> JourneyStats:
        return journey_stats(self.journeys, journey)

    def explain(self, journey: Journey) -> str:
        return explanation_html(journey, self.stats_for(journey))


class StationIndex:
    """Pre-grouped station totals; same answers as ScanAggregator, O(1) per call."""

    def __init__(self, journeys: Sequence[Journey]):
        df = pd.DataFrame(
            {
                "start": [j.start_station for j in journeys],
                "end": [j.end_station for j in journeys],
                "seconds": [j.duration_seconds for j in journeys],
            }
        )
        self._by_start = self._group(df, "start")
        self._by_end = self._group(df, "end")
        self._by_pair = self._group(df, ["start", "end"])

    @staticmethod
    def _group(df: pd.DataFrame, keys) -> Dict:
        if df.empty:
            return {}
        grouped = df.groupby(keys, sort=False)["seconds"].agg(["count", "sum"])
        return {
            key: (int(row["count"]), float(row["sum"]))
            for key, row in grouped.iterrows()
        }

    @staticmethod
    def _lookup(table: Dict, key) -> StationStats:
        count, total = table.get(key, (0, 0.0))
        return _station_stats(count, total)

    def stats_for(self, journey: Journey) -> JourneyStats:
        pair_key: Tuple[str, str] = (journey.start_station, journey.end_station)
        return JourneyStats(
            start=self._lookup(self._by_start, journey.start_station),
            end=self._lookup(self._by_end, journey.end_station),
            pair=self._lookup(self._by_pair, pair_key),
        )

    def explain(self, journey: Journey) -> str:
        return explanation_html(journey, self.stats_for(journey))
