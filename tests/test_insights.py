import unittest

import plotly.graph_objects as go

from factories import make_journey
from journey_map.insights import summarise
from journey_map.viz import score_histogram


class TestSummarise(unittest.TestCase):
    def setUp(self):
        self.journeys = [
            make_journey("A", "B", seconds=600, score=0.9),
            make_journey("A", "C", seconds=60, score=0.1),
            make_journey("A", "B", seconds=172800, score=None),
            make_journey("D", "B", seconds=300, score=0.8),
        ]

    def test_extremes(self):
        insights = summarise(self.journeys)
        self.assertEqual(insights.journey_count, 4)
        self.assertIs(insights.shortest, self.journeys[1])
        self.assertIs(insights.longest, self.journeys[2])
        self.assertEqual(insights.longest_days, 2.0)

    def test_station_counts(self):
        insights = summarise(self.journeys)
        self.assertEqual(insights.most_common_start, ("A", 3))
        self.assertEqual(insights.least_common_start, ("D", 1))
        self.assertEqual(insights.most_common_end, ("B", 3))
        self.assertEqual(insights.least_common_end, ("C", 1))

    def test_scored_and_flagged(self):
        insights = summarise(self.journeys, threshold=0.76)
        self.assertEqual(insights.scored_count, 3)
        self.assertEqual(insights.flagged_count, 2)
        self.assertEqual(summarise(self.journeys).flagged_count, 0)

    def test_empty(self):
        insights = summarise([])
        self.assertEqual(insights.journey_count, 0)
        self.assertIsNone(insights.shortest)
        self.assertIsNone(insights.longest_days)
        self.assertIsNone(insights.most_common_start)


class TestScoreHistogram(unittest.TestCase):
    def test_figure(self):
        fig = score_histogram([make_journey(score=0.9), make_journey(score=0.2), make_journey(score=None)], 0.76)
        self.assertIsInstance(fig, go.Figure)
        self.assertGreaterEqual(len(fig.data), 1)

    def test_no_scores(self):
        self.assertIsNone(score_histogram([make_journey(score=None)], 0.76))


if __name__ == "__main__":
    unittest.main()
