import unittest

from factories import make_journey
from journey_map import config
from journey_map.styling import (
    Classification,
    RenderOptions,
    classify,
    journey_key,
    line_layer_id,
    line_style,
    marker_color,
    marker_positions,
    popup_html,
)

THRESHOLD = 0.76
EPSILON = 1e-9


class TestClassify(unittest.TestCase):
    def test_threshold_boundary(self):
        self.assertIs(classify(make_journey(score=THRESHOLD), THRESHOLD), Classification.NORMAL)
        self.assertIs(classify(make_journey(score=THRESHOLD + EPSILON), THRESHOLD), Classification.ALERT)
        self.assertIs(classify(make_journey(score=THRESHOLD - EPSILON), THRESHOLD), Classification.NORMAL)

    def test_unscored(self):
        for threshold in (-100.0, 0.0, THRESHOLD):
            self.assertIs(classify(make_journey(score=None), threshold), Classification.UNSCORED)

    def test_zero_score_is_scored(self):
        self.assertIs(classify(make_journey(score=0.0), -1.0), Classification.ALERT)
        self.assertIs(classify(make_journey(score=0.0), 0.5), Classification.NORMAL)

    def test_default_threshold(self):
        self.assertEqual(RenderOptions().threshold, config.ANOMALY_THRESHOLD)


class TestLineStyle(unittest.TestCase):
    def setUp(self):
        self.options = RenderOptions(threshold=THRESHOLD)

    def test_alert_line(self):
        style = line_style(make_journey(score=0.9), self.options)
        self.assertEqual(style.color, self.options.alert_color)
        self.assertEqual(style.width, self.options.alert_line_width)

    def test_normal_line(self):
        style = line_style(make_journey(score=0.5), self.options)
        self.assertEqual(style.color, self.options.normal_color)
        self.assertEqual(style.width, self.options.normal_line_width)
        self.assertGreater(self.options.alert_line_width, self.options.normal_line_width)

    def test_unscored_line(self):
        style = line_style(make_journey(score=None), self.options)
        self.assertEqual(style.color, self.options.warning_color)
        self.assertNotEqual(style.color, self.options.alert_color)

    def test_missing_coords(self):
        self.assertIsNone(line_style(make_journey(score=0.9, start_coords=None), self.options))
        self.assertIsNone(line_style(make_journey(score=0.9, end_coords=None), self.options))

    def test_require_score(self):
        options = RenderOptions(threshold=THRESHOLD, require_score_for_line=True)
        self.assertIsNone(line_style(make_journey(score=None), options))
        self.assertIsNotNone(line_style(make_journey(score=0.1), options))

    def test_flagged_lines_only(self):
        options = RenderOptions(threshold=THRESHOLD, flagged_lines_only=True)
        self.assertIsNone(line_style(make_journey(score=0.1), options))
        self.assertIsNone(line_style(make_journey(score=None), options))
        self.assertIsNotNone(line_style(make_journey(score=0.9), options))


class TestMarkers(unittest.TestCase):
    def test_alert_gets_start_marker(self):
        options = RenderOptions(threshold=THRESHOLD)
        journey = make_journey(score=0.9, start_coords=(0, 0), end_coords=(1, 1))
        self.assertEqual(marker_positions(journey, options), [(0, 0)])
        self.assertEqual(marker_color(journey, options), options.alert_color)

    def test_marker_at_end(self):
        options = RenderOptions(threshold=THRESHOLD, marker_at_end=True)
        journey = make_journey(score=0.9, start_coords=(0, 0), end_coords=(1, 1))
        self.assertEqual(marker_positions(journey, options), [(0, 0), (1, 1)])

    def test_no_marker_below_threshold_or_unscored(self):
        options = RenderOptions(threshold=THRESHOLD)
        self.assertEqual(marker_positions(make_journey(score=THRESHOLD), options), [])
        self.assertEqual(marker_positions(make_journey(score=None), options), [])
        self.assertEqual(marker_color(make_journey(score=None), options), options.marker_normal_color)

    def test_no_marker_without_path(self):
        options = RenderOptions(threshold=THRESHOLD)
        journey = make_journey(score=0.99, start_coords=None, end_coords=(1, 1))
        self.assertEqual(marker_positions(journey, options), [])


class TestIdentifiersAndPopup(unittest.TestCase):
    def test_layer_ids_unique_for_identical_journeys(self):
        a, b = make_journey(score=0.9), make_journey(score=0.9)
        self.assertEqual(journey_key(a), journey_key(b))
        self.assertNotEqual(line_layer_id(0), line_layer_id(1))

    def test_popup_content(self):
        journey = make_journey("Bank", "Angel", score=0.91, label="12m 3s")
        html = popup_html(journey, "<ol></ol>")
        self.assertIn("Start: Bank", html)
        self.assertIn("End: Angel", html)
        self.assertIn("Duration: 12m 3s", html)
        self.assertIn("Score: 0.91", html)
        self.assertTrue(html.endswith("<ol></ol>"))

    def test_popup_escapes(self):
        html = popup_html(make_journey("<script>", "B"), "")
        self.assertNotIn("<script>", html)


if __name__ == "__main__":
    unittest.main()
