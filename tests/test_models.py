import os
import tempfile
import unittest

from pydantic import ValidationError

from factories import make_journey, record, records_json
from journey_map.errors import JourneyValidationError
from journey_map.loader import load_journeys, parse_journeys
from journey_map.models import Journey, JourneyStore


class TestParseJourneys(unittest.TestCase):
    def test_valid_records(self):
        store = parse_journeys(records_json(record(), record(score=None, startCoords=None)))
        self.assertEqual(len(store), 2)
        first = store[0]
        self.assertEqual(first.start_station, "Hyde Park Corner")
        self.assertEqual(first.start_coords, (-0.1527, 51.5027))
        self.assertEqual(first.duration_seconds, 600.0)
        self.assertEqual(first.score, 0.42)
        self.assertIsNone(store[1].score)
        self.assertIsNone(store[1].start_coords)

    def test_empty_array(self):
        self.assertEqual(len(parse_journeys("[]")), 0)

    def test_bytes_input(self):
        store = parse_journeys(records_json(record()).encode("utf-8"))
        self.assertEqual(len(store), 1)

    def test_one_bad_record_rejects_batch(self):
        raw = records_json(record(), record(durationSeconds="600"))
        with self.assertRaises(JourneyValidationError) as ctx:
            parse_journeys(raw)
        self.assertEqual(ctx.exception.error_count, 1)
        self.assertTrue(any("durationSeconds" in m for m in ctx.exception.messages))

    def test_missing_field(self):
        bad = record()
        del bad["score"]
        with self.assertRaises(JourneyValidationError):
            parse_journeys(records_json(bad))

    def test_negative_duration(self):
        with self.assertRaises(JourneyValidationError):
            parse_journeys(records_json(record(durationSeconds=-1)))

    def test_empty_station(self):
        with self.assertRaises(JourneyValidationError):
            parse_journeys(records_json(record(startStation="")))

    def test_wrong_coords_length(self):
        with self.assertRaises(JourneyValidationError):
            parse_journeys(records_json(record(endCoords=[1.0])))

    def test_not_json(self):
        with self.assertRaises(JourneyValidationError):
            parse_journeys("not json")

    def test_not_an_array(self):
        with self.assertRaises(JourneyValidationError):
            parse_journeys(records_json(record())[1:-1])


class TestJourney(unittest.TestCase):
    def test_frozen(self):
        journey = make_journey()
        with self.assertRaises(ValidationError):
            journey.score = 1.0

    def test_has_path(self):
        self.assertTrue(make_journey().has_path)
        self.assertFalse(make_journey(start_coords=None).has_path)
        self.assertFalse(make_journey(end_coords=None).has_path)

    def test_non_finite_coords(self):
        with self.assertRaises(ValidationError):
            make_journey(start_coords=(float("inf"), 0.0))

    def test_dump_by_alias(self):
        dumped = make_journey(score=0.5).model_dump(by_alias=True)
        self.assertEqual(dumped["startStation"], "A")
        self.assertEqual(dumped["durationSeconds"], 600.0)


class TestJourneyStore(unittest.TestCase):
    def test_snapshot_is_immutable(self):
        source = [make_journey(), make_journey(start="C")]
        store = JourneyStore(source)
        source.append(make_journey(start="D"))
        self.assertEqual(len(store), 2)
        self.assertIsInstance(store.journeys, tuple)

    def test_head(self):
        store = JourneyStore([make_journey(start=s) for s in "ABCD"])
        self.assertEqual([j.start_station for j in store.head(2)], ["A", "B"])
        self.assertIs(store.head(10), store)


class TestLoadJourneys(unittest.TestCase):
    def test_load_from_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "output.json")
            with open(path, "w") as f:
                f.write(records_json(record(), record(startStation="Bank")))
            store = load_journeys(path)
        self.assertEqual(len(store), 2)
        self.assertIsInstance(store[1], Journey)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_journeys("/nonexistent/output.json")


if __name__ == "__main__":
    unittest.main()
