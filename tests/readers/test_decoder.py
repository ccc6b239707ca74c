import unittest

from trajingest.core.errors import DecodeError
from trajingest.readers.columns import ColumnMap
from trajingest.readers.decoder import RecordDecoder, parse_id, parse_timestamps


class TestPointDecoding(unittest.TestCase):
    def setUp(self):
        self.decoder = RecordDecoder(ColumnMap(id_index=1, x_index=2, y_index=3, time_index=0))

    def test_decode_point(self):
        record = self.decoder.decode_point(["12.5", "4", "1.5", "-2.25", "ignored"], 7)
        self.assertEqual(record.id, 4)
        self.assertEqual((record.x, record.y), (1.5, -2.25))
        self.assertEqual(record.timestamp, 12.5)
        self.assertEqual(record.row_number, 7)

    def test_decode_point_without_time_column(self):
        decoder = RecordDecoder(ColumnMap(id_index=0, x_index=1, y_index=2))
        record = decoder.decode_point(["4", "1", "2"], 1)
        self.assertIsNone(record.timestamp)

    def test_bad_coordinate(self):
        with self.assertRaises(DecodeError) as ctx:
            self.decoder.decode_point(["0", "4", "abc", "1"], 3)
        self.assertEqual(ctx.exception.role, "x")
        self.assertEqual(ctx.exception.row_number, 3)
        self.assertIsInstance(ctx.exception, ValueError)

    def test_non_finite_coordinate(self):
        with self.assertRaises(DecodeError):
            self.decoder.decode_point(["0", "4", "inf", "1"], 1)

    def test_missing_field(self):
        with self.assertRaises(DecodeError) as ctx:
            self.decoder.decode_point(["0", "4", "1", None], 1)
        self.assertEqual(ctx.exception.role, "y")


class TestRowDecoding(unittest.TestCase):
    def setUp(self):
        self.decoder = RecordDecoder(ColumnMap(id_index=0, geometry_index=1, time_index=2))

    def test_decode_row(self):
        record = self.decoder.decode_row(["3", "LINESTRING (0 0, 1 2)", "5,6"], 1)
        self.assertEqual(record.id, 3)
        self.assertEqual(record.path.coords, ((0.0, 0.0), (1.0, 2.0)))
        self.assertEqual(record.timestamps, (5.0, 6.0))

    def test_decode_row_ignores_time_when_not_wanted(self):
        record = self.decoder.decode_row(["3", "LINESTRING (0 0, 1 2)", "5,6,7"], 1, with_time=False)
        self.assertEqual(record.timestamps, ())

    def test_z_ordinate_dropped(self):
        record = self.decoder.decode_row(["3", "LINESTRING Z (0 0 9, 1 2 9)", ""], 1)
        self.assertEqual(record.path.coords, ((0.0, 0.0), (1.0, 2.0)))

    def test_bad_timestamp_list(self):
        with self.assertRaises(DecodeError) as ctx:
            self.decoder.decode_row(["3", "LINESTRING (0 0, 1 2)", "5,x"], 1)
        self.assertEqual(ctx.exception.role, "time")


class TestFieldParsers(unittest.TestCase):
    def test_parse_id(self):
        self.assertEqual(parse_id("42", 1), 42)
        self.assertEqual(parse_id(" 42 ", 1), 42)
        self.assertEqual(parse_id("7.0", 1), 7)
        with self.assertRaises(DecodeError):
            parse_id("7.5", 1)
        with self.assertRaises(DecodeError):
            parse_id("", 1)

    def test_parse_timestamps(self):
        self.assertEqual(parse_timestamps("1,2.5,3", 1), [1.0, 2.5, 3.0])
        self.assertEqual(parse_timestamps("1,2,", 1), [1.0, 2.0])
        self.assertEqual(parse_timestamps("", 1), [])


if __name__ == '__main__':
    unittest.main()
