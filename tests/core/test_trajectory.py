import unittest

from shapely.geometry import LineString

from trajingest.core.polyline import Polyline
from trajingest.core.trajectory import TemporalTrajectory, Trajectory


class TestPolyline(unittest.TestCase):
    def test_coords_are_frozen_floats(self):
        polyline = Polyline([(0, 1), [2, 3]])
        self.assertEqual(polyline.coords, ((0.0, 1.0), (2.0, 3.0)))
        self.assertEqual(polyline.xs, (0.0, 2.0))
        self.assertEqual(polyline.ys, (1.0, 3.0))
        self.assertEqual(polyline[1], (2.0, 3.0))

    def test_degenerate_polylines(self):
        self.assertTrue(Polyline().is_degenerate)
        self.assertEqual(len(Polyline()), 0)
        single = Polyline([(1, 1)])
        self.assertTrue(single.is_degenerate)
        self.assertEqual(list(single), [(1.0, 1.0)])
        with self.assertRaises(ValueError):
            single.to_linestring()
        self.assertTrue(Polyline().to_linestring().is_empty)

    def test_linestring_conversion(self):
        line = LineString([(0, 0, 5), (1, 1, 5)])
        polyline = Polyline.from_linestring(line)
        self.assertEqual(polyline.coords, ((0.0, 0.0), (1.0, 1.0)))
        self.assertEqual(polyline.to_linestring().length, line.length)


class TestTemporalTrajectory(unittest.TestCase):
    def test_timestamps_must_match_points(self):
        path = Polyline([(0, 0), (1, 1)])
        with self.assertRaises(ValueError):
            TemporalTrajectory(id=1, path=path, timestamps=(1.0,))

    def test_empty_timestamps_allowed(self):
        trajectory = TemporalTrajectory(id=1, path=Polyline([(0, 0), (1, 1)]))
        self.assertFalse(trajectory.has_timestamps)
        self.assertEqual(len(trajectory), 2)

    def test_to_trajectory(self):
        path = Polyline([(0, 0)])
        trajectory = TemporalTrajectory(id=5, path=path, timestamps=[3])
        self.assertEqual(trajectory.timestamps, (3.0,))
        self.assertEqual(trajectory.to_trajectory(), Trajectory(id=5, path=path))


if __name__ == '__main__':
    unittest.main()
