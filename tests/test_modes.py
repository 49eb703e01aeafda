import unittest

from caged.catalog import Mode
from caged.errors import InvalidConfiguration, InvalidNote
from caged.modes import (calculate_mode_intervals, calculate_mode_pattern, filter_by_fret_range,
                         find_nearest_root, group_by_string, mode_box, mode_characteristics,
                         optimal_display_range, root_positions, scale_degree, scale_degrees,
                         validate_mode_pattern)


class TestModePattern(unittest.TestCase):
    def test_c_ionian_notes(self):
        pattern = calculate_mode_pattern("ionian", "C")
        self.assertEqual(set(pattern.notes()), {"C", "D", "E", "F", "G", "A", "B"})
        self.assertEqual(len(pattern.notes()), 7)

    def test_d_dorian(self):
        self.assertEqual(calculate_mode_intervals(Mode.DORIAN, "D"), [2, 4, 5, 7, 9, 11, 0])
        pattern = calculate_mode_pattern(Mode.DORIAN, "D")
        self.assertEqual(set(pattern.notes()), {"D", "E", "F", "G", "A", "B", "C"})

    def test_positions_keep_untransposed_interval(self):
        pattern = calculate_mode_pattern("dorian", "D")
        for p in pattern.positions:
            if p.note == "F":
                self.assertEqual(p.interval, 3)
            self.assertEqual(p.is_root, p.note == "D")
            self.assertEqual(p.is_root, p.interval == 0)

    def test_sharp_root(self):
        pattern = calculate_mode_pattern("aeolian", "F#")
        self.assertEqual(pattern.root, "F#")
        self.assertEqual(set(pattern.notes()), {"F#", "G#", "A", "B", "C#", "D", "E"})

    def test_order_and_bounds(self):
        pattern = calculate_mode_pattern("lydian", "G", max_fret=12)
        cells = [(p.string, p.fret) for p in pattern.positions]
        self.assertEqual(cells, sorted(cells))
        self.assertTrue(all(0 <= p.fret <= 12 for p in pattern.positions))

    def test_invalid_input_fails_whole_call(self):
        with self.assertRaises(InvalidNote):
            calculate_mode_pattern("ionian", "H")
        with self.assertRaises(InvalidConfiguration):
            calculate_mode_pattern("blues", "C")
        with self.assertRaises(InvalidConfiguration):
            calculate_mode_pattern("ionian", "C", max_fret=-1)

    def test_validate(self):
        for mode in Mode:
            for root in range(12):
                self.assertTrue(validate_mode_pattern(calculate_mode_pattern(mode, root)))
        # open strings alone never reach C
        self.assertFalse(validate_mode_pattern(calculate_mode_pattern("ionian", "C", max_fret=0)))


class TestDisplayHelpers(unittest.TestCase):
    def test_root_positions(self):
        roots = root_positions("ionian", "C")
        self.assertEqual([(p.string, p.fret) for p in roots],
                         [(0, 8), (1, 1), (1, 13), (2, 5), (3, 10), (4, 3), (4, 15), (5, 8)])

    def test_optimal_display_range(self):
        self.assertEqual(optimal_display_range("ionian", "C", max_fret=12, padding=0), (1, 10))
        self.assertEqual(optimal_display_range("ionian", "C", max_fret=12), (0, 12))
        self.assertEqual(optimal_display_range("ionian", "C", max_fret=12, padding=1), (0, 11))

    def test_filter_range(self):
        positions = calculate_mode_pattern("ionian", "C").positions
        window = filter_by_fret_range(positions, 3, 5)
        self.assertTrue(all(3 <= p.fret <= 5 for p in window))
        with self.assertRaises(InvalidConfiguration):
            filter_by_fret_range(positions, 6, 5)

    def test_mode_box(self):
        box = mode_box("ionian", "C", 5)
        self.assertTrue(box)
        self.assertTrue(all(5 <= p.fret <= 9 for p in box))

    def test_scale_degrees(self):
        self.assertEqual(scale_degree("ionian", 0), 1)
        self.assertEqual(scale_degree("dorian", 10), 7)
        self.assertIsNone(scale_degree("ionian", 1))
        for position, degree in scale_degrees(calculate_mode_pattern("phrygian", "E")):
            self.assertEqual(degree == 1, position.is_root)

    def test_nearest_root(self):
        nearest = find_nearest_root("ionian", "C", 9)
        self.assertEqual((nearest.string, nearest.fret), (0, 8))
        nearest = find_nearest_root("ionian", "C", 12, string=1)
        self.assertEqual((nearest.string, nearest.fret), (1, 13))

    def test_characteristics(self):
        lydian = mode_characteristics("lydian")
        self.assertEqual(lydian[3]["quality"], "raised")
        self.assertEqual(lydian[3]["description"], "Raised by 1 semitone(s)")
        dorian = mode_characteristics("dorian")
        self.assertEqual([d["quality"] for d in dorian],
                         ["same", "same", "lowered", "same", "same", "same", "lowered"])

    def test_group_by_string(self):
        grouped = group_by_string(reversed(calculate_mode_pattern("ionian", "C").positions))
        self.assertEqual(sorted(grouped), list(range(6)))
        for frets in grouped.values():
            self.assertEqual([p.fret for p in frets], sorted(p.fret for p in frets))


if __name__ == "__main__":
    unittest.main()
