import dataclasses
import unittest

from caged import catalog
from caged.catalog import (CAGED_SEQUENCE, MODE_DATA, SHAPES_BY_QUALITY, Mode, Quality,
                           Shape, get_mode, get_shape, parse_mode, parse_quality, parse_shape)
from caged.errors import InvalidConfiguration
from caged.pitch import note_to_number
from caged.tuning import STRING_TUNING


class TestShapeCatalog(unittest.TestCase):
    def test_every_shape_in_both_qualities(self):
        for quality in Quality:
            self.assertEqual(set(SHAPES_BY_QUALITY[quality]), set(Shape))

    def test_root_strings_are_played(self):
        for quality in Quality:
            for definition in SHAPES_BY_QUALITY[quality].values():
                self.assertEqual(len(definition.pattern), 6)
                self.assertTrue(definition.root_strings)
                for r in definition.root_strings:
                    self.assertIsNotNone(definition.pattern[r])

    def test_open_root_strings_sound_the_shape_root(self):
        for quality in Quality:
            for shape, definition in SHAPES_BY_QUALITY[quality].items():
                for r in definition.root_strings:
                    pc = (STRING_TUNING[r] + definition.pattern[r]) % 12
                    self.assertEqual(pc, shape.natural_root, f"{shape} {quality} string {r}")

    def test_natural_roots(self):
        self.assertEqual([s.natural_root for s in CAGED_SEQUENCE], [0, 9, 7, 4, 2])

    def test_open_c_major_pattern(self):
        c = get_shape("C", "major")
        self.assertEqual(c.pattern, (0, 1, 0, 2, 3, None))
        self.assertEqual(c.root_strings, (4,))
        self.assertEqual(c.color, "#FF6B6B")
        self.assertEqual(get_shape(Shape.C, Quality.MINOR).pattern, (None, 1, 0, 1, 3, None))

    def test_catalog_is_read_only(self):
        with self.assertRaises(TypeError):
            SHAPES_BY_QUALITY[Quality.MAJOR][Shape.C] = None
        with self.assertRaises(dataclasses.FrozenInstanceError):
            get_shape("E").color = "#000000"

    def test_parse_ids(self):
        self.assertIs(parse_shape(" a "), Shape.A)
        self.assertIs(parse_quality("Minor"), Quality.MINOR)
        self.assertIs(parse_mode("DORIAN"), Mode.DORIAN)
        for parse, bad in ((parse_shape, "F"), (parse_quality, "dim"), (parse_mode, "blues")):
            with self.assertRaises(InvalidConfiguration):
                parse(bad)

    def test_loader_rejects_missing_shape(self):
        doc = catalog.MAJOR_SHAPES.split("\nD:")[0]
        with self.assertRaises(InvalidConfiguration):
            catalog._load_shapes(doc, Quality.MAJOR)

    def test_loader_rejects_muted_root(self):
        doc = catalog.MAJOR_SHAPES.replace("roots: [3]", "roots: [4]")
        with self.assertRaises(InvalidConfiguration):
            catalog._load_shapes(doc, Quality.MAJOR)


class TestModeCatalog(unittest.TestCase):
    def test_intervals_well_formed(self):
        for definition in MODE_DATA.values():
            intervals = definition.intervals
            self.assertEqual(intervals[0], 0)
            self.assertEqual(len(set(intervals)), 7)
            steps = [b - a for a, b in zip(intervals, intervals[1:])] + [12 - intervals[-1]]
            self.assertTrue(all(s in (1, 2) for s in steps))
            self.assertEqual(sum(steps), 12)

    def test_modes_are_rotations_of_ionian(self):
        ionian = get_mode("ionian").intervals
        for k, mode in enumerate(Mode):
            definition = get_mode(mode)
            expected = sorted((x - ionian[k]) % 12 for x in ionian)
            self.assertEqual(list(definition.intervals), expected)
            self.assertEqual(note_to_number(definition.natural_root), ionian[k])

    def test_dorian(self):
        dorian = get_mode(Mode.DORIAN)
        self.assertEqual(dorian.intervals, (0, 2, 3, 5, 7, 9, 10))
        self.assertEqual(dorian.display_name, "Dorian")

    def test_bad_intervals_rejected(self):
        with self.assertRaises(InvalidConfiguration):
            catalog._check_intervals((0, 2, 4, 5, 7, 9, 12), "bad")
        with self.assertRaises(InvalidConfiguration):
            catalog._check_intervals((0, 3, 5, 7, 10), "pentatonic")


if __name__ == "__main__":
    unittest.main()
