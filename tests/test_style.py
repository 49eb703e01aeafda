import unittest

from caged.catalog import Quality, Shape, get_shape
from caged.errors import InvalidConfiguration
from caged.fretboard import ChordView
from caged.style import BANDS, SOLID, SPLIT, adjust_hsl, parse_color, resolve_style


class TestResolveStyle(unittest.TestCase):
    def test_single_shape(self):
        style = resolve_style([Shape.C])
        self.assertEqual(style.kind, SOLID)
        self.assertEqual(style.colors, ("#FF6B6B",))
        self.assertEqual(style.rgb, [(255, 107, 107)])
        self.assertEqual(style.css(), "background-color: #FF6B6B")

    def test_two_shapes_split_in_caged_order(self):
        forward = resolve_style(["C", "A"])
        backward = resolve_style(["A", "C"])
        self.assertEqual(forward, backward)
        self.assertEqual(forward.kind, SPLIT)
        self.assertEqual(forward.shapes, (Shape.C, Shape.A))
        self.assertEqual(
            forward.css(),
            "background: linear-gradient(90deg, #FF6B6B 0%, #FF6B6B 50%, #4ECDC4 50%, #4ECDC4 100%)")

    def test_three_shapes_band(self):
        style = resolve_style({"D", "G", "C"})
        self.assertEqual(style.kind, BANDS)
        self.assertEqual(style.shapes, (Shape.C, Shape.G, Shape.D))
        self.assertEqual(len(style.stops), 3)
        self.assertAlmostEqual(style.stops[1][1], 100 / 3)
        self.assertEqual(style.stops[-1][2], 100)

    def test_duplicates_collapse(self):
        self.assertEqual(resolve_style(["E", "E"]).kind, SOLID)

    def test_order_stable_for_found_overlaps(self):
        # the A chord finds D before C at this cell
        shapes = ChordView("A").shapes_at(0, 9)
        self.assertEqual(shapes, [Shape.D, Shape.C])
        self.assertEqual(resolve_style(shapes).shapes, (Shape.C, Shape.D))

    def test_minor_colors(self):
        style = resolve_style(["G"], Quality.MINOR)
        self.assertEqual(style.colors, (get_shape("G", "minor").color,))

    def test_empty(self):
        with self.assertRaises(InvalidConfiguration):
            resolve_style([])


class TestColors(unittest.TestCase):
    def test_parse_color(self):
        self.assertEqual(parse_color("#000"), (0, 0, 0))
        self.assertEqual(parse_color("white"), (255, 255, 255))
        self.assertIsNone(parse_color("nonsense"))
        self.assertEqual(parse_color(None, (1, 2, 3)), (1, 2, 3))

    def test_adjust_hsl_identity(self):
        for original, adjusted in zip((255, 107, 107), adjust_hsl((255, 107, 107))):
            self.assertLessEqual(abs(original - adjusted), 1)

    def test_desaturate(self):
        r, g, b = adjust_hsl((69, 183, 209), sat_mult=0)
        self.assertEqual(r, g)
        self.assertEqual(g, b)

    def test_lightness_is_clamped(self):
        self.assertEqual(adjust_hsl((0, 0, 0), light_add=2.0), (255, 255, 255))
        self.assertEqual(adjust_hsl((255, 107, 107), light_add=-1.0), (0, 0, 0))


if __name__ == "__main__":
    unittest.main()
