import os
import shutil
import tempfile
import unittest

from PIL import Image

from caged.errors import InvalidConfiguration
from caged.fretboard import ChordView, ModeView
from caged.modes import calculate_mode_pattern
from caged.render import (chord_labels, chord_title, mode_labels, noteboard_labels,
                          render_labels)


def _by_cell(labels):
    return {lab["rc"]: lab for lab in labels}


class TestLabels(unittest.TestCase):
    def test_single_shape_labels(self):
        labels = _by_cell(chord_labels(ChordView("C", shape="C")))
        self.assertEqual(labels[(4, 3)]["text"], "R")
        self.assertEqual(labels[(1, 1)]["text"], "")
        self.assertIn((0, 0), labels)  # open E rings in the open C shape
        self.assertNotIn((5, 3), labels)

    def test_overlap_labels_use_band_colors(self):
        labels = _by_cell(chord_labels(ChordView("C")))
        self.assertEqual(labels[(4, 3)]["fill"], ["#FF6B6B", "#4ECDC4"])

    def test_pentatonic_overlay(self):
        view = ChordView("C", shape="C")
        plain = chord_labels(view)
        overlay = chord_labels(view, show_pentatonic=True)
        self.assertGreater(len(overlay), len(plain))
        extra = [lab for lab in overlay if lab not in plain]
        self.assertTrue(all(view.is_scale_tone_at(*lab["rc"]) for lab in extra))

    def test_mode_labels(self):
        view = ModeView("dorian", "D")
        labels = mode_labels(view, degrees=True)
        self.assertEqual(len(labels), len(calculate_mode_pattern("dorian", "D").positions))
        self.assertEqual(_by_cell(labels)[(3, 0)]["text"], "1")

    def test_noteboard(self):
        labels = noteboard_labels(max_fret=12)
        self.assertEqual(len(labels), 6 * 13)
        self.assertEqual(_by_cell(labels)[(4, 3)]["text"], "C")

    def test_titles(self):
        self.assertEqual(chord_title(ChordView("A", "minor", "E")), "Am - Em shape at fret 5")
        self.assertEqual(chord_title(ChordView("G")), "G - all shapes")


class TestRender(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_render_chord(self):
        path = os.path.join(self.test_dir, "c.png")
        render_labels(path, chord_labels(ChordView("C")), font_path=None, scale=1, title="C")
        with Image.open(path) as image:
            self.assertEqual(image.width, 60 * 2 + 16 * 102)
            self.assertEqual(image.height, 50 * 2 + 5 * 72 + 52)

    def test_render_supersampled(self):
        path = os.path.join(self.test_dir, "notes.png")
        render_labels(path, noteboard_labels(5), max_fret=5, font_path=None, scale=2)
        with Image.open(path) as image:
            self.assertEqual(image.size, (60 * 2 + 6 * 102, 50 * 2 + 5 * 72))

    def test_render_fret_window(self):
        path = os.path.join(self.test_dir, "window.png")
        labels = [{"rc": (0, 2), "text": "gone"}, {"rc": (0, 7), "text": "R"}]
        render_labels(path, labels, min_fret=5, max_fret=9, font_path=None, scale=1)
        with Image.open(path) as image:
            self.assertEqual(image.size, (60 * 2 + 5 * 102, 50 * 2 + 5 * 72))

    def test_render_rejects_empty_window(self):
        path = os.path.join(self.test_dir, "bad.png")
        with self.assertRaises(InvalidConfiguration):
            render_labels(path, [], min_fret=6, max_fret=5, font_path=None, scale=1)
        self.assertFalse(os.path.exists(path))

    def test_missing_font_falls_back(self):
        path = os.path.join(self.test_dir, "font.png")
        render_labels(path, [{"rc": (0, 1), "text": "R", "fill": "#FF6B6B"}],
                      font_path="no-such-font.ttf", scale=1)
        self.assertTrue(os.path.exists(path))

    def test_labels_off_the_board_are_ignored(self):
        path = os.path.join(self.test_dir, "off.png")
        render_labels(path, [{"rc": (7, 1), "text": "x"}, {"text": "no rc"}], max_fret=3, font_path=None, scale=1)
        self.assertTrue(os.path.exists(path))


if __name__ == "__main__":
    unittest.main()
