"""Per-cell questions the fretboard grid asks of the engine.

`ChordView` answers them for a CAGED chord (one shape, or all five at
once), `ModeView` for a mode rooted on any of the 12 notes. Both are
cheap immutable values: build a new one whenever the selection changes.
"""

import logging
from typing import List, NamedTuple, Optional, Tuple, Union

from .catalog import (Mode, Quality, Shape, get_mode, get_shape, parse_mode,
                      parse_quality, parse_shape, scale_intervals)
from .config import TOTAL_FRETS
from .pitch import Note, normalize, pitch_class
from .positions import natural_sequence, shape_fret, shape_offset
from .tuning import (STRING_COUNT, check_cell, is_natural_note_at, note_name_at,
                     pitch_at)

logger = logging.getLogger(__name__)

__all__ = ['Cell', 'ChordView', 'ModeView', 'note_name_at', 'is_natural_note_at']


class Cell(NamedTuple):
    string: int
    fret: int


class ChordView:
    """A CAGED chord as drawn on the neck.

    With `shape=None` every shape of the chord's quality is shown together
    (the all-shapes view) and cells report the union of all five.
    """

    def __init__(self, chord: Union[Shape, str], quality: Union[Quality, str] = Quality.MAJOR,
                 shape: Optional[Union[Shape, str]] = None):
        self.chord = parse_shape(chord)
        self.quality = parse_quality(quality)
        self.shape = None if shape is None else parse_shape(shape)
        self.root = self.chord.natural_root
        self.sequence: Tuple[Shape, ...] = tuple(natural_sequence(self.chord))
        self.active_shapes: Tuple[Shape, ...] = self.sequence if self.shape is None else (self.shape,)
        logger.debug("%r", self)

    def __repr__(self):
        shape = 'all' if self.shape is None else self.shape.value
        return f"ChordView({self.chord.value}, {self.quality.value}, shape={shape})"

    @property
    def show_all(self) -> bool:
        return self.shape is None

    def offset(self, shape: Union[Shape, str]) -> int:
        return shape_offset(self.chord, shape)

    def fret_for(self, shape: Union[Shape, str], string: int) -> Optional[int]:
        """Fret `shape` plays on `string` for this chord, None if the string is muted."""
        check_cell(string, 0)
        definition = get_shape(shape, self.quality)
        return shape_fret(definition.pattern[string], self.offset(definition.shape))

    def _realizing(self, string: int, fret: int) -> List[Shape]:
        check_cell(string, fret)
        return [s for s in self.active_shapes if self.fret_for(s, string) == fret]

    def shapes_at(self, string: int, fret: int) -> List[Shape]:
        """Shapes with a fretted dot at (string, fret), in the chord's sequence order.

        Open strings are drawn separately from the grid, so fret 0 never
        carries a dot.
        """
        check_cell(string, fret)
        if fret == 0:
            return []
        return self._realizing(string, fret)

    def shows_chord_tone_at(self, string: int, fret: int) -> bool:
        return bool(self.shapes_at(string, fret))

    def open_shapes_at(self, string: int) -> List[Shape]:
        """Shapes that let `string` ring open (only possible in open position)."""
        return self._realizing(string, 0)

    def is_root_at(self, string: int, fret: int) -> bool:
        return any(string in get_shape(s, self.quality).root_strings
                   for s in self._realizing(string, fret))

    def root_marker_at(self, string: int, fret: int) -> bool:
        """Root flag for a fretted dot; open roots are marked elsewhere."""
        check_cell(string, fret)
        return fret > 0 and self.is_root_at(string, fret)

    @property
    def scale_intervals(self) -> Tuple[int, ...]:
        return scale_intervals(self.quality)

    def is_scale_tone_at(self, string: int, fret: int) -> bool:
        return normalize(pitch_at(string, fret) - self.root) in self.scale_intervals

    def note_name_at(self, string: int, fret: int) -> str:
        return note_name_at(string, fret)

    def is_natural_note_at(self, string: int, fret: int) -> bool:
        return is_natural_note_at(string, fret)

    def chord_tone_positions(self, max_fret: int = TOTAL_FRETS) -> List[Cell]:
        return [Cell(s, f) for s in range(STRING_COUNT) for f in range(1, max_fret + 1)
                if self.shows_chord_tone_at(s, f)]

    def root_positions(self, max_fret: int = TOTAL_FRETS) -> List[Cell]:
        return [Cell(s, f) for s in range(STRING_COUNT) for f in range(max_fret + 1)
                if self.is_root_at(s, f)]

    def scale_positions(self, max_fret: int = TOTAL_FRETS) -> List[Cell]:
        """Every pentatonic cell on the neck, open strings included."""
        return [Cell(s, f) for s in range(STRING_COUNT) for f in range(max_fret + 1)
                if self.is_scale_tone_at(s, f)]


class ModeView:
    """A mode rooted on one of the 12 chromatic notes."""

    def __init__(self, mode: Union[Mode, str], root: Note):
        self.mode = parse_mode(mode)
        self.root = pitch_class(root)
        self.definition = get_mode(self.mode)

    def __repr__(self):
        return f"ModeView({self.mode.value}, root={self.root})"

    @property
    def scale_intervals(self) -> Tuple[int, ...]:
        return self.definition.intervals

    def interval_at(self, string: int, fret: int) -> int:
        return normalize(pitch_at(string, fret) - self.root)

    def is_scale_tone_at(self, string: int, fret: int) -> bool:
        return self.interval_at(string, fret) in self.scale_intervals

    def is_root_at(self, string: int, fret: int) -> bool:
        return self.interval_at(string, fret) == 0

    def note_name_at(self, string: int, fret: int) -> str:
        return note_name_at(string, fret)

    def is_natural_note_at(self, string: int, fret: int) -> bool:
        return is_natural_note_at(string, fret)
