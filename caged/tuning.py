# Standard tuning, highest-pitched string first as drawn on the fretboard

from typing import Tuple

from .errors import OutOfRangeIndex
from .pitch import number_to_note, normalize, is_natural

STRING_NAMES = ('E', 'B', 'G', 'D', 'A', 'E')
STRING_TUNING: Tuple[int, ...] = (4, 11, 7, 2, 9, 4)  # E(4), B(11), G(7), D(2), A(9), E(4)
STRING_COUNT = len(STRING_TUNING)


def check_cell(string: int, fret: int) -> None:
    if not 0 <= string < STRING_COUNT:
        raise OutOfRangeIndex(f"Invalid string index: {string}. Must be 0-{STRING_COUNT - 1}.")
    if fret < 0:
        raise OutOfRangeIndex(f"Invalid fret: {fret}. Must be 0 or higher.")


def pitch_at(string: int, fret: int) -> int:
    """Pitch class sounding at (string, fret)."""
    check_cell(string, fret)
    return normalize(STRING_TUNING[string] + fret)


def note_name_at(string: int, fret: int) -> str:
    return number_to_note(pitch_at(string, fret))


def is_natural_note_at(string: int, fret: int) -> bool:
    # gates the "show all note names" overlay: sharps stay unlabeled
    return is_natural(pitch_at(string, fret))
