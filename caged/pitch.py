# Pitch-class arithmetic: note names <-> integers 0-11 (semitones above C)

from typing import Iterable, List, Union

from .errors import InvalidNote

Note = Union[str, int]

SEMITONES = 12

CHROMATIC_NOTES = ('C', 'C#', 'D', 'D#', 'E', 'F', 'F#', 'G', 'G#', 'A', 'A#', 'B')
FLAT_NOTES = ('C', 'Db', 'D', 'Eb', 'E', 'F', 'Gb', 'G', 'Ab', 'A', 'Bb', 'B')

NOTE_TO_NUMBER = {name: n for n, name in enumerate(CHROMATIC_NOTES)}
# flat spellings resolve to the same pitch class
NOTE_TO_NUMBER.update({name: n for n, name in enumerate(FLAT_NOTES)})

NATURAL_NOTES = frozenset(NOTE_TO_NUMBER[n] for n in 'CDEFGAB')

INTERVAL_NAMES = {
    0: 'Root (Unison)',
    1: 'Minor 2nd',
    2: 'Major 2nd',
    3: 'Minor 3rd',
    4: 'Major 3rd',
    5: 'Perfect 4th',
    6: 'Tritone',
    7: 'Perfect 5th',
    8: 'Minor 6th',
    9: 'Major 6th',
    10: 'Minor 7th',
    11: 'Major 7th',
}


def normalize(n: int) -> int:
    return n % SEMITONES


def note_to_number(name: str) -> int:
    """Pitch class of a note name. 'C#', 'Db' and ' c# ' are all accepted."""
    if not isinstance(name, str):
        raise InvalidNote(name)
    key = name.strip()
    if key:
        key = key[0].upper() + key[1:]
    try:
        return NOTE_TO_NUMBER[key]
    except KeyError:
        raise InvalidNote(name) from None


def number_to_note(n: int, flats: bool = False) -> str:
    names = FLAT_NOTES if flats else CHROMATIC_NOTES
    return names[normalize(int(n))]


def pitch_class(note: Note) -> int:
    """Accept either a name or an integer and return a pitch class."""
    if isinstance(note, bool):
        raise InvalidNote(note)
    if isinstance(note, int):
        return normalize(note)
    return note_to_number(note)


def interval(from_note: Note, to_note: Note) -> int:
    """Upward distance in semitones from `from_note` to `to_note`."""
    return normalize(pitch_class(to_note) - pitch_class(from_note))


def transpose(note: Note, semitones: int) -> str:
    return number_to_note(pitch_class(note) + semitones)


def transpose_intervals(intervals: Iterable[int], semitones: int) -> List[int]:
    return [normalize(i + semitones) for i in intervals]


def is_natural(n: int) -> bool:
    return normalize(n) in NATURAL_NOTES


def interval_name(semitones: int) -> str:
    return INTERVAL_NAMES[normalize(semitones)]


def chromatic_scale(root: Note) -> List[str]:
    start = pitch_class(root)
    return [number_to_note(start + i) for i in range(SEMITONES)]
