"""Shape and mode catalog.

The five CAGED shapes (major and minor) and the seven diatonic modes are
written once, in their natural open position, as YAML documents. They are
parsed and checked when the module is imported and exposed as read-only
lookup tables keyed by the enums below.
"""

import logging
from dataclasses import dataclass
from enum import Enum, unique
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

import yaml

from .errors import InvalidConfiguration
from .tuning import STRING_COUNT

logger = logging.getLogger(__name__)


@unique
class Shape(Enum):
    C = 'C'
    A = 'A'
    G = 'G'
    E = 'E'
    D = 'D'

    @property
    def natural_root(self) -> int:
        return CHROMATIC_VALUES[self]

    def __str__(self):
        return self.value


@unique
class Quality(Enum):
    MAJOR = 'major'
    MINOR = 'minor'

    def __str__(self):
        return self.value


@unique
class Mode(Enum):
    IONIAN = 'ionian'
    DORIAN = 'dorian'
    PHRYGIAN = 'phrygian'
    LYDIAN = 'lydian'
    MIXOLYDIAN = 'mixolydian'
    AEOLIAN = 'aeolian'
    LOCRIAN = 'locrian'

    def __str__(self):
        return self.value


CHROMATIC_VALUES = MappingProxyType({
    Shape.C: 0,
    Shape.A: 9,
    Shape.G: 7,
    Shape.E: 4,
    Shape.D: 2,
})

CAGED_SEQUENCE: Tuple[Shape, ...] = (Shape.C, Shape.A, Shape.G, Shape.E, Shape.D)

# every chord starts its walk up the neck from its own open shape
NATURAL_STARTING_SHAPES = MappingProxyType({s: s for s in CAGED_SEQUENCE})

MAJOR_PENTATONIC = (0, 2, 4, 7, 9)
MINOR_PENTATONIC = (0, 3, 5, 7, 10)

PENTATONIC_INTERVALS = MappingProxyType({
    Quality.MAJOR: MAJOR_PENTATONIC,
    Quality.MINOR: MINOR_PENTATONIC,
})


# Caged shape data
# pattern: fret offset from the barre per string (high E first), ~ = not played
# fingers: fretting finger, 0 = open, ~ = unused

MAJOR_SHAPES = """
C:
  name: C Shape
  color: '#FF6B6B'
  pattern: [0, 1, 0, 2, 3, ~]
  fingers: [0, 1, 0, 2, 3, ~]
  roots: [4]
A:
  name: A Shape
  color: '#4ECDC4'
  pattern: [0, 2, 2, 2, 0, ~]
  fingers: [0, 4, 3, 2, 0, ~]
  roots: [4]
G:
  name: G Shape
  color: '#45B7D1'
  pattern: [3, 0, 0, 0, 2, 3]
  fingers: [4, ~, 0, 0, 2, 3]
  roots: [0, 5]
E:
  name: E Shape
  color: '#96CEB4'
  pattern: [0, 0, 1, 2, 2, 0]
  fingers: [0, 0, 1, 3, 2, 0]
  roots: [0, 5]
D:
  name: D Shape
  color: '#FECA57'
  pattern: [2, 3, 2, 0, ~, ~]
  fingers: [2, 3, 1, 0, ~, ~]
  roots: [3]
"""

MINOR_SHAPES = """
C:
  name: Cm Shape
  color: '#FF6B6B'
  pattern: [~, 1, 0, 1, 3, ~]
  fingers: [~, 2, 0, 1, 4, ~]
  roots: [4]
A:
  name: Am Shape
  color: '#4ECDC4'
  pattern: [0, 1, 2, 2, 0, ~]
  fingers: [0, 1, 3, 2, 0, ~]
  roots: [4]
G:
  name: Gm Shape
  color: '#45B7D1'
  pattern: [3, ~, 0, 0, 1, 3]
  fingers: [4, 0, 0, 0, 1, 3]
  roots: [0, 5]
E:
  name: Em Shape
  color: '#96CEB4'
  pattern: [0, 0, 0, 2, 2, 0]
  fingers: [0, 0, 0, 2, 3, 0]
  roots: [0, 5]
D:
  name: Dm Shape
  color: '#FECA57'
  pattern: [1, 3, 2, 0, ~, ~]
  fingers: [1, 3, 2, 0, ~, ~]
  roots: [3]
"""

# Modes of C major, each in its natural position
MODES = """
ionian:
  name: Ionian (Major)
  root: C
  intervals: [0, 2, 4, 5, 7, 9, 11]
  color: '#3B82F6'  # blue
  description: The major scale - bright and happy sound
dorian:
  name: Dorian
  root: D
  intervals: [0, 2, 3, 5, 7, 9, 10]
  color: '#8B5CF6'  # purple
  description: Minor scale with raised 6th - jazzy and sophisticated
phrygian:
  name: Phrygian
  root: E
  intervals: [0, 1, 3, 5, 7, 8, 10]
  color: '#EF4444'  # red
  description: Minor scale with lowered 2nd - Spanish/flamenco sound
lydian:
  name: Lydian
  root: F
  intervals: [0, 2, 4, 6, 7, 9, 11]
  color: '#F59E0B'  # amber
  description: Major scale with raised 4th - dreamy and ethereal
mixolydian:
  name: Mixolydian
  root: G
  intervals: [0, 2, 4, 5, 7, 9, 10]
  color: '#10B981'  # emerald
  description: Major scale with lowered 7th - bluesy and dominant
aeolian:
  name: Aeolian (Natural Minor)
  root: A
  intervals: [0, 2, 3, 5, 7, 8, 10]
  color: '#6366F1'  # indigo
  description: The natural minor scale - melancholy and emotional
locrian:
  name: Locrian
  root: B
  intervals: [0, 1, 3, 5, 6, 8, 10]
  color: '#64748B'  # slate
  description: Diminished scale - unstable and dissonant
"""


@dataclass(frozen=True)
class ShapeDefinition:
    shape: Shape
    quality: Quality
    display_name: str
    color: str
    pattern: Tuple[Optional[int], ...]
    fingers: Tuple[Optional[int], ...]
    root_strings: Tuple[int, ...]

    @property
    def natural_root(self) -> int:
        return self.shape.natural_root


@dataclass(frozen=True)
class ModeDefinition:
    mode: Mode
    display_name: str
    intervals: Tuple[int, ...]
    natural_root: str
    color: str
    description: str

    @property
    def degree_count(self) -> int:
        return len(self.intervals)


def _frets(values, label):
    if not isinstance(values, list) or len(values) != STRING_COUNT:
        raise InvalidConfiguration(f"{label}: expected {STRING_COUNT} values, got {values!r}")
    for v in values:
        if v is not None and (not isinstance(v, int) or v < 0):
            raise InvalidConfiguration(f"{label}: bad fret value {v!r}")
    return tuple(values)


def _load_shapes(document: str, quality: Quality) -> Mapping[Shape, ShapeDefinition]:
    data = yaml.safe_load(document)
    table = {}
    for shape in CAGED_SEQUENCE:
        try:
            entry = data[shape.value]
        except KeyError:
            raise InvalidConfiguration(f"{quality} catalog is missing the {shape} shape") from None

        label = f"{shape} {quality}"
        pattern = _frets(entry['pattern'], label + ' pattern')
        fingers = _frets(entry['fingers'], label + ' fingers')
        roots = tuple(entry['roots'])
        if not roots:
            raise InvalidConfiguration(f"{label}: no root strings")
        for r in roots:
            if not 0 <= r < STRING_COUNT or pattern[r] is None:
                raise InvalidConfiguration(f"{label}: root string {r} is not played")

        table[shape] = ShapeDefinition(
            shape=shape,
            quality=quality,
            display_name=entry['name'],
            color=entry['color'],
            pattern=pattern,
            fingers=fingers,
            root_strings=roots,
        )
    logger.debug("Loaded %d %s shapes", len(table), quality)
    return MappingProxyType(table)


def _check_intervals(intervals, label):
    if len(intervals) != 7 or intervals[0] != 0:
        raise InvalidConfiguration(f"{label}: a mode has 7 intervals starting at 0")
    steps = [b - a for a, b in zip(intervals, intervals[1:])]
    steps.append(12 - intervals[-1])
    if any(s not in (1, 2) for s in steps):
        raise InvalidConfiguration(f"{label}: intervals must move in steps of 1 or 2, got {steps}")


def _load_modes(document: str) -> Mapping[Mode, ModeDefinition]:
    data = yaml.safe_load(document)
    table = {}
    for mode in Mode:
        try:
            entry = data[mode.value]
        except KeyError:
            raise InvalidConfiguration(f"mode catalog is missing {mode}") from None
        intervals = tuple(entry['intervals'])
        _check_intervals(intervals, mode.value)
        table[mode] = ModeDefinition(
            mode=mode,
            display_name=entry['name'],
            intervals=intervals,
            natural_root=entry['root'],
            color=entry['color'],
            description=entry['description'],
        )
    return MappingProxyType(table)


SHAPES_BY_QUALITY = MappingProxyType({
    Quality.MAJOR: _load_shapes(MAJOR_SHAPES, Quality.MAJOR),
    Quality.MINOR: _load_shapes(MINOR_SHAPES, Quality.MINOR),
})

MODE_DATA = _load_modes(MODES)

ALL_MODES: Tuple[Mode, ...] = tuple(Mode)


def parse_shape(value: Union[Shape, str]) -> Shape:
    """Shape (or CAGED chord) from its letter."""
    if isinstance(value, Shape):
        return value
    try:
        return Shape(str(value).strip().upper())
    except ValueError:
        raise InvalidConfiguration(
            f"Unknown CAGED chord/shape {value!r}; expected one of C, A, G, E, D") from None


def parse_quality(value: Union[Quality, str]) -> Quality:
    if isinstance(value, Quality):
        return value
    try:
        return Quality(str(value).strip().lower())
    except ValueError:
        raise InvalidConfiguration(f"Unknown chord quality {value!r}") from None


def parse_mode(value: Union[Mode, str]) -> Mode:
    if isinstance(value, Mode):
        return value
    try:
        return Mode(str(value).strip().lower())
    except ValueError:
        raise InvalidConfiguration(f"Unknown mode {value!r}") from None


def get_shape(shape: Union[Shape, str], quality: Union[Quality, str] = Quality.MAJOR) -> ShapeDefinition:
    return SHAPES_BY_QUALITY[parse_quality(quality)][parse_shape(shape)]


def get_mode(mode: Union[Mode, str]) -> ModeDefinition:
    return MODE_DATA[parse_mode(mode)]


def scale_intervals(quality: Union[Quality, str]) -> Tuple[int, ...]:
    """Pentatonic overlay used alongside a chord of the given quality."""
    return PENTATONIC_INTERVALS[parse_quality(quality)]
