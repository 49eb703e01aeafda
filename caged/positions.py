# Position resolver: where each shape sits on the neck for a given chord

import logging
from typing import Dict, List, Optional, Union

from .catalog import (CAGED_SEQUENCE, NATURAL_STARTING_SHAPES, Quality, Shape,
                      get_shape, parse_shape)
from .pitch import SEMITONES, normalize
from .tuning import STRING_TUNING

logger = logging.getLogger(__name__)


def resolve_offset(target_root: int, natural_root: int) -> int:
    """Fret offset that moves a shape rooted at `natural_root` to `target_root`."""
    return (target_root - natural_root + SEMITONES) % SEMITONES


def shape_fret(pattern_value: Optional[int], offset: int) -> Optional[int]:
    """Concrete fret for one pattern cell played at `offset`.

    A zero cell stays open only in open position; anywhere else it is
    barred at the offset. `None` (string not played) never changes.
    """
    if pattern_value is None:
        return None
    if pattern_value == 0:
        return 0 if offset == 0 else offset
    return pattern_value + offset


def shape_offset(chord: Union[Shape, str], shape: Union[Shape, str]) -> int:
    return resolve_offset(parse_shape(chord).natural_root, parse_shape(shape).natural_root)


def shape_positions(chord: Union[Shape, str]) -> Dict[Shape, int]:
    """Offset of every CAGED shape for `chord`."""
    root = parse_shape(chord).natural_root
    return {s: resolve_offset(root, s.natural_root) for s in CAGED_SEQUENCE}


def realize_shape(chord, shape, quality=Quality.MAJOR) -> List[Optional[int]]:
    """The six frets (high E first) of `shape` played as `chord`."""
    definition = get_shape(shape, quality)
    offset = shape_offset(chord, definition.shape)
    frets = [shape_fret(v, offset) for v in definition.pattern]
    logger.debug("%s%s via %s shape at %d: %s", chord, '' if definition.quality is Quality.MAJOR else 'm',
                 definition.shape, offset, frets)
    return frets


def natural_sequence(chord: Union[Shape, str]) -> List[Shape]:
    """CAGED order rotated to start at the chord's own open shape."""
    start = CAGED_SEQUENCE.index(NATURAL_STARTING_SHAPES[parse_shape(chord)])
    return list(CAGED_SEQUENCE[start:] + CAGED_SEQUENCE[:start])


def next_position(current: int, length: int) -> int:
    return (current + 1) % length


def previous_position(current: int, length: int) -> int:
    return (current - 1 + length) % length


def root_pitch(chord, shape, quality=Quality.MAJOR) -> int:
    """Pitch class sounded by the shape's first root string; always the chord root."""
    definition = get_shape(shape, quality)
    frets = realize_shape(chord, shape, quality)
    string = definition.root_strings[0]
    return normalize(STRING_TUNING[string] + frets[string])
