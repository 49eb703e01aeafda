"""Mode pattern calculation.

A mode is defined once by its intervals above the root. Rooting it on any
note transposes that interval set, and every fretboard cell whose pitch
class lands in the transposed set becomes a position. Positions keep the
untransposed interval so scale degrees can be recovered afterwards.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Tuple, Union

from .catalog import Mode, get_mode, parse_mode
from .config import DISPLAY_PADDING, MODE_BOX_SPAN, TOTAL_FRETS
from .errors import InvalidConfiguration
from .pitch import Note, number_to_note, pitch_class, transpose_intervals
from .tuning import STRING_COUNT, pitch_at

logger = logging.getLogger(__name__)

IONIAN_INTERVALS = (0, 2, 4, 5, 7, 9, 11)


@dataclass(frozen=True)
class ModePosition:
    string: int
    fret: int
    note: str
    interval: int
    is_root: bool


@dataclass(frozen=True)
class ModePattern:
    mode: Mode
    root: str
    positions: Tuple[ModePosition, ...] = field(default_factory=tuple)

    @property
    def roots(self) -> List[ModePosition]:
        return [p for p in self.positions if p.is_root]

    def notes(self) -> List[str]:
        """Distinct note names in first-seen order."""
        seen = []
        for p in self.positions:
            if p.note not in seen:
                seen.append(p.note)
        return seen


class FretRange(NamedTuple):
    start: int
    end: int


def _check_max_fret(max_fret: int) -> None:
    if max_fret < 0:
        raise InvalidConfiguration(f"max_fret must be 0 or higher, got {max_fret}")


def calculate_mode_intervals(mode: Union[Mode, str], root: Note) -> List[int]:
    """Absolute pitch classes of `mode` rooted on `root`, in degree order."""
    return transpose_intervals(get_mode(mode).intervals, pitch_class(root))


def calculate_mode_pattern(mode: Union[Mode, str], root: Note, max_fret: int = TOTAL_FRETS) -> ModePattern:
    mode = parse_mode(mode)
    root_pc = pitch_class(root)
    _check_max_fret(max_fret)

    base = get_mode(mode).intervals
    absolute = transpose_intervals(base, root_pc)
    degree_of = {pc: base[i] for i, pc in enumerate(absolute)}

    positions = []
    for string in range(STRING_COUNT):
        for fret in range(max_fret + 1):
            pc = pitch_at(string, fret)
            if pc in degree_of:
                original = degree_of[pc]
                positions.append(ModePosition(
                    string=string,
                    fret=fret,
                    note=number_to_note(pc),
                    interval=original,
                    is_root=original == 0,
                ))

    logger.debug("%s on %s: %d positions up to fret %d", mode, number_to_note(root_pc),
                 len(positions), max_fret)
    return ModePattern(mode=mode, root=number_to_note(root_pc), positions=tuple(positions))


def root_positions(mode, root, max_fret: int = TOTAL_FRETS) -> List[ModePosition]:
    return calculate_mode_pattern(mode, root, max_fret).roots


def optimal_display_range(mode, root, max_fret: int = TOTAL_FRETS,
                          padding: int = DISPLAY_PADDING) -> FretRange:
    """Fret window framing every root, padded and clamped to the neck."""
    roots = root_positions(mode, root, max_fret)
    if not roots:
        return FretRange(0, max_fret)
    low = min(p.fret for p in roots)
    high = max(p.fret for p in roots)
    return FretRange(max(0, low - padding), min(max_fret, high + padding))


def filter_by_fret_range(positions, start: int, end: int) -> List[ModePosition]:
    if start > end:
        raise InvalidConfiguration(f"Fret range start {start} is after end {end}")
    return [p for p in positions if start <= p.fret <= end]


def mode_box(mode, root, start_fret: int, span: int = MODE_BOX_SPAN) -> List[ModePosition]:
    """Positions inside a `span`-fret box beginning at `start_fret`."""
    if start_fret < 0 or span < 0:
        raise InvalidConfiguration(f"Invalid box: start {start_fret}, span {span}")
    pattern = calculate_mode_pattern(mode, root, start_fret + span)
    return filter_by_fret_range(pattern.positions, start_fret, start_fret + span)


def scale_degree(mode, interval: int) -> Optional[int]:
    """1-based degree of `interval` within `mode`, None when it is not in the mode."""
    intervals = get_mode(mode).intervals
    if interval not in intervals:
        return None
    return intervals.index(interval) + 1


def scale_degrees(pattern: ModePattern) -> List[Tuple[ModePosition, int]]:
    return [(p, scale_degree(pattern.mode, p.interval)) for p in pattern.positions]


def find_nearest_root(mode, root, target_fret: int, string: Optional[int] = None) -> Optional[ModePosition]:
    candidates = root_positions(mode, root)
    if string is not None:
        candidates = [p for p in candidates if p.string == string]
    if not candidates:
        return None
    # first candidate wins ties
    return min(candidates, key=lambda p: abs(p.fret - target_fret))


def mode_characteristics(mode) -> List[Dict[str, object]]:
    """Each degree of `mode` compared against the same degree of Ionian."""
    result = []
    for i, (value, major) in enumerate(zip(get_mode(mode).intervals, IONIAN_INTERVALS)):
        if value == major:
            quality, description = 'same', 'Same as major scale'
        elif value > major:
            quality, description = 'raised', f"Raised by {value - major} semitone(s)"
        else:
            quality, description = 'lowered', f"Lowered by {major - value} semitone(s)"
        result.append({
            'degree': i + 1,
            'interval': value,
            'quality': quality,
            'description': description,
        })
    return result


def validate_mode_pattern(pattern: ModePattern) -> bool:
    """True when every interval of the mode appears and at least one root exists."""
    expected = set(get_mode(pattern.mode).intervals)
    found = {p.interval for p in pattern.positions}
    if not expected <= found:
        logger.debug("Missing intervals %s in %s pattern", sorted(expected - found), pattern.mode)
        return False
    return bool(pattern.roots)


def group_by_string(positions) -> Dict[int, List[ModePosition]]:
    grouped: Dict[int, List[ModePosition]] = {}
    for p in positions:
        grouped.setdefault(p.string, []).append(p)
    for frets in grouped.values():
        frets.sort(key=lambda p: p.fret)
    return grouped
