"""CAGED chord shapes, modes and quiz questions mapped onto the guitar fretboard."""

from .catalog import (ALL_MODES, CAGED_SEQUENCE, MODE_DATA, SHAPES_BY_QUALITY, Mode,
                      ModeDefinition, Quality, Shape, ShapeDefinition, get_mode, get_shape)
from .errors import CagedError, InvalidConfiguration, InvalidNote, OutOfRangeIndex
from .fretboard import ChordView, ModeView
from .modes import calculate_mode_pattern, optimal_display_range, root_positions
from .pitch import interval, note_to_number, number_to_note, transpose
from .positions import natural_sequence, realize_shape, resolve_offset, shape_fret
from .quiz import QuizConfig, QuizSession, generate_questions, validate_answer
from .style import resolve_style
from .tuning import STRING_TUNING, is_natural_note_at, note_name_at

__version__ = "0.1.0"
