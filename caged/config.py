# Engine defaults, quiz presets and the on-disk quiz preferences file

import json
import logging
import os
from typing import Any, Dict

import yaml

from .errors import InvalidConfiguration

logger = logging.getLogger(__name__)

TOTAL_FRETS = 15
DISPLAY_PADDING = 2  # frets shown either side of the outermost roots
MODE_BOX_SPAN = 4

MIN_QUESTIONS = 1
MAX_QUESTIONS = 50

QUIZ_MODES = ('major', 'minor', 'mixed')
ALL_CHORDS = ['C', 'A', 'G', 'E', 'D']

# persisted shape: {quizMode, questionCount, allowedChords, allowedShapes}
DEFAULT_QUIZ_PREFERENCES: Dict[str, Any] = {
    'quizMode': 'major',
    'questionCount': 5,
    'allowedChords': list(ALL_CHORDS),
    'allowedShapes': list(ALL_CHORDS),
}

QUIZ_PRESETS: Dict[str, Dict[str, Any]] = {
    'beginner': {
        'questionCount': 5,
        'allowedChords': ['C', 'G', 'D'],
        'allowedShapes': ['C', 'G', 'D'],
    },
    'intermediate': {
        'questionCount': 5,
        'allowedChords': list(ALL_CHORDS),
        'allowedShapes': list(ALL_CHORDS),
    },
    'advanced': {
        'questionCount': 10,
        'allowedChords': list(ALL_CHORDS),
        'allowedShapes': list(ALL_CHORDS),
    },
}


def preset(name: str) -> Dict[str, Any]:
    """Preferences for a named preset, filled out with the defaults."""
    try:
        values = QUIZ_PRESETS[name]
    except KeyError:
        raise InvalidConfiguration(
            f"Unknown quiz preset {name!r}; choose from {', '.join(QUIZ_PRESETS)}") from None
    merged = dict(DEFAULT_QUIZ_PREFERENCES)
    merged.update(values)
    return merged


def read_preferences(path: str) -> Dict[str, Any]:
    """Raw preferences mapping from a JSON (or YAML) file.

    A missing file gives the defaults. Contents are validated by the quiz
    module, this only checks that the document is a mapping.
    """
    if not os.path.exists(path):
        logger.debug("No preferences at %s, using defaults", path)
        return dict(DEFAULT_QUIZ_PREFERENCES)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidConfiguration(f"Could not parse preferences file {path}: {e}") from e
    if not isinstance(data, dict):
        raise InvalidConfiguration(f"Preferences file {path} must hold a mapping")
    return data


def write_preferences(path: str, preferences: Dict[str, Any]) -> None:
    with open(path, 'w') as f:
        json.dump(preferences, f, indent=2)
    logger.debug("Saved preferences to %s", path)
