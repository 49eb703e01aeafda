"""Chord-recognition quiz.

Each question shows one chord played with one CAGED shape somewhere on the
neck; the player names the chord out of all five. Randomness comes only
from the `rng` passed in (anything with `choice` and `shuffle`, normally a
`random.Random`), so a seeded generator replays the same quiz.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from . import config
from .catalog import CAGED_SEQUENCE, Quality, Shape, parse_shape
from .errors import InvalidConfiguration
from .positions import resolve_offset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuizConfig:
    question_count: int = 5
    allowed_chords: Tuple[Shape, ...] = CAGED_SEQUENCE
    allowed_shapes: Tuple[Shape, ...] = CAGED_SEQUENCE
    quiz_mode: str = 'major'

    def __post_init__(self):
        count = self.question_count
        if isinstance(count, bool) or not isinstance(count, int):
            raise InvalidConfiguration(f"questionCount must be an integer, got {count!r}")
        if not config.MIN_QUESTIONS <= count <= config.MAX_QUESTIONS:
            raise InvalidConfiguration(
                f"questionCount must be between {config.MIN_QUESTIONS} and {config.MAX_QUESTIONS}, got {count}")
        if self.quiz_mode not in config.QUIZ_MODES:
            raise InvalidConfiguration(f"quizMode must be one of {', '.join(config.QUIZ_MODES)}")
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, 'allowed_chords', _shape_list(self.allowed_chords, 'allowedChords'))
        object.__setattr__(self, 'allowed_shapes', _shape_list(self.allowed_shapes, 'allowedShapes'))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'QuizConfig':
        """Build from the persisted preferences shape; missing keys take the defaults."""
        if not isinstance(data, Mapping):
            raise InvalidConfiguration("Quiz configuration must be a mapping")
        merged = dict(config.DEFAULT_QUIZ_PREFERENCES)
        merged.update(data)
        return cls(
            question_count=merged['questionCount'],
            allowed_chords=merged['allowedChords'],
            allowed_shapes=merged['allowedShapes'],
            quiz_mode=merged['quizMode'],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'quizMode': self.quiz_mode,
            'questionCount': self.question_count,
            'allowedChords': [s.value for s in self.allowed_chords],
            'allowedShapes': [s.value for s in self.allowed_shapes],
        }


def _shape_list(values, name) -> Tuple[Shape, ...]:
    if isinstance(values, str) or not hasattr(values, '__iter__'):
        raise InvalidConfiguration(f"{name} must be a list of chord letters")
    shapes = []
    for v in values:
        s = parse_shape(v)
        if s not in shapes:
            shapes.append(s)
    if not shapes:
        raise InvalidConfiguration(f"{name} must not be empty")
    return tuple(shapes)


def validate_config(data: Mapping[str, Any]) -> QuizConfig:
    return QuizConfig.from_dict(data)


def load_quiz_config(path: str) -> QuizConfig:
    return QuizConfig.from_dict(config.read_preferences(path))


def save_quiz_config(path: str, quiz_config: QuizConfig) -> None:
    config.write_preferences(path, quiz_config.to_dict())


@dataclass(frozen=True)
class QuizQuestion:
    id: int
    root_chord: Shape
    shape_used: Shape
    position: int
    choices: Tuple[Shape, ...]
    correct_answer: Shape
    quality: Quality = Quality.MAJOR


@dataclass(frozen=True)
class QuizAnswer:
    question_id: int
    selected_answer: Shape
    correct_answer: Shape
    is_correct: bool


def _quality_for(quiz_mode: str, rng) -> Quality:
    if quiz_mode == 'mixed':
        return rng.choice([Quality.MAJOR, Quality.MINOR])
    return Quality(quiz_mode)


def generate_questions(quiz_config: QuizConfig, rng=None) -> List[QuizQuestion]:
    if not isinstance(quiz_config, QuizConfig):
        quiz_config = QuizConfig.from_dict(quiz_config)
    rng = rng or random.Random()

    questions = []
    for i in range(quiz_config.question_count):
        root_chord = rng.choice(quiz_config.allowed_chords)
        shape_used = rng.choice(quiz_config.allowed_shapes)
        position = resolve_offset(root_chord.natural_root, shape_used.natural_root)
        quality = _quality_for(quiz_config.quiz_mode, rng)

        # every chord is offered, never a sample
        choices = list(CAGED_SEQUENCE)
        rng.shuffle(choices)

        questions.append(QuizQuestion(
            id=i + 1,
            root_chord=root_chord,
            shape_used=shape_used,
            position=position,
            choices=tuple(choices),
            correct_answer=root_chord,
            quality=quality,
        ))
    logger.debug("Generated %d questions", len(questions))
    return questions


def validate_answer(question: QuizQuestion, selected) -> bool:
    if isinstance(selected, str):
        return question.correct_answer.value == selected
    return question.correct_answer == selected


def question_description(question: QuizQuestion) -> str:
    suffix = 'm' if question.quality is Quality.MINOR else ''
    return (f"What chord is being played using the {question.shape_used}{suffix} shape "
            f"at position {question.position}?")


@dataclass
class QuizSession:
    """One run through a list of questions, answered in order."""

    questions: List[QuizQuestion] = field(default_factory=list)
    answers: List[QuizAnswer] = field(default_factory=list)
    current_index: int = 0
    score: int = 0
    is_active: bool = False
    is_completed: bool = False

    @classmethod
    def start(cls, quiz_config: QuizConfig, rng=None) -> 'QuizSession':
        return cls(questions=generate_questions(quiz_config, rng), is_active=True)

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Optional[QuizQuestion]:
        if not self.is_active or self.current_index >= len(self.questions):
            return None
        return self.questions[self.current_index]

    def _check_open(self):
        if self.is_completed:
            raise InvalidConfiguration("Quiz is already completed")
        if not self.is_active:
            raise InvalidConfiguration("Quiz has not been started")

    def submit_answer(self, selected) -> QuizAnswer:
        """Record an answer for the current question; each question takes one answer."""
        self._check_open()
        question = self.current_question
        if question is None or len(self.answers) > self.current_index:
            raise InvalidConfiguration("Current question has already been answered")
        selected = parse_shape(selected)
        answer = QuizAnswer(
            question_id=question.id,
            selected_answer=selected,
            correct_answer=question.correct_answer,
            is_correct=validate_answer(question, selected),
        )
        self.answers.append(answer)
        if answer.is_correct:
            self.score += 1
        return answer

    def advance(self) -> Optional[QuizQuestion]:
        """Move to the next question, finishing the quiz after the last one."""
        self._check_open()
        if len(self.answers) <= self.current_index:
            raise InvalidConfiguration("Answer the current question before moving on")
        if self.current_index + 1 >= len(self.questions):
            self.finish()
            return None
        self.current_index += 1
        return self.current_question

    def finish(self) -> None:
        self._check_open()
        self.is_active = False
        self.is_completed = True

    @property
    def progress(self) -> float:
        if not self.questions:
            return 0.0
        return len(self.answers) / len(self.questions) * 100

    @property
    def score_percentage(self) -> int:
        if not self.answers:
            return 0
        return round(self.score / len(self.answers) * 100)

    def results(self) -> Optional[Dict[str, Any]]:
        if not self.is_completed:
            return None
        return {
            'totalQuestions': self.total_questions,
            'correctAnswers': self.score,
            'percentage': self.score_percentage,
            'answers': list(self.answers),
        }
