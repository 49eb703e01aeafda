# Command line front end: draw diagrams or run the chord quiz in a terminal

import argparse
import logging
import random
import sys

from .catalog import ALL_MODES, CAGED_SEQUENCE, Quality
from .config import TOTAL_FRETS, preset
from .errors import CagedError
from .fretboard import ChordView, ModeView
from .modes import optimal_display_range
from .pitch import number_to_note
from .positions import natural_sequence
from .quiz import QuizConfig, QuizSession, load_quiz_config, question_description
from .render import (chord_labels, chord_title, mode_labels, noteboard_labels,
                     render_labels)

logger = logging.getLogger(__name__)

MAKES = ('chord', 'sequence', 'mode', 'noteboard', 'quiz')


def build_parser():
    parser = argparse.ArgumentParser(
        prog="caged",
        description="CAGED chord shapes, modes and a chord-recognition quiz for guitar"
    )

    parser.add_argument(
        "-m", "--make",
        choices=MAKES,
        default="chord",
        help="What to build: one chord diagram, one diagram per shape in CAGED order, "
             "a mode diagram, the note board, or an interactive quiz"
    )

    parser.add_argument("-c", "--chord", default="C", help="CAGED chord (C, A, G, E or D)")
    parser.add_argument("-q", "--quality", default="major", choices=[q.value for q in Quality])
    parser.add_argument("-s", "--shape", default=None,
                        help="Show one shape; without it every shape is drawn at once")
    parser.add_argument("--mode", default="ionian", choices=[m.value for m in ALL_MODES])
    parser.add_argument("--root", default="C", help="Root note of the mode (any of the 12)")
    parser.add_argument("--pentatonic", action="store_true", help="Overlay the pentatonic scale")
    parser.add_argument("--notes", action="store_true", help="Label natural notes on empty cells")
    parser.add_argument("--degrees", action="store_true", help="Label mode positions with scale degrees")
    parser.add_argument("--frame", action="store_true", help="Crop a mode diagram to the frets around its roots")
    parser.add_argument("--frets", type=int, default=TOTAL_FRETS, help="Highest fret drawn")
    parser.add_argument("--scale", type=int, default=2, help="Supersampling factor")
    parser.add_argument("--font", default="Arial Bold.ttf", help="TrueType font for labels")

    parser.add_argument("--config", default=None, help="Quiz preferences file (JSON or YAML)")
    parser.add_argument("--preset", default=None, help="Quiz preset: beginner, intermediate or advanced")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a repeatable quiz")

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "name",
        nargs="?",
        default=None,
        help="Optional filename override"
    )

    return parser


def _render(args, labels, output, title, min_fret=0, max_fret=None):
    render_labels(output, labels, min_fret=min_fret, max_fret=args.frets if max_fret is None else max_fret,
                  font_path=args.font, scale=args.scale, title=title)
    print(f"Saved: {output}")


def make_chord(args):
    view = ChordView(args.chord, args.quality, args.shape)
    shape = view.shape.value if view.shape else 'all'
    output = args.name or f"fretboard_with_{view.chord}_{view.quality}_{shape}.png"
    labels = chord_labels(view, show_pentatonic=args.pentatonic, show_all_notes=args.notes, max_fret=args.frets)
    _render(args, labels, output, chord_title(view))
    return [output]


def make_sequence(args):
    outputs = []
    for n, shape in enumerate(natural_sequence(args.chord)):
        view = ChordView(args.chord, args.quality, shape)
        output = f"fretboard_with_{view.chord}_{view.quality}_{n + 1}_{shape}.png"
        labels = chord_labels(view, show_pentatonic=args.pentatonic, show_all_notes=args.notes,
                              max_fret=args.frets)
        _render(args, labels, output, chord_title(view))
        outputs.append(output)
    return outputs


def make_mode(args):
    view = ModeView(args.mode, args.root)
    root = number_to_note(view.root)
    labels = mode_labels(view, degrees=args.degrees, max_fret=args.frets)
    window = optimal_display_range(view.mode, view.root, args.frets) if args.frame else (0, args.frets)
    output = args.name or f"fretboard_with_{root.replace('#', 's')}_{view.mode}.png"
    _render(args, labels, output, f"{root} {view.definition.display_name}", *window)
    return [output]


def make_noteboard(args):
    output = args.name or "fretboard_with_noteboard.png"
    _render(args, noteboard_labels(args.frets), output, None)
    return [output]


def quiz_config_from_args(args) -> QuizConfig:
    if args.preset:
        return QuizConfig.from_dict(preset(args.preset))
    if args.config:
        return load_quiz_config(args.config)
    return QuizConfig()


def run_quiz(session: QuizSession, ask=input, out=print):
    """Ask every question in turn until the session completes."""
    letters = ', '.join(s.value for s in CAGED_SEQUENCE)
    while session.is_active:
        question = session.current_question
        out(f"Question {question.id}/{session.total_questions}: {question_description(question)}")
        out(f"Choices: {', '.join(c.value for c in question.choices)}")
        while True:
            reply = ask("> ").strip()
            try:
                answer = session.submit_answer(reply)
                break
            except CagedError:
                out(f"Please answer with one of {letters}")
        if answer.is_correct:
            out("Correct!")
        else:
            out(f"Wrong, it was {answer.correct_answer}.")
        session.advance()

    results = session.results()
    out(f"Score: {results['correctAnswers']}/{results['totalQuestions']} ({results['percentage']}%)")
    return results


def make_quiz(args):
    rng = random.Random(args.seed)
    session = QuizSession.start(quiz_config_from_args(args), rng)
    return run_quiz(session)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
        logger.debug("Arguments: %s", vars(args))

    makers = {
        'chord': make_chord,
        'sequence': make_sequence,
        'mode': make_mode,
        'noteboard': make_noteboard,
        'quiz': make_quiz,
    }
    try:
        makers[args.make](args)
    except CagedError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except (EOFError, KeyboardInterrupt):
        print("", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
