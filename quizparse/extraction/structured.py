"""
Recovers multiple-choice questions from prose laid out as

    1. Which planet is closest to the sun?
    A. Mercury
    B. Venus
    C. Earth
    D. Mars
    Correct: A

The text is walked line by line through a small state machine:

    SEEK_QUESTION -> SEEK_OPTIONS -> SEEK_CORRECT_MARKER -> EMIT -> SEEK_QUESTION

A numbered line always starts a new question, emitting the previous one. A question
is only kept if at least four lettered options were found before the next one.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum, auto

from quizparse.data_models import ANSWER_LETTERS, NUM_OPTIONS, Question

LOGGER = logging.getLogger(__name__)

# "1. text", "**2. text"; not "3.5 text"
QUESTION_RE = re.compile(r"^\s*(?:\*\*)?\s*\d+\.(?!\d)\s*(?P<text>.*)$")
# "A. text", "b) text", "**C.** text"
OPTION_RE = re.compile(r"^\s*(?:\*\*)?(?P<letter>[A-Da-d])[.)]\s*(?P<text>.*)$")
CORRECT_MARKER_RE = re.compile(
    r"""
    \b
    (?:
        (?:correct(?:\s+(?:answer|option))? | right\s+answer)
        (?:\s+is)? [\s:*\-]* \(?
        (?P<letter>[A-D])
    |
        # a bare "answer" needs an upper-case letter, not "answer a question"
        answer
        (?:\s+is)? [\s:*\-]* \(?
        (?-i:(?P<answer_letter>[A-D]))
    )
    \b
    """,
    re.IGNORECASE | re.VERBOSE,
)


class ParserState(Enum):
    SEEK_QUESTION = auto()
    SEEK_OPTIONS = auto()
    SEEK_CORRECT_MARKER = auto()
    EMIT = auto()


@dataclass
class _Candidate:
    question: str
    options: list[str] = field(default_factory=list)
    correct_answer: int | None = None


class StructuredTextParser:
    def __init__(self):
        self.state = ParserState.SEEK_QUESTION
        self.questions: list[Question] = []
        self._pending: str | None = None
        self._candidate: _Candidate | None = None
        self._zone_has_text = False

    def parse(self, text: str) -> list[Question]:
        for line in text.splitlines():
            self._step(line)
        self._emit()
        return self.questions

    def _step(self, line: str) -> None:
        if self.state == ParserState.EMIT:
            self._emit()

        question_match = QUESTION_RE.match(line)
        if question_match is not None:
            self._emit()
            self._start_question(question_match.group("text"))
            return

        match self.state:
            case ParserState.SEEK_QUESTION:
                self._continue_question(line)
            case ParserState.SEEK_OPTIONS:
                self._seek_options(line)
            case ParserState.SEEK_CORRECT_MARKER:
                self._seek_correct_marker(line)

    def _start_question(self, text: str) -> None:
        head, mark, rest = text.partition("?")
        if not mark:
            # the question may continue on the next line
            self._pending = text.strip()
            return

        self._pending = None
        question = head.strip(" *")
        if not question:
            return
        self._candidate = _Candidate(question=f"{question}?")
        self.state = ParserState.SEEK_OPTIONS
        if rest.strip(" *"):
            self._seek_options(rest)

    def _continue_question(self, line: str) -> None:
        if self._pending is None:
            return
        if not line.strip() or OPTION_RE.match(line):
            LOGGER.debug(f"Abandoning numbered line without a question mark: {self._pending!r}")
            self._pending = None
            return
        self._start_question(f"{self._pending} {line.strip()}")

    def _seek_options(self, line: str) -> None:
        option_match = OPTION_RE.match(line)
        if option_match is not None:
            option = option_match.group("text").strip(" *")
            if option:
                self._candidate.options.append(option)
            return

        if not line.strip():
            if self._candidate.options:
                self.state = ParserState.SEEK_CORRECT_MARKER
            return

        self._find_correct_marker(line)

    def _seek_correct_marker(self, line: str) -> None:
        if self._candidate.correct_answer is None and OPTION_RE.match(line):
            # options separated by blank lines
            self.state = ParserState.SEEK_OPTIONS
            self._seek_options(line)
            return

        if not line.strip():
            if self._zone_has_text:
                self.state = ParserState.EMIT
            return

        self._zone_has_text = True
        self._find_correct_marker(line)

    def _find_correct_marker(self, line: str) -> None:
        if self._candidate.correct_answer is not None:
            return
        marker_match = CORRECT_MARKER_RE.search(line)
        if marker_match is not None:
            letter = marker_match.group("letter") or marker_match.group("answer_letter")
            self._candidate.correct_answer = ANSWER_LETTERS.index(letter.upper())

    def _emit(self) -> None:
        candidate = self._candidate
        self._candidate = None
        self._pending = None
        self._zone_has_text = False
        self.state = ParserState.SEEK_QUESTION
        if candidate is None:
            return

        if len(candidate.options) < NUM_OPTIONS:
            LOGGER.debug(f"Skipping {candidate.question!r}: only {len(candidate.options)} options")
            return

        correct_answer = candidate.correct_answer if candidate.correct_answer is not None else 0
        self.questions.append(
            Question(
                question=candidate.question,
                options=candidate.options[:NUM_OPTIONS],
                correct_answer=correct_answer,
            )
        )


def parse_structured_questions(text: str) -> list[Question]:
    questions = StructuredTextParser().parse(text)
    LOGGER.info(f"Recovered {len(questions)} questions from structured text")
    return questions
