import logging
import random

from quizparse.data_models import ExtractionParams, ExtractionResult, ExtractionTier, Question

from .fallback import create_fallback_questions
from .json_array import extract_json_questions
from .structured import parse_structured_questions

LOGGER = logging.getLogger(__name__)


class QuizExtractor:
    """
    Turns the raw output of a text generation model into exactly `params.count` multiple-choice questions.

    Three tiers are tried in order, each only if the previous ones came up short:
        1. a JSON array of question objects embedded in the text
        2. numbered questions with lettered options and a "Correct: X" marker
        3. questions synthesised from the sentences of the text, then generic padding

    Errors raised while parsing tiers 1 and 2 are logged and treated as an empty yield.
    """

    def __init__(self, params: ExtractionParams | None = None, rng: random.Random | None = None):
        """
        `rng` drives the fallback tier. If not given, one is seeded from `params.seed`
        (which is None, i.e. system entropy, unless set).
        """
        self.params = params if params is not None else ExtractionParams()
        self.rng = rng if rng is not None else random.Random(self.params.seed)

    def __call__(self, text: str | None) -> ExtractionResult:
        text = text or ""
        if self.params.count == 0:
            return ExtractionResult(questions=[])

        match self.params.insufficient_yield_behaviour:
            case "top_up":
                result = self._extract_top_up(text)
            case "continue":
                result = self._extract_continue(text)

        LOGGER.info(f"Extracted {len(result.questions)} questions using tiers {[str(t) for t in result.tiers]}")
        return result

    def _try_json(self, text: str) -> list[Question]:
        try:
            return extract_json_questions(text)
        except Exception as e:
            LOGGER.warning(f"JSON tier failed with error {e!r}")
            return []

    def _try_structured(self, text: str) -> list[Question]:
        try:
            return parse_structured_questions(text)
        except Exception as e:
            LOGGER.warning(f"Structured text tier failed with error {e!r}")
            return []

    def _extract_continue(self, text: str) -> ExtractionResult:
        count = self.params.count

        questions = self._try_json(text)
        if len(questions) >= count:
            return ExtractionResult(questions=questions[:count], tiers=[ExtractionTier.JSON])
        LOGGER.info(f"JSON tier yielded {len(questions)} of {count} questions, discarding")

        questions = self._try_structured(text)
        if len(questions) >= self.params.min_structured_questions:
            if len(questions) < count:
                LOGGER.warning(f"Returning only {len(questions)} of {count} questions from structured text")
            return ExtractionResult(questions=questions[:count], tiers=[ExtractionTier.STRUCTURED])
        LOGGER.info(
            f"Structured tier yielded {len(questions)} questions, "
            f"need at least {self.params.min_structured_questions}, discarding"
        )

        questions = create_fallback_questions(text, count, self.rng)
        return ExtractionResult(questions=questions, tiers=[ExtractionTier.FALLBACK])

    def _extract_top_up(self, text: str) -> ExtractionResult:
        count = self.params.count
        questions: list[Question] = []
        tiers: list[ExtractionTier] = []

        json_questions = self._try_json(text)[:count]
        if json_questions:
            questions.extend(json_questions)
            tiers.append(ExtractionTier.JSON)

        seen = {question.question.strip().lower() for question in questions}
        if len(questions) < count:
            num_before = len(questions)
            for question in self._try_structured(text):
                if len(questions) >= count:
                    break
                key = question.question.strip().lower()
                if key in seen:
                    LOGGER.debug(f"Skipping duplicate question {question.question!r}")
                    continue
                seen.add(key)
                questions.append(question)
            if len(questions) > num_before:
                tiers.append(ExtractionTier.STRUCTURED)

        if len(questions) < count:
            needed = count - len(questions)
            LOGGER.info(f"Topping up {needed} questions with the fallback tier")
            questions.extend(
                create_fallback_questions(text, needed, self.rng, offset=len(questions), skip_questions=seen)
            )
            tiers.append(ExtractionTier.FALLBACK)

        return ExtractionResult(questions=questions, tiers=tiers)


def parse_mcq_questions(text: str | None, count: int = 10, rng: random.Random | None = None) -> list[Question]:
    """Returns exactly `count` questions extracted from `text`."""
    return QuizExtractor(ExtractionParams(count=count), rng=rng)(text).questions
