import logging
import random
import re

from quizparse.data_models import NUM_OPTIONS, Question

LOGGER = logging.getLogger(__name__)

SENTENCE_SPLIT_RE = re.compile(r"[.?!]\s+")
CORRECT_PHRASE_RE = re.compile(r"\b\w{4,}\b")
TRAILING_PUNCTUATION_RE = re.compile(r"[,.?!:;]$")

NUM_DISTRACTORS = NUM_OPTIONS - 1
GENERIC_OPTIONS = (
    "First possible answer",
    "Second possible answer",
    "Third possible answer",
    "Fourth possible answer",
)


def is_question_worthy(sentence: str) -> bool:
    return "?" in sentence or len(sentence) > 30


def harvest_distractors(sentences: list[str], index: int) -> list[str]:
    """
    Collects up to three distractors for sentences[index], one from each of the other sentences.
    A distractor is a window of up to five words centred on a long word the question does not use.
    Pads with "Option k" placeholders if the text runs out.
    """
    words_to_avoid = {word.lower() for word in sentences[index].split() if len(word) > 4}

    distractors: list[str] = []
    for j, other in enumerate(sentences):
        if len(distractors) >= NUM_DISTRACTORS:
            break
        if j == index or len(other) <= 15:
            continue

        words = other.split()
        for k, word in enumerate(words):
            if len(word) <= 4 or word.lower() in words_to_avoid:
                continue
            option = TRAILING_PUNCTUATION_RE.sub("", " ".join(words[max(0, k - 2) : k + 3]))
            if len(option) > 5 and option not in distractors:
                distractors.append(option)
                break

    while len(distractors) < NUM_DISTRACTORS:
        distractors.append(f"Option {len(distractors) + 1}")
    return distractors


def generic_question(number: int, rng: random.Random) -> Question:
    return Question(
        question=f"Question {number} related to the subject?",
        options=list(GENERIC_OPTIONS),
        correct_answer=rng.randrange(NUM_OPTIONS),
    )


def create_fallback_questions(
    text: str,
    count: int,
    rng: random.Random | None = None,
    offset: int = 0,
    skip_questions: set[str] | None = None,
) -> list[Question]:
    """
    Synthesises `count` questions from the vocabulary of arbitrary text.
    Works on any input, padding with generic questions numbered from offset + 1.
    Sentences whose question text (lower-cased) is in `skip_questions`, or was already
    generated, are not used again.
    """
    if rng is None:
        rng = random.Random()
    seen = set(skip_questions) if skip_questions is not None else set()

    sentences = SENTENCE_SPLIT_RE.split(text)
    questions: list[Question] = []
    for i, raw_sentence in enumerate(sentences):
        if len(questions) >= count:
            break
        sentence = raw_sentence.strip()
        if not is_question_worthy(sentence):
            continue

        question_text = sentence.rstrip(".!")
        if not question_text.endswith("?"):
            question_text = f"{question_text}?"
        if question_text.lower() in seen:
            LOGGER.debug(f"Skipping sentence already used as a question: {question_text!r}")
            continue
        seen.add(question_text.lower())

        options = harvest_distractors(sentences, i)
        phrases = CORRECT_PHRASE_RE.findall(sentence)
        correct_option = rng.choice(phrases) if phrases else "Correct option"
        position = rng.randrange(NUM_OPTIONS)
        options.insert(position, correct_option)

        questions.append(
            Question(
                question=question_text,
                options=options,
                correct_answer=position,
            )
        )

    num_generated = len(questions)
    while len(questions) < count:
        questions.append(generic_question(offset + len(questions) + 1, rng))
    LOGGER.info(f"Generated {num_generated} questions from text and {len(questions) - num_generated} generic ones")
    return questions
