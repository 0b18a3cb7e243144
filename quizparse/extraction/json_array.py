import json
import logging
import re

import pydantic

from quizparse.data_models import Question

LOGGER = logging.getLogger(__name__)

# greedy: from the first `[{"question"` to the last `}]` in the text
JSON_ARRAY_RE = re.compile(r'\[\s*\{\s*"question".*\}\s*\]', re.DOTALL)


def find_json_array(text: str) -> list | None:
    """
    Returns the parsed JSON array of question objects embedded in `text`, or None if there isn't one.
    Raises json.JSONDecodeError if the array is malformed; there is no attempt to repair it.
    """
    match = JSON_ARRAY_RE.search(text)
    if match is None:
        return None
    return json.loads(match.group(0))


def extract_json_questions(text: str) -> list[Question]:
    records = find_json_array(text)
    if records is None:
        LOGGER.info("No JSON question array found in text")
        return []

    questions = []
    for i, record in enumerate(records):
        try:
            questions.append(Question.model_validate(record))
        except pydantic.ValidationError as e:
            LOGGER.warning(f"Dropping JSON question {i} with {e.error_count()} validation error(s)")
            LOGGER.debug(str(e))
    LOGGER.info(f"Found {len(questions)} valid questions in a JSON array of {len(records)}")
    return questions
