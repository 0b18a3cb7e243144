from typing import Any, Callable, Sequence

import pydantic
from termcolor import cprint

ANSWER_LETTERS = "ABCD"
NUM_OPTIONS = len(ANSWER_LETTERS)

# keys a model might use for the correct answer, in order of preference
CORRECT_ANSWER_KEYS = ("correctAnswer", "correct_answer", "answer")

PRINT_COLORS = {
    "question": "cyan",
    "option": "white",
    "correct": "light_green",
}


def answer_to_index(answer: Any, options: Sequence[str]) -> int | None:
    """
    Converts the many ways a model writes down the correct answer into an option index.
    Accepts an int, a letter (optionally followed by ")" or "."), a numeric string naming an
    index, or the text of an option. A numeric string is read as an index when it is in range,
    even if it also matches an option. Returns None if the answer cannot be interpreted.
    """
    if isinstance(answer, bool):
        return None
    if isinstance(answer, int):
        return answer
    if not isinstance(answer, str):
        return None

    s = answer.strip()
    letter = s.rstrip(").").upper()
    if len(letter) == 1 and letter in ANSWER_LETTERS:
        return ANSWER_LETTERS.index(letter)
    if s.isdecimal() and int(s) < NUM_OPTIONS:
        return int(s)
    if s in options:
        return list(options).index(s)
    if s.isdecimal():
        return int(s)
    return None


class Question(pydantic.BaseModel):
    question: str
    options: list[str]
    correct_answer: int = pydantic.Field(alias="correctAnswer", ge=0, le=NUM_OPTIONS - 1)

    model_config = pydantic.ConfigDict(populate_by_name=True)

    @pydantic.model_validator(mode="before")
    @classmethod
    def normalise_correct_answer(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        data = dict(data)
        raw_answers = [data.pop(key) for key in CORRECT_ANSWER_KEYS if key in data]
        if not raw_answers:
            return data

        options = data.get("options")
        if not isinstance(options, list):
            options = []
        index = answer_to_index(raw_answers[0], options)
        data["correctAnswer"] = raw_answers[0] if index is None else index
        return data

    @pydantic.field_validator("question")
    @classmethod
    def check_question(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("question text must not be empty")
        return v

    @pydantic.field_validator("options")
    @classmethod
    def check_options(cls, v: list[str]) -> list[str]:
        if len(v) != NUM_OPTIONS:
            raise ValueError(f"expected {NUM_OPTIONS} options, got {len(v)}")
        if any(not option.strip() for option in v):
            raise ValueError("options must not be empty")
        return v

    def __str__(self) -> str:
        lines = [self.question]
        for letter, option in zip(ANSWER_LETTERS, self.options):
            lines.append(f"{letter}. {option}")
        lines.append(f"Correct: {ANSWER_LETTERS[self.correct_answer]}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)

    def pretty_print(self, print_fn: Callable | None = None) -> None:
        if print_fn is None:
            print_fn = cprint

        print_fn(self.question, PRINT_COLORS["question"])
        for i, (letter, option) in enumerate(zip(ANSWER_LETTERS, self.options)):
            if i == self.correct_answer:
                print_fn(f"  {letter}. {option}", PRINT_COLORS["correct"], attrs=["bold"])
            else:
                print_fn(f"  {letter}. {option}", PRINT_COLORS["option"])
        print_fn("")
