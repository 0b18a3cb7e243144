from enum import Enum
from typing import Literal

import pydantic

from .question import Question


class ExtractionParams(pydantic.BaseModel):
    count: int = pydantic.Field(default=10, ge=0)
    min_structured_questions: int = pydantic.Field(default=5, ge=1)
    # top_up: fill whatever a tier is missing from the next tier
    # continue: keep the partial result of the structured tier once it reaches min_structured_questions
    insufficient_yield_behaviour: Literal["top_up", "continue"] = "top_up"

    seed: int | None = None

    model_config = pydantic.ConfigDict(extra="forbid", frozen=True)


class ExtractionTier(Enum):
    JSON = "json"
    STRUCTURED = "structured"
    FALLBACK = "fallback"

    def __str__(self):
        return self.value


class ExtractionResult(pydantic.BaseModel):
    questions: list[Question]
    tiers: list[ExtractionTier] = []

    def to_dict(self):
        return {
            "questions": [question.to_dict() for question in self.questions],
            "tiers": [str(tier) for tier in self.tiers],
        }
