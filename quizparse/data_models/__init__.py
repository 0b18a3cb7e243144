from .extraction import ExtractionParams, ExtractionResult, ExtractionTier
from .question import ANSWER_LETTERS, NUM_OPTIONS, Question, answer_to_index

__all__ = [
    "ExtractionParams",
    "ExtractionResult",
    "ExtractionTier",
    "ANSWER_LETTERS",
    "NUM_OPTIONS",
    "Question",
    "answer_to_index",
]
