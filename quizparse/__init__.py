"""Repairs the output of a text generation model into well-formed multiple-choice questions."""

from .data_models import ExtractionParams, ExtractionResult, ExtractionTier, Question
from .extraction import QuizExtractor, parse_mcq_questions

__all__ = [
    "ExtractionParams",
    "ExtractionResult",
    "ExtractionTier",
    "Question",
    "QuizExtractor",
    "parse_mcq_questions",
]

__version__ = "0.1.0"
