from .extractor import QuizExtractor, parse_mcq_questions
from .fallback import create_fallback_questions
from .json_array import extract_json_questions
from .structured import StructuredTextParser, parse_structured_questions

__all__ = [
    "QuizExtractor",
    "parse_mcq_questions",
    "create_fallback_questions",
    "extract_json_questions",
    "StructuredTextParser",
    "parse_structured_questions",
]
