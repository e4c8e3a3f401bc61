"""Form data contract shared by the generation client and the renderers."""

from .models import OPTION_TYPES, Question, QuestionType, parse_questions

__all__ = [
    "OPTION_TYPES",
    "Question",
    "QuestionType",
    "parse_questions",
]
