"""
Strict decoder for quiz-generation output.

The model is told to answer with a raw JSON array of three question strings.
Fenced-code markup is tolerated and stripped; anything else that is not a
bracket-delimited JSON array of exactly three non-empty strings is rejected.
"""

import json
import logging
import re
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from models.tutor_models import QuizQuestionSet
from utils.exceptions import QuizDecodeError

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^\s*```[A-Za-z0-9_-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?[ \t]*```\s*$")


def strip_code_fences(text: str) -> str:
    cleaned = _FENCE_OPEN.sub("", text, count=1)
    cleaned = _FENCE_CLOSE.sub("", cleaned, count=1)
    return cleaned.strip()


def decode_quiz(raw: Optional[str]) -> QuizQuestionSet:
    """
    Decode model output into a QuizQuestionSet.
    Raises:
        QuizDecodeError on empty output, missing brackets, bad JSON or wrong shape.
    """
    if raw is None or not raw.strip():
        raise QuizDecodeError("Model returned no quiz content")

    cleaned = strip_code_fences(raw)
    if not cleaned.startswith("[") or not cleaned.endswith("]"):
        logger.warning(f"Quiz output is not a JSON array: {cleaned[:200]}")
        raise QuizDecodeError("Generated content is not a valid JSON array")

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning(f"Quiz output failed JSON parsing: {e}")
        raise QuizDecodeError("Generated content is not valid JSON", context={"position": e.pos}) from e

    if not isinstance(parsed, list) or len(parsed) != 3:
        raise QuizDecodeError(
            "Generated content is not a valid array of 3 questions",
            context={"count": len(parsed) if isinstance(parsed, list) else None},
        )

    try:
        return QuizQuestionSet(questions=parsed)
    except PydanticValidationError as e:
        raise QuizDecodeError("Generated questions must be non-empty strings") from e
