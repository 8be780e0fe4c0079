from typing import Any, Optional

from utils.exceptions import InvalidArgumentError, ValidationError

QUESTION_COUNT = 3


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(message: str, **fields: Any) -> None:
    """Raise ValidationError naming every field that is missing or blank."""
    missing = [name for name, value in fields.items() if _is_blank(value)]
    if missing:
        raise ValidationError(message, context={"missing": missing})


def resolve_question_number(question_number: Optional[Any]) -> int:
    """Default to 1; anything that is not an integer in [1, QUESTION_COUNT] is rejected."""
    if question_number is None:
        return 1
    if isinstance(question_number, bool) or not isinstance(question_number, int):
        raise InvalidArgumentError(
            "Invalid question number",
            error_code="INVALID_QUESTION_NUMBER",
            context={"question_number": question_number},
        )
    if not 1 <= question_number <= QUESTION_COUNT:
        raise InvalidArgumentError(
            "Invalid question number",
            error_code="INVALID_QUESTION_NUMBER",
            context={"question_number": question_number},
        )
    return question_number
