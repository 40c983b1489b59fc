import re
from typing import Any, Optional

from catalog.core.exceptions import ValidationError

RATING_MIN = 1
RATING_MAX = 5

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required and must be a non-empty string", field)
    return value


def optional_text(value: Any, field: str) -> Optional[str]:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string", field)
    return value


def parse_rating_value(value: Any) -> int:
    message = f"ratingValue must be an integer between {RATING_MIN} and {RATING_MAX}"

    # bool is an int subclass
    if value is None or isinstance(value, bool):
        raise ValidationError(message, "ratingValue")

    if isinstance(value, int):
        rating = value
    elif isinstance(value, float) and value.is_integer():
        rating = int(value)
    elif isinstance(value, str) and _INTEGER_PATTERN.fullmatch(value.strip()):
        rating = int(value.strip())
    else:
        raise ValidationError(message, "ratingValue")

    if not RATING_MIN <= rating <= RATING_MAX:
        raise ValidationError(message, "ratingValue")
    return rating


def normalize_feedback_text(value: Any, min_length: int, max_length: int) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("feedbackText must not be empty", "feedbackText")

    text = value.strip()
    if len(text) < min_length:
        raise ValidationError(
            f"feedbackText is too short (minimum {min_length} characters)",
            "feedbackText"
        )
    if len(text) > max_length:
        raise ValidationError(
            f"feedbackText is too long (maximum {max_length} characters)",
            "feedbackText"
        )
    return text
