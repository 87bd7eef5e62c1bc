import re
from typing import Any, List, Optional


_REGEX_SPECIAL = re.compile(r"[.*+?^${}()|\[\]\\]")
_OBJECT_ID = re.compile(r"^[0-9a-fA-F]{24}$")


def escape_regex(value: Any) -> str:
    """Escape regex metacharacters so user input matches literally."""
    if not value or not isinstance(value, str):
        return ""
    return _REGEX_SPECIAL.sub(lambda match: "\\" + match.group(0), value.strip())


def sanitize_string(value: Any, max_length: Optional[int] = None) -> str:
    if not value or not isinstance(value, str):
        return ""
    value = value.strip()
    if max_length is not None:
        value = value[:max_length]
    return value


def sanitize_array(values: Any, max_length: Optional[int] = None) -> List[str]:
    if not isinstance(values, (list, tuple)):
        return []
    cleaned = (sanitize_string(item, max_length) for item in values)
    return [item for item in cleaned if item]


def sanitize_object_id(value: Any) -> Optional[str]:
    """Return the trimmed id if it looks like a MongoDB ObjectId, else None."""
    if not value or not isinstance(value, str):
        return None
    trimmed = value.strip()
    if not _OBJECT_ID.match(trimmed):
        return None
    return trimmed


def sanitize_number(value: Any, minimum: Optional[int] = None,
                    maximum: Optional[int] = None, default: int = 0) -> int:
    """Parse an integer, clamping it to [minimum, maximum]."""
    if isinstance(value, bool):
        return default
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default

    if minimum is not None and number < minimum:
        return minimum
    if maximum is not None and number > maximum:
        return maximum
    return number
