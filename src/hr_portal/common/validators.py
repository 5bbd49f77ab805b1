from __future__ import annotations

import re
from typing import Any

from ..core.exceptions import ValidationError

HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


def require_non_empty(value: Any, field_name: str, message: str | None = None) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(message or f"The {field_name} field is required.", field=field_name)
    return str(value).strip()


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"The {field_name} field must not be greater than {max_len} characters.", field=field_name)
    return value


def require_hex_color(value: Any, field_name: str, message: str) -> str:
    if not isinstance(value, str) or not HEX_COLOR_RE.match(value):
        raise ValidationError(message, field=field_name)
    return value


def require_non_negative_int(value: Any, field_name: str) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool):
        raise ValidationError(f"The {field_name} field must be an integer.", field=field_name)
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"The {field_name} field must be an integer.", field=field_name)
    if isinstance(value, float) and value != number:
        raise ValidationError(f"The {field_name} field must be an integer.", field=field_name)
    if number < 0:
        raise ValidationError(f"The {field_name} field must be at least 0.", field=field_name)
    return number


def require_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if value in (0, 1, "0", "1"):
        return bool(int(value))
    if isinstance(value, str) and value.lower() in {"true", "false"}:
        return value.lower() == "true"
    raise ValidationError(f"The {field_name} field must be true or false.", field=field_name)
