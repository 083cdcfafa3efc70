"""
Normalization of raw node parameter values.

Host parameters arrive loosely typed: strings with stray whitespace,
comma-separated ID lists, JSON either pre-parsed or as text. These
helpers turn them into the clean values request models expect, with
"absent" consistently represented as None so it can be omitted.
"""

import json
from typing import Any, Dict, List, Optional, Tuple, Type, Union

from node_sdk import ValidationError


def clean_str(value: Any) -> str:
    """Stringify and trim; None becomes the empty string."""
    if value is None:
        return ""
    return str(value).strip()


def optional_str(value: Any) -> Optional[str]:
    """Trimmed string, or None when blank."""
    return clean_str(value) or None


def require_str(value: Any, label: str) -> str:
    """Trimmed string that must not be blank."""
    text = clean_str(value)
    if not text:
        raise ValidationError(f"{label} is required")
    return text


def split_ids(value: Any) -> Optional[List[str]]:
    """
    Split a comma-separated ID list into trimmed, non-empty, unique tokens.

    Lists are accepted as-is (each entry trimmed). Returns None when no
    token remains, so callers can omit the field.
    """
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        raw = [clean_str(part) for part in value]
    else:
        raw = [part.strip() for part in str(value).split(",")]
    tokens = list(dict.fromkeys(part for part in raw if part))
    return tokens or None


def join_ids(value: Any) -> Optional[str]:
    """Normalized comma-joined ID list for query-string filters."""
    tokens = split_ids(value)
    return ",".join(tokens) if tokens else None


def parse_json(
    value: Any,
    label: str,
    expected: Union[Type, Tuple[Type, ...]] = dict,
    default: str = "{}",
) -> Any:
    """
    Accept a pre-parsed value or JSON text.

    Empty text parses as `default`. Malformed JSON, or a value that is not
    of the `expected` type, raises ValidationError.
    """
    if value is None:
        value = default
    if isinstance(value, str):
        text = value.strip() or default
        try:
            value = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"{label} must be valid JSON",
                description=f"{e.msg} at line {e.lineno} column {e.colno}",
            ) from e
    if expected and not isinstance(value, expected):
        kinds = expected if isinstance(expected, tuple) else (expected,)
        kind = " or ".join("an array" if k is list else "an object" for k in kinds)
        raise ValidationError(f"{label} must be {kind}")
    return value


def optional_object(value: Any, label: str) -> Optional[Dict[str, Any]]:
    """JSON object field omitted when empty."""
    parsed = parse_json(value, label, dict)
    return parsed or None


def optional_array(value: Any, label: str) -> Optional[List[Any]]:
    """JSON array field; empty text means not provided."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_json(value, label, list, default="[]")


def optional_number(value: Any) -> Optional[Any]:
    """Number parameter, None when absent or blank."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return value


def optional_bool(value: Any) -> Optional[bool]:
    """Boolean parameter, None when absent."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)
