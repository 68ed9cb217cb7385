"""Argument coercion for tool calls.

Tool arguments arrive as an untyped JSON object, so every tool reads its
parameters through these helpers. Each raises ``InvalidArgumentError`` with
the parameter name when a value is missing or has the wrong shape.
"""

from typing import Any

from mail_organizer_mcp.email.models import DEFAULT_MAILBOX
from mail_organizer_mcp.exceptions import InvalidArgumentError


def _type_name(value: Any) -> str:
    return type(value).__name__


def mailbox_arg(arguments: dict[str, Any], key: str = "mailbox") -> str:
    """Return the mailbox argument, defaulting to INBOX when absent or empty."""
    value = arguments.get(key)
    if value is None or value == "":
        return DEFAULT_MAILBOX
    if not isinstance(value, str):
        raise InvalidArgumentError(f"'{key}' must be a string, got {_type_name(value)}")
    return value


def required_str(arguments: dict[str, Any], key: str) -> str:
    value = arguments.get(key)
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"'{key}' is required and must be a non-empty string")
    return value


def int_arg(arguments: dict[str, Any], key: str, default: int | None = None) -> int | None:
    """Return an integer argument.

    JSON numbers may arrive as floats; whole floats are accepted, booleans
    are not.
    """
    value = arguments.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        raise InvalidArgumentError(f"'{key}' must be a number, got bool")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, int):
        raise InvalidArgumentError(f"'{key}' must be a whole number, got {value!r}")
    return value


def bool_arg(arguments: dict[str, Any], key: str, default: bool | None = None) -> bool | None:
    value = arguments.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise InvalidArgumentError(f"'{key}' must be a boolean, got {_type_name(value)}")
    return value


def uids_arg(arguments: dict[str, Any], key: str = "uids") -> list[int]:
    """Return a non-empty list of positive message UIDs."""
    value = arguments.get(key)
    if not isinstance(value, list) or not value:
        raise InvalidArgumentError(f"'{key}' must be a non-empty array of message UIDs")

    uids: list[int] = []
    for item in value:
        if isinstance(item, float) and item.is_integer():
            item = int(item)
        if isinstance(item, bool) or not isinstance(item, int) or item <= 0:
            raise InvalidArgumentError(f"'{key}' contains an invalid UID: {item!r}")
        uids.append(item)
    return uids


def uid_arg(arguments: dict[str, Any], key: str = "uid") -> int:
    uid = int_arg(arguments, key)
    if uid is None or uid <= 0:
        raise InvalidArgumentError(f"'{key}' is required and must be a positive number")
    return uid


def flags_arg(arguments: dict[str, Any], key: str = "flags") -> list[str]:
    """Return flag names verbatim. A single string is treated as one flag."""
    value = arguments.get(key)
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not value:
        raise InvalidArgumentError(f"'{key}' must be a non-empty array of flag names")
    if not all(isinstance(flag, str) and flag for flag in value):
        raise InvalidArgumentError(f"'{key}' must contain only non-empty strings")
    return list(value)
