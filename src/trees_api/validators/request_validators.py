"""
Helpers for the checks route handlers run before touching the database.
"""

from typing import Any


def parse_path_id(raw: str) -> int | None:
    """
    Convert a path id to an integer, or None when it cannot name any row.

    Only plain ASCII digit strings are ids: "3" -> 3, while " 3 ", "0_3",
    "+3", "3.5", "abc", "" and non-ASCII digits such as "٣" -> None.
    """
    if not isinstance(raw, str) or not (raw.isascii() and raw.isdigit()):
        return None
    return int(raw)


def ids_match(pk: int | None, body_id: Any) -> bool:
    """
    True when a JSON body id names the same row as the path id.

    The body value is compared as sent: the string "3" or the boolean true
    never match path id 3.
    """
    if pk is None or isinstance(body_id, bool) or not isinstance(body_id, (int, float)):
        return False
    return body_id == pk


def is_provided(value: Any) -> bool:
    """
    True when an update value should overwrite the stored one.

    A value counts as provided when it is defined, non-empty and non-zero:
    None, "", 0 and 0.0 leave the existing column unchanged.
    """
    if value is None:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0
    return True
