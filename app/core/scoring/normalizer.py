"""
Canonical forms of answer values for comparison.
"""
from typing import Any, List, Union


def _normalize_scalar(value: Any) -> str:
    if isinstance(value, bool):
        value = "true" if value else "false"
    return str(value).strip().lower()


def normalize_answer(value: Any) -> Union[str, List[str]]:
    """
    Normalize an answer value: trimmed, lower-cased text, or a sorted list
    of such texts for multi-select answers.
    """
    if isinstance(value, str):
        return value.strip().lower()
    if isinstance(value, (list, tuple)):
        return sorted(_normalize_scalar(item) for item in value)
    return _normalize_scalar(value)


def is_blank(value: Any) -> bool:
    """True for None, whitespace-only strings and empty (or all-blank) lists."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return all(is_blank(item) for item in value)
    return False
