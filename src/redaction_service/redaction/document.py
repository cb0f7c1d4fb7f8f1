"""
Dotted-path access into nested record documents.

Documents are plain JSON-shaped values: dicts, lists and scalars. Paths
address dict keys only; a path that runs into a list resolves to ABSENT
and lists are never traversed or created.
"""

import copy
from typing import Any


class _Absent:
    """Sentinel for "no value at this path" (distinct from a stored None)."""
    
    _instance = None
    
    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance
    
    def __repr__(self) -> str:
        return "ABSENT"
    
    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


def split_path(path: str) -> list[str]:
    """Split a dotted path into its segments."""
    return path.split(".")


def get_path(document: Any, path: str) -> Any:
    """
    Resolve a dotted path against a document.
    
    Args:
        document: Root of the document tree
        path: Dotted path, e.g. "profile.email"
    
    Returns:
        The value at the path (may be None if stored as null), or ABSENT if
        any segment is missing or an intermediate is null, a scalar or a list.
    
    Examples:
        >>> get_path({"profile": {"email": "a@b.com"}}, "profile.email")
        'a@b.com'
        >>> get_path({"phones": ["1", "2"]}, "phones.0")
        ABSENT
    """
    current = document
    for key in split_path(path):
        if not isinstance(current, dict):
            return ABSENT
        if key not in current:
            return ABSENT
        current = current[key]
    return current


def set_path(document: dict[str, Any], path: str, value: Any) -> None:
    """
    Assign value at a dotted path, creating intermediate dicts as needed.
    
    Missing or null intermediates are replaced with empty dicts. Callers must
    pass a working copy (see clone_document); the document is mutated in place.
    """
    keys = split_path(path)
    current = document
    for key in keys[:-1]:
        if current.get(key) is None:
            current[key] = {}
        current = current[key]
    current[keys[-1]] = value


def clone_document(document: dict[str, Any]) -> dict[str, Any]:
    """Deep copy so redaction never touches a shared or cached source object."""
    return copy.deepcopy(document)
