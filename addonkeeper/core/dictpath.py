# addonkeeper/core/dictpath.py
from __future__ import annotations
from typing import Any
from collections.abc import Mapping

__all__ = ["splitPath", "getByPath", "hasPath"]

_MISSING = object()



def splitPath(path: str) -> list[str]:
    """
    Splits a dotted/slashed path where '.' and '/' are segment separators,
    and backslash '\\' escapes the next character (including separators).

    Examples:
      - catalog.url   -> ["catalog", "url"]
      - a\\.b/c       -> ["a.b", "c"]
    """
    if not isinstance(path, str) or not path:
        raise ValueError("Path must be a non-empty string")

    parts: list[str] = []
    curr: list[str] = []
    esc = False
    for ch in path:
        if esc:
            curr.append(ch)
            esc = False
            continue
        if ch == "\\":
            esc = True
            continue
        if ch in (".", "/"):
            parts.append("".join(curr))
            curr = []
            continue
        curr.append(ch)
    if esc:
        raise ValueError("Path ends with a dangling escape (trailing backslash)")
    parts.append("".join(curr))

    if any(part == "" for part in parts):
        raise ValueError(f"Path '{path}' contains empty segment(s)")
    return parts



def _walk(data: Any, path: str) -> Any:
    node = data
    for part in splitPath(path):
        if not isinstance(node, Mapping) or part not in node:
            return _MISSING
        node = node[part]
    return node



def getByPath(data: Any, path: str, default: Any = None) -> Any:
    """Returns the value at `path` inside nested mappings, or `default` when any segment is missing."""
    value = _walk(data, path)
    return default if value is _MISSING else value



def hasPath(data: Any, path: str) -> bool:
    return _walk(data, path) is not _MISSING
