from __future__ import annotations

import pytest

from addonkeeper.core.dictpath import getByPath, hasPath, splitPath


def test_splitPath_separatorsAndEscapes() -> None:
    assert splitPath("catalog.url") == ["catalog", "url"]
    assert splitPath("a/b.c") == ["a", "b", "c"]
    assert splitPath("a\\.b/c") == ["a.b", "c"]


@pytest.mark.parametrize("path", ["", "a..b", ".a", "a.", "a\\"])
def test_splitPath_invalid(path: str) -> None:
    with pytest.raises(ValueError):
        splitPath(path)


def test_getByPath_nested() -> None:
    data = {"catalog": {"url": "x", "empty": None}}

    assert getByPath(data, "catalog.url") == "x"
    assert getByPath(data, "catalog.missing", "d") == "d"
    assert getByPath(data, "catalog.url.deeper", "d") == "d"
    assert getByPath(data, "catalog.empty", "d") is None


def test_hasPath() -> None:
    data = {"a": {"b": None}}

    assert hasPath(data, "a.b")
    assert not hasPath(data, "a.c")
    assert not hasPath([], "a")
