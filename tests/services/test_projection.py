from __future__ import annotations

import pytest

from inkbridge.services.projection import as_bool, as_float, as_int, as_str, by_index, dig, find_by, size

DOC = {"items": [{"id": "a", "n": 1}, {"id": "b", "n": "2.5"}], "flag": "true"}


def test_dig_walks_mixed_paths():
    assert dig(DOC, "items", 1, "n") == "2.5"
    assert dig(DOC, "items", 7, "n") is None
    assert dig(DOC, "missing", 0) is None
    assert dig("text", 0) is None


def test_find_by_and_size():
    assert find_by(DOC["items"], "id", "b") == {"id": "b", "n": "2.5"}
    assert find_by(DOC["items"], "id", "z") is None
    assert find_by({"id": "a"}, "id", "a") is None
    assert size(DOC["items"]) == 2
    assert size(None) == 0
    assert size("abc") == 0


def test_by_index_rejects_negative():
    assert by_index([1, 2], -1) is None


@pytest.mark.parametrize(
    "value, text, number, integer, truth",
    [
        (None, "", 0.0, 0, False),
        (True, "true", 1.0, 1, True),
        ("2.5", "2.5", 2.5, 2, False),
        ("abc", "abc", 0.0, 0, False),
        (0, "0", 0.0, 0, False),
        (3.9, "3.9", 3.9, 3, True),
        ({"k": 1}, "{'k': 1}", 0.0, 0, False),
    ],
)
def test_coercions_never_raise(value, text, number, integer, truth):
    assert as_str(value) == text
    assert as_float(value) == number
    assert as_int(value) == integer
    assert as_bool(value) is truth
