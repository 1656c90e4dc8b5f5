"""Poem Parser — tests for the structured parse of the sentence payload.

Tests cover:
    - Well-formed payload yields a fully populated PoemRecord
    - Extra upstream fields are ignored
    - Each required field missing raises PoemParseError naming its dotted path
    - Wrong types at every nesting level raise PoemParseError
"""

import copy

import pytest

from shici.core.domain_types import PoemRecord
from shici.core.errors import PoemParseError
from shici.core.poem_parser import parse_poem

VALID_PAYLOAD = {
    "status": "success",
    "data": {
        "id": "5b8b9572e116fb3714e6fa7f",
        "content": "床前明月光",
        "popularity": 1170000,
        "origin": {
            "title": "静夜思",
            "dynasty": "唐",
            "author": "李白",
            "content": ["床前明月光，疑是地上霜。"],
        },
        "matchTags": ["秋", "晚上"],
    },
    "token": "abc123",
    "ipAddress": "127.0.0.1",
}


def _without(path: str) -> dict:
    payload = copy.deepcopy(VALID_PAYLOAD)
    *parents, leaf = path.split(".")
    node = payload
    for key in parents:
        node = node[key]
    del node[leaf]
    return payload


def _replaced(path: str, value) -> dict:
    payload = copy.deepcopy(VALID_PAYLOAD)
    *parents, leaf = path.split(".")
    node = payload
    for key in parents:
        node = node[key]
    node[leaf] = value
    return payload


# ─── Well-formed payloads ────────────────────────────────────────

def test_parses_valid_payload():
    poem = parse_poem(VALID_PAYLOAD)
    assert poem == PoemRecord(
        content="床前明月光", title="静夜思", dynasty="唐", author="李白",
    )


def test_minimal_payload_is_enough():
    payload = {
        "data": {
            "content": "白日依山尽",
            "origin": {"title": "登鹳雀楼", "dynasty": "唐", "author": "王之涣"},
        },
    }
    assert parse_poem(payload).attribution == "——《登鹳雀楼》唐·王之涣"


def test_empty_strings_are_accepted():
    payload = _replaced("data.content", "")
    assert parse_poem(payload).content == ""


# ─── Missing fields ──────────────────────────────────────────────

@pytest.mark.parametrize("path", [
    "data",
    "data.content",
    "data.origin",
    "data.origin.title",
    "data.origin.dynasty",
    "data.origin.author",
])
def test_missing_field_names_its_path(path):
    with pytest.raises(PoemParseError) as exc_info:
        parse_poem(_without(path))
    assert exc_info.value.field == path
    assert exc_info.value.code == "POEM_PARSE_FAILED"
    assert exc_info.value.http_status == 500


# ─── Wrong types ─────────────────────────────────────────────────

@pytest.mark.parametrize("path, value", [
    ("data", "床前明月光"),
    ("data", ["床前明月光"]),
    ("data.content", 42),
    ("data.content", None),
    ("data.origin", "静夜思"),
    ("data.origin.title", ["静夜思"]),
    ("data.origin.dynasty", 618),
    ("data.origin.author", {"name": "李白"}),
])
def test_wrong_type_names_its_path(path, value):
    with pytest.raises(PoemParseError) as exc_info:
        parse_poem(_replaced(path, value))
    assert exc_info.value.field == path


@pytest.mark.parametrize("payload", [None, [], "data", 0])
def test_non_object_payload_is_rejected(payload):
    with pytest.raises(PoemParseError) as exc_info:
        parse_poem(payload)
    assert exc_info.value.field == "data"
