import types

import pytest

from airtop_mcp.normalizer import (
    EmptyError,
    MessageError,
    OpaqueError,
    PlainTextError,
    classify,
    normalize,
)

BANNER = "Errors from the API:"


def _lines(result):
    assert result.is_error is True
    assert len(result.content) == 1
    text = result.content[0].text
    assert text.startswith(BANNER + "\n")
    return text.split("\n")[1:]


@pytest.mark.parametrize("errors", [[], [None], [""], [False], [0], None])
def test_empty_entries_render_unknown_error(errors):
    assert _lines(normalize(errors)) == ["Unknown error (empty)"]


def test_plain_string_is_used_verbatim():
    assert _lines(normalize(["plain string"])) == ["plain string"]


def test_message_field_is_extracted():
    assert _lines(normalize([{"message": "x"}])) == ["x"]


def test_empty_mapping_is_serialized_not_treated_as_empty():
    assert _lines(normalize([{}])) == ["{}"]


def test_mixed_entries_keep_order_one_line_each():
    errors = ["a", {"message": "b"}, None, {"code": 5}]
    assert _lines(normalize(errors)) == ["a", "b", "Unknown error (empty)", '{"code": 5}']


def test_exception_and_attribute_messages():
    errors = [ValueError("boom"), types.SimpleNamespace(message="from attr")]
    assert _lines(normalize(errors)) == ["boom", "from attr"]


def test_single_string_is_one_entry():
    assert _lines(normalize("oops")) == ["oops"]


def test_unserializable_entry_does_not_raise():
    class Weird:
        __slots__ = ()

        def __repr__(self):
            return "<weird>"

    assert _lines(normalize([Weird()])) == ['"<weird>"']


def test_classify_variants():
    assert classify(None) == EmptyError()
    assert classify(float("nan")) == EmptyError()
    assert classify("text") == PlainTextError("text")
    assert classify({"message": "m"}) == MessageError("m")
    assert classify({"message": ""}) == OpaqueError({"message": ""})
    assert isinstance(classify(42), OpaqueError)
