"""Tests for server error body and message decoding."""

from cryptol_client.diagnostics import (
    decode_error_payload,
    parse_module_not_found,
    summarize_message,
)


def test_decode_error_payload_full_shape(module_not_found_error):
    payload = decode_error_payload(module_not_found_error)

    assert payload is not None
    assert payload.code == 20500
    assert payload.search_paths == ["client", "//.cryptol", "/usr/local/share/cryptol"]
    assert payload.source == "NoModule"
    assert payload.data.data.warnings == []


def test_decode_error_payload_without_data():
    payload = decode_error_payload({"code": 1, "message": "boom"})

    assert payload is not None
    assert payload.search_paths == []
    assert payload.source is None


def test_decode_error_payload_rejects_non_objects():
    assert decode_error_payload("flattened message") is None
    assert decode_error_payload(None) is None


def test_decode_error_payload_rejects_missing_code():
    assert decode_error_payload({"message": "no code"}) is None


def test_parse_module_not_found_extracts_paths(module_not_found_error):
    parsed = parse_module_not_found(module_not_found_error["message"])

    assert parsed is not None
    assert parsed.module_name == "NoModule"
    assert parsed.search_paths == ["//.cryptol", "/usr/local/share/cryptol"]


def test_parse_module_not_found_without_paths_section():
    parsed = parse_module_not_found("Could not find module Foo")

    assert parsed is not None
    assert parsed.module_name == "Foo"
    assert parsed.search_paths == []


def test_parse_module_not_found_ignores_other_messages():
    assert parse_module_not_found("Parse error at line 3") is None
    assert parse_module_not_found("") is None
    assert parse_module_not_found(None) is None


def test_summarize_message_strips_tag_and_keeps_first_line(module_not_found_error):
    assert summarize_message(module_not_found_error["message"]) == "Could not find module NoModule"


def test_summarize_message_handles_empty():
    assert summarize_message("") == "remote error"
    assert summarize_message("   ") == "remote error"
    assert summarize_message(None) == "remote error"


def test_decode_error_payload_tolerates_null_output():
    payload = decode_error_payload(
        {
            "code": 1,
            "message": "m",
            "data": {
                "stderr": None,
                "stdout": None,
                "data": {"path": ["a"], "source": "s", "warnings": []},
            },
        }
    )

    assert payload is not None
    assert payload.search_paths == ["a"]
    assert payload.source == "s"
