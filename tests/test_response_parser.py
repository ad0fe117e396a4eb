"""Tests for the LLM response parser.

All functions under test are pure, so no mocking is needed.  Log output is
checked with pytest's ``caplog`` where a function promises to log.
"""

from __future__ import annotations

import json
import logging

import pytest

from careercoach.ai.models import PARSING_ERROR, CodeBlock, ParsedPayload, Rating
from careercoach.ai.response_parser import (
    clean_markdown,
    clean_response,
    extract_all_code_blocks,
    extract_code_block,
    extract_json_block,
    extract_key_value_pairs,
    extract_list_items,
    extract_sections,
    extract_structured_data,
    extract_thinking,
    parse_boolean,
    parse_json,
    parse_number,
    parse_rating,
    validate_response,
)


# ---------------------------------------------------------------------------
# extract_json_block
# ---------------------------------------------------------------------------

class TestExtractJsonBlock:
    def test_json_fence(self) -> None:
        text = 'Here you go:\n```json\n{"a": 1}\n```\nThanks.'
        assert extract_json_block(text) == '{"a": 1}'

    def test_fenced_block_preferred_over_bare_object(self) -> None:
        text = 'Prefix {"bare": true}\n```json\n{"fenced": true}\n```'
        assert json.loads(extract_json_block(text)) == {"fenced": True}

    def test_untagged_fence(self) -> None:
        text = '```\n[1, 2, 3]\n```'
        assert extract_json_block(text) == "[1, 2, 3]"

    def test_non_json_fence_is_skipped(self) -> None:
        text = "```python\nprint('hi')\n```\nResult: {\"a\": 1}"
        assert extract_json_block(text) == '{"a": 1}'

    def test_bare_object_in_prose(self) -> None:
        text = 'The answer is {"title": "Engineer", "level": "senior"} as requested.'
        assert json.loads(extract_json_block(text)) == {"title": "Engineer", "level": "senior"}

    def test_bare_object_span_is_widest(self) -> None:
        text = 'x {"outer": {"inner": 1}} y'
        assert extract_json_block(text) == '{"outer": {"inner": 1}}'

    def test_bare_array(self) -> None:
        assert extract_json_block("Items: [1, 2, 3] done") == "[1, 2, 3]"

    def test_no_json_returns_none_and_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="careercoach"):
            assert extract_json_block("nothing structured here") is None
        assert "No JSON found" in caplog.text

    def test_round_trip_through_fence(self) -> None:
        obj = {"a": [1, 2.5, {"b": None}], "c": "quoted \"text\"", "d": True}
        text = f"```json\n{json.dumps(obj)}\n```"
        assert json.loads(extract_json_block(text)) == obj


# ---------------------------------------------------------------------------
# parse_json
# ---------------------------------------------------------------------------

class TestParseJson:
    def test_success_from_fence(self) -> None:
        result = parse_json('```json\n{"company": "Acme"}\n```')

        assert result.success is True
        assert result.data == {"company": "Acme"}
        assert result.error is None

    def test_success_from_bare_json(self) -> None:
        assert parse_json('{"x": 1}').data == {"x": 1}

    def test_failure_is_parse_error(self) -> None:
        result = parse_json('```json\n{"company": \n```')

        assert result.success is False
        assert result.data is None
        assert result.error.kind == PARSING_ERROR
        assert result.error.code == "JSON_PARSE_ERROR"
        assert result.error.retryable is False

    def test_failure_details_describe_response(self) -> None:
        response = "no json " * 10
        result = parse_json(response)

        details = result.error.details
        assert details["response_length"] == len(response)
        assert details["response_start"] == response[:500]
        assert details["response_end"] == response[-500:]
        assert "original_error" in details

    def test_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="careercoach"):
            parse_json("definitely not json")
        assert "JSON parsing failed" in caplog.text

    def test_default_value_turns_failure_into_success(self) -> None:
        result = parse_json("garbage", default_value={"fallback": True})

        assert result.success is True
        assert result.data == {"fallback": True}

    def test_strict_rejects_wrapped_json(self) -> None:
        assert parse_json('Sure! {"a": 1}', strict=True).success is False

    def test_strict_accepts_pure_json(self) -> None:
        assert parse_json('{"a": 1}', strict=True).data == {"a": 1}

    @pytest.mark.parametrize(
        "response",
        ["NaN", '{"a": Infinity}', '```json\n{"score": -Infinity}\n```'],
    )
    def test_non_finite_constants_are_rejected(self, response: str) -> None:
        result = parse_json(response)

        assert result.success is False
        assert result.error.kind == PARSING_ERROR
        assert "Invalid JSON constant" in result.error.message

    @pytest.mark.parametrize(
        "response",
        [
            "",
            "noise",
            '{"a": 1}',
            '{"a": ',
            '{"a": 1} trailing prose',
            "[1, 2",
            "```json\nnot json\n```",
            "{{{{",
            "]]][[[",
            "```\n```",
            "\x00\x01",
            "[" * 5000 + "]" * 5000,
        ],
    )
    def test_never_raises(self, response: str) -> None:
        result = parse_json(response)

        assert isinstance(result, ParsedPayload)
        assert result.success != (result.error is not None)
        if not result.success:
            assert result.data is None


# ---------------------------------------------------------------------------
# validate_response
# ---------------------------------------------------------------------------

class TestValidateResponse:
    def test_all_present(self) -> None:
        result = validate_response({"a": 1, "b": ""}, ["a", "b"])
        assert result.valid is True
        assert result.missing == []

    def test_missing_and_null_fields(self) -> None:
        result = validate_response({"a": 1, "b": None}, ["a", "b", "c"])
        assert result.valid is False
        assert result.missing == ["b", "c"]

    def test_non_object_is_missing_everything(self) -> None:
        result = validate_response([1, 2], ["a", "b"])
        assert result.valid is False
        assert result.missing == ["a", "b"]


# ---------------------------------------------------------------------------
# Code blocks, markdown, cleanup
# ---------------------------------------------------------------------------

class TestCodeBlocks:
    def test_first_block_with_language(self) -> None:
        block = extract_code_block("Intro\n```python\nprint(1)\n```")
        assert block == CodeBlock(code="print(1)", language="python")

    def test_untagged_block_defaults_to_text(self) -> None:
        assert extract_code_block("```\nplain\n```") == CodeBlock(code="plain", language="text")

    def test_language_filter(self) -> None:
        text = "```js\nconsole.log(1)\n```\n```python\nx = 1\n```"
        assert extract_code_block(text, "python") == CodeBlock(code="x = 1", language="python")

    def test_language_filter_no_match(self) -> None:
        assert extract_code_block("```js\nx\n```", "rust") is None

    def test_no_block(self) -> None:
        assert extract_code_block("no fences") is None

    def test_all_blocks(self) -> None:
        text = "```js\na\n```\nbetween\n```\nb\n```"
        blocks = extract_all_code_blocks(text)
        assert [b.language for b in blocks] == ["js", "text"]
        assert [b.code for b in blocks] == ["a", "b"]


class TestCleanMarkdown:
    def test_strips_header(self) -> None:
        assert clean_markdown("## Header") == "Header"

    def test_strips_inline_syntax(self) -> None:
        text = "**Bold** and *italic* with `code` and [a link](https://example.com)"
        assert clean_markdown(text) == "Bold and italic with code and a link"

    def test_strips_list_markers_and_rules(self) -> None:
        text = "- item one\n* item two\n\n---\n\n\n\nEnd"
        assert clean_markdown(text) == "item one\nitem two\n\nEnd"

    def test_removes_code_blocks(self) -> None:
        text = "Before\n```python\nx = 1\n```\nAfter"
        cleaned = clean_markdown(text)
        assert "x = 1" not in cleaned
        assert cleaned.startswith("Before")
        assert cleaned.endswith("After")


class TestCleanResponse:
    def test_normalises_line_endings_and_blank_runs(self) -> None:
        assert clean_response("  a\r\nb\r\n\r\n\r\n\r\nc  ") == "a\nb\n\nc"


class TestExtractThinking:
    def test_thinking_tags(self) -> None:
        result = extract_thinking("<thinking>plan first</thinking>Final answer")
        assert result == {"thinking": "plan first", "response": "Final answer"}

    def test_reasoning_section(self) -> None:
        result = extract_thinking("## Reasoning\nBecause.\n## Answer\nYes")
        assert result["thinking"] == "Because."
        assert result["response"] == "## Answer\nYes"

    def test_no_reasoning(self) -> None:
        assert extract_thinking("Just the answer") == {"thinking": None, "response": "Just the answer"}


# ---------------------------------------------------------------------------
# Prose extraction
# ---------------------------------------------------------------------------

class TestExtractStructuredData:
    def test_keeps_only_matching_patterns(self) -> None:
        text = "Salary: $120k - $150k\nLocation: Remote"
        data = extract_structured_data(
            text, {"salary": r"Salary:\s*(.+)", "bonus": r"Bonus:\s*(.+)"}
        )
        assert data == {"salary": "$120k - $150k"}


class TestExtractSections:
    _TEXT = (
        "Summary: Strong candidate.\n"
        "Strengths:\n- Python\n- SQL\n"
        "Weaknesses: Limited cloud work."
    )

    def test_splits_on_headers(self) -> None:
        sections = extract_sections(self._TEXT, ["Summary", "Strengths", "Weaknesses"])
        assert sections == {
            "Summary": "Strong candidate.",
            "Strengths": "- Python\n- SQL",
            "Weaknesses": "Limited cloud work.",
        }

    def test_case_insensitive(self) -> None:
        sections = extract_sections("SUMMARY: all good", ["Summary"])
        assert sections == {"Summary": "all good"}

    def test_missing_header_is_omitted(self) -> None:
        sections = extract_sections("Summary: ok", ["Summary", "Risks"])
        assert "Risks" not in sections


class TestExtractListItems:
    def test_numbered(self) -> None:
        assert extract_list_items("1. First\n2. Second") == ["First", "Second"]

    def test_numbered_preferred_over_bullets(self) -> None:
        assert extract_list_items("- bullet\n1. numbered") == ["numbered"]

    def test_bullets(self) -> None:
        assert extract_list_items("- a\n* b\n• c") == ["a", "b", "c"]

    def test_plain_lines(self) -> None:
        assert extract_list_items("alpha\n\n  beta  \n") == ["alpha", "beta"]


class TestExtractKeyValuePairs:
    def test_default_separator(self) -> None:
        text = "Name: Ada\nRole : Engineer\n: orphan value\nEmpty:\nURL: https://x.com"
        assert extract_key_value_pairs(text) == {
            "Name": "Ada",
            "Role": "Engineer",
            "URL": "https://x.com",
        }

    def test_custom_separator(self) -> None:
        assert extract_key_value_pairs("a = 1\nb=2", separator="=") == {"a": "1", "b": "2"}


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

class TestParseBoolean:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Yes, absolutely", True),
            ("TRUE", True),
            ("definitely not", False),
            ("False.", False),
            ("maybe", None),
        ],
    )
    def test_default_vocabulary(self, text: str, expected) -> None:
        assert parse_boolean(text) is expected

    def test_custom_vocabulary(self) -> None:
        assert parse_boolean("sure thing", true_values=["sure"]) is True
        assert parse_boolean("nah", true_values=["sure"], false_values=["nah"]) is False

    def test_empty_vocabulary_is_not_replaced_by_defaults(self) -> None:
        assert parse_boolean("yes", true_values=[]) is None
        assert parse_boolean("no", false_values=[]) is None


class TestParseNumber:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [("Score: -3.5 points", -3.5), ("42", 42.0), ("about 7 years", 7.0), ("none", None)],
    )
    def test_first_number(self, text: str, expected) -> None:
        assert parse_number(text) == expected


class TestParseRating:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("8/10", Rating(score=8, max=10)),
            ("4 out of 5", Rating(score=4, max=5)),
            ("I'd say 3 OF 5", Rating(score=3, max=5)),
            ("7.5 / 10", Rating(score=7.5, max=10)),
            ("80%", Rating(score=80, max=100)),
            ("no rating here", None),
        ],
    )
    def test_rating_table(self, text: str, expected) -> None:
        assert parse_rating(text) == expected
