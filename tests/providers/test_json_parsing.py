"""Tests for JSON extraction from model output."""

from __future__ import annotations

import pytest

from cardnews_automator.providers import MalformedResponse, as_json_object, extract_json


class TestExtractJson:
    """Tests for extract_json."""

    def test_plain_json(self):
        assert extract_json('{"headline": "예산"}') == {"headline": "예산"}

    def test_code_block(self):
        assert extract_json('설명\n```json\n{"a": 1}\n```\n끝') == {"a": 1}

    def test_code_block_without_language(self):
        assert extract_json('```\n[1, 2]\n```') == [1, 2]

    def test_object_in_prose(self):
        assert extract_json('결과는 다음과 같습니다: {"a": {"b": 2}} 이상입니다.') == {"a": {"b": 2}}

    def test_braces_inside_strings(self):
        text = '앞 {"quote": "괄호 } 포함", "n": 1} 뒤'
        assert extract_json(text) == {"quote": "괄호 } 포함", "n": 1}

    def test_array_in_prose(self):
        assert extract_json('키워드: ["예산", "국회"] 입니다') == ["예산", "국회"]

    @pytest.mark.parametrize("text", ["", "   ", "JSON이 없습니다", "{broken", None])
    def test_no_json(self, text):
        with pytest.raises(MalformedResponse):
            extract_json(text)


class TestAsJsonObject:
    """Tests for as_json_object."""

    def test_object_returned(self):
        assert as_json_object({"a": 1}) == {"a": 1}

    def test_array_unwrapped(self):
        assert as_json_object(extract_json('[1, {"a": 1}, {"b": 2}]')) == {"a": 1}

    @pytest.mark.parametrize("data", [42, "text", None, [1, 2]])
    def test_non_object_rejected(self, data):
        with pytest.raises(MalformedResponse):
            as_json_object(data)
