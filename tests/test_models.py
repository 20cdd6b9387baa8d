"""
Tests for models.py - pydantic result models.
"""

import json

import pytest

from sego.models import DictionaryInfo, SegmentationResult, TokenResult

from tests.conftest import BEIJING_ENTRIES


class TestSegmentationResult:
    """Tests for building results from tokens."""

    def test_positions_and_cost(self, make_segmenter):
        segmenter = make_segmenter(BEIJING_ENTRIES)
        tokens = segmenter.segment_tokens("我去北京大学")
        result = SegmentationResult.from_tokens("我去北京大学", tokens)

        assert result.words() == ["我", "去", "北京大学"]
        assert [(t.start, t.end) for t in result.tokens] == [(0, 1), (1, 2), (2, 6)]
        assert result.tokens[0].known is False
        assert result.tokens[0].pos == "x"
        assert result.cost == pytest.approx(32 + 2 + 3)

    def test_joint(self, make_segmenter):
        segmenter = make_segmenter([("new-york", 10, "ns")], phrase=True)
        tokens = segmenter.segment_tokens("new-york")
        result = SegmentationResult.from_tokens("new-york", tokens, joint=" ")
        assert result.words() == ["new york"]
        assert result.tokens[0].units == ["new", "york"]

    def test_json(self, make_segmenter):
        segmenter = make_segmenter(BEIJING_ENTRIES)
        result = SegmentationResult.from_tokens("去", segmenter.segment_tokens("去"))
        data = json.loads(result.model_dump_json())
        assert data["text"] == "去"
        assert data["tokens"][0]["frequency"] == 16

    def test_empty(self):
        result = SegmentationResult.from_tokens("", [])
        assert result.tokens == []
        assert result.cost == 0.0


class TestDictionaryInfo:
    """Tests for dictionary statistics."""

    def test_from_dictionary(self, beijing_dictionary):
        info = DictionaryInfo.from_dictionary(beijing_dictionary)
        assert info.num_tokens == 4
        assert info.max_token_length == 4
        assert info.total_frequency == 64

    def test_token_result_defaults(self):
        result = TokenResult(text="去")
        assert result.known is True
        assert result.units == []
