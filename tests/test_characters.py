"""
Tests for characters.py - unit classification and text splitting.
"""

import pytest

from sego.characters import (
    UnitKind,
    classify_char,
    is_run_joiner,
    split_english_text_to_units,
    split_phrase_units,
    split_text_to_units,
    to_lower,
)


class TestClassifyChar:
    """Tests for single character classification."""

    @pytest.mark.parametrize("char,kind", [
        ("a", UnitKind.LETTER),
        ("Z", UnitKind.LETTER),
        ("é", UnitKind.LETTER),
        ("ж", UnitKind.LETTER),
        ("7", UnitKind.DIGIT),
        ("²", UnitKind.DIGIT),
        (" ", UnitKind.OTHER),
        (".", UnitKind.OTHER),
        ("中", UnitKind.OTHER),
        ("か", UnitKind.OTHER),
        ("５", UnitKind.OTHER),
        ("Ａ", UnitKind.OTHER),
    ])
    def test_kinds(self, char, kind):
        assert classify_char(char) is kind

    def test_joiner_between_digits(self):
        assert is_run_joiner("3", ".", "1")
        assert is_run_joiner("1", "/", "2")
        assert not is_run_joiner("a", ".", "b")

    def test_joiner_between_letters(self):
        assert is_run_joiner("n", "'", "t")
        assert not is_run_joiner("1", "'", "2")

    def test_joiner_needs_both_neighbours(self):
        assert not is_run_joiner(None, ".", "1")
        assert not is_run_joiner("3", ".", None)

    def test_to_lower_is_ascii_only(self):
        assert to_lower("HeLLo") == "hello"
        assert to_lower("ÜBER") == "Über"


class TestSplitTextToUnits:
    """Tests for general-mode splitting."""

    def test_empty(self):
        assert split_text_to_units("") == []
        assert split_text_to_units(b"") == []

    def test_invalid_utf8_becomes_replacement_unit(self):
        # a truncated multibyte sequence decodes to a single U+FFFD
        assert split_text_to_units(b"\xe4\xb8a") == ["\ufffd", "a"]
        assert split_text_to_units(b"\xff\xfe") == ["\ufffd", "\ufffd"]

    def test_cjk_characters_are_units(self):
        assert split_text_to_units("北京大学") == ["北", "京", "大", "学"]

    def test_bytes_input(self):
        assert split_text_to_units("北京".encode("utf-8")) == ["北", "京"]

    def test_latin_runs_coalesced_and_lowered(self):
        assert split_text_to_units("中国Hello 3.14") == ["中", "国", "hello", " ", "3.14"]

    def test_leading_latin_run(self):
        assert split_text_to_units("ABC中") == ["abc", "中"]

    def test_apostrophe_inside_word(self):
        assert split_text_to_units("Don't Stop") == ["don't", " ", "stop"]

    def test_fraction(self):
        assert split_text_to_units("1/2") == ["1/2"]

    def test_slash_between_letters_splits(self):
        assert split_text_to_units("a/b") == ["a", "/", "b"]

    def test_trailing_and_leading_dot(self):
        assert split_text_to_units("3.") == ["3", "."]
        assert split_text_to_units(".5") == [".", "5"]

    def test_non_ascii_letters_not_lowered(self):
        assert split_text_to_units("Ünïcode") == ["Ünïcode"]

    def test_full_width_letters_are_separate(self):
        assert split_text_to_units("ＡＢ") == ["Ａ", "Ｂ"]

    def test_punctuation_between_cjk(self):
        assert split_text_to_units("你好，世界") == ["你", "好", "，", "世", "界"]


class TestSplitEnglishTextToUnits:
    """Tests for character-granularity splitting."""

    def test_letters_are_units(self):
        assert split_english_text_to_units("iloveyou") == list("iloveyou")

    def test_digit_runs_coalesced(self):
        assert split_english_text_to_units("abc123d") == ["a", "b", "c", "123", "d"]

    def test_case_preserved(self):
        assert split_english_text_to_units("ABC") == ["A", "B", "C"]

    def test_decimal_point_not_joined(self):
        assert split_english_text_to_units("3.14") == ["3", ".", "14"]

    def test_empty(self):
        assert split_english_text_to_units("") == []


class TestPhraseSplitting:
    """Tests for phrase mode."""

    def test_hyphen_delimited(self):
        assert split_phrase_units("new-york--times") == ["new", "york", "times"]

    def test_only_hyphens(self):
        assert split_phrase_units("---") == []

    def test_phrase_flag_on_both_splitters(self):
        assert split_text_to_units("New-York", phrase=True) == ["New", "York"]
        assert split_english_text_to_units("new-york", phrase=True) == ["new", "york"]

    def test_cjk_phrase_units(self):
        assert split_text_to_units("纽约-时报", phrase=True) == ["纽约", "时报"]
