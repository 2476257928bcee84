import pytest

from jmdict_api.enums import QueryCategory
from jmdict_api.utils.script import classify_query


@pytest.mark.parametrize(
    "query",
    ["食べる", "食", "食べる123", "eat食", "東京タワー", "日本 Japan"],
)
def test_any_kanji_is_kanji(query):
    assert classify_query(query) == QueryCategory.KANJI


@pytest.mark.parametrize("query", ["たべる", "コーヒー", "ラーメン", "ひらがなカタカナ", "ー"])
def test_pure_kana(query):
    assert classify_query(query) == QueryCategory.KANA


@pytest.mark.parametrize("query", ["eat", "to eat", "Tokyo", " ", "New\tYork"])
def test_latin_letters_and_whitespace(query):
    assert classify_query(query) == QueryCategory.ENGLISH


@pytest.mark.parametrize(
    "query",
    ["100", "eat!", "たべる123", "たべる eat", "café", '"abc', "ｅａｔ"],
)
def test_everything_else_is_mixed(query):
    assert classify_query(query) == QueryCategory.MIXED


def test_empty_string_does_not_raise():
    # empty queries are rejected before classification
    assert classify_query("") == QueryCategory.MIXED
