import pytest
from sqlalchemy.dialects import sqlite

from jmdict_api.enums import QueryCategory
from jmdict_api.services.search_strategies import (
    EnglishSearchStrategy,
    KanaSearchStrategy,
    KanjiSearchStrategy,
    MixedSearchStrategy,
    get_strategy,
)


def _sql(stmt) -> str:
    return str(stmt.compile(dialect=sqlite.dialect()))


@pytest.mark.parametrize(
    "category, strategy_cls, tables",
    [
        (QueryCategory.KANJI, KanjiSearchStrategy, {"kanji"}),
        (QueryCategory.KANA, KanaSearchStrategy, {"readings"}),
        (QueryCategory.ENGLISH, EnglishSearchStrategy, {"meanings"}),
        (QueryCategory.MIXED, MixedSearchStrategy, {"kanji", "readings", "meanings"}),
    ],
)
def test_strategy_per_category(category, strategy_cls, tables):
    strategy = get_strategy(category)
    assert isinstance(strategy, strategy_cls)
    assert {source.model.__tablename__ for source in strategy.sources} == tables


def test_primary_pass_uses_substring_match():
    sql = _sql(get_strategy(QueryCategory.ENGLISH).ranked_entries("eat", fulltext=False, limit=50))
    assert "instr(" in sql
    assert "MATCH" not in sql
    assert "LIMIT" in sql


def test_fallback_pass_uses_fulltext_prefix():
    stmt = get_strategy(QueryCategory.KANA).ranked_entries("たべ", fulltext=True, limit=50)
    sql = _sql(stmt)
    assert "readings_fts MATCH" in sql
    assert "たべ*" in stmt.compile(dialect=sqlite.dialect()).params.values()


def test_mixed_unions_all_fulltext_indexes():
    sql = _sql(get_strategy(QueryCategory.MIXED).ranked_entries("100", fulltext=True, limit=50))
    assert "UNION" in sql
    for fts_table in ("kanji_fts", "readings_fts", "meanings_fts"):
        assert f"{fts_table} MATCH" in sql
