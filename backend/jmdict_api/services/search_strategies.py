# jmdict_api/services/search_strategies.py
"""
词典检索策略

按查询类别选择检索字段和排序方式:
- KanjiSearchStrategy: 检索 kanji 表
- KanaSearchStrategy: 检索 readings 表
- EnglishSearchStrategy: 检索 meanings 表
- MixedSearchStrategy: 三张表取并集

每个策略只负责生成 SQL（候选词条、匹配等级、排序长度），执行由 DictionaryService 完成。
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Sequence

from sqlalchemy import case, column, func, literal_column, select, table, union
from sqlalchemy.sql.expression import ColumnElement, Select, Subquery

from jmdict_api.enums import QueryCategory
from jmdict_api.models import Entry, Kanji, Reading, Meaning

# 匹配等级: 1 完全一致, 2 包含, 3 其他（仅全文检索或跨字段并集时出现）
RANK_EXACT = 1
RANK_SUBSTRING = 2
RANK_INCIDENTAL = 3


class FieldSource:
    """一张字段表（kanji / readings / meanings）及其 FTS5 索引"""

    def __init__(self, model, column_name: str, fts_table: str):
        self.model = model
        self.name = column_name
        self.value = getattr(model, column_name)
        self.fts_table = fts_table
        self._fts = table(fts_table, column("rowid"))

    def contains(self, query: str) -> ColumnElement:
        # instr 区分大小写，且不需要转义 LIKE 通配符
        return func.instr(self.value, query) > 0

    def substring_entry_ids(self, query: str) -> Select:
        """字段值包含 query 的词条 ID"""
        return select(self.model.entry_id).where(self.contains(query)).correlate(None)

    def fulltext_entry_ids(self, pattern: str) -> Select:
        """FTS5 MATCH 命中的词条 ID（pattern 形如 "eat*"）"""
        matched_rows = (
            select(self._fts.c.rowid)
            .where(literal_column(self.fts_table).op("MATCH")(pattern))
        )
        return (
            select(self.model.entry_id)
            .where(self.model.id.in_(matched_rows))
            .correlate(None)
        )

    def match_stats(self, query: str, candidates) -> Subquery:
        """
        按词条聚合该字段的匹配情况

        candidates 与本表同名，子查询已关闭自动关联（correlate(None)）

        - match_rank: 该词条所有字段值中最好的匹配等级
        - match_length: 包含 query 的字段值中最短的长度
        - min_length: 所有字段值中最短的长度
        """
        rank = case(
            (self.value == query, RANK_EXACT),
            (self.contains(query), RANK_SUBSTRING),
            else_=RANK_INCIDENTAL,
        )
        return (
            select(
                self.model.entry_id.label("entry_id"),
                func.min(rank).label("match_rank"),
                func.min(case((self.contains(query), func.length(self.value)))).label("match_length"),
                func.min(func.length(self.value)).label("min_length"),
            )
            .where(self.model.entry_id.in_(candidates))
            .group_by(self.model.entry_id)
            .subquery(f"{self.name}_stats")
        )

    def values_for(self, entry_ids: Sequence[int]) -> Select:
        """取回指定词条的全部字段值，按原始行顺序"""
        return (
            select(self.model.entry_id, self.value)
            .where(self.model.entry_id.in_(entry_ids))
            .order_by(self.model.id)
        )


KANJI_SOURCE = FieldSource(Kanji, "kanji", "kanji_fts")
READING_SOURCE = FieldSource(Reading, "reading", "readings_fts")
MEANING_SOURCE = FieldSource(Meaning, "meaning", "meanings_fts")

# 结果聚合时的字段顺序
ALL_SOURCES = (KANJI_SOURCE, READING_SOURCE, MEANING_SOURCE)


class SearchStrategy(ABC):
    """
    检索策略基类

    子类提供:
    - sources: 要检索的字段表
    - rank_expression: 排序主键（匹配等级）
    - length_expression: 同等级内的排序长度
    """

    category: QueryCategory
    sources: Sequence[FieldSource] = ()

    def candidates(self, query: str, fulltext: bool = False):
        """候选词条 ID 子查询；多个字段时取并集"""
        if fulltext:
            pattern = f"{query}*"
            selects = [source.fulltext_entry_ids(pattern) for source in self.sources]
        else:
            selects = [source.substring_entry_ids(query) for source in self.sources]
        if len(selects) == 1:
            return selects[0]
        return union(*selects)

    def ranked_entries(self, query: str, fulltext: bool, limit: int) -> Select:
        """
        生成排序后的词条 ID 查询

        排序: 匹配等级升序 -> 匹配字段长度升序 -> 词条 ID
        """
        candidates = self.candidates(query, fulltext)
        stats = [source.match_stats(query, candidates) for source in self.sources]

        stmt = select(Entry.id).select_from(Entry).where(Entry.id.in_(candidates))
        for sub in stats:
            stmt = stmt.outerjoin(sub, sub.c.entry_id == Entry.id)

        return stmt.order_by(
            self.rank_expression(stats),
            self.length_expression(stats).nulls_last(),
            Entry.id,
        ).limit(limit)

    @abstractmethod
    def rank_expression(self, stats: List[Subquery]) -> ColumnElement:
        pass

    @abstractmethod
    def length_expression(self, stats: List[Subquery]) -> ColumnElement:
        pass


class SingleFieldSearchStrategy(SearchStrategy):
    """只检索一个字段，等级和长度都以该字段为准"""

    source: FieldSource

    @property
    def sources(self) -> Sequence[FieldSource]:
        return (self.source,)

    def rank_expression(self, stats: List[Subquery]) -> ColumnElement:
        return func.coalesce(stats[0].c.match_rank, RANK_INCIDENTAL)

    def length_expression(self, stats: List[Subquery]) -> ColumnElement:
        # 没有字段值包含 query 时（全文检索命中），退回该字段最短值的长度
        return func.coalesce(stats[0].c.match_length, stats[0].c.min_length)


class KanjiSearchStrategy(SingleFieldSearchStrategy):
    category = QueryCategory.KANJI
    source = KANJI_SOURCE


class KanaSearchStrategy(SingleFieldSearchStrategy):
    category = QueryCategory.KANA
    source = READING_SOURCE


class EnglishSearchStrategy(SingleFieldSearchStrategy):
    category = QueryCategory.ENGLISH
    source = MEANING_SOURCE


class MixedSearchStrategy(SearchStrategy):
    """
    汉字、读音、释义三张表取并集

    等级取三个字段中最好的；排序长度按 汉字 -> 读音 -> 释义 的顺序，
    取第一个包含 query 的字段（不是三者最小值），都不包含时用释义长度
    """

    category = QueryCategory.MIXED
    sources = ALL_SOURCES

    def rank_expression(self, stats: List[Subquery]) -> ColumnElement:
        # SQLite 的多参数 min() 是标量函数
        return func.min(*[func.coalesce(sub.c.match_rank, RANK_INCIDENTAL) for sub in stats])

    def length_expression(self, stats: List[Subquery]) -> ColumnElement:
        kanji_stats, reading_stats, meaning_stats = stats
        return func.coalesce(
            kanji_stats.c.match_length,
            reading_stats.c.match_length,
            meaning_stats.c.match_length,
            meaning_stats.c.min_length,
        )


STRATEGIES: Dict[QueryCategory, SearchStrategy] = {
    strategy.category: strategy
    for strategy in (
        KanjiSearchStrategy(),
        KanaSearchStrategy(),
        EnglishSearchStrategy(),
        MixedSearchStrategy(),
    )
}


def get_strategy(category: QueryCategory) -> SearchStrategy:
    """按查询类别取检索策略"""
    return STRATEGIES[category]
