# jmdict_api/services/dictionary_service.py
import logging
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from jmdict_api.config import DICTIONARY_CACHE_SIZE, SEARCH_MAX_RESULTS, SEARCH_RESULT_LIMIT
from jmdict_api.database import SessionLocal
from jmdict_api.schemas import SearchResult
from jmdict_api.services.search_strategies import ALL_SOURCES, SearchStrategy, get_strategy
from jmdict_api.utils.script import classify_query

logger = logging.getLogger(__name__)


class MissingQueryError(ValueError):
    """查询词为空或缺失"""

    def __init__(self, message: str = "Missing query parameter: q"):
        super().__init__(message)


class StoreError(Exception):
    """词典数据库查询失败（连接错误、FTS 语法错误等）"""


class DictionaryService:
    """
    日语词典检索服务

    查询流程:
    1. 按文字类别（汉字/假名/英文/混合）选择检索策略
    2. 子串匹配检索主字段
    3. 若无结果，改用 FTS5 前缀匹配 ("query*") 重试一次
    4. 按 匹配等级 -> 匹配字段长度 排序，最多返回 SEARCH_RESULT_LIMIT 条

    词典数据只读，查询结果可以安全缓存。
    """

    def __init__(
        self,
        session_factory: Optional[sessionmaker] = None,
        cache_size: Optional[int] = None,
        result_limit: Optional[int] = None,
    ):
        self._session_factory = session_factory or SessionLocal
        # 限制在 1..50 之间，负数会被 SQLite 当作不限条数
        self.result_limit = max(1, min(result_limit or SEARCH_RESULT_LIMIT, SEARCH_MAX_RESULTS))
        if cache_size is None:
            cache_size = DICTIONARY_CACHE_SIZE
        self._cached_search = lru_cache(maxsize=cache_size)(self._search)

    def search(self, query: Optional[str]) -> List[SearchResult]:
        """
        查询词典

        Args:
            query: 查询词（汉字、假名、英文或混合）

        Returns:
            List[SearchResult]: 排序后的词条列表

        Raises:
            MissingQueryError: 查询词为空
            StoreError: 数据库查询失败
        """
        if not query:
            raise MissingQueryError()
        # 缓存中的对象在请求间共享，每次返回深拷贝
        return [result.model_copy(deep=True) for result in self._cached_search(query)]

    def clear_cache(self) -> None:
        self._cached_search.cache_clear()

    def _search(self, query: str) -> Tuple[SearchResult, ...]:
        category = classify_query(query)
        strategy = get_strategy(category)

        try:
            with self._session_factory() as db:
                results = self._run_primary(db, strategy, query)
                if not results:
                    logger.debug(f'No substring match for "{query}", falling back to full-text search')
                    results = self._run_fallback(db, strategy, query)
        except SQLAlchemyError as e:
            logger.error(f'Error searching for "{query}": {e}', exc_info=True)
            # 优先使用驱动层的原始错误信息，如 "fts5: syntax error near ..."
            raise StoreError(str(getattr(e, "orig", None) or e)) from e

        logger.info(f'Search for "{query}" ({category.value}) returned {len(results)} results')
        return tuple(results)

    def _run_primary(self, db: Session, strategy: SearchStrategy, query: str) -> List[SearchResult]:
        """子串匹配"""
        return self._execute(db, strategy, query, fulltext=False)

    def _run_fallback(self, db: Session, strategy: SearchStrategy, query: str) -> List[SearchResult]:
        """FTS5 前缀匹配"""
        return self._execute(db, strategy, query, fulltext=True)

    def _execute(self, db: Session, strategy: SearchStrategy, query: str, fulltext: bool) -> List[SearchResult]:
        stmt = strategy.ranked_entries(query, fulltext=fulltext, limit=self.result_limit)
        entry_ids = [row[0] for row in db.execute(stmt)]
        if not entry_ids:
            return []
        return self._load_entries(db, entry_ids)

    def _load_entries(self, db: Session, entry_ids: Sequence[int]) -> List[SearchResult]:
        """
        按排好的 ID 顺序取回每个词条的汉字、读音、释义

        同一词条的字段值去重，保持首次出现的顺序
        """
        collected: Dict[str, Dict[int, List[str]]] = {}
        for source in ALL_SOURCES:
            grouped: Dict[int, List[str]] = {}
            for entry_id, value in db.execute(source.values_for(entry_ids)):
                values = grouped.setdefault(entry_id, [])
                if value not in values:
                    values.append(value)
            collected[source.name] = grouped

        return [
            SearchResult(
                id=entry_id,
                kanji=collected["kanji"].get(entry_id, []),
                readings=collected["reading"].get(entry_id, []),
                meanings=collected["meaning"].get(entry_id, []),
            )
            for entry_id in entry_ids
        ]


# ==================== FastAPI 依赖注入 ====================
@lru_cache(maxsize=None)
def get_dictionary_service() -> DictionaryService:
    """获取字典服务实例（进程内单例，共享同一个 Engine 连接池）"""
    return DictionaryService()
