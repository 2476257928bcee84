# jmdict_api/schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional

from jmdict_api.enums import QueryCategory


# ==================== Dictionary 相关 ====================
class SearchResult(BaseModel):
    """
    单个词条的检索结果（服务层内部使用）

    同一词条的汉字/读音/释义可能来自多行联表结果，这里保证各自去重，保持首次出现的顺序
    """
    id: int = Field(..., description="JMdict 词条 ID")
    kanji: List[str] = Field(default_factory=list, description="汉字写法列表")
    readings: List[str] = Field(default_factory=list, description="读音列表")
    meanings: List[str] = Field(default_factory=list, description="释义列表")


class SearchResultItem(BaseModel):
    """
    /search 接口返回的词条

    kanji / readings / meanings 为逗号拼接的字符串，没有对应数据时为 null
    """
    id: int
    kanji: Optional[str] = None
    readings: Optional[str] = None
    meanings: Optional[str] = None

    @classmethod
    def from_result(cls, result: SearchResult, delimiter: str = ",") -> "SearchResultItem":
        def _join(values: List[str]) -> Optional[str]:
            return delimiter.join(values) if values else None

        return cls(
            id=result.id,
            kanji=_join(result.kanji),
            readings=_join(result.readings),
            meanings=_join(result.meanings),
        )


class ErrorResponse(BaseModel):
    """错误响应"""
    error: str
    details: Optional[str] = None


# ==================== Config 相关 ====================
class SearchLimits(BaseModel):
    """检索相关限制"""
    result_limit: int = Field(..., description="单次查询返回的最大词条数")
    result_delimiter: str = Field(..., description="多值字段的拼接分隔符")


class PublicConfigResponse(BaseModel):
    """公共配置响应（供前端使用）"""
    version: str = Field(..., description="API 版本")
    search: SearchLimits
    categories: List[QueryCategory] = Field(..., description="支持的查询类别")
