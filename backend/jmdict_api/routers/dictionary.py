# jmdict_api/routers/dictionary.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from jmdict_api.config import SEARCH_RESULT_DELIMITER
from jmdict_api.schemas import ErrorResponse, SearchResultItem
from jmdict_api.services.dictionary_service import (
    DictionaryService,
    MissingQueryError,
    StoreError,
    get_dictionary_service,
)

router = APIRouter(tags=["Dictionary"])


@router.get(
    "/search",
    response_model=List[SearchResultItem],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
def search_dictionary(
    q: Optional[str] = Query(None, description="查询词"),
    dictionary_service: DictionaryService = Depends(get_dictionary_service)
):
    """
    查询日语词典

    **查询参数**:
    - q: 汉字、假名、英文或混合文本

    **检索规则**:
    - 含汉字 -> 检索汉字写法；纯假名 -> 检索读音；纯英文 -> 检索释义；其他 -> 全部字段
    - 先做子串匹配，无结果时改用全文检索前缀匹配
    - 完全一致 > 包含，同等级内较短的优先，最多 50 条

    **返回结果**:
    - 词条列表，kanji / readings / meanings 为逗号拼接的字符串

    **示例**:
    - GET /search?q=食べる
    - GET /search?q=たべる
    - GET /search?q=eat
    """
    try:
        results = dictionary_service.search(q)
    except MissingQueryError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": str(e)},
        )
    except StoreError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Database search error", "details": str(e)},
        )

    return [SearchResultItem.from_result(r, SEARCH_RESULT_DELIMITER) for r in results]
