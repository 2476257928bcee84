# jmdict_api/routers/config.py
"""
公共配置 API
提供前端需要的配置信息，实现前后端配置同步
"""
from fastapi import APIRouter

from jmdict_api.enums import QueryCategory
from jmdict_api.schemas import PublicConfigResponse, SearchLimits
from jmdict_api.config import API_VERSION, SEARCH_RESULT_LIMIT, SEARCH_RESULT_DELIMITER

router = APIRouter(prefix="/api/config", tags=["Config"])


@router.get("", response_model=PublicConfigResponse)
def get_public_config():
    """
    获取公共配置（供前端使用）

    **返回内容**：
    - `version`: API 版本号
    - `search`: 单次查询返回上限、多值字段分隔符
    - `categories`: 支持的查询类别

    **示例响应**：
    ```json
    {
      "version": "0.1.0",
      "search": {"result_limit": 50, "result_delimiter": ","},
      "categories": ["kanji", "kana", "english", "mixed"]
    }
    ```
    """
    return PublicConfigResponse(
        version=API_VERSION,
        search=SearchLimits(
            result_limit=SEARCH_RESULT_LIMIT,
            result_delimiter=SEARCH_RESULT_DELIMITER,
        ),
        categories=list(QueryCategory),
    )
