# main.py
import uvicorn
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jmdict_api.database import check_db_connection
from jmdict_api.config import (
    API_VERSION, HOST, PORT, CORS_ALLOWED_ORIGINS, CORS_ALLOW_CREDENTIALS,
    DICTIONARY_DB_PATH, DICTIONARY_CACHE_SIZE, SEARCH_RESULT_LIMIT, LOG_LEVEL,
)
from jmdict_api.routers import dictionary, config

logger = logging.getLogger(__name__)


def _setup_logging():
    """配置日志级别"""
    logging.basicConfig(
        level=LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    # 启动时
    _setup_logging()
    logger.info("Japanese Dictionary API starting...")

    # 词典库缺失时不退出，请求会返回 500
    check_db_connection()

    logger.info(f"Backend: http://{HOST}:{PORT}")
    logger.info(f"Dictionary: {DICTIONARY_DB_PATH} (cache_size={DICTIONARY_CACHE_SIZE}, limit={SEARCH_RESULT_LIMIT})")
    logger.info(f"CORS origins: {', '.join(CORS_ALLOWED_ORIGINS)}")

    yield

    # 关闭时
    logger.info("Shutting down...")


# 创建 FastAPI 应用
app = FastAPI(
    title="Japanese Dictionary API",
    description="Japanese-English dictionary lookup over a precompiled JMdict dataset",
    version=API_VERSION,
    lifespan=lifespan,
)

# CORS 配置（从配置读取）
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 注册 API 路由
app.include_router(dictionary.router)
app.include_router(config.router)


@app.get("/")
async def serve_root():
    """根路径"""
    return {"message": "Japanese Dictionary API is running!"}


# 健康检查
@app.get("/health")
async def health_check():
    """健康检查端点"""
    return {"status": "ok"}


def main():
    """开发服务器启动入口"""
    uvicorn.run(
        "main:app",
        host=HOST,
        port=PORT,
        log_level=LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
