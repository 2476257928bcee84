# database.py
import logging
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from jmdict_api.models import Base, CREATE_FTS_INDEXES, REBUILD_FTS_INDEXES
from jmdict_api.config import SQLALCHEMY_DATABASE_URL, DICTIONARY_DB_PATH

logger = logging.getLogger(__name__)

# 整个进程共用一个 Engine（自带连接池），词典数据只读，不存在写竞争
# check_same_thread=False 允许 FastAPI 的线程池复用池中的连接，每次查询各自创建 Session
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    # echo=False,  # 生产环境关闭 SQL 日志
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Optional[Engine] = None):
    """
    初始化空库的表结构和 FTS5 索引

    仅用于开发/测试；线上词典文件是预先构建好的
    """
    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    with bind.begin() as conn:
        for ddl in CREATE_FTS_INDEXES:
            conn.execute(ddl)
    logger.info(f"Dictionary schema initialized at {bind.url}")


def rebuild_search_index(bind: Optional[Engine] = None):
    """根据 kanji / readings / meanings 表重建 FTS5 索引"""
    bind = bind or engine
    with bind.begin() as conn:
        for stmt in REBUILD_FTS_INDEXES:
            conn.execute(stmt)


def check_db_connection() -> bool:
    """检查词典数据库是否可用（包括 FTS 索引表）"""
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1 FROM entries LIMIT 1"))
        db.execute(text("SELECT 1 FROM kanji_fts LIMIT 1"))
        logger.info(f"Dictionary database OK: {DICTIONARY_DB_PATH}")
        return True
    except Exception as e:
        logger.error(f"Dictionary database unavailable ({DICTIONARY_DB_PATH}): {e}")
        return False
    finally:
        db.close()
