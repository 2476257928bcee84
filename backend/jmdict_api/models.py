from sqlalchemy import Column, Integer, String, ForeignKey, text
from sqlalchemy.orm import relationship, declarative_base

Base = declarative_base()


class Entry(Base):
    """
    词条（JMdict 的一个 headword）
    汉字写法、读音、释义分别存放在三张子表中，一个词条可以各有零到多条
    """
    __tablename__ = "entries"

    id = Column(Integer, primary_key=True)  # JMdict ent_seq

    kanji = relationship("Kanji", back_populates="entry")
    readings = relationship("Reading", back_populates="entry")
    meanings = relationship("Meaning", back_populates="entry")


class Kanji(Base):
    __tablename__ = "kanji"

    id = Column(Integer, primary_key=True)  # 即 rowid，与 kanji_fts 的 rowid 对应
    entry_id = Column(Integer, ForeignKey("entries.id"), nullable=False, index=True)
    kanji = Column(String, nullable=False)  # 汉字写法 (e.g., 食べる)

    entry = relationship("Entry", back_populates="kanji")


class Reading(Base):
    __tablename__ = "readings"

    id = Column(Integer, primary_key=True)
    entry_id = Column(Integer, ForeignKey("entries.id"), nullable=False, index=True)
    reading = Column(String, nullable=False)  # 假名读音 (e.g., たべる)

    entry = relationship("Entry", back_populates="readings")


class Meaning(Base):
    __tablename__ = "meanings"

    id = Column(Integer, primary_key=True)
    entry_id = Column(Integer, ForeignKey("entries.id"), nullable=False, index=True)
    meaning = Column(String, nullable=False)  # 英文释义 (e.g., to eat)

    entry = relationship("Entry", back_populates="meanings")


# ==================== FTS5 全文索引 ====================
# external content 表：索引内容取自字段表，rowid 与字段表主键一致
# 词典数据由外部构建，这里的 DDL 只用于开发和测试环境初始化空库
def _fts_ddl(fts_table: str, content_table: str, column: str):
    return text(
        f"CREATE VIRTUAL TABLE IF NOT EXISTS {fts_table} "
        f"USING fts5({column}, content='{content_table}', content_rowid='id')"
    )


def _fts_rebuild(fts_table: str):
    return text(f"INSERT INTO {fts_table}({fts_table}) VALUES('rebuild')")


# (fts 表名, 内容表名, 被索引的列)
FTS_INDEXES = (
    ("kanji_fts", "kanji", "kanji"),
    ("readings_fts", "readings", "reading"),
    ("meanings_fts", "meanings", "meaning"),
)

CREATE_FTS_INDEXES = [_fts_ddl(*index) for index in FTS_INDEXES]
REBUILD_FTS_INDEXES = [_fts_rebuild(fts_table) for fts_table, _, _ in FTS_INDEXES]
