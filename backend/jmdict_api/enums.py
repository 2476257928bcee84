from enum import Enum

class QueryCategory(str, Enum):
    """查询词的文字类别，决定检索哪些字段"""
    KANJI = "kanji"      # 含汉字 -> kanji 表
    KANA = "kana"        # 纯假名 -> readings 表
    ENGLISH = "english"  # 纯拉丁字母 -> meanings 表
    MIXED = "mixed"      # 其他 -> 三张表全部检索
