import re

from jmdict_api.enums import QueryCategory

# 预编译正则
# CJK 统一汉字 (U+4E00 - U+9FFF)，出现一个即视为汉字查询
KANJI_PATTERN = re.compile(r'[\u4e00-\u9fff]')
# 平假名 + 片假名（含长音符 ー U+30FC）
KANA_ONLY_PATTERN = re.compile(r'[\u3040-\u30ff]+')
# 英文字母与空白
ENGLISH_ONLY_PATTERN = re.compile(r'[a-zA-Z\s]+')


def classify_query(query: str) -> QueryCategory:
    """
    根据字符范围判断查询词类别

    按顺序匹配，先命中者生效:
    1. 含任意汉字 -> KANJI（食べる、食べる123 都算汉字查询）
    2. 全部为假名 -> KANA
    3. 全部为英文字母/空白 -> ENGLISH
    4. 其他 -> MIXED

    空字符串应在调用前被拦截，这里不会报错（返回 MIXED）
    """
    if KANJI_PATTERN.search(query):
        return QueryCategory.KANJI
    if KANA_ONLY_PATTERN.fullmatch(query):
        return QueryCategory.KANA
    if ENGLISH_ONLY_PATTERN.fullmatch(query):
        return QueryCategory.ENGLISH
    return QueryCategory.MIXED
