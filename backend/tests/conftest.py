from __future__ import annotations

import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Make the backend importable when running tests from the repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from jmdict_api.database import init_db, rebuild_search_index  # noqa: E402
from jmdict_api.models import Entry, Kanji, Reading, Meaning  # noqa: E402
from jmdict_api.services.dictionary_service import DictionaryService  # noqa: E402

# (id, kanji forms, readings, meanings); duplicates are intentional
SAMPLE_ENTRIES = [
    (1, ["食べる"], ["たべる"], ["to eat", "to live on", "to eat"]),
    (2, ["食べ物"], ["たべもの"], ["food"]),
    (3, ["食"], ["しょく"], ["meal", "eating"]),
    (4, ["食べ過ぎる"], ["たべすぎる"], ["to overeat"]),
    (5, ["飲む"], ["のむ"], ["to drink"]),
    (6, [], ["コーヒー"], ["coffee"]),
    (7, ["東京"], ["とうきょう"], ["Tokyo"]),
    (8, ["百円玉"], ["ひゃくえんだま"], ["100 yen coin"]),
    (9, ["百"], ["ひゃく", "ひゃく"], ["100", "hundred"]),
    # kanji match is longer than the meaning match
    (20, ["Q1号機機機"], [], ["Q1a"]),
    (21, ["電気"], ["でんき"], ["Q1bcd"]),
    # only reachable through full-text tokens
    (22, [], [], ["100 yen store item"]),
    (23, [], ["ミルク ティー"], ["milk tea"]),
    (24, ["大阪 城"], ["おおさかじょう"], ["Osaka Castle"]),
]

# Enough rows sharing one meaning prefix to exceed the result cap.
SAMPLE_BULK = [
    (1000 + i, [], [], ["sample" + "x" * i])
    for i in range(1, 61)
]


def _seed(session, entries):
    for entry_id, kanji, readings, meanings in entries:
        session.add(Entry(id=entry_id))
        session.add_all(Kanji(entry_id=entry_id, kanji=k) for k in kanji)
        session.add_all(Reading(entry_id=entry_id, reading=r) for r in readings)
        session.add_all(Meaning(entry_id=entry_id, meaning=m) for m in meanings)
    session.commit()


@pytest.fixture(scope="session")
def dictionary_engine(tmp_path_factory):
    db_path = tmp_path_factory.mktemp("dictionary") / "jmdict.sqlite"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    init_db(engine)
    with sessionmaker(bind=engine)() as session:
        _seed(session, SAMPLE_ENTRIES + SAMPLE_BULK)
    rebuild_search_index(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="session")
def session_factory(dictionary_engine):
    return sessionmaker(autoflush=False, bind=dictionary_engine)


@pytest.fixture
def service(session_factory) -> DictionaryService:
    return DictionaryService(session_factory=session_factory, cache_size=0)


@pytest.fixture
def client(service):
    from fastapi.testclient import TestClient

    from main import app
    from jmdict_api.services.dictionary_service import get_dictionary_service

    app.dependency_overrides[get_dictionary_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
