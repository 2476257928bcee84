from jmdict_api.services.dictionary_service import DictionaryService


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Japanese Dictionary API is running!"}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_search_returns_joined_fields(client):
    response = client.get("/search", params={"q": "たべる"})
    assert response.status_code == 200
    assert response.json() == [
        {"id": 1, "kanji": "食べる", "readings": "たべる", "meanings": "to eat,to live on"},
    ]


def test_search_missing_field_is_null(client):
    body = client.get("/search", params={"q": "コーヒー"}).json()
    assert body == [{"id": 6, "kanji": None, "readings": "コーヒー", "meanings": "coffee"}]


def test_search_keeps_ranking_order(client):
    body = client.get("/search", params={"q": "食"}).json()
    assert [item["id"] for item in body] == [3, 1, 2, 4]
    assert all(set(item) == {"id", "kanji", "readings", "meanings"} for item in body)


def test_search_cap(client):
    assert len(client.get("/search", params={"q": "sample"}).json()) == 50


def test_search_no_results(client):
    response = client.get("/search", params={"q": "zzz"})
    assert response.status_code == 200
    assert response.json() == []


def test_missing_query_parameter(client, monkeypatch):
    calls = []
    monkeypatch.setattr(DictionaryService, "_run_primary", lambda self, db, strategy, query: calls.append(query))

    for params in ({}, {"q": ""}):
        response = client.get("/search", params=params)
        assert response.status_code == 400
        assert response.json() == {"error": "Missing query parameter: q"}
    assert calls == []


def test_store_error(client):
    response = client.get("/search", params={"q": '"abc'})
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Database search error"
    assert body["details"]


def test_cors_allows_any_origin(client):
    response = client.get("/", headers={"Origin": "http://example.com"})
    assert response.headers["access-control-allow-origin"] == "*"


def test_public_config(client):
    body = client.get("/api/config").json()
    assert body["search"] == {"result_limit": 50, "result_delimiter": ","}
    assert body["categories"] == ["kanji", "kana", "english", "mixed"]
