from unittest.mock import AsyncMock

from book_preview.utils import UpstreamTranslationError


def test_translate_single_text(client, upstream):
    response = client.post("/api/translate", json={"q": "Hello", "source": "en", "target": "fr"})

    assert response.status_code == 200
    assert response.json() == {"translatedText": "[fr] Hello"}


def test_translate_list_keeps_length_and_order(client):
    texts = ["one", "two", "three", "two"]
    response = client.post("/api/translate", json={"q": texts, "source": "en", "target": "de"})

    assert response.status_code == 200
    assert response.json() == ["[de] one", "[de] two", "[de] three", "[de] two"]


def test_repeat_request_hits_cache(client, upstream):
    payload = {"q": ["a", "b"], "source": "en", "target": "fr"}

    client.post("/api/translate", json=payload)
    response = client.post("/api/translate", json={"q": ["b", "c", "a"], "source": "en", "target": "fr"})

    assert response.json() == ["[fr] b", "[fr] c", "[fr] a"]
    assert upstream.translate_many.await_count == 2
    assert upstream.translate_many.await_args_list[1].args == (["c"], "en", "fr")


def test_missing_fields_returns_400(client, upstream):
    response = client.post("/api/translate", json={"q": "Hello"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required fields: source, target"
    upstream.translate_many.assert_not_awaited()


def test_empty_body_returns_400(client):
    response = client.post("/api/translate", json={})

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required fields: q, source, target"


def test_upstream_failure_returns_500(client, upstream, translation_cache):
    upstream.translate_many = AsyncMock(side_effect=UpstreamTranslationError("timeout"))

    response = client.post("/api/translate", json={"q": "Hello", "source": "en", "target": "fr"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Translation failed"

    stats = client.get("/api/translate/cache/stats").json()
    assert stats["total_entries"] == 0


def test_cache_stats(client):
    client.post("/api/translate", json={"q": ["a", "b"], "source": "en", "target": "fr"})

    response = client.get("/api/translate/cache/stats")

    assert response.status_code == 200
    data = response.json()
    assert data["total_entries"] == 2
    assert data["valid_entries"] == 2
    assert data["max_capacity"] == 100


def test_no_body_returns_400(client, upstream):
    response = client.post("/api/translate")

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required fields: q, source, target"
    upstream.translate_many.assert_not_awaited()


def test_null_body_returns_400(client):
    response = client.post(
        "/api/translate", content="null", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required fields: q, source, target"
