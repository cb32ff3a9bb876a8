import httpx
import pytest

from book_preview.services.translation_client import TranslationClient, extract_translated_text
from book_preview.utils import UpstreamTranslationError

API_URL = "https://translator.test/get"


def _client(handler):
    return TranslationClient(api_url=API_URL, timeout=5, transport=httpx.MockTransport(handler))


def test_extract_translated_text():
    payload = {"responseData": {"translatedText": "Bonjour"}}
    assert extract_translated_text(payload, "Hello") == "Bonjour"


@pytest.mark.parametrize("payload", [
    None,
    {},
    {"responseData": None},
    {"responseData": {}},
    {"responseData": {"translatedText": 42}},
    ["unexpected"],
])
def test_extract_translated_text_malformed_echoes_input(payload):
    assert extract_translated_text(payload, "Hello") == "Hello"


@pytest.mark.asyncio
async def test_translate_many_sends_langpair_and_keeps_order():
    seen = []

    def handler(request):
        seen.append((request.url.params["q"], request.url.params["langpair"]))
        text = request.url.params["q"]
        return httpx.Response(200, json={"responseData": {"translatedText": text.upper()}})

    result = await _client(handler).translate_many(["one", "two", "three"], "en", "fr")

    assert result == ["ONE", "TWO", "THREE"]
    assert sorted(seen) == [("one", "en|fr"), ("three", "en|fr"), ("two", "en|fr")]


@pytest.mark.asyncio
async def test_malformed_payload_for_one_text_does_not_abort_others():
    def handler(request):
        text = request.url.params["q"]
        if text == "broken":
            return httpx.Response(200, json={"responseStatus": 200})
        if text == "not-json":
            return httpx.Response(200, text="<html>oops</html>")
        return httpx.Response(200, json={"responseData": {"translatedText": f"fr:{text}"}})

    result = await _client(handler).translate_many(["a", "broken", "not-json", "b"], "en", "fr")

    assert result == ["fr:a", "broken", "not-json", "fr:b"]


@pytest.mark.asyncio
async def test_http_error_fails_whole_batch():
    def handler(request):
        if request.url.params["q"] == "bad":
            return httpx.Response(503, text="unavailable")
        return httpx.Response(200, json={"responseData": {"translatedText": "ok"}})

    with pytest.raises(UpstreamTranslationError):
        await _client(handler).translate_many(["good", "bad"], "en", "fr")


@pytest.mark.asyncio
async def test_transport_error_fails_whole_batch():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamTranslationError):
        await _client(handler).translate("Hello", "en", "fr")


@pytest.mark.asyncio
async def test_empty_batch_makes_no_requests():
    def handler(request):
        raise AssertionError("no request expected")

    assert await _client(handler).translate_many([], "en", "fr") == []
