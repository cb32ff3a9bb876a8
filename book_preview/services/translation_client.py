"""
Client for the MyMemory translation API.
"""
import asyncio
import logging
from typing import List, Optional, Sequence

import httpx

from ..config import Config
from ..utils import UpstreamTranslationError

logger = logging.getLogger(__name__)


def extract_translated_text(payload, original_text: str) -> str:
    """
    Pull responseData.translatedText out of an upstream payload.

    Falls back to the original text when the payload does not have the
    expected shape.
    """
    try:
        translated_text = payload["responseData"]["translatedText"]
    except (KeyError, TypeError):
        translated_text = None

    if not isinstance(translated_text, str):
        logger.warning(f"Malformed translation payload, echoing original text ({len(original_text)} chars)")
        return original_text

    return translated_text


class TranslationClient:
    """
    Sends translation requests to the upstream API, one GET per text.
    """

    def __init__(
        self,
        api_url: str = Config.TRANSLATION_API_URL,
        timeout: float = Config.TRANSLATION_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Args:
            api_url: Upstream endpoint
            timeout: Per-call timeout in seconds
            transport: Optional httpx transport, used by tests to stub the upstream
        """
        self.api_url = api_url
        self.timeout = timeout
        self.transport = transport

    async def _translate_one(self, client: httpx.AsyncClient, text: str, langpair: str) -> str:
        response = await client.get(self.api_url, params={"q": text, "langpair": langpair})
        response.raise_for_status()

        try:
            payload = response.json()
        except ValueError:
            payload = None

        return extract_translated_text(payload, text)

    async def translate_many(self, texts: Sequence[str], source: str, target: str) -> List[str]:
        """
        Translate several texts concurrently.

        Every request runs to completion or failure before this returns.

        Args:
            texts: Texts to translate
            source: Source language tag
            target: Target language tag

        Returns:
            Translations in the same order as texts

        Raises:
            UpstreamTranslationError: If any request fails at the transport or HTTP level
        """
        if not texts:
            return []

        langpair = f"{source}|{target}"

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            results = await asyncio.gather(
                *(self._translate_one(client, text, langpair) for text in texts),
                return_exceptions=True
            )

        failures = [result for result in results if isinstance(result, BaseException)]
        if failures:
            logger.error(
                f"{len(failures)} of {len(texts)} upstream translations failed for {langpair}: {failures[0]!r}"
            )
            raise UpstreamTranslationError(f"Upstream translation failed: {failures[0]}") from failures[0]

        return list(results)

    async def translate(self, text: str, source: str, target: str) -> str:
        results = await self.translate_many([text], source, target)
        return results[0]
