"""
Translation service that combines the cache with the upstream client.
"""
import logging
from typing import List, Sequence, Union

from .translation_cache import TranslationCache
from .translation_client import TranslationClient
from ..utils import TranslationInputError

logger = logging.getLogger(__name__)


class TranslationService:
    """
    Serves translation batches from the cache and fetches the misses upstream.
    """

    def __init__(self, cache: TranslationCache, client: TranslationClient):
        self.cache = cache
        self.client = client

    async def translate_batch(self, texts: Sequence[str], source: str, target: str) -> List[str]:
        """
        Translate an ordered batch of texts.

        Args:
            texts: Texts to translate
            source: Source language tag
            target: Target language tag

        Returns:
            Translations in the same order as texts, whatever the hit/miss split

        Raises:
            UpstreamTranslationError: If fetching any miss fails; nothing from the batch is cached
        """
        cache_keys = [TranslationCache.generate_cache_key(source, target, text) for text in texts]
        cached_translations = await self.cache.get_many(cache_keys)

        indexes_to_fetch = [
            index for index, translation in enumerate(cached_translations)
            if translation is None
        ]

        logger.info(
            f"Translating {len(texts)} texts {source}|{target}: "
            f"{len(texts) - len(indexes_to_fetch)} cached, {len(indexes_to_fetch)} to fetch"
        )

        final_translations = list(cached_translations)

        if indexes_to_fetch:
            texts_to_fetch = [texts[index] for index in indexes_to_fetch]
            fetched_translations = await self.client.translate_many(texts_to_fetch, source, target)

            await self.cache.set_many([
                (cache_keys[index], translated_text)
                for index, translated_text in zip(indexes_to_fetch, fetched_translations)
            ])

            for index, translated_text in zip(indexes_to_fetch, fetched_translations):
                final_translations[index] = translated_text

        return final_translations

    async def translate(
        self,
        q: Union[str, List[str], None],
        source: str,
        target: str
    ) -> Union[str, List[str]]:
        """
        Translate a single text or a list of texts, returning the same shape.

        Raises:
            TranslationInputError: If q, source or target is missing
        """
        missing = []
        if q is None or q == "":
            missing.append("q")
        if not source:
            missing.append("source")
        if not target:
            missing.append("target")
        if missing:
            raise TranslationInputError(missing)

        is_list = isinstance(q, list)
        texts = q if is_list else [q]

        translations = await self.translate_batch(texts, source, target)

        if not is_list:
            return translations[0]
        return translations
