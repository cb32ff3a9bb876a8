"""
Translation API endpoints.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request

from ..models.translation import TranslateRequest, TranslateResponse, TranslationCacheStats
from ..services.translation_cache import TranslationCache
from ..services.translation_service import TranslationService
from ..utils import TranslationInputError, UpstreamTranslationError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/translate", tags=["translation"])


def get_translation_service(request: Request) -> TranslationService:
    """Dependency returning the service built at application startup."""
    return request.app.state.translation_service


def get_translation_cache(request: Request) -> TranslationCache:
    return request.app.state.translation_cache


@router.post("")
async def translate(
    request: Optional[TranslateRequest] = None,
    service: TranslationService = Depends(get_translation_service)
):
    """
    Translate a single text or an ordered list of texts.

    Args:
        request: The translation request with q, source and target

    Returns:
        {"translatedText": ...} for a single text, a list of strings for a list
    """
    request = request or TranslateRequest()

    try:
        result = await service.translate(request.q, request.source, request.target)

        if isinstance(request.q, list):
            return result
        return TranslateResponse(translatedText=result)

    except TranslationInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UpstreamTranslationError as e:
        logger.error(f"Translation Error: {str(e)}")
        raise HTTPException(status_code=500, detail="Translation failed")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error in translate: {str(e)}")
        raise HTTPException(status_code=500, detail="Translation failed")


@router.get("/cache/stats", response_model=TranslationCacheStats)
async def translation_cache_stats(cache: TranslationCache = Depends(get_translation_cache)):
    """
    Report the size and expiry state of the translation cache.
    """
    return TranslationCacheStats(**await cache.get_cache_stats())
