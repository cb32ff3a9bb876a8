"""
Translation request/response models for the translation proxy.
"""
from pydantic import BaseModel
from typing import List, Optional, Union


class TranslateRequest(BaseModel):
    """
    Request model for the translation API endpoint.

    Every field is optional at the schema level so that missing fields are
    reported as a single 400 listing all of them.
    """
    q: Optional[Union[str, List[str]]] = None  # Text or ordered list of texts
    source: Optional[str] = None  # Source language tag, e.g. "en"
    target: Optional[str] = None  # Target language tag, e.g. "fr"


class TranslateResponse(BaseModel):
    """
    Response model for a scalar translation request.
    """
    translatedText: str


class TranslationCacheStats(BaseModel):
    """
    Response model for the cache statistics endpoint.
    """
    total_entries: int
    valid_entries: int
    expired_entries: int
    max_capacity: int
    utilization_percent: float
