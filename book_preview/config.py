"""
Configuration settings for the translation proxy and the catalog generator.
"""
import os
from typing import List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """
    Configuration class for book preview service settings.
    """

    # Upstream translation API (MyMemory)
    TRANSLATION_API_URL: str = os.getenv("TRANSLATION_API_URL", "https://api.mymemory.translated.net/get")
    TRANSLATION_TIMEOUT: float = float(os.getenv("TRANSLATION_TIMEOUT", "10"))  # seconds

    # Caching Configuration
    CACHE_TTL_SECONDS: int = int(os.getenv("TRANSLATION_CACHE_TTL", "86400"))  # 24 hours default
    MAX_CACHE_SIZE: int = int(os.getenv("TRANSLATION_MAX_CACHE_SIZE", "10000"))
    CACHE_CHECK_PERIOD: int = int(os.getenv("TRANSLATION_CACHE_CHECK_PERIOD", "20"))  # seconds

    # Catalog generation
    BOOKS_PER_PAGE: int = 20
    MAX_AVERAGE_REVIEWS: float = float(os.getenv("CATALOG_MAX_AVERAGE_REVIEWS", "50"))
    DEFAULT_LOCALE: str = "en_US"
    REGION_LOCALES = {
        "en": "en_US",
        "fr": "fr_FR",
        "de": "de_DE",
    }
    COVER_IMAGE_URL_TEMPLATE: str = os.getenv(
        "COVER_IMAGE_URL_TEMPLATE", "https://picsum.photos/seed/{isbn}/200/300"
    )

    # Server
    PORT: int = int(os.getenv("PORT", "3001"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ALLOW_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    @classmethod
    def validate(cls) -> tuple[bool, str]:
        """
        Validate that all required configuration values are usable.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not cls.TRANSLATION_API_URL.startswith(("http://", "https://")):
            return False, "TRANSLATION_API_URL must start with http:// or https://"

        if cls.TRANSLATION_TIMEOUT <= 0:
            return False, "TRANSLATION_TIMEOUT must be positive"

        if cls.CACHE_TTL_SECONDS <= 0:
            return False, "TRANSLATION_CACHE_TTL must be positive"

        if cls.MAX_CACHE_SIZE <= 0:
            return False, "TRANSLATION_MAX_CACHE_SIZE must be positive"

        if "{isbn}" not in cls.COVER_IMAGE_URL_TEMPLATE:
            return False, "COVER_IMAGE_URL_TEMPLATE must contain an {isbn} placeholder"

        return True, ""
