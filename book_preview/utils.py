import logging

from .config import Config


def setup_logging(level: str = None):
    """Set up basic logging configuration."""
    logging.basicConfig(
        level=(level or Config.LOG_LEVEL).upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(),
        ]
    )


class BookPreviewError(Exception):
    """Base exception for the book preview backend."""
    pass


class TranslationInputError(BookPreviewError):
    """Exception raised when a translation request is missing required fields."""

    def __init__(self, missing_fields):
        self.missing_fields = list(missing_fields)
        super().__init__(f"Missing required fields: {', '.join(self.missing_fields)}")


class UpstreamTranslationError(BookPreviewError):
    """Exception raised when the upstream translation API cannot be reached or errors."""
    pass


class CatalogGenerationError(BookPreviewError):
    """Exception raised when a catalog page cannot be generated."""
    pass
