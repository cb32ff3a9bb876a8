import asyncio
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from book_preview.config import Config
from book_preview.endpoints.books import router as books_router
from book_preview.endpoints.translation import router as translation_router
from book_preview.services.translation_cache import TranslationCache
from book_preview.services.translation_client import TranslationClient
from book_preview.services.translation_service import TranslationService
from book_preview.utils import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

config_valid, config_error = Config.validate()
if not config_valid:
    logger.warning(f"Invalid configuration: {config_error}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.cache_sweeper = asyncio.create_task(
        app.state.translation_cache.run_expiry_sweeper(Config.CACHE_CHECK_PERIOD)
    )
    logger.info(f"Translation cache sweeper started (every {Config.CACHE_CHECK_PERIOD}s)")

    yield

    sweeper = app.state.cache_sweeper
    sweeper.cancel()
    try:
        await sweeper
    except asyncio.CancelledError:
        pass
    app.state.cache_sweeper = None


# Create FastAPI app
app = FastAPI(
    title="Book Preview API",
    description="Translation proxy and synthetic book catalog",
    version="1.0.0",
    lifespan=lifespan
)

# The translation cache is the only process-wide state; handlers reach it through app.state
app.state.translation_cache = TranslationCache(
    ttl_seconds=Config.CACHE_TTL_SECONDS,
    max_size=Config.MAX_CACHE_SIZE
)
app.state.translation_service = TranslationService(
    cache=app.state.translation_cache,
    client=TranslationClient(
        api_url=Config.TRANSLATION_API_URL,
        timeout=Config.TRANSLATION_TIMEOUT
    )
)
app.state.cache_sweeper = None


# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ALLOW_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(translation_router)
app.include_router(books_router)


@app.get("/")
async def root():
    return {"message": "Book Preview API is running!"}


@app.get("/health")
async def health_check():
    health_info = {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "environment": {
            "port": os.getenv("PORT", str(Config.PORT)),
            "translation_api_url": Config.TRANSLATION_API_URL,
            "config_valid": config_valid,
        },
        "translation_cache": await app.state.translation_cache.get_cache_stats(),
    }
    return health_info

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=Config.PORT)
