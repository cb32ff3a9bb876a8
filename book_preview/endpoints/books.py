"""
Synthetic book catalog endpoint.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, HTTPException
from fastapi.concurrency import run_in_threadpool

from ..config import Config
from ..models.book import BookRecord
from ..services.catalog_generator import generate_books, parse_average, parse_page

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/books", tags=["books"])


@router.get("", response_model=List[BookRecord])
async def get_books(
    seed: str = "default",
    page: Optional[str] = "1",
    region: str = "en",
    likes: Optional[str] = "0",
    reviews: Optional[str] = "0"
):
    """
    Return one page of deterministic synthetic books.

    Numeric parameters are taken as strings and clamped instead of rejected.
    """
    page_num = parse_page(page)
    avg_likes = parse_average(likes)
    avg_reviews = parse_average(reviews, maximum=Config.MAX_AVERAGE_REVIEWS)

    try:
        return await run_in_threadpool(
            generate_books,
            seed=seed,
            page=page_num,
            region=region,
            avg_likes=avg_likes,
            avg_reviews=avg_reviews
        )
    except Exception as e:
        logger.error(f"Error generating books: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to generate books")
