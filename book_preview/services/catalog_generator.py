"""
Deterministic synthetic book catalog generation.

Every field on a page is drawn from a GenerationContext seeded from the
(seed, page) pair, so identical parameters reproduce identical pages apart
from the random record ids.
"""
import logging
import math
import random
import uuid
from dataclasses import dataclass
from typing import List, Optional

from faker import Faker
from faker.exceptions import UniquenessException

from ..config import Config
from ..models.book import BookRecord, Review
from ..utils import BookPreviewError, CatalogGenerationError

logger = logging.getLogger(__name__)

ISBN_PATTERN = "###-##########"


def hash_code(value: str) -> int:
    """
    32-bit string hash: h = 31 * h + code unit, over UTF-16 code units,
    wrapped to a signed 32-bit integer.
    """
    data = value.encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (31 * h + unit) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


def get_locale(region: Optional[str]) -> str:
    """Map a region code to a Faker locale, falling back to the default."""
    return Config.REGION_LOCALES.get(region or "", Config.DEFAULT_LOCALE)


def parse_page(raw) -> int:
    """Parse a page number, clamped to >= 1. Unparsable input means page 1."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(value):
        return 1
    return max(1, int(value))


def parse_average(raw, maximum: Optional[float] = None) -> float:
    """Parse an average count, clamped to >= 0 (and to maximum when given)."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    value = max(0.0, value)
    if maximum is not None:
        value = min(value, maximum)
    return value


@dataclass
class GenerationContext:
    """
    Per-request generator state.

    `fake` produces every text field; `count_rng` makes the fractional
    like/review draws. They are seeded from different hashes of the
    (seed, page) pair so the counts do not follow the text draws.
    """
    fake: Faker
    count_rng: random.Random
    seed_value: int
    locale: str


def build_context(seed: str, page: int, region: str) -> GenerationContext:
    """
    Construct the generator state for one catalog page.

    Args:
        seed: User-supplied seed string
        page: 1-based page number
        region: Region code selecting the Faker locale

    Returns:
        A freshly seeded GenerationContext
    """
    seed_value = hash_code(f"{seed}-{page}")
    locale = get_locale(region)

    fake = Faker(locale)
    fake.seed_instance(seed_value)

    return GenerationContext(
        fake=fake,
        count_rng=random.Random(hash_code(f"{seed}-{page}-counts")),
        seed_value=seed_value,
        locale=locale
    )


def fractional_value(average: float, rng: random.Random) -> int:
    """
    Realize a possibly fractional average as an integer count.

    Returns floor(average), plus one with probability equal to the fractional
    part. Integer averages never consume randomness.
    """
    int_part = math.floor(average)
    fraction = average - int_part
    value = int_part
    if fraction > 0 and rng.random() < fraction:
        value += 1
    return value


def _text_or_default(value: Optional[str], fallback: str) -> str:
    if value is None:
        return fallback
    value = value.strip()
    return value or fallback


def generate_title(ctx: GenerationContext) -> str:
    title = ctx.fake.sentence(nb_words=3, variable_nb_words=True).rstrip(".")
    return _text_or_default(title, "Untitled")


def generate_author(ctx: GenerationContext) -> str:
    return _text_or_default(ctx.fake.name(), "Unknown Author")


def generate_publisher(ctx: GenerationContext) -> str:
    return _text_or_default(ctx.fake.company(), "Unknown Publisher")


def generate_reviews(ctx: GenerationContext, count: int) -> List[Review]:
    return [
        Review(author=generate_author(ctx), text=ctx.fake.paragraph())
        for _ in range(count)
    ]


def generate_isbn(ctx: GenerationContext) -> str:
    """
    Generate an ISBN-like code, unique within the page when possible.
    """
    try:
        return ctx.fake.unique.numerify(ISBN_PATTERN)
    except UniquenessException:
        logger.warning("Exhausted unique ISBN retries, using a non-unique code")
        return ctx.fake.numerify(ISBN_PATTERN)


def cover_image_url(isbn: str) -> str:
    return Config.COVER_IMAGE_URL_TEMPLATE.format(isbn=isbn)


def generate_book(ctx: GenerationContext, index: int, avg_likes: float, avg_reviews: float) -> BookRecord:
    title = generate_title(ctx)
    author = generate_author(ctx)
    publisher = generate_publisher(ctx)
    likes = fractional_value(avg_likes, ctx.count_rng)
    reviews = generate_reviews(ctx, fractional_value(avg_reviews, ctx.count_rng))
    isbn = generate_isbn(ctx)

    return BookRecord(
        id=str(uuid.uuid4()),
        index=index,
        isbn=isbn,
        title=title,
        author=author,
        publisher=publisher,
        likes=likes,
        reviews=reviews,
        cover_image_url=cover_image_url(isbn)
    )


def generate_books(
    seed: str = "default",
    page: int = 1,
    region: str = "en",
    avg_likes: float = 0.0,
    avg_reviews: float = 0.0
) -> List[BookRecord]:
    """
    Generate one catalog page of synthetic books.

    Args:
        seed: Seed string; the same seed and page always give the same books
        page: 1-based page number, clamped to >= 1
        region: Region code ("en", "fr", "de"); other values use the default locale
        avg_likes: Average likes per book, clamped to >= 0
        avg_reviews: Average reviews per book, clamped to >= 0

    Returns:
        Exactly Config.BOOKS_PER_PAGE books with indexes continuing across pages

    Raises:
        CatalogGenerationError: If generation fails unexpectedly
    """
    page = max(1, int(page))
    avg_likes = max(0.0, float(avg_likes))
    avg_reviews = max(0.0, float(avg_reviews))
    books_per_page = Config.BOOKS_PER_PAGE

    try:
        ctx = build_context(seed, page, region)
        books = [
            generate_book(ctx, i + 1 + (page - 1) * books_per_page, avg_likes, avg_reviews)
            for i in range(books_per_page)
        ]
    except BookPreviewError:
        raise
    except Exception as e:
        logger.error(f"Error generating catalog page {page} for seed {seed!r}: {str(e)}")
        raise CatalogGenerationError(f"Failed to generate catalog page {page}") from e

    logger.debug(f"Generated {len(books)} books for seed {seed!r}, page {page}, locale {ctx.locale}")
    return books
