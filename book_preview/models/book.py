"""
Synthetic book catalog models.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List


class Review(BaseModel):
    author: str
    text: str


class BookRecord(BaseModel):
    """
    A single generated book on a catalog page.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str  # uuid4, random per call
    index: int  # 1-based, continuous across pages
    isbn: str
    title: str
    author: str
    publisher: str
    likes: int = Field(ge=0)
    reviews: List[Review] = Field(default_factory=list)
    cover_image_url: str = Field(alias="coverImageUrl")
