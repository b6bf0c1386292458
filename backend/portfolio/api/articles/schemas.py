"""Pydantic response schemas for the public Articles API."""
from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ArticleSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    title: str
    date: Optional[str] = None
    cat: Optional[str] = Field(default=None, validation_alias="category")
    preview: Optional[str] = None
    is_pinned: bool = Field(default=False, serialization_alias="isPinned")
    pin_message: Optional[str] = Field(default=None, serialization_alias="pinMessage")


class ArticleListOut(BaseModel):
    articles: List[ArticleSummaryOut]
    pinned_count: int = Field(serialization_alias="pinnedCount")
    page: int
    total_pages: int = Field(serialization_alias="totalPages")
    page_numbers: List[Union[int, str]] = Field(serialization_alias="pageNumbers")
    categories: List[str]
    is_empty: bool = Field(serialization_alias="isEmpty")


class ArticleDetailOut(BaseModel):
    article: Optional[ArticleSummaryOut]
    content: str
    first_image: Optional[str] = Field(default=None, serialization_alias="firstImage")
