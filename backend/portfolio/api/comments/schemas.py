"""Pydantic request/response schemas for the Comments API."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CommentCreateIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    article_name: str = Field(default="", alias="articleName", max_length=500)
    author_name: str = Field(default="", alias="authorName", max_length=100)
    content: str = Field(default="", max_length=5000)
    parent_id: Optional[str] = Field(default=None, alias="parentId")


class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    article_id: str = Field(serialization_alias="articleId")
    article_name: str = Field(serialization_alias="articleName")
    author_name: str = Field(serialization_alias="authorName")
    content: str
    created_at: Optional[str] = Field(default=None, serialization_alias="createdAt")
    parent_id: Optional[str] = Field(default=None, serialization_alias="parentId")
    avatar_text: str = Field(default="?", serialization_alias="avatarText")
    avatar_color: str = Field(default="#000000", serialization_alias="avatarColor")


class CommentPageOut(BaseModel):
    items: List[CommentOut]
    page: int
    total_pages: int = Field(serialization_alias="totalPages")
    total_count: int = Field(serialization_alias="totalCount")
