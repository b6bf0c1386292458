"""Pydantic request/response schemas for the admin API."""
from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Status = Literal["draft", "published"]


class ArticleCreateIn(BaseModel):
    id: Optional[str] = Field(default=None, max_length=200)
    title: str = Field(..., min_length=1, max_length=500)
    content: str = ""
    date: Optional[str] = None
    cat: Optional[str] = None
    preview: Optional[str] = None
    is_pinned: bool = False
    pin_message: Optional[str] = None
    status: Status = "draft"


class ArticleUpdateIn(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    content: Optional[str] = None
    date: Optional[str] = None
    cat: Optional[str] = None
    preview: Optional[str] = None
    is_pinned: Optional[bool] = None
    pin_message: Optional[str] = None
    status: Optional[Status] = None


class RestoreIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    history_id: str = Field(..., min_length=1, alias="historyId")


class ArticleOut(BaseModel):
    id: str
    title: str
    content: str
    date: Optional[str]
    cat: Optional[str]
    preview: Optional[str]
    is_pinned: bool
    pin_message: Optional[str]
    status: str
    created_by: Optional[str]
    created_at: Optional[str]
    updated_at: Optional[str]


class HistoryOut(BaseModel):
    id: str
    article_id: str
    title: str
    content: str
    changed_fields: Dict[str, Any]
    created_by: Optional[str]
    created_at: Optional[str]
