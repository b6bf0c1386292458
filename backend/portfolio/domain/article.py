"""Domain dataclasses for articles (DB-agnostic)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True, slots=True)
class ArticleSummary:
    id: str
    title: str
    date: Optional[str] = None
    category: Optional[str] = None
    preview: Optional[str] = None
    is_pinned: bool = False
    pin_message: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ArticleContent:
    id: str
    text: str


@dataclass(slots=True)
class Article:
    id: str
    title: str
    content: str = ""
    date: Optional[str] = None
    category: Optional[str] = None
    preview: Optional[str] = None
    is_pinned: bool = False
    pin_message: Optional[str] = None
    status: str = "draft"
    created_by: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def summary(self) -> ArticleSummary:
        return ArticleSummary(
            id=self.id,
            title=self.title,
            date=self.date,
            category=self.category,
            preview=self.preview,
            is_pinned=self.is_pinned,
            pin_message=self.pin_message,
        )


@dataclass(slots=True)
class HistoryRecord:
    id: str
    article_id: str
    title: str
    content: str
    changed_fields: Dict = field(default_factory=dict)
    created_at: Optional[str] = None
    created_by: Optional[str] = None
