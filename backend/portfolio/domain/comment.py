"""Domain dataclasses for the comment board."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True, slots=True)
class Comment:
    id: str
    article_id: str
    article_name: str
    author_name: str
    content: str
    created_at: Optional[str] = None
    parent_id: Optional[str] = None


@dataclass(slots=True)
class CommentPage:
    items: List[Comment] = field(default_factory=list)
    page: int = 1
    total_pages: int = 1
    total_count: int = 0
