"""Article and edit-history ORM models compatible with PostgreSQL(Supabase) and SQLite."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import Boolean, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from ..base import Base


class ArticleModel(Base):
    __tablename__ = "articles"

    id: Mapped[str] = mapped_column(String(200), primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str] = mapped_column(Text, default="")
    date: Mapped[Optional[str]] = mapped_column(String(40), default=None, index=True)
    cat: Mapped[Optional[str]] = mapped_column(String(100), default=None)
    preview: Mapped[Optional[str]] = mapped_column(Text, default=None)
    is_pinned: Mapped[bool] = mapped_column(Boolean, default=False)
    pin_message: Mapped[Optional[str]] = mapped_column(String(500), default=None)
    status: Mapped[str] = mapped_column(String(20), default="draft", index=True)
    created_by: Mapped[Optional[str]] = mapped_column(String(100), default=None)

    created_at: Mapped[datetime] = mapped_column(default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(default=func.now(), onupdate=func.now(), nullable=False)


class ArticleHistoryModel(Base):
    __tablename__ = "article_history"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # UUID string
    article_id: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str] = mapped_column(Text, default="")
    changed_fields: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict)
    created_by: Mapped[Optional[str]] = mapped_column(String(100), default=None)

    created_at: Mapped[datetime] = mapped_column(default=func.now(), nullable=False)
