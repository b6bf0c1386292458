"""SQLAlchemy-backed article repository returning dataclasses."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from ..models.article import ArticleHistoryModel, ArticleModel
from ...domain.article import Article, HistoryRecord

UPDATABLE_FIELDS = {
    "title", "content", "date", "cat", "preview", "is_pinned",
    "pin_message", "status", "created_by",
}


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _to_dc(m: ArticleModel) -> Article:
    return Article(
        id=m.id,
        title=m.title,
        content=m.content or "",
        date=m.date,
        category=m.cat,
        preview=m.preview,
        is_pinned=bool(m.is_pinned),
        pin_message=m.pin_message,
        status=m.status or "draft",
        created_by=m.created_by,
        created_at=_iso(m.created_at),
        updated_at=_iso(m.updated_at),
    )


def _history_to_dc(m: ArticleHistoryModel) -> HistoryRecord:
    return HistoryRecord(
        id=m.id,
        article_id=m.article_id,
        title=m.title,
        content=m.content or "",
        changed_fields=dict(m.changed_fields or {}),
        created_at=_iso(m.created_at),
        created_by=m.created_by,
    )


class ArticleRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, *, status: str | None = None) -> Iterable[Article]:
        stmt: Select = select(ArticleModel).order_by(ArticleModel.created_at.desc())
        if status:
            stmt = stmt.where(ArticleModel.status == status)
        return [_to_dc(m) for m in self.session.scalars(stmt).all()]

    def list_published(self) -> List[Article]:
        stmt = (
            select(ArticleModel)
            .where(ArticleModel.status == "published")
            .order_by(ArticleModel.date.desc().nulls_last())
        )
        return [_to_dc(m) for m in self.session.scalars(stmt).all()]

    def get(self, article_id: str) -> Optional[Article]:
        m = self.session.get(ArticleModel, article_id)
        return _to_dc(m) if m else None

    def exists(self, article_id: str) -> bool:
        return self.session.get(ArticleModel, article_id) is not None

    def create(self, data: Article) -> Article:
        now = _now()
        m = ArticleModel(
            id=data.id,
            title=data.title,
            content=data.content or "",
            date=data.date,
            cat=data.category,
            preview=data.preview,
            is_pinned=bool(data.is_pinned),
            pin_message=data.pin_message,
            status=data.status or "draft",
            created_by=data.created_by,
            created_at=now,
            updated_at=now,
        )
        self.session.add(m)
        self.session.commit()
        self.session.refresh(m)
        return _to_dc(m)

    def update(self, article_id: str, **fields) -> Optional[Article]:
        m = self.session.get(ArticleModel, article_id)
        if not m:
            return None
        for k, v in fields.items():
            if k in UPDATABLE_FIELDS:
                setattr(m, k, v)
        m.updated_at = _now()
        self.session.commit()
        self.session.refresh(m)
        return _to_dc(m)

    def delete(self, article_id: str) -> bool:
        m = self.session.get(ArticleModel, article_id)
        if not m:
            return False
        self.session.delete(m)
        self.session.commit()
        return True

    # --- history ---

    def add_history(self, record: HistoryRecord) -> HistoryRecord:
        m = ArticleHistoryModel(
            id=record.id or str(uuid.uuid4()),
            article_id=record.article_id,
            title=record.title,
            content=record.content or "",
            changed_fields=dict(record.changed_fields or {}),
            created_by=record.created_by,
            created_at=_now(),
        )
        self.session.add(m)
        self.session.commit()
        self.session.refresh(m)
        return _history_to_dc(m)

    def list_history(self, article_id: str) -> List[HistoryRecord]:
        stmt = (
            select(ArticleHistoryModel)
            .where(ArticleHistoryModel.article_id == article_id)
            .order_by(ArticleHistoryModel.created_at.desc())
        )
        return [_history_to_dc(m) for m in self.session.scalars(stmt).all()]

    def get_history(self, history_id: str) -> Optional[HistoryRecord]:
        m = self.session.get(ArticleHistoryModel, history_id)
        return _history_to_dc(m) if m else None
