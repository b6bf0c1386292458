"""Supabase-backed article repository using supabase-py v2."""
from __future__ import annotations

import uuid
from typing import Any, Dict, Iterable, List, Optional

from supabase import Client

from ...domain.article import Article, HistoryRecord
from .article_repo import UPDATABLE_FIELDS


def _row_to_dc(row: Dict[str, Any]) -> Article:
    return Article(
        id=str(row.get("id")),
        title=row.get("title") or "",
        content=row.get("content") or "",
        date=row.get("date"),
        category=row.get("cat"),
        preview=row.get("preview"),
        is_pinned=bool(row.get("is_pinned")),
        pin_message=row.get("pin_message"),
        status=row.get("status") or "draft",
        created_by=row.get("created_by"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def _row_to_history(row: Dict[str, Any]) -> HistoryRecord:
    return HistoryRecord(
        id=str(row.get("id")),
        article_id=str(row.get("article_id")),
        title=row.get("title") or "",
        content=row.get("content") or "",
        changed_fields=dict(row.get("changed_fields") or {}),
        created_at=row.get("created_at"),
        created_by=row.get("created_by"),
    )


class ArticleRepositorySupabase:
    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("articles")
        self.history = client.table("article_history")

    def list(self, *, status: str | None = None) -> Iterable[Article]:
        q = self.table.select("*").order("created_at", desc=True)
        if status:
            q = q.eq("status", status)
        res = q.execute()
        return [_row_to_dc(r) for r in res.data or []]

    def list_published(self) -> List[Article]:
        res = (
            self.table.select("id, title, date, cat, preview, is_pinned, pin_message")
            .eq("status", "published")
            .order("date", desc=True, nullsfirst=False)
            .execute()
        )
        articles = [_row_to_dc(r) for r in res.data or []]
        # undated rows last
        articles.sort(key=lambda a: a.date is None)
        return articles

    def get(self, article_id: str) -> Optional[Article]:
        res = self.table.select("*").eq("id", article_id).limit(1).execute()
        rows = res.data or []
        return _row_to_dc(rows[0]) if rows else None

    def exists(self, article_id: str) -> bool:
        res = self.table.select("id").eq("id", article_id).limit(1).execute()
        return bool(res.data)

    def create(self, data: Article) -> Article:
        row = {
            "id": data.id,
            "title": data.title,
            "content": data.content or "",
            "date": data.date,
            "cat": data.category,
            "preview": data.preview,
            "is_pinned": bool(data.is_pinned),
            "pin_message": data.pin_message,
            "status": data.status or "draft",
            "created_by": data.created_by,
        }
        res = self.table.insert(row).execute()
        return _row_to_dc((res.data or [row])[0])

    def update(self, article_id: str, **fields) -> Optional[Article]:
        body = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        if not body:
            return self.get(article_id)
        res = self.table.update(body).eq("id", article_id).execute()
        rows = res.data or []
        return _row_to_dc(rows[0]) if rows else None

    def delete(self, article_id: str) -> bool:
        res = self.table.delete().eq("id", article_id).execute()
        return bool(res.data)

    def add_history(self, record: HistoryRecord) -> HistoryRecord:
        row = {
            "id": record.id or str(uuid.uuid4()),
            "article_id": record.article_id,
            "title": record.title,
            "content": record.content or "",
            "changed_fields": record.changed_fields or {},
            "created_by": record.created_by,
        }
        res = self.history.insert(row).execute()
        return _row_to_history((res.data or [row])[0])

    def list_history(self, article_id: str) -> List[HistoryRecord]:
        res = self.history.select("*").eq("article_id", article_id).order("created_at", desc=True).execute()
        return [_row_to_history(r) for r in res.data or []]

    def get_history(self, history_id: str) -> Optional[HistoryRecord]:
        res = self.history.select("*").eq("id", history_id).limit(1).execute()
        rows = res.data or []
        return _row_to_history(rows[0]) if rows else None
