"""Admin article management: CRUD, id allocation, edit history, restore."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from loguru import logger

from ..domain.article import Article, HistoryRecord
from ..errors import IdExhaustedError, NotFoundError
from .webhook import BuildWebhook

MAX_ID_ATTEMPTS = 100
ADMIN_AUTHOR = "admin"

# fields that are recorded as "changed" in the edit history
TRACKED_FIELDS = ("title", "content", "date", "cat", "preview", "is_pinned", "pin_message", "status")


def today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def base_id_for(date: Optional[str]) -> str:
    """``2024-01-01`` -> ``20240101``; today's date when ``date`` is empty."""
    return (date or today()).replace("-", "")


def _column_values(article: Article) -> Dict[str, Any]:
    return {
        "title": article.title,
        "content": article.content,
        "date": article.date,
        "cat": article.category,
        "preview": article.preview,
        "is_pinned": article.is_pinned,
        "pin_message": article.pin_message,
        "status": article.status,
    }


class AdminService:
    def __init__(self, repo, webhook: Optional[BuildWebhook] = None) -> None:
        self.repo = repo
        self.webhook = webhook or BuildWebhook(None)

    def list_articles(self, status: str | None = None) -> List[Article]:
        if status in (None, "", "all"):
            status = None
        return list(self.repo.list(status=status))

    def get_article(self, article_id: str) -> Article:
        article = self.repo.get(article_id)
        if article is None:
            raise NotFoundError(f"Article not found: {article_id}")
        return article

    def allocate_id(self, requested: Optional[str], date: Optional[str]) -> str:
        """``requested`` (or the date-derived id) if free, else ``<id>-2``,
        ``<id>-3``... up to ``MAX_ID_ATTEMPTS`` candidates."""
        base = requested or base_id_for(date)
        candidate = base
        for counter in range(2, MAX_ID_ATTEMPTS + 2):
            if not self.repo.exists(candidate):
                return candidate
            candidate = f"{base}-{counter}"
        raise IdExhaustedError("Could not allocate a unique article id, please try again later")

    def create_article(self, fields: Dict[str, Any]) -> Article:
        article_id = self.allocate_id(fields.get("id"), fields.get("date"))
        article = Article(
            id=article_id,
            title=fields["title"],
            content=fields.get("content") or "",
            date=fields.get("date"),
            category=fields.get("cat"),
            preview=fields.get("preview"),
            is_pinned=bool(fields.get("is_pinned")),
            pin_message=fields.get("pin_message"),
            status=fields.get("status") or "draft",
            created_by=ADMIN_AUTHOR,
        )
        created = self.repo.create(article)
        logger.info(f"created article {created.id!r}: {created.title}")
        self.webhook.trigger()
        return created

    def update_article(self, article_id: str, fields: Dict[str, Any]) -> Article:
        current = self.get_article(article_id)
        previous = _column_values(current)
        changed = {k: True for k, v in fields.items() if k in TRACKED_FIELDS and previous.get(k) != v}
        if changed:
            self.repo.add_history(
                HistoryRecord(
                    id=str(uuid.uuid4()),
                    article_id=article_id,
                    title=current.title,
                    content=current.content,
                    changed_fields=changed,
                    created_by=ADMIN_AUTHOR,
                )
            )
        updated = self.repo.update(article_id, **{**fields, "created_by": ADMIN_AUTHOR})
        if updated is None:
            raise NotFoundError(f"Article not found: {article_id}")
        logger.info(f"updated article {article_id!r} ({', '.join(changed) or 'no changes'})")
        self.webhook.trigger()
        return updated

    def delete_article(self, article_id: str) -> bool:
        deleted = self.repo.delete(article_id)
        logger.info(f"deleted article {article_id!r}: {deleted}")
        return deleted

    def get_history(self, article_id: str) -> List[HistoryRecord]:
        return list(self.repo.list_history(article_id))

    def restore_article(self, article_id: str, history_id: str) -> Article:
        record = self.repo.get_history(history_id)
        if record is None or record.article_id != article_id:
            raise NotFoundError(f"History record not found: {history_id}")
        restored = self.update_article(article_id, {"title": record.title, "content": record.content})
        logger.info(f"restored article {article_id!r} to history {history_id!r}")
        return restored
