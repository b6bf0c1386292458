"""Supabase-backed comment repository."""
from __future__ import annotations

from typing import Any, Dict, List, Tuple

from supabase import Client

from ...domain.comment import Comment


def _row_to_dc(row: Dict[str, Any]) -> Comment:
    return Comment(
        id=str(row.get("id")),
        article_id=str(row.get("article_id")),
        article_name=row.get("article_name") or "",
        author_name=row.get("author_name") or "",
        content=row.get("content") or "",
        created_at=row.get("created_at"),
        parent_id=row.get("parent_id"),
    )


class CommentRepositorySupabase:
    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("comments")

    def list(self, article_id: str, *, offset: int = 0, limit: int = 10) -> Tuple[List[Comment], int]:
        res = (
            self.table.select("*", count="exact")
            .eq("article_id", article_id)
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        return [_row_to_dc(r) for r in res.data or []], int(res.count or 0)

    def create(self, comment: Comment) -> Comment:
        row = {
            "article_id": comment.article_id,
            "article_name": comment.article_name,
            "author_name": comment.author_name,
            "content": comment.content,
            "parent_id": comment.parent_id,
        }
        res = self.table.insert(row).execute()
        return _row_to_dc((res.data or [row])[0])
