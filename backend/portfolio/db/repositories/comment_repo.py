"""SQLAlchemy-backed comment repository."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..models.comment import CommentModel
from ...domain.comment import Comment


def _to_dc(m: CommentModel) -> Comment:
    return Comment(
        id=m.id,
        article_id=m.article_id,
        article_name=m.article_name,
        author_name=m.author_name,
        content=m.content,
        created_at=m.created_at.isoformat() if m.created_at else None,
        parent_id=m.parent_id,
    )


class CommentRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, article_id: str, *, offset: int = 0, limit: int = 10) -> Tuple[List[Comment], int]:
        """One page of comments (newest first) plus the total count."""
        total = self.session.scalar(
            select(func.count()).select_from(CommentModel).where(CommentModel.article_id == article_id)
        ) or 0
        stmt = (
            select(CommentModel)
            .where(CommentModel.article_id == article_id)
            .order_by(CommentModel.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return [_to_dc(m) for m in self.session.scalars(stmt).all()], int(total)

    def create(self, comment: Comment) -> Comment:
        m = CommentModel(
            id=comment.id or str(uuid.uuid4()),
            article_id=comment.article_id,
            article_name=comment.article_name,
            author_name=comment.author_name,
            content=comment.content,
            parent_id=comment.parent_id,
            created_at=datetime.now(timezone.utc).replace(tzinfo=None),
        )
        self.session.add(m)
        self.session.commit()
        self.session.refresh(m)
        return _to_dc(m)
