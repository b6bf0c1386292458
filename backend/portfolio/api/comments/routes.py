"""Comments blueprint: paginated board per article."""
from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint, current_app, request

from ...db.repositories.factory import comment_repo
from ...domain.comment import Comment
from ...errors import ok
from ...services.comment_service import CommentService, avatar_color, avatar_text
from .schemas import CommentCreateIn, CommentOut, CommentPageOut


bp = Blueprint("comments", __name__)


def _service() -> CommentService:
    return CommentService(comment_repo(), per_page=current_app.config.get("COMMENTS_PER_PAGE", 10))


def _comment_out(comment: Comment) -> CommentOut:
    return CommentOut(
        **asdict(comment),
        avatar_text=avatar_text(comment.author_name),
        avatar_color=avatar_color(comment.author_name),
    )


@bp.get("/<article_id>")
def list_comments(article_id: str):
    page = _service().list_comments(article_id, request.args.get("page", 1, type=int))
    out = CommentPageOut(
        items=[_comment_out(c) for c in page.items],
        page=page.page,
        total_pages=page.total_pages,
        total_count=page.total_count,
    )
    return ok(out.model_dump(by_alias=True))


@bp.post("/<article_id>")
def post_comment(article_id: str):
    payload = CommentCreateIn.model_validate_json(request.data or b"{}")
    created = _service().post_comment(
        article_id,
        payload.article_name or article_id,
        payload.author_name,
        payload.content,
        parent_id=payload.parent_id,
    )
    return ok(_comment_out(created).model_dump(by_alias=True), 201)
