"""Comment board: paginated listing, posting, avatar helpers."""
from __future__ import annotations

import colorsys
import math

from loguru import logger

from ..domain.comment import Comment, CommentPage
from ..errors import ValidationError

DEFAULT_PER_PAGE = 10
AVATAR_TEXT_LENGTH = 5


class CommentService:
    def __init__(self, repo, per_page: int = DEFAULT_PER_PAGE) -> None:
        self.repo = repo
        self.per_page = per_page

    def list_comments(self, article_id: str, page: int = 1) -> CommentPage:
        page = max(1, page)
        offset = (page - 1) * self.per_page
        try:
            items, total = self.repo.list(article_id, offset=offset, limit=self.per_page)
        except Exception as e:
            logger.error(f"failed to load comments for {article_id!r}: {e}")
            return CommentPage(page=page)
        return CommentPage(
            items=list(items),
            page=page,
            total_pages=max(1, math.ceil(total / self.per_page)),
            total_count=total,
        )

    def post_comment(
        self,
        article_id: str,
        article_name: str,
        author_name: str,
        content: str,
        parent_id: str | None = None,
    ) -> Comment:
        author = (author_name or "").strip()
        body = (content or "").strip()
        if not author or not body:
            raise ValidationError("Please fill in both name and comment")
        comment = Comment(
            id="",
            article_id=article_id,
            article_name=article_name,
            author_name=author,
            content=body,
            parent_id=parent_id,
        )
        created = self.repo.create(comment)
        logger.info(f"comment posted on {article_id!r} by {author!r}")
        return created


def avatar_text(name: str) -> str:
    if not name:
        return "?"
    return name[:AVATAR_TEXT_LENGTH]


def _name_hash(name: str) -> int:
    # 32-bit string hash (h * 31 + c), signed like a JS int
    h = 0
    for ch in name:
        h = (ord(ch) + ((h << 5) - h)) & 0xFFFFFFFF
    if h & 0x80000000:
        h -= 1 << 32
    return abs(h)


def avatar_color(name: str) -> str:
    """Stable hex colour for a display name."""
    h = _name_hash(name or "")
    hue = h % 360
    saturation = 60 + h % 20
    lightness = 45 + h % 15
    r, g, b = colorsys.hls_to_rgb(hue / 360, lightness / 100, saturation / 100)
    return "#{:02x}{:02x}{:02x}".format(round(r * 255), round(g * 255), round(b * 255))
