"""Public Articles blueprint: filtered listing and single article."""
from __future__ import annotations

from typing import List, Sequence

from flask import Blueprint, current_app, request
from loguru import logger

from ...articles.listing import ArticlePage, categories, page_numbers, paginate
from ...db.repositories.factory import article_repo
from ...domain.article import ArticleSummary
from ...errors import NotFoundError, ok
from ...services.article_service import ArticleService
from ...text.markdown import extract_first_image
from .schemas import ArticleDetailOut, ArticleListOut, ArticleSummaryOut


bp = Blueprint("articles", __name__)


def article_service() -> ArticleService:
    cfg = current_app.config
    try:
        repo = article_repo()
    except RuntimeError as e:
        logger.warning(f"article table unavailable: {e}")
        repo = None
    return ArticleService(repo, cfg.get("METADATA_PATH"), cfg.get("POSTS_DIR"))


def summary_out(summary: ArticleSummary) -> dict:
    return ArticleSummaryOut.model_validate(summary).model_dump(by_alias=True)


def listing_out(page: ArticlePage, summaries: Sequence[ArticleSummary]) -> dict:
    return ArticleListOut(
        articles=[ArticleSummaryOut.model_validate(a) for a in page.visible],
        pinned_count=len(page.pinned) if page.page == 1 else 0,
        page=page.page,
        total_pages=page.total_pages,
        page_numbers=page_numbers(page.page, page.total_pages),
        categories=categories(summaries),
        is_empty=page.is_empty,
    ).model_dump(by_alias=True)


@bp.get("/")
def list_articles():
    summaries: List[ArticleSummary] = article_service().load_summaries()
    page = paginate(
        summaries,
        search=request.args.get("search", ""),
        category=request.args.get("category") or None,
        page=request.args.get("page", 1, type=int),
        page_size=current_app.config.get("ARTICLES_PER_PAGE", 5),
    )
    return ok(listing_out(page, summaries))


@bp.get("/<article_id>")
def get_article(article_id: str):
    svc = article_service()
    content = svc.load_content(article_id)
    if content is None:
        raise NotFoundError(f"Article not found: {article_id}")
    summary = next((s for s in svc.load_summaries() if s.id == article_id), None)
    detail = ArticleDetailOut(
        article=ArticleSummaryOut.model_validate(summary) if summary else None,
        content=content,
        first_image=extract_first_image(content),
    )
    return ok(detail.model_dump(by_alias=True))
