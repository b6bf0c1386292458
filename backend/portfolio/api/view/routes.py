"""Resolve a URL fragment plus filter state into everything a page shows."""
from __future__ import annotations

from flask import Blueprint, current_app, request

from ...errors import ok
from ...navigation.reader import ArticleReader
from ...navigation.routes import RouteState
from ...navigation.store import SetCategory, SetPage, SetSearch, Store, initial_state, listing
from ...services.share import build_share_meta
from ...text.markdown import extract_first_image
from ..articles.routes import article_service, listing_out, summary_out


bp = Blueprint("view", __name__)


def route_out(route: RouteState) -> dict:
    return {
        "view": route.view,
        "selectedArticleId": route.selected_article_id,
        "adminView": route.admin_view,
        "adminArticleId": route.admin_article_id,
    }


@bp.get("")
def resolve_view():
    """Query: ``fragment``, and optionally ``search``, ``category``, ``page``.

    Filters go through the same actions the page dispatches, so setting any
    of them lands on the article listing.
    """
    svc = article_service()
    summaries = svc.load_summaries()
    store = Store(initial_state(
        request.args.get("fragment", ""),
        summaries,
        page_size=current_app.config.get("ARTICLES_PER_PAGE", 5),
    ))

    # content for a fragment that selects an article is fetched by the reader
    reader = ArticleReader(store, svc.load_content)
    if "search" in request.args:
        store.dispatch(SetSearch(request.args.get("search", "")))
    if "category" in request.args:
        store.dispatch(SetCategory(request.args.get("category") or None))
    if "page" in request.args:
        store.dispatch(SetPage(request.args.get("page", 1, type=int)))
    reader.close()

    state = store.state
    summary = state.selected_summary
    content = state.content.text if state.content else None
    article = None
    if state.route.selected_article_id is not None:
        article = {
            "id": state.route.selected_article_id,
            "summary": summary_out(summary) if summary else None,
            "content": content,
            "firstImage": extract_first_image(content) if content else None,
        }

    share = build_share_meta(
        state.route.view,
        summary,
        content,
        current_app.config.get("SITE_BASE_URL", ""),
    )
    return ok({
        "fragment": store.fragment,
        "route": route_out(state.route),
        "search": state.search,
        "category": state.category,
        "listing": listing_out(listing(state), summaries) if state.listing_visible else None,
        "article": article,
        "share": share.to_dict(),
    })
