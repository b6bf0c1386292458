"""URL fragment <-> RouteState.

Grammar (leading ``#`` optional)::

    ""  | unknown            -> home
    articles                 -> article listing
    articles/<quoted id>     -> one article
    admin | admin/list       -> admin list
    admin/new                -> admin editor (new article)
    admin/edit/<id>          -> admin editor
    admin/history/<id>       -> admin edit history
    admin/<anything else>    -> admin list
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Optional
from urllib.parse import quote, unquote

View = Literal["home", "articles", "admin"]
AdminView = Literal["list", "new", "edit", "history"]

# characters encodeURIComponent leaves alone, besides alphanumerics and "-_.~"
_FRAGMENT_SAFE = "!*'()"
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass(frozen=True, slots=True)
class RouteState:
    view: View = "home"
    selected_article_id: Optional[str] = None
    admin_view: AdminView = "list"
    admin_article_id: Optional[str] = None


HOME = RouteState()
ARTICLES = RouteState(view="articles")
ADMIN_LIST = RouteState(view="admin")


def decode_segment(segment: str) -> str:
    """Percent-decode ``segment``; malformed input comes back untouched."""
    if _BAD_ESCAPE_RE.search(segment):
        return segment
    try:
        return unquote(segment, errors="strict")
    except UnicodeDecodeError:
        return segment


def encode_segment(segment: str) -> str:
    return quote(segment, safe=_FRAGMENT_SAFE)


def _parse_admin(path: str) -> RouteState:
    if path == "new":
        return RouteState(view="admin", admin_view="new")
    for sub in ("edit", "history"):
        prefix = sub + "/"
        if path.startswith(prefix) and len(path) > len(prefix):
            return RouteState(view="admin", admin_view=sub, admin_article_id=path[len(prefix):])
    return ADMIN_LIST


def parse_fragment(fragment: Optional[str]) -> RouteState:
    """Never raises; anything unparseable is the home view."""
    value = (fragment or "").strip()
    if value.startswith("#"):
        value = value[1:]

    if value == "admin":
        return ADMIN_LIST
    if value.startswith("admin/"):
        return _parse_admin(value[len("admin/"):])
    if value == "articles":
        return ARTICLES
    if value.startswith("articles/"):
        raw_id = value[len("articles/"):]
        if not raw_id:
            return ARTICLES
        return RouteState(view="articles", selected_article_id=decode_segment(raw_id))
    return HOME


def build_fragment(route: RouteState) -> str:
    """Inverse of :func:`parse_fragment` (without the ``#``)."""
    if route.view == "articles":
        if route.selected_article_id:
            return "articles/" + encode_segment(route.selected_article_id)
        return "articles"
    if route.view == "admin":
        if route.admin_view == "new":
            return "admin/new"
        if route.admin_view in ("edit", "history") and route.admin_article_id:
            return f"admin/{route.admin_view}/{route.admin_article_id}"
        return "admin"
    return "home"
