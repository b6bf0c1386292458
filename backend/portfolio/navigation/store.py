"""Navigation state container.

All state lives in one immutable :class:`BrowserState`; ``reduce`` maps
``(state, action)`` to a new state. Every intent that moves the page
(selecting an article, changing filters, navigating) is turned into a
fragment and fed back through :func:`parse_fragment`, the same path a
browser ``hashchange`` takes.
"""
from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Type

from ..articles.listing import DEFAULT_PAGE_SIZE, ArticlePage, clamp_page, paginate
from ..domain.article import ArticleContent, ArticleSummary
from .routes import ARTICLES, RouteState, build_fragment, parse_fragment


@dataclass(frozen=True, slots=True)
class BrowserState:
    route: RouteState = RouteState()
    articles: Tuple[ArticleSummary, ...] = ()
    search: str = ""
    category: Optional[str] = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    content: Optional[ArticleContent] = None
    content_loading: bool = False
    # bumped on every selection change; stale content deliveries carry an older value
    content_generation: int = 0

    @property
    def listing_visible(self) -> bool:
        return self.route.view == "articles" and self.route.selected_article_id is None

    @property
    def selected_summary(self) -> Optional[ArticleSummary]:
        article_id = self.route.selected_article_id
        if article_id is None:
            return None
        return next((a for a in self.articles if a.id == article_id), None)


# --- actions -----------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class HashChanged:
    fragment: str


@dataclass(frozen=True, slots=True)
class Navigate:
    route: RouteState


@dataclass(frozen=True, slots=True)
class SelectArticle:
    article_id: Optional[str]


@dataclass(frozen=True, slots=True)
class SetSearch:
    text: str


@dataclass(frozen=True, slots=True)
class ClearSearch:
    pass


@dataclass(frozen=True, slots=True)
class SetCategory:
    category: Optional[str]


@dataclass(frozen=True, slots=True)
class SetPage:
    page: int


@dataclass(frozen=True, slots=True)
class ArticlesLoaded:
    articles: Tuple[ArticleSummary, ...]


@dataclass(frozen=True, slots=True)
class ContentLoaded:
    generation: int
    article_id: str
    text: Optional[str]


Action = object


# --- transitions -------------------------------------------------------------

def _apply_fragment(state: BrowserState, fragment: str) -> BrowserState:
    route = parse_fragment(fragment)
    if route == state.route:
        return state

    changes: Dict[str, object] = {"route": route}
    if route.selected_article_id != state.route.selected_article_id:
        changes["content_generation"] = state.content_generation + 1
        changes["content"] = None
        changes["content_loading"] = route.selected_article_id is not None
    return dataclasses.replace(state, **changes)


def _pages(state: BrowserState) -> int:
    return listing(state).total_pages


def _hash_changed(state: BrowserState, action: HashChanged) -> BrowserState:
    return _apply_fragment(state, action.fragment)


def _navigate(state: BrowserState, action: Navigate) -> BrowserState:
    return _apply_fragment(state, build_fragment(action.route))


def _select_article(state: BrowserState, action: SelectArticle) -> BrowserState:
    route = RouteState(view="articles", selected_article_id=action.article_id or None)
    return _apply_fragment(state, build_fragment(route))


def _reset_filters(state: BrowserState, **changes: object) -> BrowserState:
    state = _apply_fragment(state, build_fragment(ARTICLES))
    if state.page == 1 and all(getattr(state, k) == v for k, v in changes.items()):
        return state
    return dataclasses.replace(state, page=1, **changes)


def _set_search(state: BrowserState, action: SetSearch) -> BrowserState:
    return _reset_filters(state, search=action.text or "")


def _clear_search(state: BrowserState, action: ClearSearch) -> BrowserState:
    return _reset_filters(state, search="")


def _set_category(state: BrowserState, action: SetCategory) -> BrowserState:
    return _reset_filters(state, category=action.category or None)


def _set_page(state: BrowserState, action: SetPage) -> BrowserState:
    page = clamp_page(action.page, _pages(state))
    if page == state.page:
        return state
    return dataclasses.replace(state, page=page)


def _articles_loaded(state: BrowserState, action: ArticlesLoaded) -> BrowserState:
    state = dataclasses.replace(state, articles=tuple(action.articles))
    page = clamp_page(state.page, _pages(state))
    return state if page == state.page else dataclasses.replace(state, page=page)


def _content_loaded(state: BrowserState, action: ContentLoaded) -> BrowserState:
    if action.generation != state.content_generation:
        return state
    if action.article_id != state.route.selected_article_id:
        return state
    content = ArticleContent(id=action.article_id, text=action.text) if action.text is not None else None
    return dataclasses.replace(state, content=content, content_loading=False)


_REDUCERS: Dict[Type, Callable[[BrowserState, object], BrowserState]] = {
    HashChanged: _hash_changed,
    Navigate: _navigate,
    SelectArticle: _select_article,
    SetSearch: _set_search,
    ClearSearch: _clear_search,
    SetCategory: _set_category,
    SetPage: _set_page,
    ArticlesLoaded: _articles_loaded,
    ContentLoaded: _content_loaded,
}


def reduce(state: BrowserState, action: Action) -> BrowserState:
    handler = _REDUCERS.get(type(action))
    if handler is None:
        raise TypeError(f"unknown action: {type(action).__name__}")
    return handler(state, action)


def listing(state: BrowserState) -> ArticlePage:
    return paginate(state.articles, state.search, state.category, state.page, state.page_size)


def initial_state(
    fragment: str = "",
    articles: Sequence[ArticleSummary] = (),
    page_size: int = DEFAULT_PAGE_SIZE,
) -> BrowserState:
    state = BrowserState(articles=tuple(articles), page_size=page_size)
    return _apply_fragment(state, fragment)


Listener = Callable[[BrowserState, BrowserState], None]


class Store:
    """Holds the current state and mirrors its route into a fragment."""

    def __init__(self, state: Optional[BrowserState] = None) -> None:
        self._state = state or BrowserState()
        self._fragment = build_fragment(self._state.route)
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()

    @property
    def state(self) -> BrowserState:
        return self._state

    @property
    def fragment(self) -> str:
        return self._fragment

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Action) -> BrowserState:
        with self._lock:
            previous = self._state
            current = reduce(previous, action)
            if isinstance(action, HashChanged):
                self._fragment = action.fragment.lstrip("#")
            if current is previous:
                return current
            self._state = current
            if not isinstance(action, HashChanged) and current.route != previous.route:
                self._fragment = build_fragment(current.route)
            for listener in list(self._listeners):
                listener(previous, current)
            return current

    def hash_changed(self, fragment: str) -> BrowserState:
        return self.dispatch(HashChanged(fragment))
