import pytest

from portfolio.domain.article import ArticleSummary
from portfolio.navigation.routes import ARTICLES, HOME, RouteState
from portfolio.navigation.store import (
    ArticlesLoaded,
    ClearSearch,
    ContentLoaded,
    HashChanged,
    Navigate,
    SelectArticle,
    SetCategory,
    SetPage,
    SetSearch,
    Store,
    initial_state,
    listing,
    reduce,
)

ARTICLE_LIST = tuple(
    ArticleSummary(id=f"a{i}", title=f"Article {i}", category="tech" if i % 2 else "life")
    for i in range(12)
)


def test_initial_state_from_article_fragment_starts_loading():
    state = initial_state("articles/a3", ARTICLE_LIST)
    assert state.route == RouteState(view="articles", selected_article_id="a3")
    assert state.content_loading
    assert state.content_generation == 1
    assert state.selected_summary.title == "Article 3"
    assert not state.listing_visible


def test_filters_return_to_listing_on_first_page():
    state = initial_state("articles/a3", ARTICLE_LIST)
    state = reduce(state, SetSearch("article"))
    assert state.route == ARTICLES
    assert state.search == "article"
    assert state.page == 1
    assert not state.content_loading

    state = reduce(reduce(state, SetPage(2)), SetCategory("tech"))
    assert state.page == 1
    assert state.category == "tech"
    assert listing(state).total_pages == 2

    state = reduce(state, ClearSearch())
    assert state.search == ""
    assert state.category == "tech"


def test_set_page_is_clamped():
    state = initial_state("articles", ARTICLE_LIST, page_size=5)
    assert reduce(state, SetPage(10)).page == 3
    assert reduce(state, SetPage(0)).page == 1


def test_articles_loaded_clamps_current_page():
    state = reduce(initial_state("articles", ARTICLE_LIST), SetPage(3))
    state = reduce(state, ArticlesLoaded(ARTICLE_LIST[:4]))
    assert state.page == 1


def test_stale_content_is_ignored():
    state = initial_state("articles/a1", ARTICLE_LIST)
    old_generation = state.content_generation
    state = reduce(state, SelectArticle("a2"))
    assert state.content_generation == old_generation + 1

    stale = reduce(state, ContentLoaded(old_generation, "a1", "old text"))
    assert stale is state

    fresh = reduce(state, ContentLoaded(state.content_generation, "a2", "new text"))
    assert fresh.content.text == "new text"
    assert not fresh.content_loading


def test_missing_content_stops_loading():
    state = initial_state("articles/nope", ARTICLE_LIST)
    state = reduce(state, ContentLoaded(state.content_generation, "nope", None))
    assert state.content is None
    assert not state.content_loading
    assert state.selected_summary is None


def test_same_route_is_a_no_op():
    state = initial_state("articles", ARTICLE_LIST)
    assert reduce(state, HashChanged("#articles")) is state
    assert reduce(state, Navigate(ARTICLES)) is state


def test_unknown_action_raises():
    with pytest.raises(TypeError):
        reduce(initial_state(), object())


def test_store_mirrors_route_into_fragment_and_notifies():
    store = Store(initial_state("", ARTICLE_LIST))
    seen = []
    unsubscribe = store.subscribe(lambda prev, cur: seen.append((prev.route, cur.route)))

    store.dispatch(SelectArticle("a5"))
    assert store.fragment == "articles/a5"
    store.dispatch(Navigate(HOME))
    assert store.fragment == "home"
    store.hash_changed("#articles")
    assert store.fragment == "articles"
    assert len(seen) == 3

    store.hash_changed("articles")
    assert len(seen) == 3

    unsubscribe()
    store.dispatch(SelectArticle("a1"))
    assert len(seen) == 3


def test_repeating_the_same_filter_does_not_notify():
    store = Store(initial_state("articles", ARTICLE_LIST, page_size=5))
    seen = []
    store.subscribe(lambda prev, cur: seen.append(cur))

    store.dispatch(SetCategory("tech"))
    store.dispatch(SetCategory("tech"))
    assert len(seen) == 1

    store.dispatch(SetPage(2))
    store.dispatch(SetCategory("tech"))
    assert store.state.page == 1
    assert len(seen) == 3

    store.dispatch(SetSearch("x"))
    store.dispatch(SetSearch("x"))
    assert len(seen) == 4


def test_unroutable_hash_still_updates_the_fragment_mirror():
    store = Store()
    seen = []
    store.subscribe(lambda prev, cur: seen.append(cur))

    store.hash_changed("#bogus")
    assert store.fragment == "bogus"
    assert store.state.route == HOME
    assert seen == []
