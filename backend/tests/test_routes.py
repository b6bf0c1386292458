import pytest

from portfolio.navigation.routes import (
    ADMIN_LIST,
    ARTICLES,
    HOME,
    RouteState,
    build_fragment,
    decode_segment,
    parse_fragment,
)


@pytest.mark.parametrize(
    "fragment, expected",
    [
        ("", HOME),
        (None, HOME),
        ("#home", HOME),
        ("somewhere/else", HOME),
        ("#articles", ARTICLES),
        ("articles/", ARTICLES),
        ("articles/hello%20world", RouteState(view="articles", selected_article_id="hello world")),
        ("#admin", ADMIN_LIST),
        ("admin/list", ADMIN_LIST),
        ("admin/unknown", ADMIN_LIST),
        ("admin/history/", ADMIN_LIST),
        ("admin/new", RouteState(view="admin", admin_view="new")),
        ("#admin/edit/2024-01-01", RouteState(view="admin", admin_view="edit", admin_article_id="2024-01-01")),
        ("admin/history/20240101-2", RouteState(view="admin", admin_view="history", admin_article_id="20240101-2")),
    ],
)
def test_parse_fragment(fragment, expected):
    assert parse_fragment(fragment) == expected


def test_malformed_escape_keeps_raw_id():
    assert parse_fragment("articles/100%").selected_article_id == "100%"
    assert decode_segment("%E0%A4%A") == "%E0%A4%A"
    assert decode_segment("%FF") == "%FF"


def test_build_fragment():
    assert build_fragment(HOME) == "home"
    assert build_fragment(ARTICLES) == "articles"
    assert build_fragment(RouteState(view="articles", selected_article_id="a b/c")) == "articles/a%20b%2Fc"
    assert build_fragment(RouteState(view="admin", admin_view="edit", admin_article_id="20240101")) == "admin/edit/20240101"
    assert build_fragment(RouteState(view="admin", admin_view="edit")) == "admin"


@pytest.mark.parametrize("article_id", ["plain", "with space", "中文標題", "50%-off", "a/b?c#d"])
def test_article_fragment_round_trip(article_id):
    route = RouteState(view="articles", selected_article_id=article_id)
    assert parse_fragment(build_fragment(route)) == route
