import pytest

from portfolio.articles.listing import (
    ELLIPSIS,
    categories,
    clamp_page,
    filter_articles,
    page_numbers,
    paginate,
    total_pages,
)
from portfolio.domain.article import ArticleSummary


def _summary(article_id, title=None, category=None, preview=None, pinned=False):
    return ArticleSummary(
        id=article_id,
        title=title or article_id.upper(),
        category=category,
        preview=preview,
        is_pinned=pinned,
    )


@pytest.fixture()
def mixed():
    return [
        _summary("a", category="tech", preview="Flask blueprints"),
        _summary("b", category="tech", pinned=True),
        _summary("c", category="life", title="Kyoto Trip"),
    ]


def test_category_filter_excludes_pinned(mixed):
    assert [a.id for a in filter_articles(mixed, category="tech")] == ["a"]


def test_no_category_keeps_pinned(mixed):
    assert [a.id for a in filter_articles(mixed)] == ["a", "b", "c"]


def test_search_matches_title_or_preview_case_insensitively(mixed):
    assert [a.id for a in filter_articles(mixed, search="BLUEPRINT")] == ["a"]
    assert [a.id for a in filter_articles(mixed, search="kyoto")] == ["c"]
    assert [a.id for a in filter_articles(mixed, search="   ")] == ["a", "b", "c"]


def test_paginate_third_page_of_twelve():
    articles = [_summary(f"r{i}") for i in range(12)]
    page = paginate(articles, page=3, page_size=5)
    assert [a.id for a in page.visible] == ["r10", "r11"]
    assert page.total_pages == 3
    assert page.page == 3


def test_pinned_only_lead_first_page():
    articles = [_summary("p", pinned=True)] + [_summary(f"r{i}") for i in range(7)]
    first = paginate(articles, page=1, page_size=5)
    second = paginate(articles, page=2, page_size=5)
    assert [a.id for a in first.visible] == ["p", "r0", "r1", "r2", "r3", "r4"]
    assert [a.id for a in second.visible] == ["r5", "r6"]
    assert first.total_pages == second.total_pages == 2


def test_paginate_clamps_page_and_handles_empty():
    articles = [_summary(f"r{i}") for i in range(6)]
    assert paginate(articles, page=99, page_size=5).page == 2
    assert paginate(articles, page=-3, page_size=5).page == 1

    empty = paginate([], search="nothing")
    assert empty.is_empty
    assert empty.total_pages == 1


def test_paginate_rejects_bad_page_size():
    with pytest.raises(ValueError):
        paginate([], page_size=0)


def test_total_pages_and_clamp():
    assert total_pages(0) == 1
    assert total_pages(10, 5) == 2
    assert total_pages(11, 5) == 3
    assert clamp_page(0, 3) == 1
    assert clamp_page(4, 3) == 3


def test_page_numbers_windows():
    assert page_numbers(1, 5) == [1, 2, 3, 4, 5]
    assert page_numbers(1, 10) == [1, 2, 3, 4, 5, ELLIPSIS, 10]
    assert page_numbers(9, 10) == [1, ELLIPSIS, 6, 7, 8, 9, 10]
    assert page_numbers(5, 10) == [1, ELLIPSIS, 4, 5, 6, ELLIPSIS, 10]


def test_categories_skip_pinned_and_missing(mixed):
    extra = mixed + [_summary("d"), _summary("e", category="zen", pinned=True)]
    assert categories(extra) == ["life", "tech"]
