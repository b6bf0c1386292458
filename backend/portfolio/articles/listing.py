"""Article search, category filter and pagination over the summary list."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Union

from ..domain.article import ArticleSummary

DEFAULT_PAGE_SIZE = 5

# marker between page numbers in the pager
ELLIPSIS = "ellipsis"

PageItem = Union[int, str]


@dataclass(slots=True)
class ArticlePage:
    pinned: List[ArticleSummary] = field(default_factory=list)
    regular: List[ArticleSummary] = field(default_factory=list)
    visible: List[ArticleSummary] = field(default_factory=list)
    page: int = 1
    total_pages: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def is_empty(self) -> bool:
        return not self.pinned and not self.regular


def _matches(article: ArticleSummary, query: str) -> bool:
    if query in article.title.lower():
        return True
    return bool(article.preview) and query in article.preview.lower()


def filter_articles(
    articles: Iterable[ArticleSummary],
    search: str = "",
    category: Optional[str] = None,
) -> List[ArticleSummary]:
    """Pinned articles only show without a category; then exact category,
    then case-insensitive substring of ``search`` in title or preview."""
    query = (search or "").lower()
    blank = not query.strip()
    result: List[ArticleSummary] = []
    for article in articles:
        if article.is_pinned and category is not None:
            continue
        if category is not None and article.category != category:
            continue
        if blank or _matches(article, query):
            result.append(article)
    return result


def total_pages(regular_count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    return max(1, math.ceil(regular_count / page_size))


def clamp_page(page: int, pages: int) -> int:
    return min(max(1, page), max(1, pages))


def paginate(
    articles: Sequence[ArticleSummary],
    search: str = "",
    category: Optional[str] = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> ArticlePage:
    """Filter ``articles`` and cut out one page.

    Only regular articles are paginated. Page 1 carries every pinned result
    ahead of its slice; later pages never repeat them.
    """
    if page_size < 1:
        raise ValueError("page_size must be >= 1")

    filtered = filter_articles(articles, search, category)
    pinned = [a for a in filtered if a.is_pinned]
    regular = [a for a in filtered if not a.is_pinned]

    pages = total_pages(len(regular), page_size)
    current = clamp_page(page, pages)
    start = (current - 1) * page_size
    visible = regular[start:start + page_size]
    if current == 1:
        visible = pinned + visible

    return ArticlePage(
        pinned=pinned,
        regular=regular,
        visible=visible,
        page=current,
        total_pages=pages,
        page_size=page_size,
    )


def page_numbers(current: int, total: int) -> List[PageItem]:
    """Pager items. Up to 7 pages are all shown; beyond that the first and
    last page stay visible and the rest collapse around ``current``."""
    if total <= 7:
        return list(range(1, total + 1))

    pages: List[PageItem] = [1]
    if current <= 4:
        pages.extend(range(2, 6))
        pages.append(ELLIPSIS)
        pages.append(total)
    elif current >= total - 3:
        pages.append(ELLIPSIS)
        pages.extend(range(total - 4, total + 1))
    else:
        pages.append(ELLIPSIS)
        pages.extend(range(current - 1, current + 2))
        pages.append(ELLIPSIS)
        pages.append(total)
    return pages


def categories(articles: Iterable[ArticleSummary]) -> List[str]:
    """Distinct categories of non-pinned articles, sorted."""
    return sorted({a.category for a in articles if not a.is_pinned and a.category})
