"""Lazy article content loading bound to the navigation store."""
from __future__ import annotations

from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, Optional

from loguru import logger

from .store import BrowserState, ContentLoaded, Store

ContentFetcher = Callable[[str], Optional[str]]


class ArticleReader:
    """Fetches content whenever the selected article changes.

    Each request remembers the store's ``content_generation`` at the time it
    was issued; the reducer drops any delivery whose generation is no longer
    current, so a slow response for an article the user already left cannot
    overwrite the newer one.
    """

    def __init__(self, store: Store, fetch: ContentFetcher, executor: Optional[Executor] = None) -> None:
        self.store = store
        self.fetch = fetch
        self._own_executor = executor is None
        self.executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="article-reader")
        self._unsubscribe = store.subscribe(self._on_change)
        state = store.state
        if state.content_loading and state.route.selected_article_id:
            self._request(state.route.selected_article_id, state.content_generation)

    def _on_change(self, previous: BrowserState, current: BrowserState) -> None:
        if current.content_generation == previous.content_generation:
            return
        article_id = current.route.selected_article_id
        if article_id is None:
            return
        self._request(article_id, current.content_generation)

    def _request(self, article_id: str, generation: int) -> Future:
        logger.debug(f"loading content for {article_id!r} (generation {generation})")
        future = self.executor.submit(self.fetch, article_id)
        future.add_done_callback(lambda f: self._deliver(article_id, generation, f))
        return future

    def _deliver(self, article_id: str, generation: int, future: Future) -> None:
        try:
            text = future.result()
        except Exception as e:
            logger.error(f"failed to load article {article_id!r}: {e}")
            text = None
        state = self.store.dispatch(ContentLoaded(generation=generation, article_id=article_id, text=text))
        if state.content_generation != generation:
            logger.debug(f"dropped stale content for {article_id!r} (generation {generation})")

    def close(self) -> None:
        self._unsubscribe()
        if self._own_executor:
            self.executor.shutdown(wait=True)
