"""Article loading for the public site: hosted table first, local files second."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from loguru import logger

from ..articles.metadata import build_metadata, load_metadata_file
from ..domain.article import ArticleSummary
from ..text.markdown import strip_front_matter


class ArticleService:
    def __init__(self, repo, metadata_path: str | Path | None = None, posts_dir: str | Path | None = None) -> None:
        self.repo = repo
        self.metadata_path = Path(metadata_path) if metadata_path else None
        self.posts_dir = Path(posts_dir) if posts_dir else None

    def load_summaries(self) -> List[ArticleSummary]:
        """Published article summaries, newest first. Never raises."""
        try:
            articles = self.repo.list_published() if self.repo is not None else []
        except Exception as e:
            logger.error(f"failed to query published articles: {e}")
            articles = []
        if articles:
            logger.info(f"loaded {len(articles)} article summaries from the article table")
            return [a.summary() for a in articles]

        if self.metadata_path is not None and self.metadata_path.is_file():
            logger.warning(f"article table empty or unavailable, reading {self.metadata_path}")
            return load_metadata_file(self.metadata_path)

        if self.posts_dir is not None and self.posts_dir.is_dir():
            logger.warning(f"no metadata file, scanning {self.posts_dir}")
            return [entry.to_summary() for entry in build_metadata(self.posts_dir)]

        logger.warning("no article source available")
        return []

    def load_content(self, article_id: str) -> Optional[str]:
        """Markdown body of a published article, ``None`` when it cannot be found."""
        try:
            article = self.repo.get(article_id) if self.repo is not None else None
        except Exception as e:
            logger.error(f"failed to load article {article_id!r} from the article table: {e}")
            article = None
        if article is not None and article.status == "published" and article.content:
            return article.content

        path = self._post_path(article_id)
        if path is None:
            logger.error(f"no article file for {article_id!r}")
            return None
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"failed to read {path}: {e}")
            return None
        logger.warning(f"article {article_id!r} read from {path}")
        return strip_front_matter(text)

    def _post_path(self, article_id: str) -> Optional[Path]:
        if self.posts_dir is None or not article_id:
            return None
        root = self.posts_dir.resolve()
        path = (root / f"{article_id}.md").resolve()
        if path.parent != root or not path.is_file():
            return None
        return path
