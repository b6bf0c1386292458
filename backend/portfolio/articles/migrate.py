"""Copy ``posts/*.md`` into the articles table as published rows."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from loguru import logger

from ..domain.article import Article
from ..text.markdown import (
    extract_date_from_filename,
    extract_preview,
    parse_bool_flag,
    parse_front_matter,
    strip_front_matter,
)

MIGRATION_AUTHOR = "migration-script"


@dataclass
class MigrationResult:
    inserted: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return len(self.inserted) + len(self.updated)


def article_from_post(file: Path) -> Article:
    text = file.read_text(encoding="utf-8")
    meta = parse_front_matter(text)
    body = strip_front_matter(text)
    return Article(
        id=file.stem,
        title=meta.get("title") or file.stem,
        content=body.strip(),
        date=extract_date_from_filename(file.name) or meta.get("date") or None,
        category=meta.get("cat") or None,
        preview=extract_preview(body) or None,
        is_pinned=parse_bool_flag(meta.get("pin", "")),
        pin_message=(meta.get("pinMessage") or "").strip() or None,
        status="published",
        created_by=MIGRATION_AUTHOR,
    )


def _columns(article: Article) -> dict:
    return {
        "title": article.title,
        "content": article.content,
        "date": article.date,
        "cat": article.category,
        "preview": article.preview,
        "is_pinned": article.is_pinned,
        "pin_message": article.pin_message,
        "status": article.status,
        "created_by": article.created_by,
    }


def migrate_posts(posts_dir: Path, repo) -> MigrationResult:
    """Upsert every post into ``repo``; a failing file is recorded and skipped."""
    result = MigrationResult()
    files = sorted(posts_dir.glob("*.md")) if posts_dir.is_dir() else []
    logger.info(f"migrating {len(files)} articles from {posts_dir}")

    for n, file in enumerate(files, start=1):
        try:
            article = article_from_post(file)
            if repo.exists(article.id):
                repo.update(article.id, **_columns(article))
                result.updated.append(article.id)
                logger.info(f"[{n}/{len(files)}] updated {article.id} - {article.title}")
            else:
                repo.create(article)
                result.inserted.append(article.id)
                logger.info(f"[{n}/{len(files)}] inserted {article.id} - {article.title}")
        except Exception as e:
            result.failed.append((file.name, str(e)))
            logger.error(f"[{n}/{len(files)}] failed to migrate {file.name}: {e}")

    logger.info(f"migration done: {result.succeeded} succeeded, {len(result.failed)} failed")
    return result
