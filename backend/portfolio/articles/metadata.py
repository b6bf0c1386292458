"""Static article metadata: the ``articles-metadata.json`` format and its builder."""
from __future__ import annotations

import json
from datetime import date as date_cls
from pathlib import Path
from typing import List, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ..domain.article import ArticleSummary
from ..text.markdown import (
    extract_date_from_filename,
    extract_preview,
    parse_bool_flag,
    parse_front_matter,
    strip_front_matter,
)


class MetadataEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    title: str
    date: Optional[str] = None
    cat: Optional[str] = None
    preview: Optional[str] = None
    path: Optional[str] = None
    is_pinned: Optional[bool] = Field(default=False, alias="isPinned")
    pin_message: Optional[str] = Field(default=None, alias="pinMessage")

    def to_summary(self) -> ArticleSummary:
        return ArticleSummary(
            id=self.id,
            title=self.title,
            date=self.date or None,
            category=self.cat or None,
            preview=self.preview or None,
            is_pinned=bool(self.is_pinned),
            pin_message=self.pin_message,
        )


_ENTRIES = TypeAdapter(List[MetadataEntry])


def parse_metadata(payload: object) -> List[ArticleSummary]:
    """Coerce a decoded metadata document; anything malformed yields ``[]``."""
    try:
        entries = _ENTRIES.validate_python(payload)
    except ValidationError as e:
        logger.error(f"malformed article metadata ({e.error_count()} errors)")
        return []
    return [entry.to_summary() for entry in entries]


def load_metadata_file(path: Path) -> List[ArticleSummary]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"failed to read article metadata {path}: {e}")
        return []
    return parse_metadata(payload)


def _sort_key(entry: MetadataEntry) -> str:
    if not entry.date:
        return ""
    try:
        return date_cls.fromisoformat(entry.date[:10]).isoformat()
    except ValueError:
        return ""


def build_metadata(posts_dir: Path) -> List[MetadataEntry]:
    """One entry per ``*.md`` under ``posts_dir``, newest first.

    The date comes from a ``YYYYMMDD`` filename prefix, else the frontmatter.
    """
    if not posts_dir.is_dir():
        logger.warning(f"posts directory {posts_dir} does not exist")
        return []

    entries: List[MetadataEntry] = []
    for file in sorted(posts_dir.glob("*.md")):
        text = file.read_text(encoding="utf-8")
        meta = parse_front_matter(text)
        pin_message = (meta.get("pinMessage") or "").strip() or None
        entries.append(
            MetadataEntry(
                id=file.stem,
                title=meta.get("title") or file.stem,
                date=extract_date_from_filename(file.name) or meta.get("date") or None,
                cat=meta.get("cat") or None,
                preview=extract_preview(strip_front_matter(text)) or None,
                path=f"/posts/{file.name}",
                is_pinned=parse_bool_flag(meta.get("pin", "")),
                pin_message=pin_message,
            )
        )

    entries.sort(key=_sort_key, reverse=True)
    return entries


def dump_metadata(entries: List[MetadataEntry]) -> str:
    return json.dumps(
        [entry.model_dump(by_alias=True) for entry in entries],
        ensure_ascii=False,
        indent=2,
    )
