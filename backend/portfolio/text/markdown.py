"""Plain-text helpers for markdown articles: frontmatter, previews, images."""
from __future__ import annotations

import re
from typing import Dict, Optional
from urllib.parse import urljoin

# ---
# title: xxx
# date: yyyy-mm-dd
# cat: category
# ---
_FRONT_MATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?=\r?\n|\Z)(?:\r?\n)*",
    re.DOTALL | re.MULTILINE,
)

FRONT_MATTER_KEYS = ("title", "date", "cat", "pin", "pinMessage")

ELLIPSIS = "..."

_IMAGE_PATTERNS = (
    re.compile(r"!\[.*?\]\((.*?)\)"),
    re.compile(r"<img[^>]+src=[\"']([^\"']+)[\"'][^>]*>", re.IGNORECASE),
)

_DATE_IN_FILENAME_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})")

_TRUE_FLAGS = {"true", "1", "yes", "y"}


def parse_front_matter(markdown: str) -> Dict[str, str]:
    """Return the known ``key: value`` pairs of the leading ``---`` block.

    Unknown keys are ignored. A document without a block yields ``{}``.
    """
    if not markdown:
        return {}
    match = _FRONT_MATTER_RE.match(markdown)
    if not match:
        return {}

    meta: Dict[str, str] = {}
    for raw in match.group(1).splitlines():
        line = raw.strip()
        if not line or ":" not in line:
            continue
        key, _, value = line.partition(":")
        key = key.strip()
        if key in FRONT_MATTER_KEYS:
            meta[key] = value.strip()
    return meta


def strip_front_matter(markdown: str) -> str:
    if not markdown:
        return markdown
    match = _FRONT_MATTER_RE.match(markdown)
    if not match:
        return markdown
    return markdown[match.end():]


def extract_preview(markdown: str, max_length: int = 150) -> str:
    """Reduce markdown to a single line of plain text, at most ``max_length``
    characters plus a trailing ellipsis.

    Truncation prefers the last space when it sits past 70% of the limit,
    otherwise the text is cut hard.
    """
    if not markdown:
        return ""

    text = markdown
    text = re.sub(r"```[\s\S]*?```", "", text)
    text = re.sub(r"`[^`]+`", "", text)
    text = re.sub(r"^#{1,6}\s+", "", text, flags=re.MULTILINE)
    text = re.sub(r"\*\*([^*]+)\*\*", r"\1", text)
    text = re.sub(r"\*([^*]+)\*", r"\1", text)
    # images go before links so "![alt](url)" does not leave "!alt" behind
    text = re.sub(r"!\[([^\]]*)\]\([^)]+\)", "", text)
    text = re.sub(r"\[([^\]]+)\]\([^)]+\)", r"\1", text)
    text = re.sub(r"^\s*[-*+]\s+", "", text, flags=re.MULTILINE)
    text = re.sub(r"^\d+\.\s+", "", text, flags=re.MULTILINE)
    text = re.sub(r"^---+$", "", text, flags=re.MULTILINE)
    text = re.sub(r"\n\s*\n\s*\n", "\n\n", text)

    lines = [line.strip() for line in text.split("\n")]
    text = " ".join(line for line in lines if line)
    text = re.sub(r"\s+", " ", text).strip()

    if len(text) <= max_length:
        return text

    truncated = text[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > max_length * 0.7:
        return truncated[:last_space] + ELLIPSIS
    return truncated + ELLIPSIS


def extract_first_image(markdown: str) -> Optional[str]:
    """First image URL: markdown ``![alt](url)`` is tried before ``<img src>``."""
    if not markdown:
        return None
    for pattern in _IMAGE_PATTERNS:
        match = pattern.search(markdown)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return None


def extract_date_from_filename(filename: str) -> Optional[str]:
    """``20240101-foo.md`` -> ``2024-01-01``."""
    name = re.sub(r"\.md$", "", filename)
    match = _DATE_IN_FILENAME_RE.match(name)
    if not match:
        return None
    year, month, day = match.groups()
    return f"{year}-{month}-{day}"


def parse_bool_flag(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_FLAGS
    return bool(value)


def resolve_image_url(image_url: str, base_url: str) -> str:
    """Absolute URLs pass through; ``./x``, ``../x`` and ``x`` hang off ``base_url``."""
    if image_url.startswith(("http://", "https://")):
        return image_url
    if image_url.startswith("./"):
        image_url = image_url[2:]
    elif image_url.startswith("../"):
        image_url = image_url[3:]
    return urljoin(base_url.rstrip("/") + "/", image_url.lstrip("/"))
