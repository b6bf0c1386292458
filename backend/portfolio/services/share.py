"""Page title, description, canonical URL and OpenGraph image for a view."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..domain.article import ArticleSummary
from ..navigation.routes import ARTICLES, build_fragment, encode_segment
from ..text.markdown import extract_first_image, resolve_image_url

SITE_TITLE = "Alan Cheng - Portfolio"
SITE_META_TITLE = "Alan Cheng | Software Engineer"
SITE_DESCRIPTION = (
    "Alan Cheng's portfolio: software projects, articles and notes on "
    "frontend and backend development."
)
ARTICLES_DESCRIPTION = "Articles on software development, LeetCode practice and learning notes."
DEFAULT_IMAGE = "avatar.png"


@dataclass(frozen=True, slots=True)
class ShareMeta:
    title: str
    meta_title: str
    description: str
    url: str
    image: str
    twitter_card: str = "summary_large_image"

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "metaTitle": self.meta_title,
            "description": self.description,
            "url": self.url,
            "image": self.image,
            "twitterCard": self.twitter_card,
        }


def build_share_meta(
    view: str,
    summary: Optional[ArticleSummary],
    content: Optional[str],
    base_url: str,
) -> ShareMeta:
    base_url = base_url.rstrip("/")
    image = f"{base_url}/{DEFAULT_IMAGE}"

    if view != "articles":
        return ShareMeta(SITE_TITLE, SITE_META_TITLE, SITE_DESCRIPTION, base_url, image)

    if summary is None:
        return ShareMeta(
            title="Alan Cheng - Articles",
            meta_title=f"Articles | {SITE_META_TITLE}",
            description=ARTICLES_DESCRIPTION,
            url=f"{base_url}/#{build_fragment(ARTICLES)}",
            image=image,
        )

    first_image = extract_first_image(content) if content else None
    if first_image:
        image = resolve_image_url(first_image, base_url)
    return ShareMeta(
        title=f"Alan Cheng - {summary.title}",
        meta_title=f"{summary.title} | {SITE_META_TITLE}",
        description=summary.preview or summary.pin_message or f"Read: {summary.title}",
        url=f"{base_url}/#articles/{encode_segment(summary.id)}",
        image=image,
    )
