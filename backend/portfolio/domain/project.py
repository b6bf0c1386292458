"""Portfolio project cards."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Project:
    title: str
    description: str
    image_url: str
    link: str
    category: str = "other"
    github_url: Optional[str] = None
