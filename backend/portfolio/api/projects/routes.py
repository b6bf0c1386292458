"""Projects blueprint: hand-picked commercial work plus GitHub repositories."""
from __future__ import annotations

from dataclasses import asdict
from typing import List

from flask import Blueprint, current_app

from ...domain.project import Project
from ...errors import ok
from ...services.github_service import GithubService


bp = Blueprint("projects", __name__)

STATIC_PROJECTS: List[Project] = [
    Project(
        title="ONE SHAPE Design",
        description="Interior design studio in Xinyi District, Taipei.",
        image_url="https://github.com/Alan-Cheng/one-shape-website/raw/main/assets/img/header.jpg",
        link="https://oneshapedesign.com/",
        category="commercial",
    ),
    Project(
        title="iimoo Design",
        description="Residential and commercial interior design in Xinyi District, Taipei.",
        image_url="https://github.com/iimoo-design/iimoo-design.github.io/raw/master/assets/img/header.jpg?raw=true",
        link="https://iimoo.com.tw/",
        category="commercial",
    ),
]


def _project_out(project: Project) -> dict:
    data = asdict(project)
    return {
        "title": data["title"],
        "description": data["description"],
        "imageUrl": data["image_url"],
        "link": data["link"],
        "category": data["category"],
        "githubUrl": data["github_url"],
    }


@bp.get("/")
def list_projects():
    cfg = current_app.config
    github = GithubService(cfg.get("GITHUB_USERNAME", ""), cfg.get("GITHUB_TOKEN"))
    commercial = [p for p in STATIC_PROJECTS if p.category == "commercial"]
    other = [p for p in STATIC_PROJECTS if p.category == "other"] + github.fetch_projects()
    return ok({
        "commercial": [_project_out(p) for p in commercial],
        "other": [_project_out(p) for p in other],
    })
