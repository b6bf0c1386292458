from __future__ import annotations

from pathlib import Path

import pytest

from portfolio import create_app
from portfolio.auth import jwt as admin_jwt
from portfolio.config import TestingConfig
from portfolio.db.repositories.article_repo import ArticleRepository
from portfolio.db.session import db
from portfolio.domain.article import Article

POSTS = {
    "20240301-flask-notes.md": "---\ntitle: Flask Notes\ncat: tech\n---\n# Flask\n\nBlueprints and ![diagram](/img/flask.png) factories.\n",
    "20240201-travel.md": "---\ntitle: Travel Diary\ncat: life\n---\nA week in Kyoto.\n",
    "welcome.md": "---\ntitle: Welcome\ndate: 2023-12-01\npin: true\npinMessage: Start here\n---\nHello and welcome.\n",
}


@pytest.fixture()
def posts_dir(tmp_path: Path) -> Path:
    posts = tmp_path / "posts"
    posts.mkdir()
    for name, text in POSTS.items():
        (posts / name).write_text(text, encoding="utf-8")
    return posts


@pytest.fixture()
def app(tmp_path: Path, posts_dir: Path):
    config = TestingConfig(
        METADATA_PATH=str(tmp_path / "articles-metadata.json"),
        POSTS_DIR=str(posts_dir),
        SITE_BASE_URL="https://example.com",
    )
    return create_app(config)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def admin_headers(app) -> dict:
    with app.app_context():
        token = admin_jwt.encode({"sub": "admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def add_article(app):
    def _add(article_id: str, title: str, **fields) -> Article:
        with app.app_context():
            repo = ArticleRepository(db.Session())
            return repo.create(Article(id=article_id, title=title, **fields))
    return _add
