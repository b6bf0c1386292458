"""Application configuration objects."""
from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv
from loguru import logger

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class BaseConfig:
    SECRET_KEY: str = field(default_factory=lambda: os.getenv("SECRET_KEY", "change-me"))
    FRONTEND_ORIGIN: str = field(default_factory=lambda: os.getenv("FRONTEND_ORIGIN", "http://localhost:5173"))
    SITE_BASE_URL: str = field(default_factory=lambda: os.getenv("SITE_BASE_URL", "http://localhost:5173"))

    # Database
    DATABASE_URL: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///portfolio.db"))
    SQL_ECHO: bool = field(default_factory=lambda: _env_bool("SQL_ECHO"))
    POOL_SIZE: int = field(default_factory=lambda: int(os.getenv("POOL_SIZE", 10)))
    MAX_OVERFLOW: int = field(default_factory=lambda: int(os.getenv("MAX_OVERFLOW", 20)))

    # Repository backend: sqlalchemy | supabase
    ARTICLE_REPO_BACKEND: str = field(default_factory=lambda: os.getenv("ARTICLE_REPO_BACKEND", "sqlalchemy"))

    # Supabase
    SUPABASE_URL: str | None = field(default_factory=lambda: os.getenv("SUPABASE_URL") or None)
    SUPABASE_ANON_KEY: str | None = field(default_factory=lambda: os.getenv("SUPABASE_ANON_KEY") or None)
    SUPABASE_SERVICE_ROLE_KEY: str | None = field(default_factory=lambda: os.getenv("SUPABASE_SERVICE_ROLE_KEY") or None)

    # JWT (used when no Supabase service client can verify admin tokens)
    JWT_SECRET: str = field(default_factory=lambda: os.getenv("JWT_SECRET", "change-me"))
    JWT_ALG: str = field(default_factory=lambda: os.getenv("JWT_ALG", "HS256"))

    # Static article fallbacks
    METADATA_PATH: str = field(default_factory=lambda: os.getenv("METADATA_PATH", "public/articles-metadata.json"))
    POSTS_DIR: str = field(default_factory=lambda: os.getenv("POSTS_DIR", "posts"))

    # Listing
    ARTICLES_PER_PAGE: int = field(default_factory=lambda: int(os.getenv("ARTICLES_PER_PAGE", 5)))
    COMMENTS_PER_PAGE: int = field(default_factory=lambda: int(os.getenv("COMMENTS_PER_PAGE", 10)))

    # GitHub projects
    GITHUB_USERNAME: str = field(default_factory=lambda: os.getenv("GITHUB_USERNAME", "Alan-Cheng"))
    GITHUB_TOKEN: str | None = field(default_factory=lambda: os.getenv("GITHUB_TOKEN") or None)

    # Admin API / image host / deploy hook
    ADMIN_API_URL: str | None = field(default_factory=lambda: os.getenv("ADMIN_API_URL") or None)
    IMAGE_UPLOAD_URL: str = field(default_factory=lambda: os.getenv("IMAGE_UPLOAD_URL", "https://image.alan-cheng.com/images"))
    IMG_WORKER_API_TOKEN: str | None = field(default_factory=lambda: os.getenv("IMG_WORKER_API_TOKEN") or None)
    BUILD_WEBHOOK_URL: str | None = field(default_factory=lambda: os.getenv("BUILD_WEBHOOK_URL") or None)
    WEBHOOK_TIMEOUT: float = field(default_factory=lambda: float(os.getenv("WEBHOOK_TIMEOUT", 10)))

    def warn_missing(self) -> None:
        if not self.SUPABASE_URL or not self.SUPABASE_ANON_KEY:
            logger.warning("SUPABASE_URL / SUPABASE_ANON_KEY not set; articles fall back to local files")
        if not self.GITHUB_TOKEN:
            logger.info("GITHUB_TOKEN not set; GitHub projects use the public REST API")
        if not self.IMG_WORKER_API_TOKEN:
            logger.info("IMG_WORKER_API_TOKEN not set; image upload is disabled")


@dataclass
class TestingConfig(BaseConfig):
    TESTING: bool = True
    DATABASE_URL: str = "sqlite://"
    ARTICLE_REPO_BACKEND: str = "sqlalchemy"
    SUPABASE_URL: str | None = None
    SUPABASE_ANON_KEY: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    JWT_SECRET: str = "portfolio-test-secret-0123456789abcdef"
    BUILD_WEBHOOK_URL: str | None = None
    GITHUB_TOKEN: str | None = None
