"""Repository factories for articles and comments (sqlalchemy|supabase)."""
from __future__ import annotations

from typing import Optional

from flask import current_app
from sqlalchemy.orm import Session

from .article_repo import ArticleRepository as SQLAArticleRepo
from .article_repo_supabase import ArticleRepositorySupabase
from .comment_repo import CommentRepository as SQLACommentRepo
from .comment_repo_supabase import CommentRepositorySupabase
from ..session import db
from ...integrations.supabase_client import supabase_ext


def _backend() -> str:
    return (current_app.config.get("ARTICLE_REPO_BACKEND") or "sqlalchemy").lower()


def _session(session: Optional[Session]) -> Session:
    if session is not None:
        return session
    if db.Session is None:
        raise RuntimeError("SQLAlchemy repo requires a session")
    return db.Session()


def article_repo(session: Optional[Session] = None, *, admin: bool = False):
    """``admin`` picks the service-role client (bypasses row level security)."""
    if _backend() == "supabase":
        client = (supabase_ext.service or supabase_ext.anon) if admin else (supabase_ext.anon or supabase_ext.service)
        if client is None:
            raise RuntimeError("Supabase client is not initialized; set SUPABASE_URL and a key.")
        return ArticleRepositorySupabase(client)
    return SQLAArticleRepo(_session(session))


def comment_repo(session: Optional[Session] = None):
    if _backend() == "supabase":
        client = supabase_ext.anon or supabase_ext.service
        if client is None:
            raise RuntimeError("Supabase client is not initialized; set SUPABASE_URL and a key.")
        return CommentRepositorySupabase(client)
    return SQLACommentRepo(_session(session))
