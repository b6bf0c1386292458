"""Health check endpoints."""
from __future__ import annotations

from flask import Blueprint, current_app

from ...errors import ok
from ...integrations.supabase_client import supabase_ext


bp = Blueprint("health", __name__)


@bp.get("/")
def alive():
    return ok({"status": "ok", "backend": current_app.config.get("ARTICLE_REPO_BACKEND", "sqlalchemy")})


@bp.get("/supabase")
def supabase_status():
    return ok({
        "anon_initialized": supabase_ext.anon is not None,
        "service_initialized": supabase_ext.service is not None,
    })
