"""Admin blueprint: article CRUD, edit history and restore behind a bearer token.

Success bodies are bare JSON (no ``data`` envelope); every error is
``{"error": "<message>"}``.
"""
from __future__ import annotations

from dataclasses import asdict

import pydantic
from flask import Blueprint, current_app, jsonify, request
from loguru import logger
from werkzeug.exceptions import HTTPException

from ...auth.jwt import require_bearer
from ...db.repositories.factory import article_repo
from ...domain.article import Article
from ...errors import PortfolioError
from ...services.admin_service import AdminService
from ...services.webhook import BuildWebhook
from .schemas import ArticleCreateIn, ArticleOut, ArticleUpdateIn, HistoryOut, RestoreIn


bp = Blueprint("admin", __name__)

# columns an explicit null in an update must not clear
NOT_NULL_FIELDS = {"title", "content", "is_pinned", "status"}


def _service() -> AdminService:
    cfg = current_app.config
    webhook = BuildWebhook(cfg.get("BUILD_WEBHOOK_URL"), timeout=cfg.get("WEBHOOK_TIMEOUT", 10))
    return AdminService(article_repo(admin=True), webhook)


def _article_out(article: Article) -> dict:
    data = asdict(article)
    data["cat"] = data.pop("category")
    return ArticleOut.model_validate(data).model_dump()


@bp.errorhandler(Exception)
def admin_error(err: Exception):
    if isinstance(err, PortfolioError):
        status, message = err.status_code, err.message
    elif isinstance(err, pydantic.ValidationError):
        status, message = 400, str(err)
    elif isinstance(err, HTTPException):
        status, message = err.code or 500, err.description or err.name
    else:
        logger.exception(f"admin API failure: {err}")
        status, message = 500, str(err) or "Internal server error"
    return jsonify({"error": message}), status


@bp.get("/articles")
@require_bearer
def list_articles():
    articles = _service().list_articles(request.args.get("status", "all"))
    return jsonify([_article_out(a) for a in articles])


@bp.get("/articles/<article_id>")
@require_bearer
def get_article(article_id: str):
    return jsonify(_article_out(_service().get_article(article_id)))


@bp.post("/articles")
@require_bearer
def create_article():
    payload = ArticleCreateIn.model_validate_json(request.data or b"{}")
    created = _service().create_article(payload.model_dump())
    return jsonify(_article_out(created)), 201


@bp.put("/articles/<article_id>")
@require_bearer
def update_article(article_id: str):
    payload = ArticleUpdateIn.model_validate_json(request.data or b"{}")
    fields = {
        k: v for k, v in payload.model_dump(exclude_unset=True).items()
        if v is not None or k not in NOT_NULL_FIELDS
    }
    updated = _service().update_article(article_id, fields)
    return jsonify(_article_out(updated))


@bp.delete("/articles/<article_id>")
@require_bearer
def delete_article(article_id: str):
    return jsonify({"success": _service().delete_article(article_id)})


@bp.get("/articles/<article_id>/history")
@require_bearer
def get_history(article_id: str):
    records = _service().get_history(article_id)
    return jsonify([HistoryOut.model_validate(asdict(r)).model_dump() for r in records])


@bp.post("/articles/<article_id>/restore")
@require_bearer
def restore_article(article_id: str):
    payload = RestoreIn.model_validate_json(request.data or b"{}")
    restored = _service().restore_article(article_id, payload.history_id)
    return jsonify(_article_out(restored))
