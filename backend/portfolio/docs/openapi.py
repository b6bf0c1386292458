"""Builds a minimal OpenAPI spec from existing Pydantic schemas."""
from __future__ import annotations

from typing import Any, Dict

from flask import request

from ..api.admin.schemas import ArticleCreateIn, ArticleOut, ArticleUpdateIn, HistoryOut, RestoreIn
from ..api.articles.schemas import ArticleDetailOut, ArticleListOut, ArticleSummaryOut
from ..api.comments.schemas import CommentCreateIn, CommentPageOut

_REF = "#/components/schemas/{model}"


def _schemas() -> Dict[str, Any]:
    models = (
        ArticleSummaryOut, ArticleListOut, ArticleDetailOut,
        CommentCreateIn, CommentPageOut,
        ArticleCreateIn, ArticleUpdateIn, ArticleOut, HistoryOut, RestoreIn,
    )
    schemas: Dict[str, Any] = {}
    for model in models:
        schema = model.model_json_schema(ref_template=_REF, by_alias=True)
        schemas.update(schema.pop("$defs", {}))
        schemas[model.__name__] = schema
    return schemas


def _ref(name: str) -> Dict[str, Any]:
    return {"$ref": _REF.format(model=name)}


def _json(schema: Dict[str, Any], description: str = "OK") -> Dict[str, Any]:
    return {"description": description, "content": {"application/json": {"schema": schema}}}


def _envelope(schema: Dict[str, Any], description: str = "OK") -> Dict[str, Any]:
    return _json({"type": "object", "properties": {"data": schema}}, description)


def _path_param(name: str) -> Dict[str, Any]:
    return {"name": name, "in": "path", "required": True, "schema": {"type": "string"}}


def _query(name: str, type_: str = "string") -> Dict[str, Any]:
    return {"name": name, "in": "query", "required": False, "schema": {"type": type_}}


def build_openapi() -> Dict[str, Any]:
    base_url = f"{request.scheme}://{request.host}"
    secured = [{"BearerAuth": []}]
    return {
        "openapi": "3.0.3",
        "info": {"title": "Portfolio API", "version": "1.0.0"},
        "servers": [{"url": base_url}],
        "tags": [
            {"name": "Health"},
            {"name": "Articles"},
            {"name": "Comments"},
            {"name": "Projects"},
            {"name": "Admin"},
        ],
        "paths": {
            "/api/health/": {
                "get": {"tags": ["Health"], "summary": "Liveness probe", "responses": {"200": {"description": "OK"}}}
            },
            "/api/health/supabase": {
                "get": {"tags": ["Health"], "summary": "Supabase client status", "responses": {"200": {"description": "Status"}}}
            },
            "/api/articles/": {
                "get": {
                    "tags": ["Articles"], "summary": "Filtered, paginated article listing",
                    "parameters": [_query("search"), _query("category"), _query("page", "integer")],
                    "responses": {"200": _envelope(_ref("ArticleListOut"))},
                }
            },
            "/api/articles/{article_id}": {
                "parameters": [_path_param("article_id")],
                "get": {
                    "tags": ["Articles"], "summary": "Article summary and markdown content",
                    "responses": {"200": _envelope(_ref("ArticleDetailOut")), "404": {"description": "Not found"}},
                },
            },
            "/api/view": {
                "get": {
                    "tags": ["Articles"], "summary": "Resolve a URL fragment into route, listing, article and share metadata",
                    "parameters": [_query("fragment"), _query("search"), _query("category"), _query("page", "integer")],
                    "responses": {"200": {"description": "OK"}},
                }
            },
            "/api/comments/{article_id}": {
                "parameters": [_path_param("article_id")],
                "get": {
                    "tags": ["Comments"], "summary": "One page of comments, newest first",
                    "parameters": [_query("page", "integer")],
                    "responses": {"200": _envelope(_ref("CommentPageOut"))},
                },
                "post": {
                    "tags": ["Comments"], "summary": "Post a comment",
                    "requestBody": {"required": True, "content": {"application/json": {"schema": _ref("CommentCreateIn")}}},
                    "responses": {"201": {"description": "Created"}, "400": {"description": "Empty name or comment"}},
                },
            },
            "/api/projects/": {
                "get": {"tags": ["Projects"], "summary": "Commercial and GitHub projects", "responses": {"200": {"description": "OK"}}}
            },
            "/admin-api/articles": {
                "get": {
                    "tags": ["Admin"], "summary": "List articles", "security": secured,
                    "parameters": [_query("status")],
                    "responses": {"200": _json({"type": "array", "items": _ref("ArticleOut")})},
                },
                "post": {
                    "tags": ["Admin"], "summary": "Create article", "security": secured,
                    "requestBody": {"required": True, "content": {"application/json": {"schema": _ref("ArticleCreateIn")}}},
                    "responses": {"201": _json(_ref("ArticleOut"), "Created")},
                },
            },
            "/admin-api/articles/{article_id}": {
                "parameters": [_path_param("article_id")],
                "get": {"tags": ["Admin"], "summary": "Get article", "security": secured,
                        "responses": {"200": _json(_ref("ArticleOut"))}},
                "put": {
                    "tags": ["Admin"], "summary": "Update article (records history)", "security": secured,
                    "requestBody": {"required": True, "content": {"application/json": {"schema": _ref("ArticleUpdateIn")}}},
                    "responses": {"200": _json(_ref("ArticleOut"))},
                },
                "delete": {"tags": ["Admin"], "summary": "Delete article", "security": secured,
                           "responses": {"200": {"description": "OK"}}},
            },
            "/admin-api/articles/{article_id}/history": {
                "parameters": [_path_param("article_id")],
                "get": {"tags": ["Admin"], "summary": "Edit history, newest first", "security": secured,
                        "responses": {"200": _json({"type": "array", "items": _ref("HistoryOut")})}},
            },
            "/admin-api/articles/{article_id}/restore": {
                "parameters": [_path_param("article_id")],
                "post": {
                    "tags": ["Admin"], "summary": "Restore title and content from a history record", "security": secured,
                    "requestBody": {"required": True, "content": {"application/json": {"schema": _ref("RestoreIn")}}},
                    "responses": {"200": _json(_ref("ArticleOut")), "404": {"description": "Unknown history record"}},
                },
            },
        },
        "components": {
            "schemas": _schemas(),
            "securitySchemes": {"BearerAuth": {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}},
        },
    }
