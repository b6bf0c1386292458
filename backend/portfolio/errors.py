"""Error types, global HTTP error handling and JSON response helpers."""
from __future__ import annotations

from typing import Any

import pydantic
from flask import Flask, jsonify
from loguru import logger


class PortfolioError(Exception):
    status_code = 500
    code = "internal_server_error"

    def __init__(self, message: str = "unexpected error") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(PortfolioError):
    status_code = 400
    code = "bad_request"


class AuthError(PortfolioError):
    status_code = 401
    code = "unauthorized"


class NotFoundError(PortfolioError):
    status_code = 404
    code = "not_found"


class IdExhaustedError(PortfolioError):
    """No free article id left after the bounded number of suffix attempts."""


class AdminApiError(PortfolioError):
    """Admin API answered with an error (client side)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


def error_body(message: str, code: str) -> dict:
    return {"error": message, "code": code}


def portfolio_error_response(err: PortfolioError):
    if err.status_code >= 500:
        logger.error(f"{type(err).__name__}: {err.message}")
    return jsonify(error_body(err.message, err.code)), err.status_code


def register_error_handlers(app: Flask) -> None:
    app.register_error_handler(PortfolioError, portfolio_error_response)

    @app.errorhandler(pydantic.ValidationError)
    def invalid_payload(err: pydantic.ValidationError):  # type: ignore[override]
        return jsonify(error_body(str(err), "unprocessable_entity")), 422

    @app.errorhandler(400)
    def bad_request(err: Exception):  # type: ignore[override]
        return jsonify(error_body(str(err), "bad_request")), 400

    @app.errorhandler(404)
    def not_found(err: Exception):  # type: ignore[override]
        return jsonify(error_body(str(err), "not_found")), 404

    @app.errorhandler(422)
    def unprocessable(err: Exception):  # type: ignore[override]
        return jsonify(error_body(str(err), "unprocessable_entity")), 422

    @app.errorhandler(500)
    def internal(err: Exception):  # type: ignore[override]
        return jsonify(error_body("unexpected error", "internal_server_error")), 500


def ok(data: Any, status: int = 200):
    return jsonify({"data": data}), status
