"""Bearer token helpers and a Flask decorator guarding the admin API."""
from __future__ import annotations

import functools
from typing import Any, Callable, Dict

import jwt
from flask import current_app, g, request

from ..errors import AuthError
from ..integrations.supabase_client import supabase_ext


def encode(payload: Dict[str, Any]) -> str:
    secret = current_app.config.get("JWT_SECRET", "change-me")
    alg = current_app.config.get("JWT_ALG", "HS256")
    return jwt.encode(payload, secret, algorithm=alg)


def decode(token: str) -> Dict[str, Any]:
    secret = current_app.config.get("JWT_SECRET", "change-me")
    alg = current_app.config.get("JWT_ALG", "HS256")
    return jwt.decode(token, secret, algorithms=[alg], options={"verify_aud": False})


def bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        raise AuthError("Unauthorized: admin authentication required")
    token = auth.split(" ", 1)[1].strip()
    if not token:
        raise AuthError("Unauthorized: admin authentication required")
    return token


def verify(token: str) -> Dict[str, Any]:
    """Supabase Auth when a client is configured, otherwise a local JWT."""
    if supabase_ext.service is not None or supabase_ext.anon is not None:
        user = supabase_ext.get_user(token)
        if user is None:
            raise AuthError("Unauthorized: invalid token, please log in again")
        return {"sub": getattr(user, "id", None), "email": getattr(user, "email", None)}
    try:
        return decode(token)
    except jwt.PyJWTError as e:
        raise AuthError(f"Unauthorized: invalid token, please log in again ({e})") from e


def require_bearer(fn: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any):
        g.admin = verify(bearer_token())
        return fn(*args, **kwargs)
    return wrapper
