"""Admin login state backed by Supabase Auth."""
from __future__ import annotations

from typing import Optional

from loguru import logger
from supabase import Client

from ..errors import AuthError


class AdminSession:
    def __init__(self, client: Optional[Client]) -> None:
        self.client = client

    def _auth(self):
        if self.client is None:
            raise AuthError("Supabase is not configured, admin login is unavailable")
        return self.client.auth

    def login(self, email: str, password: str) -> None:
        try:
            res = self._auth().sign_in_with_password({"email": email, "password": password})
        except AuthError:
            raise
        except Exception as e:
            raise AuthError(str(e) or "Login failed") from e
        if getattr(res, "session", None) is None:
            raise AuthError("Login failed")
        logger.info(f"admin logged in as {email}")

    def logout(self) -> None:
        self._auth().sign_out()

    def access_token(self) -> Optional[str]:
        if self.client is None:
            return None
        session = self.client.auth.get_session()
        return session.access_token if session else None

    def is_authenticated(self) -> bool:
        return self.access_token() is not None
