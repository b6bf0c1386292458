"""Supabase clients (anon + service role) as a Flask extension."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from flask import Flask
from loguru import logger
from supabase import Client, create_client


@dataclass
class _SBClients:
    anon: Optional[Client] = None
    service: Optional[Client] = None


class SupabaseExt:
    def __init__(self) -> None:
        self.clients = _SBClients()

    def init_app(self, app: Flask) -> None:
        self.clients = _SBClients()
        url = app.config.get("SUPABASE_URL")
        anon_key = app.config.get("SUPABASE_ANON_KEY")
        service_key = app.config.get("SUPABASE_SERVICE_ROLE_KEY")
        if not url or not anon_key:
            logger.warning("Supabase URL or anon key missing; hosted article table disabled")
        if url and anon_key:
            self.clients.anon = create_client(url, anon_key)
        if url and service_key:
            self.clients.service = create_client(url, service_key)

    @property
    def anon(self) -> Optional[Client]:
        return self.clients.anon

    @property
    def service(self) -> Optional[Client]:
        return self.clients.service

    def get_user(self, token: str) -> Optional[Any]:
        """Resolve an access token to its Supabase Auth user, ``None`` if invalid."""
        client = self.service or self.anon
        if client is None:
            return None
        try:
            res = client.auth.get_user(token)
        except Exception as e:
            logger.warning(f"Supabase token check failed: {e}")
            return None
        return getattr(res, "user", None)


supabase_ext = SupabaseExt()
