"""HTTP client for the admin API and the image host."""
from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import requests
from loguru import logger

from ..errors import AdminApiError, AuthError

MAX_IMAGE_BYTES = 10 * 1024 * 1024

TokenProvider = Callable[[], Optional[str]]


class AdminApiClient:
    """Talks to ``<base_url>/articles...`` with the admin's bearer token.

    ``token_provider`` is asked for a token before every request; without one
    nothing is sent.
    """

    def __init__(
        self,
        base_url: Optional[str],
        token_provider: TokenProvider,
        *,
        anon_key: Optional[str] = None,
        image_upload_url: Optional[str] = None,
        image_token: Optional[str] = None,
        timeout: float = 15.0,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.token_provider = token_provider
        self.anon_key = anon_key
        self.image_upload_url = image_upload_url
        self.image_token = image_token
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: Any, token_provider: TokenProvider) -> "AdminApiClient":
        return cls(
            config.ADMIN_API_URL,
            token_provider,
            anon_key=config.SUPABASE_ANON_KEY,
            image_upload_url=config.IMAGE_UPLOAD_URL,
            image_token=config.IMG_WORKER_API_TOKEN,
        )

    def _request(self, method: str, endpoint: str, body: Optional[Dict[str, Any]] = None) -> Any:
        token = self.token_provider()
        if not token:
            raise AuthError("Not logged in, please log in to the admin first")
        if not self.base_url:
            raise AdminApiError("ADMIN_API_URL is not configured")

        url = f"{self.base_url}{endpoint}"
        headers = {"Content-Type": "application/json", "Authorization": f"Bearer {token}"}
        if self.anon_key:
            headers["apikey"] = self.anon_key
        logger.debug(f"admin API {method} {url}")
        try:
            resp = requests.request(method, url, json=body, headers=headers, timeout=self.timeout)
        except requests.ConnectionError as e:
            raise AdminApiError(f"Cannot reach the admin API at {url}; is it deployed and reachable? ({e})") from e

        if resp.status_code == 404 and not _error_message(resp):
            raise AdminApiError(f"Admin API not found at {url}; check that it is deployed", 404)
        if resp.status_code == 401:
            raise AuthError("Authentication failed, please log in again")
        if not resp.ok:
            raise AdminApiError(_error_message(resp) or f"HTTP {resp.status_code}", resp.status_code)
        return resp.json()

    def list_articles(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        endpoint = f"/articles?status={status}" if status and status != "all" else "/articles"
        data = self._request("GET", endpoint)
        return data if isinstance(data, list) else []

    def get_article(self, article_id: str) -> Dict[str, Any]:
        data = self._request("GET", f"/articles/{article_id}")
        if isinstance(data, dict) and data.get("error"):
            raise AdminApiError(data["error"])
        return data

    def create_article(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/articles", data)

    def update_article(self, article_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/articles/{article_id}", data)

    def delete_article(self, article_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/articles/{article_id}")

    def get_history(self, article_id: str) -> List[Dict[str, Any]]:
        data = self._request("GET", f"/articles/{article_id}/history")
        return data if isinstance(data, list) else []

    def restore_article(self, article_id: str, history_id: str) -> Dict[str, Any]:
        return self._request("POST", f"/articles/{article_id}/restore", {"historyId": history_id})

    def upload_image(self, path: str | Path) -> Dict[str, Any]:
        """Upload a local image to the image host; returns ``{"url", "filename"}``."""
        if not self.image_token:
            raise AdminApiError("Image upload token is not configured, set IMG_WORKER_API_TOKEN")
        if not self.image_upload_url:
            raise AdminApiError("IMAGE_UPLOAD_URL is not configured")

        path = Path(path)
        mime, _ = mimetypes.guess_type(path.name)
        if not mime or not mime.startswith("image/"):
            raise AdminApiError("Please choose an image file", 400)
        if path.stat().st_size > MAX_IMAGE_BYTES:
            raise AdminApiError("Image must be smaller than 10MB", 400)

        with path.open("rb") as fh:
            resp = requests.post(
                self.image_upload_url,
                headers={"x-api-key": self.image_token},
                files={"file": (path.name, fh, mime)},
                timeout=self.timeout,
            )
        if not resp.ok:
            raise AdminApiError(_error_message(resp) or f"Upload failed: HTTP {resp.status_code}", resp.status_code)
        data = resp.json()
        logger.info(f"uploaded {path.name} -> {data.get('url')}")
        return data


def _error_message(resp: requests.Response) -> Optional[str]:
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None
