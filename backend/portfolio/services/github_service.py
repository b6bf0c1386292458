"""GitHub projects for the portfolio page."""
from __future__ import annotations

import base64
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

import requests
from loguru import logger
from pydantic import BaseModel, ValidationError

from ..domain.project import Project
from ..text.markdown import extract_first_image, resolve_image_url

API_URL = "https://api.github.com"
GRAPHQL_URL = "https://api.github.com/graphql"
RAW_URL = "https://raw.githubusercontent.com"
OPENGRAPH_URL = "https://opengraph.githubassets.com"
PROJECT_LIMIT = 6

PINNED_QUERY = """
{
  user(login: "%s") {
    pinnedItems(first: %d, types: REPOSITORY) {
      nodes {
        ... on Repository {
          name
          description
          url
          openGraphImageUrl
          homepageUrl
          owner { login }
        }
      }
    }
  }
}
"""


class _Repo(BaseModel):
    owner: str
    name: str
    description: Optional[str] = None
    url: str
    homepage: Optional[str] = None
    og_image: Optional[str] = None


class GithubService:
    def __init__(self, username: str, token: Optional[str] = None, timeout: float = 10.0) -> None:
        self.username = username
        self.token = token
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/vnd.github.v3+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def fetch_projects(self) -> List[Project]:
        """Pinned repos (GraphQL, needs a token) or the most starred ones (REST).

        Any failure yields ``[]``.
        """
        try:
            repos = self._pinned_repos() if self.token else self._starred_repos()
        except (requests.RequestException, KeyError, ValueError, ValidationError) as e:
            logger.error(f"failed to fetch GitHub repos for {self.username}: {e}")
            return []

        if not repos:
            return []
        with ThreadPoolExecutor(max_workers=len(repos)) as pool:
            images = list(pool.map(lambda r: self.readme_image(r.owner, r.name), repos))

        return [
            Project(
                title=repo.name,
                description=repo.description or "GitHub Repository",
                image_url=image or repo.og_image or f"{OPENGRAPH_URL}/{repo.owner}/{repo.name}",
                link=repo.homepage or repo.url,
                category="other",
                github_url=repo.url,
            )
            for repo, image in zip(repos, images)
        ]

    def _pinned_repos(self) -> List[_Repo]:
        resp = requests.post(
            GRAPHQL_URL,
            json={"query": PINNED_QUERY % (self.username, PROJECT_LIMIT)},
            headers={"Content-Type": "application/json", "Authorization": f"Bearer {self.token}"},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        data = resp.json()
        if data.get("errors"):
            logger.error(f"GraphQL errors: {data['errors']}")
            return []
        nodes = (((data.get("data") or {}).get("user") or {}).get("pinnedItems") or {}).get("nodes") or []
        return [
            _Repo(
                owner=(node.get("owner") or {}).get("login") or self.username,
                name=node["name"],
                description=node.get("description"),
                url=node["url"],
                homepage=node.get("homepageUrl") or None,
                og_image=node.get("openGraphImageUrl"),
            )
            for node in nodes
            if node
        ]

    def _starred_repos(self) -> List[_Repo]:
        resp = requests.get(
            f"{API_URL}/users/{self.username}/repos",
            params={"sort": "stars", "per_page": PROJECT_LIMIT},
            headers=self._headers(),
            timeout=self.timeout,
        )
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, list):
            return []
        return [
            _Repo(
                owner=(item.get("owner") or {}).get("login") or self.username,
                name=item["name"],
                description=item.get("description"),
                url=item["html_url"],
                homepage=item.get("homepage") or None,
            )
            for item in data
        ]

    def readme_image(self, owner: str, repo: str) -> Optional[str]:
        """First image in the repo README as an absolute URL, or ``None``."""
        try:
            resp = requests.get(f"{API_URL}/repos/{owner}/{repo}/readme", headers=self._headers(), timeout=self.timeout)
            if not resp.ok:
                return None
            data: Dict[str, Any] = resp.json()
            encoded = data.get("content")
            if not encoded:
                return None
            markdown = base64.b64decode("".join(encoded.split())).decode("utf-8", errors="replace")
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"failed to read README of {owner}/{repo}: {e}")
            return None

        image = extract_first_image(markdown)
        if not image:
            return None
        branch = data.get("default_branch") or "main"
        return resolve_image_url(image, f"{RAW_URL}/{owner}/{repo}/{branch}")
