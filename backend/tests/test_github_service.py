import base64
from unittest.mock import Mock

import requests

from portfolio.services import github_service
from portfolio.services.github_service import GithubService


def _response(body, status=200):
    resp = Mock()
    resp.status_code = status
    resp.ok = status < 400
    resp.json.return_value = body
    resp.raise_for_status = Mock()
    return resp


def _readme(markdown, branch=None):
    body = {"content": base64.b64encode(markdown.encode()).decode()}
    if branch:
        body["default_branch"] = branch
    return body


def test_public_repos_with_readme_images(monkeypatch):
    repos = [
        {"name": "shots", "description": "Has a screenshot", "html_url": "https://github.com/alan/shots",
         "homepage": "https://shots.dev", "owner": {"login": "alan"}},
        {"name": "plain", "description": None, "html_url": "https://github.com/alan/plain",
         "homepage": "", "owner": {"login": "alan"}},
    ]

    def fake_get(url, **kwargs):
        if url.endswith("/users/alan/repos"):
            assert kwargs["params"] == {"sort": "stars", "per_page": 6}
            return _response(repos)
        if url.endswith("/repos/alan/shots/readme"):
            return _response(_readme("# Shots\n\n![demo](docs/demo.png)\n", branch="master"))
        return _response({"message": "Not Found"}, status=404)

    monkeypatch.setattr(github_service.requests, "get", fake_get)
    shots, plain = GithubService("alan").fetch_projects()

    assert shots.image_url == "https://raw.githubusercontent.com/alan/shots/master/docs/demo.png"
    assert shots.link == "https://shots.dev"
    assert shots.github_url == "https://github.com/alan/shots"
    assert plain.description == "GitHub Repository"
    assert plain.image_url == "https://opengraph.githubassets.com/alan/plain"
    assert plain.link == "https://github.com/alan/plain"


def test_pinned_repos_via_graphql_when_token_given(monkeypatch):
    payload = {"data": {"user": {"pinnedItems": {"nodes": [
        {"name": "pinned", "description": "Pinned one", "url": "https://github.com/alan/pinned",
         "openGraphImageUrl": "https://og.example.com/pinned.png", "homepageUrl": None, "owner": {"login": "alan"}},
    ]}}}}
    post = Mock(return_value=_response(payload))
    monkeypatch.setattr(github_service.requests, "post", post)
    monkeypatch.setattr(github_service.requests, "get", Mock(return_value=_response({}, status=404)))

    [project] = GithubService("alan", token="ghp_x").fetch_projects()
    assert project.image_url == "https://og.example.com/pinned.png"
    assert post.call_args.kwargs["headers"]["Authorization"] == "Bearer ghp_x"


def test_network_failure_yields_no_projects(monkeypatch):
    monkeypatch.setattr(github_service.requests, "get", Mock(side_effect=requests.ConnectionError("offline")))
    assert GithubService("alan").fetch_projects() == []


def test_graphql_errors_yield_no_projects(monkeypatch):
    monkeypatch.setattr(github_service.requests, "post", Mock(return_value=_response({"errors": [{"message": "bad"}]})))
    assert GithubService("alan", token="ghp_x").fetch_projects() == []


def test_readme_with_absolute_image(monkeypatch):
    monkeypatch.setattr(
        github_service.requests, "get",
        Mock(return_value=_response(_readme('<img src="https://cdn.example.com/logo.svg">'))),
    )
    assert GithubService("alan").readme_image("alan", "repo") == "https://cdn.example.com/logo.svg"
