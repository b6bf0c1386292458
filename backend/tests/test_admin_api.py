from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
import requests

from portfolio.errors import IdExhaustedError
from portfolio.services import admin_service, webhook as webhook_module
from portfolio.services.admin_service import MAX_ID_ATTEMPTS, AdminService, base_id_for
from portfolio.services.webhook import BuildWebhook


def test_requests_without_token_are_rejected(client):
    resp = client.get("/admin-api/articles")
    assert resp.status_code == 401
    assert "error" in resp.get_json()

    resp = client.get("/admin-api/articles", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_created_ids_follow_date_with_suffixes(client, admin_headers):
    ids = []
    for title in ("One", "Two", "Three"):
        resp = client.post("/admin-api/articles", json={"title": title, "date": "2024-01-01"}, headers=admin_headers)
        assert resp.status_code == 201
        ids.append(resp.get_json()["id"])
    assert ids == ["20240101", "20240101-2", "20240101-3"]

    created = client.get("/admin-api/articles/20240101-2", headers=admin_headers).get_json()
    assert created["title"] == "Two"
    assert created["created_by"] == "admin"
    assert created["status"] == "draft"


def test_explicit_id_is_kept(client, admin_headers):
    resp = client.post("/admin-api/articles", json={"id": "my-post", "title": "Mine"}, headers=admin_headers)
    assert resp.get_json()["id"] == "my-post"


def test_missing_title_is_a_bad_request(client, admin_headers):
    resp = client.post("/admin-api/articles", json={"content": "no title"}, headers=admin_headers)
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_unknown_article_is_404(client, admin_headers):
    resp = client.get("/admin-api/articles/nope", headers=admin_headers)
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Article not found: nope"}


def test_status_filter(client, admin_headers, add_article):
    add_article("p1", "Published", status="published")
    add_article("d1", "Draft")
    published = client.get("/admin-api/articles?status=published", headers=admin_headers).get_json()
    everything = client.get("/admin-api/articles?status=all", headers=admin_headers).get_json()
    assert [a["id"] for a in published] == ["p1"]
    assert {a["id"] for a in everything} == {"p1", "d1"}


def test_update_records_history_and_restore_brings_it_back(client, admin_headers, add_article):
    add_article("post", "Original", content="first body")
    resp = client.put("/admin-api/articles/post", json={"title": "Edited", "content": "second body"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.get_json()["title"] == "Edited"

    [record] = client.get("/admin-api/articles/post/history", headers=admin_headers).get_json()
    assert record["title"] == "Original"
    assert record["content"] == "first body"
    assert record["changed_fields"] == {"title": True, "content": True}

    restored = client.post(
        "/admin-api/articles/post/restore", json={"historyId": record["id"]}, headers=admin_headers
    ).get_json()
    assert restored["title"] == "Original"
    assert restored["content"] == "first body"


def test_restore_with_unknown_history_is_404(client, admin_headers, add_article):
    add_article("post", "Original")
    resp = client.post("/admin-api/articles/post/restore", json={"historyId": "missing"}, headers=admin_headers)
    assert resp.status_code == 404


def test_delete(client, admin_headers, add_article):
    add_article("gone", "Bye")
    assert client.delete("/admin-api/articles/gone", headers=admin_headers).get_json() == {"success": True}
    assert client.get("/admin-api/articles/gone", headers=admin_headers).status_code == 404


def test_id_allocation_gives_up_after_bounded_attempts():
    repo = Mock()
    repo.exists.return_value = True
    svc = AdminService(repo, Mock())
    with pytest.raises(IdExhaustedError):
        svc.allocate_id(None, "2024-05-06")
    assert repo.exists.call_count == MAX_ID_ATTEMPTS


def test_base_id_for_date():
    assert base_id_for("2024-05-06") == "20240506"
    assert len(base_id_for(None)) == 8


class _LateEveningUtc(datetime):
    @classmethod
    def now(cls, tz=None):
        return datetime(2024, 5, 6, 23, 30, tzinfo=timezone.utc).astimezone(tz)


def test_undated_ids_use_the_utc_date(monkeypatch):
    monkeypatch.setattr(admin_service, "datetime", _LateEveningUtc)
    assert base_id_for(None) == "20240506"


def test_create_and_update_trigger_the_build_webhook():
    repo = Mock()
    repo.exists.return_value = False
    repo.create.side_effect = lambda article: article
    hook = Mock()
    svc = AdminService(repo, hook)

    article = svc.create_article({"title": "Hi", "date": "2024-01-01"})
    repo.get.return_value = article
    repo.update.return_value = article
    svc.update_article(article.id, {"title": "Hello"})
    assert hook.trigger.call_count == 2


def test_webhook_failure_goes_to_error_callback(monkeypatch):
    monkeypatch.setattr(webhook_module.requests, "post", Mock(side_effect=requests.ConnectionError("refused")))
    errors = []
    BuildWebhook("https://hooks.example.com/build", on_error=errors.append).send()
    assert len(errors) == 1


def test_webhook_without_url_does_nothing():
    assert BuildWebhook(None).trigger() is None
