import re
from unittest.mock import Mock

import pytest

from portfolio.errors import ValidationError
from portfolio.services.comment_service import CommentService, avatar_color, avatar_text


def test_blank_comment_is_rejected_before_storage():
    repo = Mock()
    svc = CommentService(repo)
    with pytest.raises(ValidationError):
        svc.post_comment("post-1", "Post", "   ", "hello")
    with pytest.raises(ValidationError):
        svc.post_comment("post-1", "Post", "Ann", "\n\t")
    repo.create.assert_not_called()


def test_post_comment_trims_values():
    repo = Mock()
    repo.create.side_effect = lambda comment: comment
    created = CommentService(repo).post_comment("post-1", "Post", "  Ann ", " nice post \n")
    assert created.author_name == "Ann"
    assert created.content == "nice post"


def test_list_failure_yields_empty_page():
    repo = Mock()
    repo.list.side_effect = RuntimeError("connection refused")
    page = CommentService(repo).list_comments("post-1", page=3)
    assert page.items == []
    assert page.page == 3
    assert page.total_count == 0


def test_avatar_helpers():
    assert avatar_text("Alexander") == "Alexa"
    assert avatar_text("Ann") == "Ann"
    assert avatar_text("") == "?"
    assert avatar_color("Ann") == avatar_color("Ann")
    assert re.fullmatch(r"#[0-9a-f]{6}", avatar_color("Ann"))
    assert re.fullmatch(r"#[0-9a-f]{6}", avatar_color(""))


def test_comment_board_round_trip(client):
    resp = client.post("/api/comments/post-1", json={"articleName": "Post One", "authorName": "Ann", "content": "Great read"})
    assert resp.status_code == 201
    created = resp.get_json()["data"]
    assert created["authorName"] == "Ann"
    assert created["avatarText"] == "Ann"

    body = client.get("/api/comments/post-1").get_json()["data"]
    assert body["totalCount"] == 1
    assert body["items"][0]["content"] == "Great read"
    assert client.get("/api/comments/other").get_json()["data"]["totalCount"] == 0


def test_comment_board_paginates_ten_per_page(client):
    for i in range(12):
        client.post("/api/comments/post-2", json={"authorName": f"user{i}", "content": f"comment {i}"})
    second = client.get("/api/comments/post-2?page=2").get_json()["data"]
    assert second["page"] == 2
    assert second["totalPages"] == 2
    assert second["totalCount"] == 12
    assert len(second["items"]) == 2


def test_empty_comment_is_a_bad_request(client):
    resp = client.post("/api/comments/post-1", json={"authorName": "Ann", "content": "  "})
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "bad_request"
