from unittest.mock import Mock

from portfolio.api.projects import routes as project_routes
from portfolio.domain.project import Project
from portfolio.services.share import build_share_meta
from portfolio.domain.article import ArticleSummary


def test_health(client):
    assert client.get("/api/health/").get_json()["data"]["status"] == "ok"
    status = client.get("/api/health/supabase").get_json()["data"]
    assert status == {"anon_initialized": False, "service_initialized": False}


def test_openapi_and_docs(client):
    doc = client.get("/openapi.json").get_json()
    assert "/admin-api/articles/{article_id}/restore" in doc["paths"]
    assert "ArticleOut" in doc["components"]["schemas"]
    assert "swagger-ui" in client.get("/docs").get_data(as_text=True)


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.get_json()["code"] == "not_found"


def test_article_listing_falls_back_to_post_files(client):
    body = client.get("/api/articles/").get_json()["data"]
    assert [a["id"] for a in body["articles"]] == ["welcome", "20240301-flask-notes", "20240201-travel"]
    assert body["pinnedCount"] == 1
    assert body["categories"] == ["life", "tech"]
    assert body["pageNumbers"] == [1]

    tech = client.get("/api/articles/?category=tech").get_json()["data"]
    assert [a["id"] for a in tech["articles"]] == ["20240301-flask-notes"]
    assert tech["articles"][0]["cat"] == "tech"


def test_published_table_rows_win(client, add_article):
    add_article("db-post", "From the table", content="Table body", status="published", date="2024-06-01")
    add_article("draft-post", "Hidden draft", content="Draft body")
    body = client.get("/api/articles/").get_json()["data"]
    assert [a["id"] for a in body["articles"]] == ["db-post"]

    detail = client.get("/api/articles/db-post").get_json()["data"]
    assert detail["content"] == "Table body"
    assert detail["article"]["title"] == "From the table"


def test_article_detail(client):
    detail = client.get("/api/articles/20240301-flask-notes").get_json()["data"]
    assert detail["article"]["title"] == "Flask Notes"
    assert detail["firstImage"] == "/img/flask.png"
    assert detail["content"].startswith("# Flask")
    assert client.get("/api/articles/missing").status_code == 404


def test_projects(client, monkeypatch):
    repo = Project(title="repo", description="d", image_url="i", link="l", github_url="g")
    monkeypatch.setattr(project_routes.GithubService, "fetch_projects", Mock(return_value=[repo]))
    body = client.get("/api/projects/").get_json()["data"]
    assert len(body["commercial"]) == 2
    assert body["other"] == [{
        "title": "repo", "description": "d", "imageUrl": "i", "link": "l", "category": "other", "githubUrl": "g",
    }]


def test_share_meta_for_an_article():
    summary = ArticleSummary(id="my post", title="My Post", preview=None, pin_message="Pinned!")
    meta = build_share_meta("articles", summary, "![cover](images/cover.png)", "https://example.com/")
    assert meta.url == "https://example.com/#articles/my%20post"
    assert meta.image == "https://example.com/images/cover.png"
    assert meta.description == "Pinned!"
    assert meta.meta_title.startswith("My Post | ")


def test_share_meta_for_home_and_listing():
    home = build_share_meta("home", None, None, "https://example.com")
    listing = build_share_meta("articles", None, None, "https://example.com")
    assert home.url == "https://example.com"
    assert home.image == "https://example.com/avatar.png"
    assert listing.url == "https://example.com/#articles"


def test_view_resolves_an_article_fragment(client):
    body = client.get("/api/view?fragment=%23articles/20240301-flask-notes").get_json()["data"]
    assert body["route"]["selectedArticleId"] == "20240301-flask-notes"
    assert body["listing"] is None
    assert body["article"]["content"].startswith("# Flask")
    assert body["share"]["image"] == "https://example.com/img/flask.png"
    assert body["fragment"] == "articles/20240301-flask-notes"


def test_view_filters_land_on_the_listing(client):
    body = client.get("/api/view?fragment=articles/welcome&search=kyoto").get_json()["data"]
    assert body["route"]["view"] == "articles"
    assert body["article"] is None
    assert body["fragment"] == "articles"
    assert [a["id"] for a in body["listing"]["articles"]] == ["20240201-travel"]


def test_view_admin_fragment(client):
    body = client.get("/api/view?fragment=%23admin/edit/2024-01-01").get_json()["data"]
    assert body["route"] == {
        "view": "admin", "selectedArticleId": None, "adminView": "edit", "adminArticleId": "2024-01-01",
    }
    assert body["share"]["url"] == "https://example.com"
