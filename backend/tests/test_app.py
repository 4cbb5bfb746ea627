import asyncio

from blogql.core.config import settings
from blogql.repositories.posts import PostRepository


def test_root_and_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["graphql"] == "/graphql"


def test_explorer_page(client):
    res = client.get("/graphql")
    assert res.status_code == 200
    assert "text/html" in res.headers["content-type"]


def test_introspection_is_enabled(gql):
    body = gql("query { __schema { mutationType { fields { name } } } }")
    names = {f["name"] for f in body["data"]["__schema"]["mutationType"]["fields"]}
    assert names == {
        "signup", "login", "createPost", "updatePost", "removePost",
        "updateProfile", "removeProfile", "changePassword",
    }


def test_invalid_json_body(client):
    res = client.post("/graphql", content=b"{not json", headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    assert res.json()["errors"][0]["message"] == "Request body is not valid JSON"


def test_syntax_error_is_bad_request(client):
    res = client.post("/graphql", json={"query": "query { posts { id "})
    assert res.status_code == 400
    assert res.json()["errors"]


def test_unexpected_errors_are_masked(gql, monkeypatch):
    def explode(self):
        raise RuntimeError("connection string with secrets")

    monkeypatch.setattr(PostRepository, "list", explode)

    body = gql("query { posts { id } }")
    error = body["errors"][0]
    assert error["message"] == "Internal server error"
    assert error["extensions"]["code"] == "INTERNAL_SERVER_ERROR"


def test_unexpected_errors_shown_in_debug(gql, monkeypatch):
    def explode(self):
        raise RuntimeError("boom")

    monkeypatch.setattr(PostRepository, "list", explode)
    monkeypatch.setattr(settings, "DEBUG", True)

    body = gql("query { posts { id } }")
    assert body["errors"][0]["message"] == "boom"


def test_cors_origins_parsing():
    assert settings.get_cors_origins() == ["http://localhost:5173", "http://localhost:3000"]
    assert settings.get_server_url() == f"http://{settings.HOST}:{settings.PORT}/graphql"


def test_resolvers_run_off_the_event_loop(gql, monkeypatch):
    seen = []

    def record_loop(self):
        try:
            asyncio.get_running_loop()
            seen.append("event loop")
        except RuntimeError:
            seen.append("worker thread")
        return []

    monkeypatch.setattr(PostRepository, "list", record_loop)

    assert gql("query { posts { id } }")["data"]["posts"] == []
    assert seen == ["worker thread"]
