from __future__ import annotations

from typing import Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from portfolio_hub.config.database import Database
from portfolio_hub.main import create_app
from portfolio_hub.services.stats.service import StatsService
from tests.conftest import make_settings
from tests.test_clients import GITHUB_USER

REPOS = [
    {
        "id": index,
        "name": name,
        "description": None,
        "html_url": f"https://github.com/octocat/{name}",
        "language": "TypeScript",
        "stargazers_count": stars,
        "forks_count": 1,
        "owner": {"login": "octocat"},
    }
    for index, (name, stars) in enumerate([("web", 3), ("cli", 4)])
]


def upstream(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/users/octocat":
        return httpx.Response(200, json=GITHUB_USER)
    if path == "/users/octocat/repos":
        return httpx.Response(200, json=REPOS)
    if path == "/repos/octocat/web/languages":
        return httpx.Response(200, json={"TypeScript": 100})
    if path == "/repos/octocat/cli/languages":
        return httpx.Response(200, json={"TypeScript": 100, "Shell": 5})
    return httpx.Response(503)


def build_client(**settings_overrides) -> TestClient:
    settings = make_settings(**settings_overrides)
    stats_service = StatsService.from_settings(settings, transport=httpx.MockTransport(upstream))
    app = create_app(settings, database=Database("sqlite://"), stats_service=stats_service)
    return TestClient(app)


@pytest.fixture
def client() -> Iterator[TestClient]:
    with build_client() as test_client:
        yield test_client


def onboard(client: TestClient, user_id: str, username: str, **domains) -> None:
    response = client.post(
        f"/api/users/{user_id}",
        json={"username": username, "fullName": f"{username.title()} Doe", "email": f"{username}@example.com"},
    )
    assert response.status_code == 201
    if domains:
        assert client.put(f"/api/users/{user_id}/domains", json=domains).status_code == 200


def test_health(client: TestClient) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_root_domain_serves_marketing_page(client: TestClient) -> None:
    response = client.get("/", headers={"host": "localhost:3000"})

    assert response.status_code == 200
    assert response.json()["rootDomain"] == "localhost:3000"


def test_github_stats_demo_when_unconfigured(client: TestClient) -> None:
    response = client.get("/api/github")

    assert response.status_code == 200
    body = response.json()
    assert body["isDemo"] is True
    assert body["totalStars"] == 120
    assert body["totalForks"] == 45


def test_github_stats_live() -> None:
    with build_client(GITHUB_USERNAME="octocat") as client:
        body = client.get("/api/github").json()

    assert body["isDemo"] is False
    assert body["totalStars"] == 7
    assert body["totalForks"] == 2
    assert body["languages"] == {"TypeScript": 200, "Shell": 5}
    assert body["totalRepos"] == GITHUB_USER["public_repos"]


def test_github_recent_repos() -> None:
    with build_client(GITHUB_USERNAME="octocat") as client:
        live = client.get("/api/github/repos").json()

    assert live["isDemo"] is False
    assert [repo["name"] for repo in live["repos"]] == ["web", "cli"]


def test_github_recent_repos_demo_when_unconfigured(client: TestClient) -> None:
    response = client.get("/api/github/repos")

    assert response.status_code == 200
    assert response.json() == {"repos": [], "isDemo": True}


def test_leetcode_and_linkedin_demo(client: TestClient) -> None:
    leetcode = client.get("/api/leetcode").json()
    linkedin = client.get("/api/linkedin").json()
    contributions = client.get("/api/github/contributions").json()

    assert leetcode["solvedCount"] == 150
    assert leetcode["difficultyBreakdown"] == {"easy": 80, "medium": 60, "hard": 10}
    assert leetcode["isDemo"] is True
    assert "ranking" not in leetcode
    assert linkedin["isDemo"] is True
    assert contributions == {"totalContributions": 0, "weeks": [], "isDemo": True}


def test_upstream_failure_still_answers_200() -> None:
    # The mock upstream answers 503 for LeetCode paths
    with build_client(LEETCODE_USERNAME="alice") as client:
        response = client.get("/api/leetcode")

    assert response.status_code == 200
    assert response.json()["isDemo"] is True


def test_user_lifecycle(client: TestClient) -> None:
    onboard(client, "uid-1", "alice")

    assert client.post(
        "/api/users/uid-1",
        json={"username": "alice", "fullName": "Alice", "email": "alice@example.com"},
    ).status_code == 409

    user = client.get("/api/users/uid-1").json()
    assert user["profilePictureUrl"] == "https://avatar.vercel.sh/alice"

    patched = client.patch("/api/users/uid-1", json={"bio": "Builder of things"})
    assert patched.status_code == 200
    assert patched.json()["bio"] == "Builder of things"

    assert client.patch("/api/users/uid-1", json={}).status_code == 400
    assert client.patch("/api/users/uid-1", json={"unknownField": 1}).status_code == 422
    assert client.get("/api/users/ghost").status_code == 404


def test_user_validation_errors(client: TestClient) -> None:
    response = client.post("/api/users/uid-1", json={"username": "a", "fullName": "A", "email": "bad"})

    assert response.status_code == 422


def test_experience_endpoints(client: TestClient) -> None:
    onboard(client, "uid-1", "alice")

    created = client.post(
        "/api/users/uid-1/experience",
        json={"company": "Acme", "position": "Engineer", "startDate": "2021-03"},
    )
    assert created.status_code == 201
    entry_id = created.json()["experience"][0]["id"]

    updated = client.patch(f"/api/users/uid-1/experience/{entry_id}", json={"current": True})
    assert updated.json()["experience"][0]["current"] is True

    assert client.delete(f"/api/users/uid-1/experience/{entry_id}").json()["experience"] == []
    assert client.delete(f"/api/users/uid-1/experience/{entry_id}").status_code == 404

    profile = client.get("/api/users/uid-1/profile").json()
    assert profile["stats"]["totalExperience"] == 0
    assert 0 < profile["stats"]["profileCompleteness"] < 100


def test_domain_endpoints(client: TestClient) -> None:
    onboard(client, "uid-1", "alice", portfolio="alice.dev", admin="admin.alice.dev")
    onboard(client, "uid-2", "bob")

    assert client.get("/api/users/uid-1/domains").json() == {"portfolio": "alice.dev", "admin": "admin.alice.dev"}

    conflict = client.put("/api/users/uid-2/domains", json={"portfolio": "alice.dev"})
    assert conflict.status_code == 409

    valid = client.get("/api/domains/validate", params={"domain": "alice.dev", "user_id": "uid-1"}).json()
    assert valid["valid"] is True
    invalid = client.get("/api/domains/validate", params={"domain": "alice.dev", "user_id": "uid-2"}).json()
    assert invalid["valid"] is False

    assert client.put("/api/users/ghost/domains", json={"portfolio": "ghost.dev"}).status_code == 404


def test_project_endpoints(client: TestClient) -> None:
    onboard(client, "uid-1", "alice")

    created = client.post(
        "/api/users/uid-1/projects",
        json={
            "title": "Portfolio Hub",
            "description": "Multi-tenant portfolio hosting",
            "technologies": ["python", "fastapi"],
        },
    )
    assert created.status_code == 201
    project = created.json()
    assert project["authorUsername"] == "alice"

    assert client.post(
        "/api/users/uid-1/projects",
        json={"title": "x", "description": "short", "technologies": []},
    ).status_code == 422
    assert client.post(
        "/api/users/ghost/projects",
        json={"title": "Valid title", "description": "A valid description", "technologies": ["go"]},
    ).status_code == 404

    assert [p["id"] for p in client.get("/api/projects").json()] == [project["id"]]
    assert client.get("/api/users/uid-1/projects/stats").json() == {
        "total": 1,
        "byTechnology": {"python": 1, "fastapi": 1},
    }

    patched = client.patch(f"/api/projects/{project['id']}", json={"title": "Portfolio Hub 2"})
    assert patched.json()["title"] == "Portfolio Hub 2"

    assert client.delete(f"/api/projects/{project['id']}").status_code == 204
    assert client.delete(f"/api/projects/{project['id']}").status_code == 404


def test_tenant_hosts_render_portfolio_and_admin(client: TestClient) -> None:
    onboard(client, "uid-1", "alice", portfolio="alice.dev", admin="admin.alice.dev")
    client.post(
        "/api/users/uid-1/projects",
        json={"title": "Portfolio Hub", "description": "Multi-tenant portfolio hosting", "technologies": ["python"]},
    )

    portfolio = client.get("/", headers={"host": "alice.dev"})
    assert portfolio.status_code == 200
    body = portfolio.json()
    assert body["appType"] == "portfolio"
    assert body["user"]["id"] == "uid-1"
    assert body["metadata"] == {"title": "Alice Doe - Portfolio", "description": "Alice Doe's portfolio"}
    assert [p["title"] for p in body["projects"]] == ["Portfolio Hub"]

    admin = client.get("/projects", headers={"host": "admin.alice.dev"}).json()
    assert admin["appType"] == "admin"
    assert admin["path"] == "/projects"
    assert admin["projectStats"]["total"] == 1
    assert admin["metadata"]["title"] == "Alice Doe - Dashboard"


def test_unknown_tenant_host_is_404(client: TestClient) -> None:
    assert client.get("/", headers={"host": "nobody.dev"}).status_code == 404


def test_resolution_outage_is_503(client: TestClient, monkeypatch) -> None:
    from portfolio_hub.services.errors import ResolutionUnavailableError

    def unavailable(db, host):
        raise ResolutionUnavailableError(host)

    monkeypatch.setattr(client.app.state.domain_service, "resolve_domain", unavailable)

    assert client.get("/", headers={"host": "alice.dev"}).status_code == 503


def test_null_on_required_project_fields_is_rejected(client: TestClient) -> None:
    onboard(client, "uid-1", "alice", portfolio="alice.dev")
    project = client.post(
        "/api/users/uid-1/projects",
        json={"title": "Portfolio Hub", "description": "Multi-tenant portfolio hosting", "technologies": ["python"]},
    ).json()

    for field in ("title", "description", "coverImageUrl", "technologies"):
        response = client.patch(f"/api/projects/{project['id']}", json={field: None})
        assert response.status_code == 422, field

    assert client.get("/api/projects").status_code == 200
    assert client.get("/api/users/uid-1/projects/stats").json()["byTechnology"] == {"python": 1}
    page = client.get("/", headers={"host": "alice.dev"})
    assert page.status_code == 200
    assert [p["title"] for p in page.json()["projects"]] == ["Portfolio Hub"]


def test_tenant_host_cannot_reach_another_tenant(client: TestClient) -> None:
    onboard(client, "uid-1", "alice", portfolio="alice.dev")
    onboard(client, "uid-2", "bob", admin="admin.bob.dev")

    response = client.get("/tenants/admin.bob.dev", headers={"host": "alice.dev"})

    # Served as a path on alice's portfolio, never as bob's dashboard
    assert response.status_code == 200
    body = response.json()
    assert body["appType"] == "portfolio"
    assert body["user"]["id"] == "uid-1"
    assert body["domain"] == "alice.dev"
    assert body["path"] == "/tenants/admin.bob.dev"
    assert "projectStats" not in body
