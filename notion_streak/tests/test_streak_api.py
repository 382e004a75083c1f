from fastapi.testclient import TestClient

from notion_streak.core.errors import SourceUnavailableError
from notion_streak.features.streaks.cache import StreakCache
from notion_streak.main import build_streak_cache, create_app
from notion_streak.tests.mocks import FakeNotionQuery, pages_from_flags


class FlakyCompute:
    def __init__(self, results):
        self.results = list(results)
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def _client(settings, compute, clock):
    cache = StreakCache(compute, clock=clock)
    app = create_app(settings, cache=cache, warm_on_startup=False)
    return TestClient(app)


def test_api_streak_returns_value_and_timestamp(settings, clock):
    client = _client(settings, FlakyCompute([3]), clock)
    resp = client.get("/api/streak")

    assert resp.status_code == 200
    body = resp.json()
    assert body["streak"] == 3
    assert body["lastUpdated"] == "2024-06-01T12:00:00Z"
    assert body["timezone"] == "America/New_York"


def test_api_streak_is_cached_between_requests(settings, clock):
    compute = FlakyCompute([3, 8])
    client = _client(settings, compute, clock)

    client.get("/api/streak")
    resp = client.get("/api/streak")

    assert resp.json()["streak"] == 3
    assert compute.calls == 1


def test_source_failure_falls_back_to_default(settings, clock):
    client = _client(settings, FlakyCompute([SourceUnavailableError("down")]), clock)
    resp = client.get("/api/streak")

    assert resp.status_code == 200
    assert resp.json() == {"streak": 0, "lastUpdated": None, "timezone": "America/New_York"}


def test_refresh_forces_recompute(settings, clock):
    compute = FlakyCompute([3, 5])
    client = _client(settings, compute, clock)

    client.get("/api/streak")
    resp = client.get("/refresh")

    assert resp.status_code == 200
    assert resp.json() == {"message": "Streak refreshed", "streak": 5}
    assert compute.calls == 2


def test_widget_renders_html(settings, clock):
    client = _client(settings, FlakyCompute([14]), clock)
    resp = client.get("/")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert '<div class="streak-number">14</div>' in resp.text
    assert "Updated: 08:00 AM" in resp.text


def test_cors_headers_on_every_route(settings, clock):
    client = _client(settings, FlakyCompute([1, 1]), clock)
    for path in ("/", "/api/streak", "/refresh", "/healthz"):
        resp = client.get(path)
        assert resp.headers["access-control-allow-origin"] == "*"
        assert resp.headers["access-control-allow-methods"] == "GET"


def test_missing_config_returns_500_before_compute(unconfigured_settings, clock):
    compute = FlakyCompute([1])
    client = _client(unconfigured_settings, compute, clock)

    for path in ("/", "/api/streak", "/refresh"):
        resp = client.get(path)
        assert resp.status_code == 500
        body = resp.json()
        assert body["error"]["code"] == "configuration_missing"
        assert "NOTION_TOKEN" in body["error"]["message"]
        assert "NOTION_DATABASE_ID" in body["error"]["message"]
        assert resp.headers["access-control-allow-origin"] == "*"
    assert compute.calls == 0


def test_unconfigured_app_builds_without_cache(unconfigured_settings):
    app = create_app(unconfigured_settings, warm_on_startup=False)
    assert app.state.streak_cache is None
    resp = TestClient(app).get("/api/streak")
    assert resp.status_code == 500


def test_end_to_end_with_paginated_source(settings, clock):
    query = FakeNotionQuery([pages_from_flags([True, True]), pages_from_flags([False, True])])
    cache = build_streak_cache(settings, query)
    app = create_app(settings, cache=cache, warm_on_startup=False)

    resp = TestClient(app).get("/api/streak")

    assert resp.json()["streak"] == 2
    assert len(query.calls) == 2
    assert query.calls[0]["database_id"] == "db123"


def test_rendering_failure_surfaces_as_500(settings, clock, monkeypatch):
    import notion_streak.api.streak as streak_api

    def broken_render(*args, **kwargs):
        raise ValueError("template exploded")

    monkeypatch.setattr(streak_api, "render_widget", broken_render)
    cache = StreakCache(FlakyCompute([1]), clock=clock)
    app = create_app(settings, cache=cache, warm_on_startup=False)

    resp = TestClient(app, raise_server_exceptions=False).get("/")

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"]["code"] == "internal_error"
    assert body["error"]["message"] == "Unexpected error: template exploded"


def test_startup_warms_cache(settings, clock):
    compute = FlakyCompute([6])
    cache = StreakCache(compute, clock=clock)
    app = create_app(settings, cache=cache)

    with TestClient(app) as client:
        assert compute.calls == 1
        assert client.get("/api/streak").json()["streak"] == 6
    assert compute.calls == 1
