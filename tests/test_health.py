from __future__ import annotations


def test_health_ok(client) -> None:
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"ok": True, "status": "ok", "service": "sanctuary-relay"}


def test_root_returns_plain_text_banner(client) -> None:
    res = client.get("/")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/plain")
    assert res.text == "sanctuary-relay is running"


def test_cors_preflight_allows_any_origin(client) -> None:
    res = client.options(
        "/magicball",
        headers={
            "Origin": "https://app.example.org",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type,authorization",
        },
    )
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "*"
    allowed_methods = res.headers["access-control-allow-methods"]
    for method in ("GET", "POST", "OPTIONS"):
        assert method in allowed_methods
    allowed_headers = res.headers["access-control-allow-headers"].lower()
    assert "authorization" in allowed_headers
    assert "content-type" in allowed_headers


def test_cors_simple_request_sets_allow_origin(client) -> None:
    res = client.get("/health", headers={"Origin": "https://app.example.org"})
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "*"


def test_metrics_exposes_upstream_counters(client) -> None:
    client.post("/magicball", json={"question": "Will it rain?"})
    res = client.get("/metrics")
    assert res.status_code == 200
    assert "upstream_requests_total" in res.text
    assert "http_requests_total" in res.text
