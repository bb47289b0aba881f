import types

import pytest

from doc_advisor.web import search_client


class DummyCfg:
    class Web:
        enabled = True
        provider = "serpapi"
        api_key = "key"
        max_results = 5
        timeout_s = 10
        allowed_domains = []
        blocked_domains = []

    web = Web()


def _fake_response(items):
    return types.SimpleNamespace(status_code=200, text="", json=lambda: {"organic_results": items})


def test_search_success(monkeypatch):
    monkeypatch.delenv("WEB_API_KEY", raising=False)

    def fake_get(url, params=None, timeout=None):
        assert "serpapi.com" in url
        assert params["q"] == "react hooks documentation"
        return _fake_response([{"title": "Result", "link": "http://example.com", "snippet": "Snippet", "source": "example.com"}])

    monkeypatch.setattr(search_client.requests, "get", fake_get)
    results = search_client.search("react hooks documentation", config=DummyCfg())
    assert results
    assert results[0].url == "http://example.com"


def test_search_missing_key(monkeypatch):
    monkeypatch.delenv("WEB_API_KEY", raising=False)
    cfg = types.SimpleNamespace(
        web=types.SimpleNamespace(enabled=True, provider="serpapi", api_key="", max_results=5, timeout_s=10)
    )
    monkeypatch.setattr(search_client.requests, "get", lambda *a, **k: None)
    with pytest.raises(search_client.WebSearchError):
        search_client.search("test", config=cfg)


def test_search_disabled_raises():
    cfg = types.SimpleNamespace(web=types.SimpleNamespace(enabled=False))
    with pytest.raises(search_client.WebSearchError):
        search_client.search("test", config=cfg)


def test_search_http_error(monkeypatch):
    monkeypatch.delenv("WEB_API_KEY", raising=False)
    monkeypatch.setattr(
        search_client.requests,
        "get",
        lambda *a, **k: types.SimpleNamespace(status_code=500, text="boom", json=lambda: {}),
    )
    with pytest.raises(search_client.WebSearchError):
        search_client.search("test", config=DummyCfg())


def test_blocklist_filters_domains(monkeypatch):
    monkeypatch.delenv("WEB_API_KEY", raising=False)
    items = [
        {"title": "Docs", "link": "https://react.dev/reference/react/hooks", "snippet": "a"},
        {"title": "Spam", "link": "https://spam.example.com/hooks", "snippet": "b"},
    ]
    monkeypatch.setattr(search_client.requests, "get", lambda *a, **k: _fake_response(items))
    results = search_client.search("hooks", config=DummyCfg(), blocklist=["example.com"])
    assert [r.url for r in results] == ["https://react.dev/reference/react/hooks"]


@pytest.mark.parametrize(
    "body",
    [[], "not json object", {"organic_results": {"title": "x"}}, {"error": "Invalid API key."}],
)
def test_unexpected_body_raises_web_search_error(monkeypatch, body):
    monkeypatch.delenv("WEB_API_KEY", raising=False)
    monkeypatch.setattr(
        search_client.requests,
        "get",
        lambda *a, **k: types.SimpleNamespace(status_code=200, text="", json=lambda: body),
    )
    with pytest.raises(search_client.WebSearchError):
        search_client.search("react hooks", config=DummyCfg())


def test_malformed_entries_are_skipped(monkeypatch):
    monkeypatch.delenv("WEB_API_KEY", raising=False)
    items = [
        "stray string",
        {"title": None, "link": "https://react.dev/learn", "snippet": None, "date": "Mar 3, 2024"},
        {"title": "No date", "link": "https://react.dev/reference", "date": ""},
    ]
    monkeypatch.setattr(search_client.requests, "get", lambda *a, **k: _fake_response(items))
    results = search_client.search("react", config=DummyCfg())
    assert [r.url for r in results] == ["https://react.dev/learn", "https://react.dev/reference"]
    assert results[0].title == ""
    assert results[0].source == "react.dev"
    assert results[0].published_at == "Mar 3, 2024"
    assert results[1].published_at is None


def test_null_organic_results_means_no_results(monkeypatch):
    monkeypatch.delenv("WEB_API_KEY", raising=False)
    monkeypatch.setattr(search_client.requests, "get", lambda *a, **k: _fake_response(None))
    assert search_client.search("react", config=DummyCfg()) == []
