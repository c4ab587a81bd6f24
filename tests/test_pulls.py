"""Tests for the GitHub pull request lookup."""

from __future__ import annotations

import pytest
import requests

from conftest import make_pr_payload
from prcontext.exceptions import ApiError
from prcontext.github.pulls import (
    NO_DESCRIPTION,
    GitHubPullRequestSource,
    PullRequestSummary,
)


class StubResponse:
    def __init__(self, status_code: int = 200, payload=None, invalid_json: bool = False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class StubSession:
    """Minimal requests.Session replacement recording GET calls."""

    def __init__(self, response: StubResponse | None = None, error: Exception | None = None):
        self.headers: dict[str, str] = {}
        self.response = response
        self.error = error
        self.calls: list[dict] = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def make_source(session: StubSession, api_url: str = "https://api.github.com") -> GitHubPullRequestSource:
    return GitHubPullRequestSource("ghp_test", api_url=api_url, timeout=7, session=session)


class TestPullRequestSummary:
    def test_from_api(self):
        pr = PullRequestSummary.from_api(make_pr_payload())
        assert pr.number == 42
        assert pr.title == "Add X"
        assert pr.author == "alice"
        assert pr.state == "open"
        assert pr.url == "https://github.com/acme/widgets/pull/42"
        assert pr.body == "Adds the X feature."

    @pytest.mark.parametrize("body", [None, "", "   \n"])
    def test_missing_body_uses_placeholder(self, body):
        pr = PullRequestSummary.from_api(make_pr_payload(body=body))
        assert pr.body == NO_DESCRIPTION

    def test_body_key_absent(self):
        payload = make_pr_payload()
        del payload["body"]
        assert PullRequestSummary.from_api(payload).body == NO_DESCRIPTION


class TestGitHubPullRequestSource:
    def test_query_shape(self):
        session = StubSession(StubResponse(payload=[]))
        make_source(session).find_open_pull_request("acme", "widgets", "feature/x")

        call = session.calls[0]
        assert call["url"] == "https://api.github.com/repos/acme/widgets/pulls"
        assert call["params"] == {"head": "acme:feature/x", "state": "open"}
        assert call["timeout"] == 7

    def test_auth_headers(self):
        session = StubSession(StubResponse(payload=[]))
        make_source(session)
        assert session.headers["Authorization"] == "token ghp_test"
        assert session.headers["Accept"] == "application/vnd.github.v3+json"

    def test_enterprise_api_root(self):
        session = StubSession(StubResponse(payload=[]))
        make_source(session, api_url="https://ghe.example/api/v3/").find_open_pull_request(
            "acme", "widgets", "x"
        )
        assert session.calls[0]["url"] == "https://ghe.example/api/v3/repos/acme/widgets/pulls"

    def test_first_entry_in_response_order_wins(self):
        payload = [make_pr_payload(number=7, title="Newer"), make_pr_payload(number=3, title="Older")]
        session = StubSession(StubResponse(payload=payload))
        pr = make_source(session).find_open_pull_request("acme", "widgets", "x")
        assert pr is not None
        assert pr.number == 7
        assert pr.title == "Newer"

    def test_no_match_returns_none(self):
        session = StubSession(StubResponse(payload=[]))
        assert make_source(session).find_open_pull_request("acme", "widgets", "x") is None

    @pytest.mark.parametrize("status", [401, 403, 404, 500])
    def test_http_error(self, status: int):
        session = StubSession(StubResponse(status_code=status, payload={"message": "nope"}))
        with pytest.raises(ApiError) as excinfo:
            make_source(session).find_open_pull_request("acme", "widgets", "x")
        assert excinfo.value.status_code == status

    def test_network_error(self):
        session = StubSession(error=requests.exceptions.ConnectionError("connection refused"))
        with pytest.raises(ApiError, match="connection refused"):
            make_source(session).find_open_pull_request("acme", "widgets", "x")

    def test_timeout(self):
        session = StubSession(error=requests.exceptions.Timeout("read timed out"))
        with pytest.raises(ApiError):
            make_source(session).find_open_pull_request("acme", "widgets", "x")

    def test_invalid_json(self):
        session = StubSession(StubResponse(invalid_json=True))
        with pytest.raises(ApiError, match="invalid JSON"):
            make_source(session).find_open_pull_request("acme", "widgets", "x")

    def test_unexpected_payload(self):
        session = StubSession(StubResponse(payload={"message": "Not Found"}))
        with pytest.raises(ApiError):
            make_source(session).find_open_pull_request("acme", "widgets", "x")

    def test_malformed_entry(self):
        session = StubSession(StubResponse(payload=[{"title": "no number"}]))
        with pytest.raises(ApiError, match="Malformed"):
            make_source(session).find_open_pull_request("acme", "widgets", "x")
