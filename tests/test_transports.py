"""
Tests for request signing and transport selection
"""
from dataclasses import replace

import httpx
import pytest

from client_config import load_config
from transports import HeaderPolicyAuth, build_header_policy, open_session


def _signed_request(config, method="POST", json=None):
    """Send one request through HeaderPolicyAuth and return what the server saw."""
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={})

    auth = HeaderPolicyAuth(build_header_policy(config))
    with httpx.Client(transport=httpx.MockTransport(handler), auth=auth) as client:
        client.request(method, config.url, json=json)
    return seen[0]


def test_policy_builds_full_header_set():
    config = load_config("github", {"GITHUB_TOKEN": "abc"})
    headers = build_header_policy(config)("POST", httpx.URL(config.url), b"{}")

    assert headers == {
        "Authorization": "Bearer abc",
        "Content-Type": "application/json",
        "Accept": "application/json, text/event-stream",
        "User-Agent": "mcp-python-client/1.0",
        "Origin": "https://github.com",
    }


def test_policy_returns_fresh_dict():
    config = load_config("github", {"GITHUB_TOKEN": "abc"})
    policy = build_header_policy(config)

    first = policy("GET", httpx.URL(config.url), b"")
    first["Authorization"] = "tampered"

    assert policy("GET", httpx.URL(config.url), b"")["Authorization"] == "Bearer abc"


def test_auth_signs_outgoing_post():
    config = load_config("github", {"GITHUB_TOKEN": "generic", "GITHUB_MCP_PAT": "specific"})
    request = _signed_request(config, json={"jsonrpc": "2.0", "id": 1, "method": "initialize"})

    assert request.headers["Authorization"] == "Bearer specific"
    assert request.headers["Origin"] == "https://github.com"
    assert request.headers["Accept"] == "application/json, text/event-stream"


def test_auth_signs_sse_get_with_api_version():
    config = load_config("github-sse", {"GITHUB_TOKEN": "tok", "GITHUB_MCP_USER_AGENT": "demo/1"})
    request = _signed_request(config, method="GET")

    assert request.headers["Authorization"] == "Bearer tok"
    assert request.headers["User-Agent"] == "demo/1"
    assert request.headers["X-GitHub-Api-Version"] == "2023-07-07"
    assert "Origin" not in request.headers


def test_custom_auth_scheme():
    config = load_config("github", {"GITHUB_TOKEN": "tok", "GITHUB_MCP_AUTH_SCHEME": "token"})
    assert _signed_request(config).headers["Authorization"] == "token tok"


@pytest.mark.asyncio
async def test_open_session_rejects_unknown_transport():
    config = load_config("github", {"GITHUB_TOKEN": "tok"})
    bad = replace(config, transport="websocket")

    with pytest.raises(ValueError, match="Unsupported transport"):
        async with open_session(bad):
            pass
