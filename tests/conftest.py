"""
Pytest configuration and fixtures for the MCP demo client.

Provides:
1. A fake MCP session with AsyncMock methods
2. A connector that hands the fake session to run() and records open/close
3. An environment-free config builder
"""
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from mcp import types

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from client_config import load_config


class FakeConnector:
    """Stands in for transports.open_session and tracks the session lifecycle."""

    def __init__(self, session):
        self.session = session
        self.opened = 0
        self.closed = 0

    @asynccontextmanager
    async def __call__(self, config):
        self.opened += 1
        try:
            yield self.session
        finally:
            self.closed += 1


@pytest.fixture
def fake_session():
    session = AsyncMock()
    session.initialize = AsyncMock(
        return_value=types.InitializeResult(
            protocolVersion="2025-06-18",
            capabilities=types.ServerCapabilities(),
            serverInfo=types.Implementation(name="demo-server", version="1.2.3"),
        )
    )
    session.list_tools = AsyncMock(
        return_value=types.ListToolsResult(
            tools=[
                types.Tool(name="echo", description="Echo a message", inputSchema={"type": "object"}),
                types.Tool(name="add", description="Add two numbers", inputSchema={"type": "object"}),
            ]
        )
    )
    session.call_tool = AsyncMock(
        return_value=types.CallToolResult(content=[types.TextContent(type="text", text="hello")])
    )
    return session


@pytest.fixture
def connector(fake_session):
    return FakeConnector(fake_session)


@pytest.fixture
def make_config():
    """Build a RunnerConfig for the github profile from a plain dict."""
    def _make(profile="github", **env):
        environ = {"GITHUB_TOKEN": "test-token"}
        environ.update(env)
        return load_config(profile, environ)
    return _make
