# -*- coding: utf-8 -*-
"""
transports.py
Request signing and transport selection for the MCP session.

The header policy is a plain function of (method, url, body); HeaderPolicyAuth hands
it to httpx so every request the mcp transports send, the handshake included, is signed.
"""
import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import AsyncIterator, Callable, Dict, Generator

import httpx
from mcp import ClientSession
from mcp.client.sse import sse_client
from mcp.client.streamable_http import streamable_http_client

from client_config import SSE, STREAMABLE_HTTP, RunnerConfig

logger = logging.getLogger(__name__)

SSE_READ_TIMEOUT = timedelta(minutes=5)

HeaderPolicy = Callable[[str, httpx.URL, bytes], Dict[str, str]]


def build_header_policy(config: RunnerConfig) -> HeaderPolicy:
    headers = {
        "Authorization": f"{config.auth_scheme} {config.credential}",
        "Content-Type": "application/json",
        "Accept": "application/json, text/event-stream",
        "User-Agent": config.user_agent,
        **dict(config.extra_headers),
    }

    def policy(method: str, url: httpx.URL, body: bytes) -> Dict[str, str]:
        return dict(headers)

    return policy


class HeaderPolicyAuth(httpx.Auth):
    """Apply a HeaderPolicy to each outgoing request."""

    requires_request_body = True

    def __init__(self, policy: HeaderPolicy):
        self._policy = policy

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers.update(self._policy(request.method, request.url, request.content))
        yield request


@asynccontextmanager
async def open_streamable_http(config: RunnerConfig, auth: httpx.Auth):
    timeout = httpx.Timeout(
        config.connect_timeout.total_seconds(),
        read=SSE_READ_TIMEOUT.total_seconds(),
    )
    async with httpx.AsyncClient(auth=auth, timeout=timeout, follow_redirects=True) as http_client:
        async with streamable_http_client(config.url, http_client=http_client) as (
            read_stream,
            write_stream,
            _,
        ):
            yield read_stream, write_stream


@asynccontextmanager
async def open_sse(config: RunnerConfig, auth: httpx.Auth):
    async with sse_client(
        config.url,
        timeout=config.connect_timeout.total_seconds(),
        sse_read_timeout=SSE_READ_TIMEOUT.total_seconds(),
        auth=auth,
    ) as (read_stream, write_stream):
        yield read_stream, write_stream


TRANSPORTS = {
    STREAMABLE_HTTP: open_streamable_http,
    SSE: open_sse,
}


@asynccontextmanager
async def open_session(config: RunnerConfig) -> AsyncIterator[ClientSession]:
    """Open the configured transport and an MCP session on top of it; both close on exit."""
    try:
        open_transport = TRANSPORTS[config.transport]
    except KeyError:
        raise ValueError(f"Unsupported transport: {config.transport}") from None

    auth = HeaderPolicyAuth(build_header_policy(config))
    logger.info("Opening %s transport to %s", config.transport, config.url)
    async with open_transport(config, auth) as (read_stream, write_stream):
        async with ClientSession(
            read_stream,
            write_stream,
            read_timeout_seconds=config.request_timeout,
        ) as session:
            yield session
    logger.info("Session to %s closed", config.url)
