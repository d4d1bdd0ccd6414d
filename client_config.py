# -*- coding: utf-8 -*-
"""
client_config.py
Transport profiles and the run configuration, resolved once from the environment.
"""
import os
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

STREAMABLE_HTTP = "streamable-http"
SSE = "sse"

DEFAULT_USER_AGENT = "mcp-python-client/1.0"
DEFAULT_AUTH_SCHEME = "Bearer"
DEFAULT_TIMEOUT = timedelta(seconds=30)


@dataclass(frozen=True)
class Profile:
    """Which transport to use and where each setting lives in the environment."""
    name: str
    transport: str
    default_server_url: str
    default_endpoint: str
    server_url_var: str
    endpoint_var: str
    credential_vars: Tuple[str, ...]
    tool_var: str
    tool_args_var: str
    user_agent_var: str
    auth_scheme_var: Optional[str] = None
    extra_headers: Tuple[Tuple[str, str], ...] = ()
    connect_timeout: timedelta = DEFAULT_TIMEOUT
    request_timeout: timedelta = DEFAULT_TIMEOUT
    init_timeout: timedelta = DEFAULT_TIMEOUT


GITHUB = Profile(
    name="github",
    transport=STREAMABLE_HTTP,
    default_server_url="https://api.githubcopilot.com",
    default_endpoint="/mcp",
    server_url_var="GITHUB_MCP_SERVER_URL",
    endpoint_var="GITHUB_MCP_ENDPOINT",
    credential_vars=("GITHUB_MCP_PAT", "GITHUB_PAT", "GITHUB_TOKEN"),
    tool_var="MCP_TOOL",
    tool_args_var="MCP_TOOL_ARGS_JSON",
    user_agent_var="GITHUB_MCP_USER_AGENT",
    auth_scheme_var="GITHUB_MCP_AUTH_SCHEME",
    extra_headers=(("Origin", "https://github.com"),),
)

GITHUB_SSE = Profile(
    name="github-sse",
    transport=SSE,
    default_server_url="https://api.github.com/copilot/mcp",
    default_endpoint="/server/sse",
    server_url_var="GITHUB_MCP_SERVER_URL",
    endpoint_var="GITHUB_MCP_SSE_ENDPOINT",
    credential_vars=("GITHUB_TOKEN",),
    tool_var="GITHUB_MCP_TOOL",
    tool_args_var="GITHUB_MCP_TOOL_ARGS_JSON",
    user_agent_var="GITHUB_MCP_USER_AGENT",
    extra_headers=(("X-GitHub-Api-Version", "2023-07-07"),),
    connect_timeout=timedelta(seconds=20),
)

LOCAL = Profile(
    name="local",
    transport=STREAMABLE_HTTP,
    default_server_url="http://127.0.0.1:8000",
    default_endpoint="/mcp",
    server_url_var="MCP_SERVER_URL",
    endpoint_var="MCP_ENDPOINT",
    credential_vars=("MCP_AUTH_TOKEN",),
    tool_var="MCP_TOOL",
    tool_args_var="MCP_TOOL_ARGS_JSON",
    user_agent_var="MCP_USER_AGENT",
    auth_scheme_var="MCP_AUTH_SCHEME",
)

PROFILES: Dict[str, Profile] = {p.name: p for p in (GITHUB, GITHUB_SSE, LOCAL)}


@dataclass(frozen=True)
class RunnerConfig:
    profile: str
    transport: str
    server_url: str
    endpoint: str
    credential: Optional[str]
    credential_vars: Tuple[str, ...]
    auth_scheme: str
    user_agent: str
    tool_name: Optional[str]
    tool_args_json: Optional[str]
    tool_args_var: str
    extra_headers: Tuple[Tuple[str, str], ...] = ()
    connect_timeout: timedelta = DEFAULT_TIMEOUT
    request_timeout: timedelta = DEFAULT_TIMEOUT
    init_timeout: timedelta = DEFAULT_TIMEOUT

    @property
    def url(self) -> str:
        return f"{self.server_url.rstrip('/')}/{self.endpoint.lstrip('/')}"


def _get(environ: Mapping[str, str], name: Optional[str]) -> Optional[str]:
    # Blank values count as unset.
    if not name:
        return None
    value = environ.get(name)
    if value is None or not value.strip():
        return None
    return value


def resolve_credential(environ: Mapping[str, str], names: Tuple[str, ...]) -> Optional[str]:
    """Return the first non-blank value among `names`, trimmed; most specific name first."""
    for name in names:
        value = _get(environ, name)
        if value is not None:
            return value.strip()
    return None


def get_profile(profile: Union[str, Profile]) -> Profile:
    if isinstance(profile, Profile):
        return profile
    try:
        return PROFILES[profile]
    except KeyError:
        raise ValueError(
            f"Unknown profile {profile!r}; expected one of {', '.join(sorted(PROFILES))}"
        ) from None


def load_config(
    profile: Union[str, Profile] = GITHUB,
    environ: Optional[Mapping[str, str]] = None,
) -> RunnerConfig:
    """
    Build a RunnerConfig for `profile` from `environ` (defaults to os.environ).

    A missing credential is not an error here; the runner reports it before connecting.
    """
    prof = get_profile(profile)
    env = os.environ if environ is None else environ

    config = RunnerConfig(
        profile=prof.name,
        transport=prof.transport,
        server_url=_get(env, prof.server_url_var) or prof.default_server_url,
        endpoint=_get(env, prof.endpoint_var) or prof.default_endpoint,
        credential=resolve_credential(env, prof.credential_vars),
        credential_vars=prof.credential_vars,
        auth_scheme=(_get(env, prof.auth_scheme_var) or DEFAULT_AUTH_SCHEME).strip(),
        user_agent=_get(env, prof.user_agent_var) or DEFAULT_USER_AGENT,
        tool_name=(_get(env, prof.tool_var) or "").strip() or None,
        tool_args_json=_get(env, prof.tool_args_var),
        tool_args_var=prof.tool_args_var,
        extra_headers=prof.extra_headers,
        connect_timeout=prof.connect_timeout,
        request_timeout=prof.request_timeout,
        init_timeout=prof.init_timeout,
    )
    logger.debug("Resolved %s profile for %s", config.profile, config.url)
    return config
