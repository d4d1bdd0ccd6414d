# -*- coding: utf-8 -*-
"""
mcp_client.py
Connect to an MCP server, list its tools and optionally call one of them.
"""
import json
import asyncio
import logging
from typing import Any, AsyncContextManager, Callable, Dict, Optional

from mcp import ClientSession
from mcp import types

from client_config import RunnerConfig
from transports import open_session

logger = logging.getLogger(__name__)

Connector = Callable[[RunnerConfig], AsyncContextManager[ClientSession]]


def root_cause(exc: BaseException) -> BaseException:
    """Unwrap the task-group exception groups the transports raise down to the first leaf."""
    while isinstance(exc, BaseExceptionGroup) and exc.exceptions:
        exc = exc.exceptions[0]
    return exc


def parse_tool_arguments(raw: Optional[str]) -> Dict[str, Any]:
    """Parse the raw argument string into a dict; blank or missing means no arguments."""
    if raw is None or not raw.strip():
        return {}
    arguments = json.loads(raw)
    if not isinstance(arguments, dict):
        raise ValueError(f"expected a JSON object, got {type(arguments).__name__}")
    return arguments


def print_initialize_result(result: Optional[types.InitializeResult]) -> None:
    if result is None:
        print("Initialize response: (null)")
        return

    try:
        print(f"Initialize response: {result.model_dump_json(by_alias=True, exclude_none=True)}")
    except (AttributeError, TypeError, ValueError):
        print(f"Initialize response (repr): {result!r}")

    server_info = getattr(result, "serverInfo", None)
    if server_info is not None:
        print(f"Connected to MCP server: {server_info.name} {server_info.version}")


def print_tools(result: Optional[types.ListToolsResult]) -> None:
    tools = result.tools if result is not None else None
    print("== Available Tools ==")
    if not tools:
        print("(no tools exposed)")
        return
    for tool in tools:
        print(f"- {tool.name} : {tool.description or ''}")


def render_content_item(item: Any) -> str:
    if getattr(item, "type", None) == "text":
        return item.text
    if hasattr(item, "model_dump_json"):
        return item.model_dump_json(by_alias=True, exclude_none=True)
    return str(item)


def print_call_result(result: Optional[types.CallToolResult]) -> None:
    # structured content > content items > empty placeholder
    print("== Call Result ==")
    if result is None:
        print("(null response)")
    elif result.structuredContent is not None:
        print(json.dumps(result.structuredContent, ensure_ascii=False))
    elif result.content:
        for item in result.content:
            print(render_content_item(item))
    else:
        print("(empty response)")


async def run(config: RunnerConfig, connect: Connector = open_session) -> None:
    if not config.credential:
        logger.error(
            "A credential is required for the %s profile. Set %s.",
            config.profile,
            " or ".join(config.credential_vars),
        )
        return

    print(f"Connecting to MCP server at {config.url} ({config.transport})")
    try:
        async with connect(config) as session:
            init_result = await asyncio.wait_for(
                session.initialize(), timeout=config.init_timeout.total_seconds()
            )
            print_initialize_result(init_result)

            tools_result = await session.list_tools()
            print_tools(tools_result)

            if not config.tool_name:
                return

            try:
                arguments = parse_tool_arguments(config.tool_args_json)
            except ValueError as e:
                logger.error("Invalid JSON for %s: %s", config.tool_args_var, e)
                return

            logger.info("Invoking tool '%s' with args %s", config.tool_name, arguments)
            call_result = await session.call_tool(config.tool_name, arguments)
            if call_result is not None and call_result.isError:
                logger.warning("Tool '%s' reported an error", config.tool_name)
            print_call_result(call_result)
    except Exception as e:
        cause = root_cause(e)
        logger.error("MCP transport error (%s): %s", type(cause).__name__, cause)
        raise
