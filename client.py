# -*- coding: utf-8 -*-
"""
client.py
Command-line entry point: load .env, configure logging and run the MCP demo client.
"""
import os
import sys
import asyncio
import logging
import argparse
from typing import List, Optional

from dotenv import load_dotenv, find_dotenv

from client_config import PROFILES, load_config
from mcp_client import run

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="List the tools of a remote MCP server and optionally call one."
    )
    parser.add_argument(
        "--profile",
        choices=sorted(PROFILES),
        default=None,
        help="transport profile (default: $MCP_CLIENT_PROFILE or github)",
    )
    parser.add_argument("--env-file", default=None, help="path to a .env file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # Variables already in the environment win over the .env file
    load_dotenv(args.env_file or find_dotenv(usecwd=True))

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format=LOG_FORMAT,
    )

    config = load_config(args.profile or os.getenv("MCP_CLIENT_PROFILE") or "github")
    logger.debug("Using %s profile (%s)", config.profile, config.transport)
    asyncio.run(run(config))
    return 0


if __name__ == "__main__":
    sys.exit(main())
