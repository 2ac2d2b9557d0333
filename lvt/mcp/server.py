"""
MCP server exposing lvt operations to AI assistants over stdio.
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from .tools import TOOLS

logger = logging.getLogger("lvt.mcp")

SERVER_NAME = "lvt"


def create_server() -> FastMCP:
    mcp = FastMCP(SERVER_NAME)
    for name, handler in TOOLS.items():
        mcp.tool(name=name)(handler)
    logger.debug("Registered %d MCP tools", len(TOOLS))
    return mcp


def run() -> None:
    create_server().run()
