"""
MCP tools for the Masa MCP Service.

Each module groups related tools in a class holding the ServiceFactory;
`register_tools` attaches all of them to a FastMCP server.
"""

from fastmcp import FastMCP

from ..services.factory import ServiceFactory
from .analysis import TwitterAnalysisTools
from .twitter import TwitterTools
from .web import WebTools


def register_tools(mcp: FastMCP, factory: ServiceFactory):
    """Register every Masa tool on `mcp`."""
    TwitterTools(factory).register(mcp)
    TwitterAnalysisTools(factory).register(mcp)
    WebTools(factory).register(mcp)


__all__ = [
    "TwitterTools",
    "TwitterAnalysisTools",
    "WebTools",
    "register_tools",
]
