"""MCP tool surface: handlers, directory listing and the FastMCP server."""
