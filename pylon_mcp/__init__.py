"""pylon-mcp: Pylon customer-support API exposed as MCP tools."""
