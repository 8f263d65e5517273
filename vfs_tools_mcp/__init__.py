"""Virtual file system and file editing tools for LLM agents, served over MCP."""
