"""
Data Models
===========

Pydantic models describing MCP tool arguments.
"""
