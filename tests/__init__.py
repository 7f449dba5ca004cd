"""
Test Suite
==========

Test suite matching the pdfgenstudio_mcp/ package structure.

Test Categories:
- unit: Unit tests for individual components
- integration: MCP server tests against a local fake of the PDF Gen Studio API
"""
