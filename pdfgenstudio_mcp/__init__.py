"""
PDF Gen Studio MCP Server
=========================

A Model Context Protocol (MCP) server that exposes the PDF Gen Studio rendering
API to AI agent hosts.

This package provides:
- MCP tools for rendering templates, JSON documents, HTML and URLs to PDF/images
- MCP tools for listing and inspecting saved templates
- Read-only resources and prompt templates
- stdio and streamable HTTP transports
"""

__version__ = "1.0.0"
__author__ = "PDF Gen Studio MCP Team"
