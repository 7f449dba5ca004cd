"""
Command Line Interface
======================

Argument parsing for the server process. Flags override the matching
``PDFGENSTUDIO_*`` environment variables.
"""

import argparse
from typing import List, Optional

from pdfgenstudio_mcp import __version__
from pdfgenstudio_mcp.config.settings import HTTP_TRANSPORTS, Settings, reload_settings

TRANSPORT_CHOICES = ["stdio", *sorted(HTTP_TRANSPORTS)]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdfgenstudio-mcp",
        description="PDF Gen Studio MCP server: render templates, JSON, HTML and URLs to PDF/images",
    )
    parser.add_argument(
        "--api-key", "-k", dest="api_key", help="PDF Gen Studio API key (PDFGENSTUDIO_API_KEY)"
    )
    parser.add_argument(
        "--transport",
        "-t",
        choices=TRANSPORT_CHOICES,
        help="Transport: stdio (default) or an HTTP stream (http, httpStream, sse)",
    )
    parser.add_argument("--port", "-p", type=int, help="HTTP transport port (default: 3100)")
    parser.add_argument("--host", help="HTTP transport bind host (default: 0.0.0.0)")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Settings from the environment with any flags given on the command line applied."""
    return reload_settings(
        api_key=args.api_key,
        transport=args.transport,
        port=args.port,
        host=args.host,
        log_level=args.log_level,
    )
