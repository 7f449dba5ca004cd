"""
Server Entry Point
==================

Composition root: parses the command line, configures logging, installs the
top-level error logging and runs the MCP server until a shutdown signal
arrives. Cleanup is expressed as shutdown listeners run once on the way out.
"""

import asyncio
import signal
import sys
import threading
from types import TracebackType
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from pdfgenstudio_mcp.cli import parse_args, settings_from_args
from pdfgenstudio_mcp.config.logging import get_logger, setup_logging
from pdfgenstudio_mcp.config.settings import Settings
from pdfgenstudio_mcp.mcp_server.server import PDFGenStudioMCPServer

logger = get_logger(__name__)

ShutdownListener = Callable[[], Awaitable[None]]


class ShutdownListeners:
    """Cleanup callbacks run once, in registration order, when the process stops."""

    def __init__(self) -> None:
        self._listeners: List[ShutdownListener] = []
        self._notified = False

    def add(self, listener: ShutdownListener) -> None:
        self._listeners.append(listener)

    async def notify(self) -> None:
        if self._notified:
            return
        self._notified = True
        for listener in self._listeners:
            try:
                await listener()
            except Exception as e:
                logger.error("Shutdown listener failed", listener=repr(listener), error=str(e))


def log_uncaught_exception(
    exc_type: Type[BaseException],
    exc_value: BaseException,
    exc_tb: Optional[TracebackType],
) -> None:
    """``sys.excepthook`` replacement: log instead of printing a bare traceback."""
    logger.error(
        "Uncaught exception",
        exc_info=(exc_type, exc_value, exc_tb),
    )


def log_thread_exception(args: threading.ExceptHookArgs) -> None:
    logger.error(
        "Uncaught exception in thread",
        thread=args.thread.name if args.thread else None,
        exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
    )


def log_loop_exception(loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
    """Unhandled task errors are logged; the server keeps running."""
    exception = context.get("exception")
    logger.error(
        "Unhandled asynchronous error",
        message=context.get("message"),
        error=str(exception) if exception else None,
        exc_info=exception,
    )


def install_error_hooks() -> None:
    sys.excepthook = log_uncaught_exception
    threading.excepthook = log_thread_exception


class Application:
    """Owns the server and its shutdown listeners for one process lifetime."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.server = PDFGenStudioMCPServer(settings)
        self.shutdown = ShutdownListeners()
        self.shutdown.add(self.server.close)

    async def run(self) -> None:
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(log_loop_exception)

        serve_task = asyncio.ensure_future(self.server.run())
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, self._request_stop, serve_task, sig)
            except (NotImplementedError, RuntimeError):
                # Signal handlers are unavailable on some platforms (Windows).
                pass

        try:
            await serve_task
        except asyncio.CancelledError:
            if not serve_task.cancelled():
                raise
            logger.info("MCP server stopped")
        finally:
            await self.shutdown.notify()

    def _request_stop(self, serve_task: "asyncio.Future[None]", sig: signal.Signals) -> None:
        logger.info("Received shutdown signal", signal=sig.name)
        serve_task.cancel()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the MCP server process."""
    args = parse_args(argv)
    settings = settings_from_args(args)
    setup_logging(settings)
    install_error_hooks()

    logger.info(
        "Starting PDF Gen Studio MCP server",
        transport=settings.transport,
        base_url=settings.base_url,
        api_key_configured=settings.has_api_key,
    )
    try:
        asyncio.run(Application(settings).run())
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
