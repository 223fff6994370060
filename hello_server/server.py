from __future__ import annotations

import asyncio
import contextlib
import errno
import logging
import signal
import socket
import sys
from enum import Enum
from typing import Iterator, List, Optional

import uvicorn
from pydantic import ValidationError

from .config import Settings
from .errors import AddressInUseError, ListenError
from .main import app

logger = logging.getLogger(__name__)

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)
BACKLOG = 2048


class ServerState(str, Enum):
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"


def bind_socket(host: str, port: int) -> socket.socket:
    """Bind and listen on host:port.

    Raises AddressInUseError when another process holds the port and
    ListenError for any other bind or listen failure. The socket is closed
    before either error propagates.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(BACKLOG)
    except OSError as exc:
        sock.close()
        if exc.errno == errno.EADDRINUSE:
            raise AddressInUseError(host, port) from exc
        raise ListenError(host, port, exc.strerror or str(exc)) from exc
    return sock


class HelloServer(uvicorn.Server):
    """uvicorn server whose signal handling is owned by this class.

    SIGINT and SIGTERM are subscribed on the event loop for the lifetime of
    serve() and both call request_shutdown(). uvicorn's own capture is
    replaced so the process exits normally instead of re-raising the signal.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.state = ServerState.RUNNING
        super().__init__(
            uvicorn.Config(
                app,
                host=settings.host,
                port=settings.port,
                log_level="info",
                timeout_graceful_shutdown=settings.shutdown_timeout,
            )
        )

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        loop = asyncio.get_running_loop()
        for sig in HANDLED_SIGNALS:
            loop.add_signal_handler(sig, self.request_shutdown, sig)
        try:
            yield
        finally:
            for sig in HANDLED_SIGNALS:
                loop.remove_signal_handler(sig)

    def request_shutdown(self, sig: Optional[int] = None) -> None:
        if self.state is ServerState.SHUTTING_DOWN:
            logger.debug("Already shutting down, ignoring signal %s", sig)
            return
        self.state = ServerState.SHUTTING_DOWN
        logger.info("Shutting down gracefully...")
        self.should_exit = True

    async def startup(self, sockets: Optional[List[socket.socket]] = None) -> None:
        await super().startup(sockets=sockets)
        if self.should_exit:
            return
        host, port = self.settings.host, self.settings.port
        if sockets:
            host, port = sockets[0].getsockname()[:2]
        logger.info("Server running at http://%s:%d/", host, port)
        logger.info("Try: curl http://%s:%d/hello", host, port)


async def serve(server: HelloServer) -> None:
    sock = bind_socket(server.settings.host, server.settings.port)
    with sock:
        await server.serve(sockets=[sock])
    logger.info("Server closed")


def run(settings: Optional[Settings] = None) -> int:
    """Serve until a shutdown signal and return the process exit status."""
    if settings is None:
        try:
            settings = Settings.from_env()
        except ValidationError as exc:
            logger.error("Invalid configuration: %s", exc)
            return 1

    server = HelloServer(settings)
    try:
        asyncio.run(serve(server))
    except AddressInUseError as exc:
        logger.error("Error: Port %d is already in use", exc.port)
        return 1
    except ListenError as exc:
        logger.error("Server error: %s", exc)
        return 1
    return 0


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    sys.exit(run())
