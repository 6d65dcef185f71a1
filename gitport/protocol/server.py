"""Blocking request loop: read a frame, dispatch, write the response, repeat.

One request is processed to completion before the next frame is read, so
responses leave in exactly the order requests arrived and no two git
operations ever run concurrently within one sidecar.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Callable

from gitport.config import Settings
from gitport.errors import GitPortError
from gitport.ops import files, inspection
from gitport.protocol.framing import FramingError, StreamClosed, read_frame, write_frame
from gitport.protocol.messages import (
    CheckoutRequest,
    FilesRequest,
    HeadRequest,
    LsRemoteRequest,
    ReadRequest,
    Request,
    SyncRequest,
    decode_request,
    encode_response,
    err,
    ok,
)
from gitport.sync.manager import SyncManager
from gitport.vcs.repo import GitEngine

logger = logging.getLogger(__name__)


@dataclass
class ServerContext:
    """Everything a request handler needs; the server keeps no other state."""

    settings: Settings = field(default_factory=Settings)
    engine: GitEngine | None = None
    syncer: SyncManager | None = None

    def __post_init__(self) -> None:
        if self.engine is None:
            self.engine = GitEngine(self.settings)
        if self.syncer is None:
            self.syncer = SyncManager(self.engine)


def _handle_sync(request: SyncRequest, ctx: ServerContext) -> str:
    depth = request.depth if request.depth is not None else ctx.settings.default_depth
    return ctx.syncer.sync(request.url, request.branch, request.path, depth)


def _handle_files(request: FilesRequest, ctx: ServerContext) -> list[str]:
    return files.list_files(request.path, request.subpath)


def _handle_read(request: ReadRequest, ctx: ServerContext) -> str:
    return files.read_file(request.path, request.file)


def _handle_head(request: HeadRequest, ctx: ServerContext) -> Any:
    return inspection.head(ctx.engine, request.path)


def _handle_checkout(request: CheckoutRequest, ctx: ServerContext) -> str:
    return inspection.checkout(ctx.engine, request.path, request.sha)


def _handle_ls_remote(request: LsRemoteRequest, ctx: ServerContext) -> str:
    return inspection.ls_remote(ctx.engine, request.url, request.branch)


_HANDLERS: dict[str, Callable[[Any, ServerContext], Any]] = {
    "sync": _handle_sync,
    "files": _handle_files,
    "read": _handle_read,
    "head": _handle_head,
    "checkout": _handle_checkout,
    "lsremote": _handle_ls_remote,
}


def dispatch(request: Request, ctx: ServerContext) -> dict[str, Any]:
    """Run one request and wrap the outcome in a response envelope.

    Operation failures become ``{"err": ...}``; they never escape.
    """
    handler = _HANDLERS[request.op]
    logger.debug("Dispatching %s", request.op)
    try:
        return ok(handler(request, ctx))
    except GitPortError as exc:
        logger.warning("%s failed: %s", request.op, exc)
        return err(str(exc))


def serve(ctx: ServerContext, reader: BinaryIO, writer: BinaryIO) -> int:
    """Process requests until the stream closes.

    Returns the number of requests answered when the peer closes the
    stream cleanly.

    Raises
    ------
    FramingError
        A malformed frame or payload was read, or a response could not be
        written.  No response is produced for the offending frame.
    """
    handled = 0
    while True:
        try:
            payload = read_frame(reader, ctx.settings.max_frame_size)
        except StreamClosed:
            logger.info("Input closed after %d request(s), shutting down", handled)
            return handled
        except FramingError as exc:
            logger.error("Framing error, shutting down: %s", exc)
            raise

        try:
            request = decode_request(payload)
        except FramingError as exc:
            logger.error("Bad request payload, shutting down: %s", exc)
            raise

        response = dispatch(request, ctx)

        try:
            write_frame(writer, encode_response(response))
        except FramingError as exc:
            logger.error("Failed to write response, shutting down: %s", exc)
            raise
        handled += 1
