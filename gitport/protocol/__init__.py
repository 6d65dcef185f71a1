"""Wire protocol — framing, message schema, and the serve loop."""

from gitport.protocol.framing import FramingError, StreamClosed, read_frame, write_frame
from gitport.protocol.server import ServerContext, dispatch, serve

__all__ = [
    "FramingError",
    "ServerContext",
    "StreamClosed",
    "dispatch",
    "read_frame",
    "serve",
    "write_frame",
]
