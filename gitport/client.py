"""SidecarClient — host-side transport for talking to a running sidecar.

Requests are sent strictly one at a time; each call blocks until the
matching response arrives.
"""

from __future__ import annotations

import base64
import logging
import subprocess
import sys
from typing import Any, BinaryIO

from pydantic import BaseModel

from gitport.config import DEFAULT_DEPTH
from gitport.models import CommitInfo
from gitport.protocol.framing import read_frame, write_frame
from gitport.protocol.messages import (
    CheckoutRequest,
    FilesRequest,
    HeadRequest,
    LsRemoteRequest,
    ReadRequest,
    SyncRequest,
    decode_response,
    encode_request,
)

logger = logging.getLogger(__name__)


class SidecarError(Exception):
    """The sidecar answered with an error response."""


class SidecarClient:
    """Speak the framed protocol over a pair of binary streams.

    Parameters
    ----------
    reader:
        Stream carrying responses from the sidecar.
    writer:
        Stream carrying requests to the sidecar.
    process:
        Child process owning the streams, when spawned via :meth:`spawn`.
    """

    def __init__(
        self,
        reader: BinaryIO,
        writer: BinaryIO,
        process: subprocess.Popen | None = None,
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.process = process

    @classmethod
    def spawn(
        cls,
        command: list[str] | None = None,
        env: dict[str, str] | None = None,
    ) -> SidecarClient:
        """Start a sidecar subprocess (``python -m gitport`` by default)."""
        cmd = command or [sys.executable, "-m", "gitport"]
        process = subprocess.Popen(
            cmd,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            env=env,
        )
        logger.debug("Spawned sidecar pid=%s", process.pid)
        return cls(process.stdout, process.stdin, process)

    def close(self, timeout: float = 10.0) -> int | None:
        """Close the request stream and wait for a spawned sidecar to exit."""
        self.writer.close()
        if self.process is None:
            return None
        try:
            return self.process.wait(timeout=timeout)
        finally:
            if self.process.stdout is not None:
                self.process.stdout.close()

    def __enter__(self) -> SidecarClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def call(self, request: BaseModel) -> Any:
        """Send *request* and return the ``ok`` value, raising on ``err``."""
        write_frame(self.writer, encode_request(request))
        response = decode_response(read_frame(self.reader))
        if "err" in response:
            raise SidecarError(response["err"])
        return response["ok"]

    def sync(self, url: str, branch: str, path: str, depth: int = DEFAULT_DEPTH) -> str:
        return self.call(SyncRequest(url=url, branch=branch, path=path, depth=depth))

    def files(self, path: str, subpath: str | None = None) -> list[str]:
        return self.call(FilesRequest(path=path, subpath=subpath))

    def read(self, path: str, file: str) -> bytes:
        """Return the raw bytes of *file* (the wire form is base64)."""
        return base64.b64decode(self.call(ReadRequest(path=path, file=file)))

    def head(self, path: str) -> CommitInfo:
        return CommitInfo.model_validate(self.call(HeadRequest(path=path)))

    def checkout(self, path: str, sha: str) -> str:
        return self.call(CheckoutRequest(path=path, sha=sha))

    def ls_remote(self, url: str, branch: str) -> str:
        return self.call(LsRemoteRequest(url=url, branch=branch))
