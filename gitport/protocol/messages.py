"""Request schema and response envelope, msgpack-encoded.

Requests are maps tagged by ``op``::

    {"op": "sync", "url": ..., "branch": ..., "path": ..., "depth": 1}

Responses are single-key maps, ``{"ok": value}`` or ``{"err": message}``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

import msgpack
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from gitport.models import CommitInfo
from gitport.protocol.framing import FramingError

_U32_MAX = 2**32 - 1


class SyncRequest(BaseModel):
    """Clone or update a working tree to a remote branch tip."""

    op: Literal["sync"] = "sync"
    url: str
    branch: str
    path: str
    depth: Optional[int] = Field(default=None, ge=0, le=_U32_MAX)
    """History depth; omitted means the configured default."""


class FilesRequest(BaseModel):
    """List visible YAML files in a directory."""

    op: Literal["files"] = "files"
    path: str
    subpath: Optional[str] = None


class ReadRequest(BaseModel):
    """Read one file, returned base64-encoded."""

    op: Literal["read"] = "read"
    path: str
    file: str


class HeadRequest(BaseModel):
    """Describe the commit HEAD points at."""

    op: Literal["head"] = "head"
    path: str


class CheckoutRequest(BaseModel):
    """Hard-reset to a commit already present locally."""

    op: Literal["checkout"] = "checkout"
    path: str
    sha: str


class LsRemoteRequest(BaseModel):
    """Look up a remote branch tip without fetching."""

    op: Literal["lsremote"] = "lsremote"
    url: str
    branch: str


Request = Annotated[
    Union[SyncRequest, FilesRequest, ReadRequest, HeadRequest, CheckoutRequest, LsRemoteRequest],
    Field(discriminator="op"),
]

_REQUEST_ADAPTER: TypeAdapter = TypeAdapter(Request)


def decode_request(payload: bytes) -> Request:
    """Decode one request payload.

    Raises :class:`FramingError` for undecodable bytes, a non-map payload,
    an unknown ``op`` or missing fields.
    """
    try:
        data = msgpack.unpackb(payload, raw=False)
    except (msgpack.UnpackException, ValueError, TypeError) as exc:
        raise FramingError(f"undecodable payload: {exc}") from exc

    if not isinstance(data, dict):
        raise FramingError(f"request must be a map, got {type(data).__name__}")
    if isinstance(data.get("op"), str):
        data["op"] = data["op"].lower()

    try:
        return _REQUEST_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise FramingError(f"malformed request: {exc.error_count()} validation error(s): {exc}") from exc


def encode_request(request: BaseModel) -> bytes:
    """Encode a request model for the wire, dropping unset optional fields."""
    return msgpack.packb(request.model_dump(exclude_none=True), use_bin_type=True)


def ok(value: Any) -> dict[str, Any]:
    """Success envelope; :class:`CommitInfo` is flattened to a map."""
    if isinstance(value, CommitInfo):
        value = value.model_dump()
    return {"ok": value}


def err(message: str) -> dict[str, Any]:
    """Error envelope carrying a human-readable message."""
    return {"err": message}


def encode_response(response: dict[str, Any]) -> bytes:
    return msgpack.packb(response, use_bin_type=True)


def decode_response(payload: bytes) -> dict[str, Any]:
    try:
        data = msgpack.unpackb(payload, raw=False)
    except (msgpack.UnpackException, ValueError, TypeError) as exc:
        raise FramingError(f"undecodable response: {exc}") from exc
    if not isinstance(data, dict) or len(data) != 1 or not ({"ok", "err"} & data.keys()):
        raise FramingError(f"malformed response envelope: {data!r}")
    return data
