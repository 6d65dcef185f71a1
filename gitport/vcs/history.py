"""Commit metadata — parse raw commit objects into :class:`CommitInfo`.

Reading the raw object (``git cat-file commit``) rather than a formatted
log line keeps the message byte-exact, including embedded newlines and
the absence of a trailing one.
"""

from __future__ import annotations

import codecs
import logging
import re

from gitport.models import CommitInfo

logger = logging.getLogger(__name__)

_SIGNATURE = re.compile(r"^(?P<name>.*?)\s*<(?P<email>[^>]*)>\s*(?P<time>-?\d+)?(?:\s+[+-]\d{4})?\s*$")


def _decode(data: bytes, encoding: str) -> str:
    try:
        codecs.lookup(encoding)
    except LookupError:
        encoding = "utf-8"
    return data.decode(encoding, errors="replace")


def parse_signature(value: str) -> tuple[str, str, int]:
    """Split an ``author``/``committer`` header into (name, email, seconds).

    Missing parts come back as empty strings and zero.
    """
    match = _SIGNATURE.match(value)
    if not match:
        return value.strip(), "", 0
    seconds = int(match.group("time")) if match.group("time") else 0
    return match.group("name").strip(), match.group("email"), seconds


def parse_commit_object(sha: str, raw: bytes) -> CommitInfo:
    """Build a :class:`CommitInfo` from the raw bytes of a commit object.

    Parameters
    ----------
    sha:
        Full identifier of the commit.
    raw:
        Output of ``git cat-file commit <sha>``.
    """
    header_block, sep, message_bytes = raw.partition(b"\n\n")
    if not sep:
        message_bytes = b""

    headers: dict[str, bytes] = {}
    last_key = None
    for line in header_block.split(b"\n"):
        if line.startswith(b" ") and last_key is not None:
            # continuation of a multi-line header (gpgsig, mergetag)
            headers[last_key] += b"\n" + line[1:]
            continue
        key, _, value = line.partition(b" ")
        last_key = key.decode("ascii", errors="replace")
        headers.setdefault(last_key, value)

    encoding = headers.get("encoding", b"utf-8").decode("ascii", errors="replace")

    author_name, author_email, _ = parse_signature(_decode(headers.get("author", b""), encoding))
    _, _, committed_at = parse_signature(_decode(headers.get("committer", b""), encoding))

    return CommitInfo(
        sha=sha,
        author=author_name,
        email=author_email,
        message=_decode(message_bytes, encoding),
        timestamp=committed_at,
    )
