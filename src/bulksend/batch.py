"""
Bulk payload assembly: newline-delimited JSON, optionally gzip-compressed.
"""

import gzip
from typing import Iterable, Optional

from .encoding import serialize_event
from .errors import SerializationError
from .models import LogEvent

DEFAULT_ENCODING = "utf-8"


def assemble_batch(
    events: Iterable[LogEvent], encoding: str = DEFAULT_ENCODING
) -> Optional[bytes]:
    """
    Build the bulk payload for a batch of log events.

    Args:
        events: Log events in send order
        encoding: Text encoding of the payload

    Returns:
        One JSON document per event joined by ``\\n`` (no trailing newline),
        encoded as bytes. ``None`` for an empty batch, which must not be
        sent at all.

    Raises:
        SerializationError: any event fails to encode. The batch is
            rejected as a whole and ``index`` names the failing event.
    """
    documents = []
    for index, event in enumerate(events):
        try:
            documents.append(serialize_event(event))
        except SerializationError as exc:
            raise SerializationError(exc.args[0], index=index) from exc

    if not documents:
        return None

    try:
        return "\n".join(documents).encode(encoding)
    except (LookupError, UnicodeEncodeError) as exc:
        raise SerializationError(
            f"cannot encode payload as {encoding}: {exc}"
        ) from exc


def compress_payload(payload: bytes) -> bytes:
    """
    Gzip a bulk payload.

    The gzip header timestamp is pinned to 0 so the same payload always
    compresses to the same bytes.
    """
    return gzip.compress(payload, mtime=0)


def decompress_payload(data: bytes) -> bytes:
    """Reverse :func:`compress_payload`."""
    return gzip.decompress(data)
