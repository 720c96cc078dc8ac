"""
Send options, with defaults overridable from environment variables.
"""

import os
from dataclasses import dataclass
from urllib.parse import quote

from .batch import DEFAULT_ENCODING

DEFAULT_LISTENER_URL = "https://listener.logz.io:8071"
DEFAULT_LOG_TYPE = "python"


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class SendOptions:
    """
    Per-call options of :meth:`BulkSender.send_batch`.

    Attributes:
        use_compression: Gzip the payload before sending
        listener_url: Base URL of the bulk-ingest listener
        log_type: Log type reported to the listener
        encoding: Text encoding of the payload
    """

    use_compression: bool = False
    listener_url: str = DEFAULT_LISTENER_URL
    log_type: str = DEFAULT_LOG_TYPE
    encoding: str = DEFAULT_ENCODING

    def __post_init__(self) -> None:
        if not self.listener_url:
            raise ValueError("listener_url is required")
        if not self.log_type:
            raise ValueError("log_type is required")
        if not self.encoding:
            raise ValueError("encoding is required")

    @property
    def address(self) -> str:
        """Destination address of the bulk payload."""
        base = self.listener_url.rstrip("/")
        return f"{base}/?type={quote(self.log_type, safe='')}"


def load_send_options() -> SendOptions:
    """Build SendOptions from environment variables with sensible defaults."""
    return SendOptions(
        use_compression=_parse_bool(
            os.environ.get("BULKSEND_USE_COMPRESSION", "false")
        ),
        listener_url=os.environ.get(
            "BULKSEND_LISTENER_URL", SendOptions.listener_url
        ),
        log_type=os.environ.get("BULKSEND_LOG_TYPE", SendOptions.log_type),
        encoding=os.environ.get("BULKSEND_ENCODING", SendOptions.encoding),
    )
