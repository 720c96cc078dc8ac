"""
Batch log events into newline-delimited JSON and ship them over HTTP.
"""

from .config import SendOptions, load_send_options
from .errors import BulkSendError, SerializationError, TransportError
from .models import LogLevel, create_log_event
from .sender import BulkSender
from .transport import HttpTransport, Transport

__version__ = "0.1.0"
__all__ = [
    "BulkSender",
    "BulkSendError",
    "HttpTransport",
    "LogLevel",
    "SendOptions",
    "SerializationError",
    "Transport",
    "TransportError",
    "create_log_event",
    "load_send_options",
]
