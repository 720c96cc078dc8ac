"""
Log event types.
"""

from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Dict, List, Mapping, Optional, TypeAlias, Union

JSONValue: TypeAlias = Union[
    str,
    int,
    float,
    bool,
    None,
    Dict[str, "JSONValue"],
    List["JSONValue"],
]

JSONObject: TypeAlias = Dict[str, JSONValue]

# A log event maps field names to arbitrary values; the encoder narrows the
# values down to JSONValue.
LogEvent: TypeAlias = Mapping[str, Any]

TIMESTAMP_FIELD = "@timestamp"


class LogLevel(IntEnum):
    """Log levels."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


def create_log_event(
    message: str,
    level: Optional[LogLevel] = None,
    extra: Optional[Dict[str, Any]] = None,
    timestamp: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Create a log event dictionary.

    Args:
        message: Log message
        level: Optional log level, stored by name
        extra: Extra fields merged into the event at top level
        timestamp: Event time, defaults to now (UTC)

    Returns:
        Event with ``message`` and ``@timestamp`` first, then ``level``
        and the extra fields.
    """
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)

    event: Dict[str, Any] = {
        "message": message,
        TIMESTAMP_FIELD: timestamp.isoformat(),
    }
    if level is not None:
        event["level"] = level.name

    if extra:
        event.update(extra)

    return event
