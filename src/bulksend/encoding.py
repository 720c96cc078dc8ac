"""
JSON encoding of log events.

Top-level field names are written verbatim since they are the caller's log
keys. Members of nested objects are renamed to lower camel case so that
structured payloads match what the ingest side expects.
"""

import dataclasses
import json
import math
from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Mapping, Set, Tuple
from uuid import UUID

from .errors import SerializationError
from .models import JSONObject, JSONValue, LogEvent

_SEPARATORS = (",", ":")


def to_camel_case(name: str) -> str:
    """
    Convert a member name to lower camel case.

    ``SomeId`` becomes ``someId``. A leading run of capitals is lowered as
    a whole (``URLValue`` -> ``urlValue``, ``ID`` -> ``id``). The rest of
    the name, underscores included, is kept as is.
    """
    if not name or not name[0].isupper():
        return name

    chars = list(name)
    for i, char in enumerate(chars):
        if i == 1 and not char.isupper():
            break
        # Keep the capital that starts the next word
        if i > 0 and i + 1 < len(chars) and not chars[i + 1].isupper():
            break
        chars[i] = char.lower()
    return "".join(chars)


def to_json_value(value: Any) -> JSONValue:
    """
    Narrow an arbitrary field value down to a JSON value.

    Raises:
        SerializationError: the value (or something inside it) has no JSON
            representation, or the structure is cyclic
    """
    try:
        return _convert(value, set())
    except RecursionError as exc:
        raise SerializationError("value is nested too deeply") from exc


def encode_field(name: str, value: Any) -> str:
    """Encode one top-level field as a ``"name":value`` JSON member."""
    try:
        return _encode_member(name, value, set())
    except RecursionError as exc:
        raise SerializationError(
            f"field {name!r} is nested too deeply"
        ) from exc


def serialize_event(event: LogEvent) -> str:
    """
    Serialize a log event into a single compact JSON object.

    Members keep the event's iteration order. The result holds no
    whitespace and no trailing newline.
    """
    if not isinstance(event, Mapping):
        raise SerializationError(
            f"log event must be a mapping, got {type(event).__name__}"
        )

    active = {id(event)}
    try:
        members = [
            _encode_member(name, value, active)
            for name, value in event.items()
        ]
    except RecursionError as exc:
        raise SerializationError("log event is nested too deeply") from exc
    return "{" + ",".join(members) + "}"


def _encode_member(name: Any, value: Any, active: Set[int]) -> str:
    if not isinstance(name, str):
        raise SerializationError(
            f"field names must be str, got {type(name).__name__}"
        )
    return _dumps(name) + ":" + _dumps(_convert(value, active))


def _dumps(value: JSONValue) -> str:
    try:
        return json.dumps(
            value,
            ensure_ascii=False,
            separators=_SEPARATORS,
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise SerializationError(str(exc)) from exc


def _convert(value: Any, active: Set[int]) -> JSONValue:
    # Enum first: IntEnum and StrEnum members are also int/str
    if isinstance(value, Enum):
        return _convert(value.value, active)
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(f"{value!r} is not a valid JSON number")
        return value
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        raise SerializationError(
            f"cannot encode {type(value).__name__} values as JSON"
        )
    if isinstance(value, BaseException):
        return {"type": type(value).__name__, "message": str(value)}

    if id(value) in active:
        raise SerializationError(
            f"circular reference to {type(value).__name__} object"
        )
    active.add(id(value))
    try:
        if isinstance(value, Mapping):
            return _convert_members(value.items(), active)
        if isinstance(value, (list, tuple)):
            return [_convert(item, active) for item in value]
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return _convert_members(
                (
                    (field.name, getattr(value, field.name))
                    for field in dataclasses.fields(value)
                ),
                active,
            )
        if hasattr(value, "__dict__") and not (
            isinstance(value, type) or callable(value)
        ):
            public = [
                (name, member)
                for name, member in vars(value).items()
                if not name.startswith("_")
            ]
            if not public:
                raise SerializationError(
                    f"{type(value).__name__} object has no public attributes"
                )
            return _convert_members(public, active)
    finally:
        active.discard(id(value))

    raise SerializationError(
        f"cannot encode {type(value).__name__} values as JSON"
    )


def _convert_members(
    items: Iterable[Tuple[Any, Any]], active: Set[int]
) -> JSONObject:
    members: JSONObject = {}
    original_names = {}
    for name, member in items:
        if not isinstance(name, str):
            raise SerializationError(
                f"member names must be str, got {type(name).__name__}"
            )
        key = to_camel_case(name)
        if key in members:
            raise SerializationError(
                f"members {original_names[key]!r} and {name!r} "
                f"both encode as {key!r}"
            )
        original_names[key] = name
        members[key] = _convert(member, active)
    return members
