"""Tests for field encoding and event serialization."""

import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

import pytest

from bulksend.encoding import (
    encode_field,
    serialize_event,
    to_camel_case,
    to_json_value,
)
from bulksend.errors import SerializationError
from bulksend.models import LogLevel


@dataclass
class DummyLogObject:
    SomeId: int
    SomeString: str


@dataclass
class Request:
    request_id: str
    status_code: int
    client: DummyLogObject


class Color(Enum):
    RED = "red"


class TestToCamelCase:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("SomeId", "someId"),
            ("some_id", "some_id"),
            ("User_Id", "user_Id"),
            ("someId", "someId"),
            ("URLValue", "urlValue"),
            ("ID", "id"),
            ("message", "message"),
            ("_private", "_private"),
            ("", ""),
        ],
    )
    def test_conversion(self, name, expected):
        assert to_camel_case(name) == expected


class TestEncodeField:
    def test_string(self):
        assert encode_field("message", "hey") == '"message":"hey"'

    def test_integer_is_unquoted(self):
        assert encode_field("id", 300) == '"id":300'

    def test_float(self):
        assert encode_field("ratio", 0.5) == '"ratio":0.5'

    def test_bool_and_null(self):
        assert encode_field("ok", True) == '"ok":true'
        assert encode_field("missing", None) == '"missing":null'

    def test_string_is_escaped(self):
        assert encode_field("msg", 'say "hi"\n') == '"msg":"say \\"hi\\"\\n"'

    def test_non_ascii_kept(self):
        assert encode_field("city", "Zürich") == '"city":"Zürich"'

    def test_top_level_name_verbatim(self):
        assert encode_field("SomeField", 1) == '"SomeField":1'

    def test_nested_object_members_camel_cased(self):
        value = DummyLogObject(SomeId=42, SomeString="The Answer")
        assert (
            encode_field("dummy", value)
            == '"dummy":{"someId":42,"someString":"The Answer"}'
        )

    def test_nested_mapping_keys_camel_cased(self):
        assert (
            encode_field("ctx", {"UserName": "john", "user_id": 7})
            == '"ctx":{"userName":"john","user_id":7}'
        )

    def test_exception_keeps_type_and_message(self):
        assert (
            encode_field("error", ValueError("disk full"))
            == '"error":{"type":"ValueError","message":"disk full"}'
        )

    def test_non_finite_float_rejected(self):
        with pytest.raises(SerializationError):
            encode_field("ratio", float("nan"))

    def test_non_string_name_rejected(self):
        with pytest.raises(SerializationError, match="must be str"):
            encode_field(1, "x")


class TestToJsonValue:
    def test_nested_dataclasses(self):
        value = Request("abc", 200, DummyLogObject(1, "x"))
        assert to_json_value(value) == {
            "request_id": "abc",
            "status_code": 200,
            "client": {"someId": 1, "someString": "x"},
        }

    def test_plain_object_public_attributes(self):
        class Job:
            def __init__(self):
                self.JobName = "nightly"
                self._secret = "hidden"

        assert to_json_value(Job()) == {"jobName": "nightly"}

    def test_object_without_public_attributes_rejected(self):
        class Handle:
            def __init__(self):
                self._fd = 3

        with pytest.raises(SerializationError, match="no public attributes"):
            to_json_value(Handle())

    def test_nested_exception(self):
        value = {"Cause": KeyError("user")}
        assert to_json_value(value) == {
            "cause": {"type": "KeyError", "message": "'user'"}
        }

    def test_sequences(self):
        assert to_json_value([1, ("a", None)]) == [1, ["a", None]]

    def test_datetime_iso_string(self):
        value = datetime(2016, 1, 1, 1, 1, 1, tzinfo=timezone.utc)
        assert to_json_value(value) == "2016-01-01T01:01:01+00:00"

    def test_uuid_and_decimal_as_strings(self):
        uid = uuid.UUID("12345678-1234-5678-1234-567812345678")
        assert to_json_value(uid) == "12345678-1234-5678-1234-567812345678"
        assert to_json_value(Decimal("1.10")) == "1.10"

    def test_enum_value(self):
        assert to_json_value(Color.RED) == "red"
        assert to_json_value(LogLevel.ERROR) == 40

    def test_cycle_rejected(self):
        data = {"name": "loop"}
        data["self"] = data
        with pytest.raises(SerializationError, match="circular"):
            to_json_value(data)

    def test_shared_reference_is_not_a_cycle(self):
        shared = {"a": 1}
        assert to_json_value([shared, shared]) == [{"a": 1}, {"a": 1}]

    def test_bytes_rejected(self):
        with pytest.raises(SerializationError):
            to_json_value(b"raw")

    def test_set_rejected(self):
        with pytest.raises(SerializationError):
            to_json_value({1, 2})

    def test_function_rejected(self):
        with pytest.raises(SerializationError):
            to_json_value(lambda: None)

    def test_colliding_member_names_rejected(self):
        with pytest.raises(SerializationError, match="both encode as"):
            to_json_value({"SomeId": 1, "someId": 2})

    def test_snake_and_camel_names_do_not_collide(self):
        assert to_json_value({"user_id": 1, "userId": 2}) == {
            "user_id": 1,
            "userId": 2,
        }

    def test_non_string_member_name_rejected(self):
        with pytest.raises(SerializationError):
            to_json_value({1: "one"})


class TestSerializeEvent:
    def test_single_field(self):
        assert serialize_event({"message": "hey"}) == '{"message":"hey"}'

    def test_members_keep_event_order(self):
        event = {"b": 1, "a": 2}
        assert serialize_event(event) == '{"b":1,"a":2}'

    def test_output_is_parseable_json(self):
        event = {
            "message": "hey",
            "id": 300,
            "dummy": DummyLogObject(42, "The Answer"),
        }
        assert json.loads(serialize_event(event)) == {
            "message": "hey",
            "id": 300,
            "dummy": {"someId": 42, "someString": "The Answer"},
        }

    def test_no_whitespace_or_newline(self):
        text = serialize_event({"a": [1, 2], "b": {"c": None}})
        assert text == '{"a":[1,2],"b":{"c":null}}'

    def test_event_not_mutated(self):
        event = {"message": "hey", "ctx": {"user_id": 1}}
        serialize_event(event)
        assert event == {"message": "hey", "ctx": {"user_id": 1}}

    def test_event_containing_itself_rejected(self):
        event = {"message": "hey"}
        event["me"] = event
        with pytest.raises(SerializationError, match="circular"):
            serialize_event(event)

    def test_non_mapping_rejected(self):
        with pytest.raises(SerializationError, match="mapping"):
            serialize_event(["message", "hey"])
