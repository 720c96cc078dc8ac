"""Shared fixtures: an in-memory transport that records every post."""

from typing import NamedTuple, Optional

import pytest

from bulksend.sender import BulkSender


class PostCall(NamedTuple):
    address: str
    payload: bytes
    encoding: str
    is_compressed: bool


class RecordingTransport:
    """Transport double that records calls and optionally fails them."""

    def __init__(self, error: Optional[Exception] = None):
        self.calls: list[PostCall] = []
        self.error = error

    async def post_async(self, address, payload, encoding, is_compressed=False):
        self.calls.append(PostCall(address, payload, encoding, is_compressed))
        if self.error is not None:
            raise self.error


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def sender(transport):
    return BulkSender(transport)
