"""
Exceptions raised by bulksend.
"""

from typing import Optional


class BulkSendError(Exception):
    """Base class for all bulksend errors."""


class SerializationError(BulkSendError):
    """
    A log event could not be encoded as JSON.

    Raised for unsupported value types, cyclic structures, non-string keys
    and non-finite floats. When raised while assembling a batch, ``index``
    is the position of the offending event; the whole batch is rejected.
    """

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.index = index

    def __str__(self) -> str:
        message = super().__str__()
        if self.index is None:
            return message
        return f"event #{self.index}: {message}"


class TransportError(BulkSendError):
    """The transport failed to deliver a bulk payload."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        address: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.address = address
