"""
Bulk sender: serializes a batch of log events and ships it in one request.
"""

import asyncio
import logging
from typing import Iterable, Optional

from .batch import assemble_batch, compress_payload
from .config import SendOptions
from .errors import TransportError
from .models import LogEvent
from .transport import Transport

logger = logging.getLogger(__name__)


class BulkSender:
    """
    Ships batches of log events to a bulk-ingest endpoint.

    Each batch becomes newline-delimited JSON, gzipped when the options ask
    for it, and is handed to the transport in a single call. Nothing is
    kept between calls and failed sends are not retried.

    Example:
        transport = HttpTransport()
        sender = BulkSender(transport)

        await sender.send_batch(
            [{"message": "hey"}],
            SendOptions(use_compression=True),
        )

        transport.close()
    """

    def __init__(self, transport: Transport):
        """
        Initialize BulkSender.

        Args:
            transport: Delivers the assembled payloads
        """
        self._transport = transport

    async def send_batch(
        self,
        events: Iterable[LogEvent],
        options: Optional[SendOptions] = None,
    ) -> None:
        """
        Send a batch of log events.

        An empty batch is a no-op: the transport is not called.

        Args:
            events: Log events in send order
            options: Send options, defaults to ``SendOptions()``

        Raises:
            SerializationError: an event cannot be encoded; nothing is sent
            TransportError: the transport failed to deliver the payload
        """
        if options is None:
            options = SendOptions()

        batch = list(events)
        if not batch:
            return

        payload = assemble_batch(batch, options.encoding)
        if options.use_compression:
            payload = compress_payload(payload)

        address = options.address
        logger.debug(
            "Sending %d logs (%d bytes, compressed=%s) to %s",
            len(batch),
            len(payload),
            options.use_compression,
            address,
        )

        try:
            await self._transport.post_async(
                address, payload, options.encoding, options.use_compression
            )
        except TransportError as exc:
            logger.warning("Failed to send %d logs: %s", len(batch), exc)
            raise
        except Exception as exc:
            logger.warning("Failed to send %d logs: %s", len(batch), exc)
            raise TransportError(str(exc), address=address) from exc

    def send(
        self,
        events: Iterable[LogEvent],
        options: Optional[SendOptions] = None,
    ) -> None:
        """Blocking :meth:`send_batch` for callers without an event loop."""
        asyncio.run(self.send_batch(events, options))
