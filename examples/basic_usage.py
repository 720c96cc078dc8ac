"""
Basic usage example for bulksend.
"""

import asyncio
import logging
from dataclasses import dataclass

from bulksend import (
    BulkSender,
    HttpTransport,
    LogLevel,
    SendOptions,
    TransportError,
    create_log_event,
)


@dataclass
class Order:
    order_id: int
    total_amount: float


async def main():
    logging.basicConfig(level=logging.DEBUG)

    options = SendOptions(
        listener_url="http://localhost:8080",
        log_type="my-project",
        use_compression=True,
    )

    with HttpTransport(timeout=5.0) as transport:
        sender = BulkSender(transport)

        batch = [
            create_log_event("Application starting...", LogLevel.DEBUG),
            create_log_event(
                "User logged in",
                LogLevel.INFO,
                extra={"user_id": 123, "username": "john"},
            ),
            # Goes out as "order":{"order_id":7,"total_amount":19.99}
            create_log_event(
                "Order placed",
                LogLevel.INFO,
                extra={"order": Order(order_id=7, total_amount=19.99)},
            ),
        ]

        try:
            await sender.send_batch(batch, options)
        except TransportError as exc:
            print(f"Send failed: {exc}")


if __name__ == "__main__":
    asyncio.run(main())
