"""
In-process change notifier for new messages.

Each connected client holds an asyncio queue keyed by its profile id. A
message insert publishes a small event to the receiver's queues and the
client re-fetches. Delivery and ordering are best effort and limited to
the current process.
"""

import asyncio
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Set
import logging

logger = logging.getLogger(__name__)

QUEUE_SIZE = 100


class MessageNotifier:
    """Publish/subscribe registry of per-user asyncio queues."""

    def __init__(self, queue_size: int = QUEUE_SIZE):
        self.queue_size = queue_size
        self._subscribers: Dict[uuid.UUID, Set[asyncio.Queue]] = {}

    @asynccontextmanager
    async def subscribe(self, user_id: uuid.UUID) -> AsyncIterator[asyncio.Queue]:
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self._subscribers.setdefault(user_id, set()).add(queue)
        logger.debug(f"Notifier subscriber added for {user_id}")
        try:
            yield queue
        finally:
            queues = self._subscribers.get(user_id)
            if queues is not None:
                queues.discard(queue)
                if not queues:
                    del self._subscribers[user_id]
            logger.debug(f"Notifier subscriber removed for {user_id}")

    def publish(self, user_id: uuid.UUID, event: dict) -> int:
        """Queue an event for every connection of user_id. Returns the number reached."""
        delivered = 0
        for queue in list(self._subscribers.get(user_id, ())):
            try:
                queue.put_nowait(event)
                delivered += 1
            except asyncio.QueueFull:
                logger.warning(f"Dropping notification for slow subscriber {user_id}")
        return delivered

    def subscriber_count(self, user_id: uuid.UUID) -> int:
        return len(self._subscribers.get(user_id, ()))


# Shared by the messaging service and the websocket endpoint
notifier = MessageNotifier()
