import datetime
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Literal, cast

from pydantic.dataclasses import dataclass as config_dataclass

from message_queue.message import Message, find_visible_index
from message_queue.validation import (
    validate_message,
    validate_queue_name,
    validate_receipt_handle,
)
from utils.time import now

_logger = logging.getLogger("memory_queue")


@config_dataclass
class MemoryQueueConfig:
    type: Literal["memory"]
    invisibility_duration: float = 30


@dataclass
class MemoryQueueBucket:
    """Messages of a single queue, with its own lock"""

    lock: threading.Lock = field(default_factory=threading.Lock)
    messages: list[Message] = field(default_factory=list)


class MemoryQueueRegistry:
    """Registry of the in-memory queues. Queues sharing a registry see the same messages"""

    _buckets: dict[str, MemoryQueueBucket]
    _lock: threading.Lock

    def __init__(self) -> None:
        self._buckets = {}
        self._lock = threading.Lock()

    def get(self, queue_name: str, create: bool = False) -> MemoryQueueBucket | None:
        """Get the bucket for a queue, creating it if it doesn't exist and 'create' is set"""
        with self._lock:
            bucket = self._buckets.get(queue_name)
            if bucket is None and create:
                _logger.info(f"Queue '{queue_name}' created", extra={"queue_name": queue_name})
                bucket = self._buckets[queue_name] = MemoryQueueBucket()
            return bucket


class MemoryQueue:
    """Queue that keeps the messages in memory. Only usable by producers and consumers in the
    same process"""

    _config: MemoryQueueConfig
    _registry: MemoryQueueRegistry

    def __init__(self, config: dict[str, Any], registry: MemoryQueueRegistry) -> None:
        self._config = MemoryQueueConfig(**config)
        self._registry = registry

    @property
    def invisibility_duration(self) -> datetime.timedelta:
        return datetime.timedelta(seconds=self._config.invisibility_duration)

    def push(self, queue_name: str, message: Message) -> bool:
        """Push a message to the queue"""
        validate_queue_name(queue_name)
        validate_message(message)

        bucket = cast(MemoryQueueBucket, self._registry.get(queue_name, create=True))

        with bucket.lock:
            bucket.messages.append(message)
        return True

    def pull(self, queue_name: str) -> Message | None:
        """Get the first visible message of the queue, making it invisible for the configured
        invisibility duration"""
        validate_queue_name(queue_name)

        bucket = self._registry.get(queue_name)
        if bucket is None:
            return None

        with bucket.lock:
            reference = now()
            index = find_visible_index(bucket.messages, reference)
            if index is None:
                return None

            pulled_message = bucket.messages[index].with_visible_from(
                reference + self.invisibility_duration
            )
            bucket.messages[index] = pulled_message
            return pulled_message

    def delete(self, queue_name: str, message: Message) -> bool:
        """Delete the messages with the same receipt handle as the provided message"""
        validate_queue_name(queue_name)
        validate_message(message)
        validate_receipt_handle(message.receipt_handle)

        bucket = self._registry.get(queue_name)
        if bucket is None:
            return False

        with bucket.lock:
            messages_count = len(bucket.messages)
            bucket.messages[:] = [
                stored_message
                for stored_message in bucket.messages
                if stored_message.receipt_handle != message.receipt_handle
            ]
            return len(bucket.messages) < messages_count
