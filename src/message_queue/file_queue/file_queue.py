import datetime
import logging
from contextlib import contextmanager
from typing import Any, Generator, Literal

import prometheus_client
from pydantic.dataclasses import dataclass

from message_queue.exceptions import MessageDecodeError, QueueError
from message_queue.message import Message, find_visible_index
from message_queue.validation import (
    validate_message,
    validate_queue_name,
    validate_receipt_handle,
)
from utils.time import now

from . import codec
from .lock import LockManager
from .store import QueueStore

_logger = logging.getLogger("file_queue")

prometheus_storage_error_count = prometheus_client.Counter(
    "queue_storage_error_count",
    "Count of storage errors while running queue operations",
    ["operation"],
)


@dataclass
class FileQueueConfig:
    type: Literal["file"]
    path: str = "queues"
    invisibility_duration: float = 30
    lock_timeout: float = 10
    lock_retry_interval: float = 0.05


class FileQueue:
    """Queue that stores the messages in files, allowing many producers and consumers, from
    different processes, to use the same queues. Every operation holds the queue lock while
    reading or changing the queue file.

    Pushing to an existing queue appends a single line to the queue file, while pulling and
    deleting rewrite the whole file, as they change or remove an arbitrary message.

    Messages are stored one per line with ":" separated fields, so this queue rejects messages
    whose content has ":", a line feed or a carriage return, raising a ValueError on 'push'.
    """

    _config: FileQueueConfig
    _store: QueueStore
    _lock_manager: LockManager

    def __init__(self, config: dict[str, Any]) -> None:
        self._config = FileQueueConfig(**config)
        self._store = QueueStore(self._config.path)
        self._lock_manager = LockManager(
            self._config.path,
            timeout=self._config.lock_timeout,
            retry_interval=self._config.lock_retry_interval,
        )

    @property
    def invisibility_duration(self) -> datetime.timedelta:
        return datetime.timedelta(seconds=self._config.invisibility_duration)

    @contextmanager
    def _locked_operation(self, operation: str, queue_name: str) -> Generator[None, None, None]:
        """Hold the queue lock while running the operation, wrapping storage errors in a
        'QueueError'. Lock timeouts are not wrapped"""
        try:
            with self._lock_manager.hold(queue_name):
                yield
        except (OSError, MessageDecodeError) as e:
            prometheus_storage_error_count.labels(operation=operation).inc()
            _logger.error(
                f"Storage error on '{operation}' for queue '{queue_name}': {e}",
                extra={"queue_name": queue_name, "operation": operation},
            )
            raise QueueError(operation, queue_name, e) from e

    def push(self, queue_name: str, message: Message) -> bool:
        """Push a message to the queue, creating the queue if it doesn't exist"""
        validate_queue_name(queue_name)
        validate_message(message)
        codec.validate_content(message.content)

        with self._locked_operation("push", queue_name):
            if self._store.exists(queue_name):
                self._store.append_one(queue_name, message)
            else:
                self._store.create(queue_name)
                self._store.overwrite_all(queue_name, [message])

        _logger.debug(f"Message '{message.id}' pushed to queue '{queue_name}'")
        return True

    def pull(self, queue_name: str) -> Message | None:
        """Get the first visible message of the queue, making it invisible for the configured
        invisibility duration. Returns 'None' if there're no visible messages"""
        validate_queue_name(queue_name)

        with self._locked_operation("pull", queue_name):
            if not self._store.exists(queue_name):
                return None

            messages = self._store.read_all(queue_name)
            reference = now()
            index = find_visible_index(messages, reference)
            if index is None:
                return None

            pulled_message = messages[index].with_visible_from(
                reference + self.invisibility_duration
            )
            messages[index] = pulled_message
            self._store.overwrite_all(queue_name, messages)

        _logger.debug(f"Message '{pulled_message.id}' pulled from queue '{queue_name}'")
        return pulled_message

    def delete(self, queue_name: str, message: Message) -> bool:
        """Delete every message in the queue with the same receipt handle as the provided
        message. Returns 'True' if any message was removed"""
        validate_queue_name(queue_name)
        validate_message(message)
        validate_receipt_handle(message.receipt_handle)

        with self._locked_operation("delete", queue_name):
            if not self._store.exists(queue_name):
                return False

            messages = self._store.read_all(queue_name)
            remaining_messages = [
                stored_message
                for stored_message in messages
                if stored_message.receipt_handle != message.receipt_handle
            ]
            self._store.overwrite_all(queue_name, remaining_messages)

        deleted = len(remaining_messages) < len(messages)
        if deleted:
            _logger.debug(f"Message '{message.receipt_handle}' deleted from queue '{queue_name}'")
        return deleted
