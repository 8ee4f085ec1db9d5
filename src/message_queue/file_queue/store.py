"""
Storage of the messages of each queue, with one file per queue at `<path>/<queue_name>/messages`.
No locking is done here, so callers must hold the queue lock before changing a queue.
"""

import logging
import os
from typing import Iterable

from message_queue.message import Message

from . import codec

MESSAGES_FILE_NAME = "messages"
TEMPORARY_SUFFIX = ".tmp"
ENCODING = "utf-8"

_logger = logging.getLogger("file_queue_store")


class QueueStore:
    _path: str

    def __init__(self, path: str) -> None:
        self._path = path

    def messages_path(self, queue_name: str) -> str:
        return os.path.join(self._path, queue_name, MESSAGES_FILE_NAME)

    def exists(self, queue_name: str) -> bool:
        return os.path.isfile(self.messages_path(queue_name))

    def create(self, queue_name: str) -> None:
        """Create an empty messages file for the queue. Fails if it already exists"""
        messages_path = self.messages_path(queue_name)
        os.makedirs(os.path.dirname(messages_path), exist_ok=True)
        with open(messages_path, "x", encoding=ENCODING):
            pass
        _logger.info(f"Queue '{queue_name}' created", extra={"queue_name": queue_name})

    def read_all(self, queue_name: str) -> list[Message]:
        # Only "\n" ends a record, other line boundaries are part of the content
        with open(self.messages_path(queue_name), "r", encoding=ENCODING) as file:
            return [codec.decode(line) for line in file.read().split("\n") if line]

    def append_one(self, queue_name: str, message: Message) -> None:
        with open(self.messages_path(queue_name), "a", encoding=ENCODING) as file:
            file.write(codec.encode(message) + "\n")

    def overwrite_all(self, queue_name: str, messages: Iterable[Message]) -> None:
        """Replace the queue content with the provided messages. The new content is written to a
        temporary file that then replaces the messages file, so readers never see a partial
        write"""
        messages_path = self.messages_path(queue_name)
        temporary_path = messages_path + TEMPORARY_SUFFIX

        with open(temporary_path, "w", encoding=ENCODING) as file:
            file.writelines(codec.encode(message) + "\n" for message in messages)
        os.replace(temporary_path, messages_path)
