from typing import Protocol

from .message import Message


class Queue(Protocol):
    def push(self, queue_name: str, message: Message) -> bool: ...

    def pull(self, queue_name: str) -> Message | None: ...

    def delete(self, queue_name: str, message: Message) -> bool: ...
