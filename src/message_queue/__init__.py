from configs import configs

from .exceptions import LockTimeoutError, MessageDecodeError, QueueError
from .file_queue import FileQueue
from .memory_queue import MemoryQueue, MemoryQueueRegistry
from .message import Message
from .protocols import Queue
from .sqs_queue import SQSQueue

queue: Queue


def init() -> None:
    """Initialize the queue backend configured in 'application_queue'"""
    global queue

    queue_type = configs.application_queue["type"]

    if queue_type == "file":
        queue = FileQueue(config=configs.application_queue)
    elif queue_type == "memory":
        queue = MemoryQueue(config=configs.application_queue, registry=MemoryQueueRegistry())
    elif queue_type == "sqs":
        queue = SQSQueue(config=configs.application_queue)
    else:
        raise ValueError(f"Invalid queue type '{queue_type}'")


def push(queue_name: str, message: Message) -> bool:
    """Push a message to the queue"""
    return queue.push(queue_name, message)


def pull(queue_name: str) -> Message | None:
    """Pull the first visible message from the queue"""
    return queue.pull(queue_name)


def delete(queue_name: str, message: Message) -> bool:
    """Delete a message from the queue"""
    return queue.delete(queue_name, message)


__all__ = [
    "delete",
    "init",
    "LockTimeoutError",
    "Message",
    "MessageDecodeError",
    "pull",
    "push",
    "Queue",
    "QueueError",
]
