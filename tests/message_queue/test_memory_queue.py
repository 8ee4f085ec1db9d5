import datetime
import threading
import time

import pytest

from message_queue.memory_queue import MemoryQueue, MemoryQueueRegistry
from message_queue.message import Message
from utils.time import now


@pytest.fixture(scope="function")
def registry() -> MemoryQueueRegistry:
    return MemoryQueueRegistry()


@pytest.fixture(scope="function")
def queue(registry) -> MemoryQueue:
    return MemoryQueue(config={"type": "memory", "invisibility_duration": 10}, registry=registry)


def test_registry_get(registry):
    """'get' should only create the queue bucket when requested"""
    assert registry.get("orders") is None

    bucket = registry.get("orders", create=True)

    assert bucket is not None
    assert registry.get("orders") is bucket
    assert registry.get("payments") is None


def test_push(registry, queue):
    """'push' should create the queue and append the message"""
    message = Message.create("hello1")

    assert queue.push("orders", message) is True

    bucket = registry.get("orders")
    assert bucket is not None
    assert bucket.messages == [message]


def test_pull(queue):
    """'pull' should return the first visible message, making it invisible"""
    message = Message.create("hello1")
    queue.push("orders", message)

    before_pull = now()
    pulled_message = queue.pull("orders")

    assert pulled_message is not None
    assert pulled_message.id == message.id
    assert pulled_message.visible_from >= before_pull + queue.invisibility_duration
    assert queue.pull("orders") is None


def test_pull_does_not_change_pushed_message(queue):
    """'pull' should not change the message object that was pushed"""
    message = Message.create("hello1")
    visible_from = message.visible_from
    queue.push("orders", message)

    queue.pull("orders")

    assert message.visible_from == visible_from


@pytest.mark.flaky(reruns=2)
def test_pull_message_visible_again(registry):
    """'pull' should return a message again after its invisibility duration is over"""
    queue = MemoryQueue(config={"type": "memory", "invisibility_duration": 0.1}, registry=registry)
    queue.push("orders", Message.create("hello1"))

    assert queue.pull("orders") is not None
    assert queue.pull("orders") is None
    time.sleep(0.2)
    assert queue.pull("orders") is not None


def test_pull_fifo(queue):
    """'pull' should return the messages in the order they were pushed"""
    queue.push("orders", Message.create("hello1"))
    queue.push("orders", Message.create("hello2"))

    message_1 = queue.pull("orders")
    message_2 = queue.pull("orders")

    assert message_1 is not None and message_1.content == "hello1"
    assert message_2 is not None and message_2.content == "hello2"


def test_pull_skips_invisible_messages(queue):
    """'pull' should skip messages that are not visible yet"""
    queue.push(
        "orders", Message.create("hello1").with_visible_from(now() + datetime.timedelta(minutes=1))
    )
    queue.push("orders", Message.create("hello2"))

    pulled_message = queue.pull("orders")

    assert pulled_message is not None
    assert pulled_message.content == "hello2"


def test_pull_queue_not_exists(queue):
    """'pull' should return 'None' if the queue doesn't exist"""
    assert queue.pull("orders") is None


def test_delete(queue):
    """'delete' should remove the message, returning 'True' only once"""
    queue.push("orders", Message.create("hello1"))
    pulled_message = queue.pull("orders")
    assert pulled_message is not None

    assert queue.delete("orders", pulled_message) is True
    assert queue.delete("orders", pulled_message) is False


def test_delete_queue_not_exists(queue):
    """'delete' should return 'False' if the queue doesn't exist"""
    assert queue.delete("orders", Message.create("hello1")) is False


def test_scenario(queue):
    """Pull should respect the visibility of pulled messages and deleted messages should be
    removed"""
    queue.push("q", Message.create("hello1"))
    queue.push("q", Message.create("hello2"))

    message_1 = queue.pull("q")
    message_2 = queue.pull("q")
    assert message_1 is not None and message_1.content == "hello1"
    assert message_2 is not None and message_2.content == "hello2"

    assert queue.delete("q", message_2) is True
    assert queue.pull("q") is None


def test_shared_registry(registry):
    """Queues sharing a registry should see the same messages, while queues with different
    registries should not"""
    config = {"type": "memory"}
    producer = MemoryQueue(config=config, registry=registry)
    consumer = MemoryQueue(config=config, registry=registry)
    other_consumer = MemoryQueue(config=config, registry=MemoryQueueRegistry())

    producer.push("orders", Message.create("hello1"))

    assert other_consumer.pull("orders") is None
    assert consumer.pull("orders") is not None


@pytest.mark.parametrize(
    "operation, args, error_message",
    [
        ("push", ("", Message.create("hello")), "queue_name must not be empty"),
        ("push", ("orders", None), "message must not be None"),
        ("pull", ("",), "queue_name must not be empty"),
        ("delete", ("", Message.create("hello")), "queue_name must not be empty"),
        ("delete", ("orders", None), "message must not be None"),
        (
            "delete",
            ("orders", Message(id="id", receipt_handle="", content="a", visible_from=now())),
            "receipt handle must not be empty",
        ),
    ],
)
def test_invalid_arguments(queue, operation, args, error_message):
    """Operations should raise a ValueError for invalid arguments"""
    with pytest.raises(ValueError, match=error_message):
        getattr(queue, operation)(*args)


def test_concurrent_push(registry, queue):
    """Concurrent pushes should store every message"""
    messages = [Message.create(f"message {i}") for i in range(100)]

    threads = [threading.Thread(target=queue.push, args=("orders", m)) for m in messages]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    bucket = registry.get("orders")
    assert bucket is not None
    assert sorted(message.id for message in bucket.messages) == sorted(
        message.id for message in messages
    )
