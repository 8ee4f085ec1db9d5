"""
Inter-process lock for a queue, built on the atomic creation of a directory. Creating the lock
marker directory fails if it already exists, so only one holder can create it at a time. The
marker is removed when the holder releases the lock.

If a process dies while holding the lock, the marker is left behind and every operation on that
queue will time out until the marker directory is removed manually.
"""

import logging
import os
import time
from contextlib import contextmanager
from typing import Generator

import prometheus_client

from message_queue.exceptions import LockTimeoutError

LOCK_MARKER_NAME = ".lock"

_logger = logging.getLogger("file_queue_lock")

prometheus_lock_timeout_count = prometheus_client.Counter(
    "queue_lock_timeout_count",
    "Count of times a queue lock couldn't be acquired before the timeout",
)


class LockManager:
    _path: str
    _timeout: float
    _retry_interval: float

    def __init__(self, path: str, timeout: float = 10, retry_interval: float = 0.05) -> None:
        self._path = path
        self._timeout = timeout
        self._retry_interval = retry_interval

    def lock_path(self, queue_name: str) -> str:
        return os.path.join(self._path, queue_name, LOCK_MARKER_NAME)

    def acquire(self, queue_name: str) -> None:
        """Try to create the lock marker for the queue until it succeeds or the timeout is
        reached, raising a 'LockTimeoutError' in the latter"""
        lock_path = self.lock_path(queue_name)
        os.makedirs(os.path.dirname(lock_path), exist_ok=True)

        deadline = time.monotonic() + self._timeout
        while True:
            try:
                os.mkdir(lock_path)
                return
            except FileExistsError:
                pass

            if time.monotonic() >= deadline:
                prometheus_lock_timeout_count.inc()
                _logger.warning(
                    f"Lock for queue '{queue_name}' not acquired after {self._timeout} seconds",
                    extra={"queue_name": queue_name},
                )
                raise LockTimeoutError(queue_name, lock_path, self._timeout)

            _logger.debug(f"Queue '{queue_name}' is locked, waiting")
            time.sleep(self._retry_interval)

    def release(self, queue_name: str) -> None:
        lock_path = self.lock_path(queue_name)
        try:
            os.rmdir(lock_path)
        except FileNotFoundError:
            _logger.warning(
                f"Lock marker '{lock_path}' was already removed", extra={"queue_name": queue_name}
            )

    @contextmanager
    def hold(self, queue_name: str) -> Generator[None, None, None]:
        """Hold the queue lock while in the context. The lock is always released when leaving
        the context, but only if it was acquired"""
        self.acquire(queue_name)
        try:
            yield
        finally:
            self.release(queue_name)
