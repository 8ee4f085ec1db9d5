from .file_queue import FileQueue, FileQueueConfig
from .lock import LockManager
from .store import QueueStore

__all__ = [
    "FileQueue",
    "FileQueueConfig",
    "LockManager",
    "QueueStore",
]
