from base_exception import BaseQueueException


class QueueError(BaseQueueException):
    """Storage fault while running a queue operation. The original exception is available in
    'cause' and as '__cause__'"""

    operation: str
    queue_name: str
    cause: Exception

    def __init__(self, operation: str, queue_name: str, cause: Exception) -> None:
        super().__init__(f"Error while running '{operation}' on queue '{queue_name}': {cause}")
        self.operation = operation
        self.queue_name = queue_name
        self.cause = cause


class LockTimeoutError(BaseQueueException):
    queue_name: str
    lock_path: str
    timeout: float

    def __init__(self, queue_name: str, lock_path: str, timeout: float) -> None:
        super().__init__(
            f"Timed out after {timeout} seconds waiting for the lock of queue '{queue_name}'. "
            f"If no process is using the queue, remove '{lock_path}'"
        )
        self.queue_name = queue_name
        self.lock_path = lock_path
        self.timeout = timeout


class MessageDecodeError(BaseQueueException):
    pass
