from .message import Message

INVALID_QUEUE_NAME = "queue_name must not be empty"
INVALID_MESSAGE = "message must not be None"
INVALID_RECEIPT_HANDLE = "receipt handle must not be empty"


def validate_queue_name(queue_name: str) -> None:
    if not queue_name:
        raise ValueError(INVALID_QUEUE_NAME)


def validate_message(message: Message | None) -> None:
    if message is None:
        raise ValueError(INVALID_MESSAGE)


def validate_receipt_handle(receipt_handle: str | None) -> None:
    if not receipt_handle:
        raise ValueError(INVALID_RECEIPT_HANDLE)
