"""
Line format of the file queue store. Each message is stored as a single line with 4 fields:
`<visible_from as epoch milliseconds>:<receipt handle>:<id>:<content>`

The fields are not escaped, so a message content with the delimiter or a line break can't be
stored. Messages with this kind of content are rejected by 'validate_content'.
"""

from message_queue.exceptions import MessageDecodeError
from message_queue.message import Message
from utils.time import from_epoch_millis, to_epoch_millis

DELIMITER = ":"
FIELDS_COUNT = 4

INVALID_CONTENT = f"message content must not contain '{DELIMITER}' or line breaks"


def validate_content(content: str) -> None:
    if DELIMITER in content or "\n" in content or "\r" in content:
        raise ValueError(INVALID_CONTENT)


def encode(message: Message) -> str:
    return DELIMITER.join(
        [
            str(to_epoch_millis(message.visible_from)),
            message.receipt_handle,
            message.id,
            message.content,
        ]
    )


def decode(line: str) -> Message:
    fields = line.split(DELIMITER)
    if len(fields) != FIELDS_COUNT:
        raise MessageDecodeError(
            f"Expected {FIELDS_COUNT} fields in line, got {len(fields)}: '{line}'"
        )

    epoch_millis, receipt_handle, message_id, content = fields
    try:
        visible_from = from_epoch_millis(int(epoch_millis))
    except ValueError:
        raise MessageDecodeError(f"Invalid timestamp '{epoch_millis}' in line: '{line}'")

    return Message(
        id=message_id,
        receipt_handle=receipt_handle,
        content=content,
        visible_from=visible_from,
    )
