from __future__ import annotations

import dataclasses
import datetime
import uuid
from typing import Sequence

from utils.time import now


@dataclasses.dataclass(frozen=True)
class Message:
    """Message exchanged through a queue.
    - `id`: Unique identifier assigned when the message is created.
    - `receipt_handle`: Unique token used to delete this message from the queue.
    - `content`: The text payload.
    - `visible_from`: The message can only be pulled when the current time reaches this
    timestamp. Every pull moves it into the future by the queue's invisibility duration.
    """

    id: str
    receipt_handle: str
    content: str
    visible_from: datetime.datetime

    @classmethod
    def create(cls, content: str) -> Message:
        """Create a new message, visible immediately"""
        return cls(
            id=str(uuid.uuid4()),
            receipt_handle=str(uuid.uuid4()),
            content=content,
            visible_from=now(),
        )

    def is_visible(self, reference: datetime.datetime | None = None) -> bool:
        if reference is None:
            reference = now()
        return self.visible_from <= reference

    def with_visible_from(self, visible_from: datetime.datetime) -> Message:
        """Return a copy of the message with a new visibility timestamp"""
        return dataclasses.replace(self, visible_from=visible_from)


def find_visible_index(
    messages: Sequence[Message], reference: datetime.datetime | None = None
) -> int | None:
    """Get the index of the first visible message, keeping the queue order"""
    if reference is None:
        reference = now()

    for index, message in enumerate(messages):
        if message.is_visible(reference):
            return index
    return None
