import datetime
import logging
from typing import Any, Literal

from pydantic.dataclasses import dataclass

from message_queue.message import Message
from message_queue.validation import (
    validate_message,
    validate_queue_name,
    validate_receipt_handle,
)
from utils.time import now

from .aws_client import aws_client

_logger = logging.getLogger("sqs_queue")


@dataclass
class SQSQueueConfig:
    type: Literal["sqs"]
    region: str | None = None
    invisibility_duration: int = 30
    wait_message_time: int = 0


class SQSQueue:
    """Adapter to AWS SQS. The queue name used in the operations is the queue URL"""

    _config: SQSQueueConfig
    _aws_client_params: dict[str, str]

    def __init__(self, config: dict[str, Any]) -> None:
        self._config = SQSQueueConfig(**config)
        self._aws_client_params = {
            "credential_name": "application",
            "service": "sqs",
        }
        if self._config.region:
            self._aws_client_params["region_name"] = self._config.region

    def push(self, queue_name: str, message: Message) -> bool:
        """Send a message to the queue"""
        validate_queue_name(queue_name)
        validate_message(message)

        with aws_client(**self._aws_client_params) as client:
            client.send_message(QueueUrl=queue_name, MessageBody=message.content)
        return True

    def pull(self, queue_name: str) -> Message | None:
        """Get a message from the queue"""
        validate_queue_name(queue_name)

        with aws_client(**self._aws_client_params) as client:
            response = client.receive_message(
                QueueUrl=queue_name,
                MaxNumberOfMessages=1,
                VisibilityTimeout=self._config.invisibility_duration,
                WaitTimeSeconds=self._config.wait_message_time,
            )

        if not response.get("Messages"):
            _logger.debug(f"No messages received from queue '{queue_name}'")
            return None

        sqs_message = response["Messages"][0]
        return Message(
            id=sqs_message["MessageId"],
            receipt_handle=sqs_message["ReceiptHandle"],
            content=sqs_message["Body"],
            visible_from=now() + datetime.timedelta(seconds=self._config.invisibility_duration),
        )

    def delete(self, queue_name: str, message: Message) -> bool:
        """Delete a message from the queue"""
        validate_queue_name(queue_name)
        validate_message(message)
        validate_receipt_handle(message.receipt_handle)

        with aws_client(**self._aws_client_params) as client:
            client.delete_message(QueueUrl=queue_name, ReceiptHandle=message.receipt_handle)
        return True
