import logging
import sys

import message_queue as message_queue
import utils.log as log
from base_exception import BaseQueueException
from utils.time import format_datetime_iso, now

_logger = logging.getLogger("main")

USAGE = """Usage:
  main.py push <queue> <content>
  main.py pull <queue>
  main.py delete <queue> <receipt_handle>"""


def push(queue_name: str, content: str) -> None:
    message = message_queue.Message.create(content)
    message_queue.push(queue_name, message)
    print(f"id: {message.id}")
    print(f"receipt_handle: {message.receipt_handle}")


def pull(queue_name: str) -> None:
    message = message_queue.pull(queue_name)
    if message is None:
        print("No visible message")
        return

    print(f"id: {message.id}")
    print(f"receipt_handle: {message.receipt_handle}")
    print(f"visible_from: {format_datetime_iso(message.visible_from)}")
    print(f"content: {message.content}")


def delete(queue_name: str, receipt_handle: str) -> None:
    # Only the receipt handle is used to identify the message to be deleted
    message = message_queue.Message(
        id="", receipt_handle=receipt_handle, content="", visible_from=now()
    )
    if message_queue.delete(queue_name, message):
        print("Deleted")
    else:
        print("Not found")


COMMANDS = {
    "push": (push, 2),
    "pull": (pull, 1),
    "delete": (delete, 2),
}


def main(args: list[str]) -> int:
    if len(args) == 0 or args[0] not in COMMANDS:
        print(USAGE)
        return 2

    command, params = args[0], args[1:]
    function, params_count = COMMANDS[command]
    if len(params) != params_count:
        print(USAGE)
        return 2

    log.setup()
    message_queue.init()

    try:
        function(*params)
    except (BaseQueueException, ValueError) as e:
        _logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
