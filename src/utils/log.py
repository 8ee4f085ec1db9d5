import json
import logging

from configs import configs

# Attributes that queue loggers attach through 'extra' and that are exported by the JSON formatter
CONTEXT_FIELDS = ("queue_name", "operation")


class FriendlyFormatter(logging.Formatter):
    GREY = "\x1b[38;20m"
    YELLOW = "\x1b[33;20m"
    RED = "\x1b[31;20m"
    BOLD_RED = "\x1b[31;1m"
    RESET_COLOR = "\x1b[0m"

    COLOR_FORMAT = {
        logging.DEBUG: (GREY, RESET_COLOR),
        logging.INFO: (GREY, RESET_COLOR),
        logging.WARNING: (YELLOW, RESET_COLOR),
        logging.ERROR: (RED, RESET_COLOR),
        logging.CRITICAL: (BOLD_RED, RESET_COLOR),
    }

    _formatter: logging.Formatter

    def __init__(self, log_format: str | None = None) -> None:
        """Initialize the log formatter."""
        super().__init__()
        if log_format is None:
            log_format = "%(asctime)s [%(levelname)s]: %(message)s"

        self._formatter = logging.Formatter(log_format)

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with a color based on its level"""
        prefix, suffix = self.COLOR_FORMAT.get(record.levelno, ("", ""))
        return prefix + self._formatter.format(record) + suffix


class JsonFormatter(logging.Formatter):
    fields: dict[str, str]

    def __init__(self, fields: dict[str, str] | None = None) -> None:
        """Initialize the JSON log formatter."""
        super().__init__()
        if fields is None:
            fields = {"message": "message"}

        self.fields = fields

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a JSON object, including the queue context when the record
        has it"""
        record.message = record.getMessage()
        message_dict = {
            key: getattr(record, record_field) for key, record_field in self.fields.items()
        }

        for context_field in CONTEXT_FIELDS:
            value = getattr(record, context_field, None)
            if value is not None:
                message_dict.setdefault(context_field, value)

        if record.exc_info:
            message_dict["exception"] = self.formatException(record.exc_info)

        return json.dumps(message_dict, default=str)


def setup(level: int = logging.INFO) -> None:
    """Setup the logging"""
    stream = logging.StreamHandler()
    stream.setLevel(level)
    if configs.logging.mode == "friendly":
        stream.setFormatter(FriendlyFormatter(configs.logging.format))
    elif configs.logging.mode == "json":
        stream.setFormatter(JsonFormatter(configs.logging.fields))
    else:
        raise ValueError(f"Unknown logging mode: '{configs.logging.mode}'")

    logging.basicConfig(level=level, handlers=[stream])
