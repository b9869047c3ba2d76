import json
import logging
from logging.config import dictConfig


def setup_logging(fmt: str = "plain", level: str = "WARNING") -> None:
    formatter = "json" if fmt == "json" else "plain"
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": JsonFormatter,
                },
                "plain": {
                    "format": "%(levelname)s %(name)s: %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter,
                    "stream": "ext://sys.stderr",
                },
            },
            "root": {
                "level": "WARNING",
                "handlers": ["console"],
            },
            "loggers": {
                "r2cli": {
                    "level": level.upper(),
                    "propagate": True,
                },
                "botocore": {
                    "level": "WARNING",
                },
            },
        }
    )


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)
