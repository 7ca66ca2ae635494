import json
import logging
import sys
from typing import Any, Dict

REDACTED = "***"
SECRET_PARAMS = ("apiKey", "apikey", "api_key")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if hasattr(record, "extra") and isinstance(record.extra, dict):
            payload.update(record.extra)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger()
    if logger.handlers:
        logger.setLevel(level)
        return logger
    logger.setLevel(level)
    # stderr keeps stdout free for the final run summary
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger


def log_json(logger: logging.Logger, msg: str, level: int = logging.INFO, **extra: Any) -> None:
    logger.log(level, msg, extra={"extra": extra})


def redact_params(params: Dict[str, Any]) -> Dict[str, Any]:
    return {k: (REDACTED if k in SECRET_PARAMS else v) for k, v in params.items()}
