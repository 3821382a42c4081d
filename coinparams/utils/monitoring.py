"""Logging set-up and structured logging helpers."""

from __future__ import annotations

import json
import logging
import traceback
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..config import Settings
    from ..schemas import CoinConfig

PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = traceback.format_exception(*record.exc_info)

        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            log_data.update(extra_fields)

        return json.dumps(log_data, default=str)


class StructuredLogger:
    """Logger that attaches keyword arguments as extra JSON fields."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def log(self, level: str, message: str, **kwargs: Any) -> None:
        log_level = getattr(logging, level.upper(), logging.INFO)
        if kwargs:
            self.logger.log(log_level, message, extra={"extra_fields": kwargs})
        else:
            self.logger.log(log_level, message)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log("info", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log("warning", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log("error", message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log("debug", message, **kwargs)


def configure_logging(settings: Settings, logger_name: str = "coinparams") -> logging.Logger:
    """Install one stream handler on the package logger.

    Calling it again replaces the handler instead of stacking another one.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(settings.LOG_LEVEL)

    for handler in list(logger.handlers):
        if getattr(handler, "_coinparams_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    if settings.LOG_FORMAT == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    handler._coinparams_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger


def log_config_summary(config: CoinConfig, logger: StructuredLogger | None = None) -> None:
    """Emit one record describing the active configuration."""
    logger = logger or StructuredLogger("coinparams")
    logger.info(
        "Coin parameters active",
        coin=config.symbol,
        network=config.network_mode.value,
        address_prefix=config.address_prefix,
        fee_per_kb=str(config.fee_per_kb),
        dust_threshold=str(config.dust_threshold),
        debug_mode=config.debug_mode,
    )
