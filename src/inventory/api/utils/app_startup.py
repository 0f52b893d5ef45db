"""Loguru setup for the API process.

Every record carries the request fields bound by the request middleware
(``request_id``, ``method``, ``path``); records logged outside a request get
``-`` for each. Standard-library loggers (uvicorn, SQLAlchemy) are routed into
loguru so that one set of sinks sees everything.
"""

import logging
import sys
from pathlib import Path

from loguru import logger

from src.inventory.runtime.config.config_data import LoggingConfig
from src.inventory.runtime.context import get_config

REQUEST_FIELDS = ("request_id", "method", "path")

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> "
    "<level>{level: <8}</level> "
    "<cyan>{extra[request_id]}</cyan> "
    "<magenta>{extra[method]} {extra[path]}</magenta> "
    "{name}:{line} - <level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{extra[request_id]} | {extra[method]} {extra[path]} | "
    "{name}:{function}:{line} - {message}"
)

# Quiet by default; uvicorn.access is replaced by the request middleware
_STDLIB_LEVELS = {
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "uvicorn": logging.INFO,
    "uvicorn.error": logging.INFO,
    "uvicorn.access": logging.CRITICAL,
}


def _fill_request_fields(record) -> None:
    for field in REQUEST_FIELDS:
        record["extra"].setdefault(field, "-")


class InterceptHandler(logging.Handler):
    """Forward standard ``logging`` records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        if record.name == "uvicorn.access":
            return

        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def _add_file_sink(cfg: LoggingConfig, verbose_errors: bool) -> None:
    path = Path(cfg.file)
    path.parent.mkdir(parents=True, exist_ok=True)
    as_json = cfg.format == "json"
    logger.add(
        str(path),
        level=cfg.level,
        format="{message}" if as_json else FILE_FORMAT,
        serialize=as_json,
        rotation=f"{cfg.max_size_mb} MB",
        retention=cfg.backup_count,
        compression="zip",
        enqueue=True,
        backtrace=verbose_errors,
        diagnose=verbose_errors,
    )


def _route_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in list(logging.root.manager.loggerDict):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True
    for name, level in _STDLIB_LEVELS.items():
        logging.getLogger(name).setLevel(level)


def configure_logging() -> None:
    """Install the console sink, the optional file sink and stdlib routing."""
    config = get_config()
    cfg = config.logging
    verbose_errors = config.app.environment != "production"

    logger.remove()
    logger.configure(patcher=_fill_request_fields)
    logger.add(
        sys.stderr,
        level=cfg.level,
        format=CONSOLE_FORMAT,
        colorize=True,
        backtrace=verbose_errors,
        diagnose=verbose_errors,
    )
    if cfg.file:
        _add_file_sink(cfg, verbose_errors)
    _route_stdlib_logging()

    logger.bind(
        level=cfg.level, format=cfg.format, file=cfg.file
    ).info("Logging configured for {} environment", config.app.environment)
