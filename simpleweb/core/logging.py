"""Structured logging setup for SimpleWeb.

All modules log through structlog (``get_logger(__name__)``) using
snake_case event names and key/value context. ``setup_logging`` routes
structlog through the standard library so third-party loggers (uvicorn,
httpx) end up in the same handlers.
"""

import logging
from pathlib import Path
from typing import Any

import structlog
from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme


# Custom theme for the console handler
CUSTOM_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "critical": "bold white on red",
        "debug": "dim white",
        "timestamp": "dim cyan",
        "path": "dim blue",
    }
)

_SHARED_PROCESSORS: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
]


def setup_logging(
    json_logs: bool = False,
    log_level_name: str = "INFO",
    log_file: str | Path | None = None,
    console_width: int | None = None,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        json_logs: Render log lines as JSON instead of the Rich console format
        log_level_name: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a file receiving JSON log lines
        console_width: Optional console width override for Rich output
    """
    level = getattr(logging, log_level_name.upper(), logging.INFO)

    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )

    handlers: list[logging.Handler] = []

    if json_logs:
        console_handler: logging.Handler = logging.StreamHandler()
        console_handler.setFormatter(_json_formatter())
    else:
        console_handler = RichHandler(
            console=Console(theme=CUSTOM_THEME, width=console_width),
            show_time=False,
            show_path=level <= logging.DEBUG,
            rich_tracebacks=True,
            markup=False,
        )
        console_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=_SHARED_PROCESSORS,
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.dev.ConsoleRenderer(colors=False),
                ],
            )
        )
    handlers.append(console_handler)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(_json_formatter())
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    # Quiet down noisy libraries
    for logger_name in ["httpx", "httpcore", "multipart"]:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def _json_formatter() -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_SHARED_PROCESSORS,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to ``name``.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog bound logger
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]
