"""Structured logging for fundmetrics.

Every module takes its logger from ``LoggerFactory.get_logger()`` and emits
dotted event names with keyword context:

    logger.warning("analysis.insufficient_history", fund_id="flexicap", observations=12)

Events travel through structlog into the stdlib ``logging`` root, where two
handlers may pick them up:

- console (always): stderr, coloured one-line text or JSON
- file (opt-in): JSON lines, optionally rotated

stdout is left to the CLI tables.
"""

import inspect
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Literal

import structlog
from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_LOG_FILE = Path("logs/fundmetrics.log")
TIMESTAMP_KEY = "log_timestamp"  # "date" is taken by NAV observations

_LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"
_DIM = "\033[90m"


class LoggingConfig(BaseModel):
    """Logging settings (the ``logging`` section of system.yaml).

    What each level carries in this project:

    - INFO: batch analysis started / completed
    - DEBUG: skipped periods, Sortino without downside, loaded files
    - WARNING: short histories, benchmark length mismatches, funds
      missing the ranking period
    - ERROR: a fund that failed during batch analysis

    ``timestamp_format`` values, for 2025-10-22 20:50:07.288 UTC:

    - iso: 2025-10-22T20:50:07.288824+00:00
    - compact: 251022-205007.28
    - time: 20:50:07.28
    - short: 1022T205007
    """

    level: LogLevel = Field(default="INFO", description="Console threshold")
    format: Literal["console", "json"] = Field(default="console", description="Console rendering")
    timestamp_format: Literal["iso", "compact", "time", "short"] = Field(default="compact")
    enable_file: bool = Field(default=False, description="Also write JSON lines to a file")
    file_path: Path | None = Field(default=None, description=f"Log file; {DEFAULT_LOG_FILE} when unset")
    file_level: LogLevel = Field(default="WARNING", description="File threshold")
    file_rotation: bool = Field(default=True, description="Rotate the file by size")
    max_file_size_mb: int = Field(default=10, description="Rotation size")
    backup_count: int = Field(default=3, description="Rotated files kept")


def _format_timestamp(now: datetime, fmt: str) -> str:
    centis = now.microsecond // 10000
    if fmt == "compact":
        return now.strftime(f"%y%m%d-%H%M%S.{centis:02d}")
    if fmt == "time":
        return now.strftime(f"%H:%M:%S.{centis:02d}")
    if fmt == "short":
        return now.strftime("%m%dT%H%M%S")
    return now.isoformat()


class LoggerFactory:
    """
    Process-wide logging setup.

    ``configure()`` is called by the CLI once the system config is known;
    library modules call ``get_logger()`` at import time, which falls back
    to defaults if nothing was configured yet.

    Example:
        LoggerFactory.configure(LoggingConfig(level="DEBUG"))
        logger = LoggerFactory.get_logger()
        logger.info("analysis.completed", analysed=10, skipped=2)
    """

    _config: LoggingConfig | None = None
    _configured: bool = False

    @classmethod
    def configure(cls, config: LoggingConfig | None = None) -> None:
        """Install handlers on the root logger and point structlog at them."""
        config = config if config is not None else LoggingConfig()
        cls._config = config

        pre_chain = cls._build_common_processors(config.timestamp_format)

        handlers: list[logging.Handler] = [cls._console_handler(config, pre_chain)]
        root_level = getattr(logging, config.level)

        if config.enable_file:
            if config.file_path is None:
                config.file_path = DEFAULT_LOG_FILE
            handlers.append(cls._file_handler(config, pre_chain))
            root_level = min(root_level, getattr(logging, config.file_level))

        logging.basicConfig(level=root_level, handlers=handlers, force=True)

        if config.format == "console":
            exception_processors: list[Any] = [
                structlog.dev.set_exc_info,
                structlog.processors.ExceptionRenderer(structlog.dev.plain_traceback),  # type: ignore[arg-type]
            ]
        else:
            exception_processors = [structlog.processors.format_exc_info]

        structlog.configure(
            processors=[*pre_chain, *exception_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        cls._configured = True

    @classmethod
    def _build_common_processors(cls, timestamp_format: str) -> list[Any]:
        """Enrichment shared by structlog events and foreign stdlib records."""
        return [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            cls._get_timestamper(timestamp_format),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
        ]

    @staticmethod
    def _get_timestamper(fmt: str) -> Callable[[Any, str, dict[str, Any]], dict[str, Any]]:
        """Processor stamping each event with a UTC time under ``TIMESTAMP_KEY``."""

        def stamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
            event_dict[TIMESTAMP_KEY] = _format_timestamp(datetime.now(timezone.utc), fmt)
            return event_dict

        return stamp

    @staticmethod
    def _custom_console_renderer() -> Callable[[Any, str, dict[str, Any]], str]:
        """One line per event: time, [level], event | sorted key=value (module:line)."""

        def render(logger: Any, name: str, event_dict: dict[str, Any]) -> str:
            timestamp = event_dict.pop(TIMESTAMP_KEY, "")
            level = event_dict.pop("level", "info").upper()
            event = event_dict.pop("event", "")
            filename = event_dict.pop("filename", "")
            lineno = event_dict.pop("lineno", "")
            logger_name = event_dict.pop("logger", "")

            parts = [timestamp, f"[{_LEVEL_COLORS.get(level, '')}{level.lower()}{_RESET}]", event]

            context = " ".join(f"{k}={v}" for k, v in sorted(event_dict.items()) if not k.startswith("_"))
            if context:
                parts.append(f"{_DIM}|{_RESET} {context}")

            if filename and lineno:
                origin = logger_name if logger_name and logger_name != "fundmetrics" else Path(filename).stem
                parts.append(f"{_DIM}({origin}:{lineno}){_RESET}")

            return " ".join(parts)

        return render

    @classmethod
    def _console_handler(cls, config: LoggingConfig, pre_chain: list[Any]) -> logging.Handler:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setLevel(getattr(logging, config.level))

        renderer: Any
        if config.format == "console":
            renderer = cls._custom_console_renderer()
        else:
            renderer = structlog.processors.JSONRenderer()
        handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain))
        return handler

    @classmethod
    def _file_handler(cls, config: LoggingConfig, pre_chain: list[Any]) -> logging.Handler:
        """JSON-lines file handler; creates the parent directory."""
        path = config.file_path if config.file_path is not None else DEFAULT_LOG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)

        handler: logging.Handler
        if config.file_rotation:
            handler = RotatingFileHandler(
                filename=str(path),
                maxBytes=config.max_file_size_mb * 1024 * 1024,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        else:
            handler = logging.FileHandler(filename=str(path), encoding="utf-8")

        handler.setLevel(getattr(logging, config.file_level))
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.processors.JSONRenderer(),
                foreign_pre_chain=pre_chain,
            )
        )
        return handler

    @classmethod
    def get_logger(cls, name: str | None = None):
        """
        Logger for ``name``, defaulting to the caller's module name.

        Configures logging with defaults on first use.
        """
        if not cls._configured:
            cls.configure()

        if name is None:
            caller = inspect.currentframe()
            caller = caller.f_back if caller is not None else None
            name = caller.f_globals.get("__name__", "fundmetrics") if caller is not None else "fundmetrics"

        return structlog.get_logger(name)

    @classmethod
    def get_config(cls) -> LoggingConfig:
        """Active configuration, or the defaults before configure()."""
        return cls._config if cls._config is not None else LoggingConfig()

    @classmethod
    def is_configured(cls) -> bool:
        return cls._configured

    @classmethod
    def reset(cls) -> None:
        """Drop all root handlers and structlog configuration (tests)."""
        root = logging.getLogger()
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        root.setLevel(logging.NOTSET)
        cls._config = None
        cls._configured = False
        structlog.reset_defaults()
