import json
import logging
import sys
import time
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

API_LOGGER_NAME = "fxconvert.api"
SYSTEM_LOGGER_NAME = "fxconvert"


class CustomJSONEncoder(json.JSONEncoder):
    def default(self, o):
        if isinstance(o, datetime):
            return o.isoformat()
        if isinstance(o, Enum):
            return o.value
        return super().default(o)


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line. Structured event payloads attached through
    ``extra={"extra_data": ...}`` land under ``data``.
    """
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": self.formatException(record.exc_info),
            }

        data = getattr(record, "extra_data", None)
        if data is not None:
            entry["data"] = data

        return json.dumps(entry, ensure_ascii=False, cls=CustomJSONEncoder)


class AppLogger:
    """
    Centralized logging configuration for the application.

    A console handler is always installed on the root logger. With
    ``log_to_file`` set, three rotating JSON files are added under
    ``log_directory``: ``system/app.log`` (everything), ``errors/errors.log``
    (warnings and above) and ``api/api_calls.log`` (upstream provider calls).
    """
    def __init__(self,
                 log_directory: str = "logs",
                 console_level: str = "INFO",
                 file_level: str = "DEBUG",
                 log_to_file: bool = True,
                 max_file_size: int = 10 * 1024 * 1024,
                 backup_count: int = 5):
        self.log_directory = Path(log_directory)
        self.console_level = logging.getLevelName(console_level.upper())
        self.file_level = logging.getLevelName(file_level.upper())
        self.log_to_file = log_to_file
        self.max_file_size = max_file_size
        self.backup_count = backup_count

        self._configure()

    def _configure(self) -> None:
        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.setLevel(logging.DEBUG)

        for noisy in ("httpx", "httpcore"):
            logging.getLogger(noisy).setLevel(logging.WARNING)

        root_logger.addHandler(self._console_handler())
        if not self.log_to_file:
            return

        self.log_directory.mkdir(parents=True, exist_ok=True)
        root_logger.addHandler(self._file_handler("system", "app.log", self.file_level))
        root_logger.addHandler(self._file_handler("errors", "errors.log", logging.WARNING))
        # Provider calls still propagate to the root handlers
        logging.getLogger(API_LOGGER_NAME).addHandler(
            self._file_handler("api", "api_calls.log", logging.DEBUG)
        )

    def _console_handler(self) -> logging.Handler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(self.console_level)
        handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)-24s | %(message)s", datefmt="%H:%M:%S"
        ))
        return handler

    def _file_handler(self, subdirectory: str, filename: str, level: int) -> logging.Handler:
        log_dir = self.log_directory / subdirectory
        log_dir.mkdir(exist_ok=True)
        handler = RotatingFileHandler(
            log_dir / filename,
            maxBytes=self.max_file_size,
            backupCount=self.backup_count,
            encoding="utf-8"
        )
        handler.setLevel(level)
        handler.setFormatter(JSONFormatter())
        return handler


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EventType(Enum):
    API_CALL = "api_call"
    PROVIDER_ROTATION = "provider_rotation"
    CACHE_OPERATION = "cache_operation"
    CONVERSION = "conversion"
    USER_REQUEST = "user_request"
    SERVICE_LIFECYCLE = "service_lifecycle"
    HEALTH_CHECK = "health_check"


# Events about upstream providers go to the dedicated API log
_API_EVENTS = frozenset({EventType.API_CALL, EventType.PROVIDER_ROTATION})


@dataclass
class LogEvent:
    event_type: EventType
    level: LogLevel
    message: str
    timestamp: datetime
    duration_ms: float | None = None
    user_context: dict[str, Any] | None = None
    api_context: dict[str, Any] | None = None
    performance_context: dict[str, Any] | None = None
    error_context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        data["event_type"] = self.event_type.value
        data["level"] = self.level.value
        return data


class ProductionLogger:
    """Typed helpers that turn domain happenings into structured log events"""

    def __init__(self):
        self.system_logger = logging.getLogger(SYSTEM_LOGGER_NAME)
        self.api_logger = logging.getLogger(API_LOGGER_NAME)

    def log_event(self, event: LogEvent):
        logger = self.api_logger if event.event_type in _API_EVENTS else self.system_logger
        logger.log(
            logging.getLevelName(event.level.value),
            event.message,
            extra={"extra_data": event.to_dict()}
        )

    def _emit(self, event_type: EventType, level: LogLevel, message: str, **contexts):
        self.log_event(LogEvent(
            event_type=event_type,
            level=level,
            message=message,
            timestamp=datetime.now(UTC),
            **contexts
        ))

    def log_api_call(self, provider_name: str, url: str, success: bool, response_time_ms: float,
                     status_code: int | None = None, error_message: str | None = None,
                     rate_count: int | None = None):
        outcome = "ok" if success else "failed"
        self._emit(
            EventType.API_CALL,
            LogLevel.INFO if success else LogLevel.WARNING,
            f"{provider_name} GET {url} {outcome} in {response_time_ms}ms",
            duration_ms=response_time_ms,
            api_context={
                "provider": provider_name,
                "url": url,
                "success": success,
                "status_code": status_code,
                "rate_count": rate_count,
            },
            error_context={"error_message": error_message} if error_message else None
        )

    def log_provider_rotation(self, base: str, failed_provider: str, next_provider: str,
                              attempt: int, total: int, error_message: str):
        self._emit(
            EventType.PROVIDER_ROTATION,
            LogLevel.INFO,
            f"Provider {failed_provider} failed for {base} ({attempt}/{total}), trying {next_provider}",
            api_context={
                "base_currency": base,
                "failed_provider": failed_provider,
                "next_provider": next_provider,
                "attempt": attempt,
                "total_providers": total,
            },
            error_context={"error_message": error_message}
        )

    def log_cache_operation(self, operation: str, cache_key: str, hit: bool,
                            data_age_seconds: float | None = None,
                            level: LogLevel = LogLevel.DEBUG):
        self._emit(
            EventType.CACHE_OPERATION,
            level,
            f"Rate cache {operation} {cache_key}: {'hit' if hit else 'miss'}",
            performance_context={
                "operation": operation,
                "base_currency": cache_key,
                "hit": hit,
                "data_age_seconds": data_age_seconds,
            }
        )

    def log_conversion(self, from_currency: str, to_currency: str, amount: float,
                       converted_amount: float, rate: float, source: str | None,
                       duration_ms: float):
        self._emit(
            EventType.CONVERSION,
            LogLevel.INFO,
            f"Converted {amount} {from_currency} -> {converted_amount} {to_currency} at {rate}",
            duration_ms=duration_ms,
            user_context={
                "from_currency": from_currency,
                "to_currency": to_currency,
                "amount": amount,
                "converted_amount": converted_amount,
                "rate": rate,
            },
            api_context={"source": source}
        )

    def log_user_request(self, endpoint: str, request_data: dict[str, Any],
                         success: bool, response_time_ms: float,
                         error_message: str | None = None):
        self._emit(
            EventType.USER_REQUEST,
            LogLevel.INFO if success else LogLevel.WARNING,
            f"{endpoint} {'served' if success else 'rejected'}",
            duration_ms=response_time_ms,
            user_context={"endpoint": endpoint, "request_data": request_data, "success": success},
            error_context={"error_message": error_message} if error_message else None
        )

    def log_service_lifecycle(self, message: str, rate_source: str | None = None):
        self._emit(
            EventType.SERVICE_LIFECYCLE,
            LogLevel.INFO,
            message,
            performance_context={"rate_source": rate_source} if rate_source else None
        )

    def log_health_check(self, status: str, services: dict[str, Any]):
        self._emit(
            EventType.HEALTH_CHECK,
            LogLevel.INFO if status == "healthy" else LogLevel.WARNING,
            f"Health check: {status}",
            performance_context=services
        )

    @contextmanager
    def time_operation(self, operation_name: str):
        start_time = time.perf_counter()
        try:
            yield
        finally:
            self.system_logger.debug(
                "%s took %.2fms", operation_name, (time.perf_counter() - start_time) * 1000
            )


app_logger: AppLogger | None = None
production_logger: ProductionLogger | None = None


def setup_logging(log_directory: str = "logs", console_level: str = "INFO",
                  log_to_file: bool = True) -> AppLogger:
    """Install handlers. Called once from the API lifespan; importing this module never touches handlers."""
    global app_logger
    app_logger = AppLogger(
        log_directory=log_directory,
        console_level=console_level,
        log_to_file=log_to_file
    )
    return app_logger


def get_production_logger() -> ProductionLogger:
    global production_logger
    if production_logger is None:
        production_logger = ProductionLogger()
    return production_logger
