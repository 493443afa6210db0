"""
ProposalHub - Logging

Every record carries the request context set by RequestLoggingMiddleware:
request ID, API area (auth, topics, proposals) and, once known, the account
or student the request acts for. Production writes one JSON object per line;
other environments get a readable text line with the same context.

Services log through the ProposalHubLogger helpers so that catalog, proposal
and credential events share a fixed set of `event_type` values:

    http_request     one line per handled request
    auth             register / login outcome
    catalog          topic created, updated, deactivated
    proposal         proposal submitted, reviewed, deleted, cleared
    store_write      row-level write summary (DEBUG)
    error            unexpected failure with traceback
"""

import json
import logging
import sys
import traceback
import uuid
from contextvars import ContextVar
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from app.core.config import settings


LOGGER_NAME = "proposalhub"

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
account_id_var: ContextVar[str] = ContextVar("account_id", default="")
api_area_var: ContextVar[str] = ContextVar("api_area", default="")


def get_request_id() -> str:
    return request_id_var.get()


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def get_account_id() -> str:
    return account_id_var.get()


def set_account_id(account_id: str) -> None:
    """Remember who the current request acts for (account ID or student userId)"""
    account_id_var.set(account_id)


def get_api_area() -> str:
    return api_area_var.get()


def set_api_area(area: str) -> None:
    api_area_var.set(area)


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def clear_request_context() -> None:
    request_id_var.set("")
    account_id_var.set("")
    api_area_var.set("")


def request_context() -> Dict[str, str]:
    """Non-empty context values for the current task"""
    context = {
        "request_id": get_request_id(),
        "account_id": get_account_id(),
        "api_area": get_api_area(),
    }
    return {key: value for key, value in context.items() if value}


# Attributes every LogRecord has; anything else came in through `extra`
_STANDARD_ATTRS = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


def record_extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record, for log shipping in production"""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        entry.update(request_context())
        entry.update(record_extras(record))

        if record.exc_info and record.exc_info[0]:
            exc_type, exc_value, exc_tb = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": traceback.format_exception(exc_type, exc_value, exc_tb),
            }

        return json.dumps(entry, default=str)


class ContextualFormatter(logging.Formatter):
    """Text formatter; fills %(request_id)s, %(api_area)s and %(account_id)s"""

    def format(self, record: logging.LogRecord) -> str:
        record.request_id = get_request_id() or "-"
        record.api_area = get_api_area() or "-"
        record.account_id = get_account_id() or "-"
        return super().format(record)


class ProposalHubLogger(logging.Logger):
    """Logger with one helper per kind of ProposalHub event"""

    def log_request(self, method: str, path: str, status_code: int,
                    duration_ms: float, **kwargs) -> None:
        level = logging.WARNING if status_code >= 500 else logging.INFO
        self.log(
            level,
            f"{method} {path} -> {status_code} ({duration_ms:.1f}ms)",
            extra={
                "event_type": "http_request",
                "http_method": method,
                "http_path": path,
                "http_status": status_code,
                "duration_ms": round(duration_ms, 2),
                **kwargs
            }
        )

    def log_auth_event(self, event: str, success: bool, email: Optional[str] = None,
                       reason: Optional[str] = None, **kwargs) -> None:
        """Register and login outcomes; failures go out at WARNING"""
        outcome = "ok" if success else f"rejected ({reason})" if reason else "rejected"
        self.log(
            logging.INFO if success else logging.WARNING,
            f"[Auth] {event} {outcome}" + (f" for {email}" if email else ""),
            extra={
                "event_type": "auth",
                "auth_event": event,
                "auth_success": success,
                "email": email,
                "failure_reason": reason,
                **kwargs
            }
        )

    def log_catalog_event(self, action: str, topic_id: str, title: Optional[str] = None,
                          **kwargs) -> None:
        """Topic catalog changes (created, updated, deactivated)"""
        label = f"'{title}' ({topic_id})" if title else topic_id
        self.info(
            f"[Topics] {action} {label}",
            extra={"event_type": "catalog", "catalog_action": action, "topic_id": topic_id, **kwargs}
        )

    def log_proposal_event(self, action: str, proposal_id: Optional[str] = None,
                           status: Optional[str] = None, **kwargs) -> None:
        """Proposal lifecycle (submitted, reviewed, deleted, cleared)"""
        message = f"[Proposals] {action}"
        if proposal_id:
            message += f" {proposal_id}"
        if status:
            message += f" status={status}"
        self.info(
            message,
            extra={
                "event_type": "proposal",
                "proposal_action": action,
                "proposal_id": proposal_id,
                "proposal_status": status,
                **kwargs
            }
        )

    def log_store_write(self, operation: str, table: str, rows: int = 1, **kwargs) -> None:
        self.debug(
            f"[Store] {operation} {table} rows={rows}",
            extra={"event_type": "store_write", "store_operation": operation,
                   "store_table": table, "rows": rows, **kwargs}
        )

    def log_error_with_context(self, error: Exception, context: Optional[str] = None,
                               **kwargs) -> None:
        self.error(
            f"Unhandled {type(error).__name__} in {context or 'unknown context'}: {error}",
            exc_info=error,
            extra={
                "event_type": "error",
                "error_type": type(error).__name__,
                "error_context": context,
                **kwargs
            }
        )


def _text_formatter(detailed: bool) -> logging.Formatter:
    if detailed:
        return ContextualFormatter(
            "%(asctime)s | %(levelname)-8s | [%(request_id)s] %(api_area)s "
            "account=%(account_id)s | %(funcName)s:%(lineno)d | %(message)s"
        )
    return ContextualFormatter("%(levelname)-8s | [%(request_id)s] %(api_area)s | %(message)s")


def _console_handler(formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.INFO)
    handler.setFormatter(formatter)
    return handler


def _file_handler(path: str, formatter: logging.Formatter, backups: int) -> logging.Handler:
    log_file = Path(path)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=backups)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def _quiet_library_loggers() -> None:
    for name in ("uvicorn.access", "sqlalchemy.engine", "aiosqlite"):
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging() -> ProposalHubLogger:
    """Configure the "proposalhub" logger for the current environment"""
    logging.setLoggerClass(ProposalHubLogger)

    logger = logging.getLogger(LOGGER_NAME)
    logger.__class__ = ProposalHubLogger
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    logger.handlers.clear()

    json_output = settings.ENVIRONMENT == "production"
    if json_output:
        logger.addHandler(_console_handler(JSONFormatter()))
    else:
        logger.addHandler(_console_handler(_text_formatter(detailed=False)))

    if settings.LOG_FILE:
        formatter = JSONFormatter() if json_output else _text_formatter(detailed=True)
        logger.addHandler(_file_handler(settings.LOG_FILE, formatter, backups=10 if json_output else 5))

    _quiet_library_loggers()

    logger.info(
        f"Logging ready ({'json' if json_output else 'text'}, level {settings.LOG_LEVEL})",
        extra={"environment": settings.ENVIRONMENT}
    )
    return logger


logger: ProposalHubLogger = setup_logging()


__all__ = [
    "logger",
    "setup_logging",
    "ProposalHubLogger",
    "JSONFormatter",
    "get_request_id",
    "set_request_id",
    "get_account_id",
    "set_account_id",
    "get_api_area",
    "set_api_area",
    "new_request_id",
    "clear_request_context",
    "request_context",
]
