from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, List, Optional, Protocol, TextIO, Tuple

from web_version_tracker.logconfig import LOGGER_NAME
from web_version_tracker.store import VersionRecord


class Reporter(Protocol):
    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingReporter:
    """Progress messages on the diagnostic channel (stderr via ``logging``)."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def info(self, message: str) -> None:
        self.logger.info(message)

    def success(self, message: str) -> None:
        self.logger.info("[ OK ]  %s", message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error("[ ERROR ]  %s", message)


class NullReporter:
    """Keeps messages in memory instead of printing them."""

    def __init__(self) -> None:
        self.messages: List[Tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))


def failure_result(error: str) -> Dict[str, Any]:
    return {"success": False, "error": error}


def existing_result(key: str) -> Dict[str, Any]:
    return {
        "success": True,
        "is_new": False,
        "key": key,
        "message": f"Version {key} already exists",
    }


def added_result(key: str, record: VersionRecord, ledger_name: str) -> Dict[str, Any]:
    return {
        "success": True,
        "is_new": True,
        "key": key,
        "data": record.to_dict(),
        "message": f"Version {key} added to {ledger_name}",
    }


def emit_result(result: Dict[str, Any], stream: Optional[TextIO] = None) -> None:
    """Write the machine-readable result as a single JSON line."""
    out = stream or sys.stdout
    out.write(json.dumps(result, ensure_ascii=False) + "\n")
    out.flush()
