from __future__ import annotations

import json
import logging
from typing import Any, Optional

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _coerce_field(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (list, tuple)):
        return [_coerce_field(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _coerce_field(item) for key, item in value.items()}
    return str(value)


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    *,
    exc: Optional[BaseException] = None,
    **fields: Any,
) -> None:
    """Emit a structured log line: a JSON object keyed by ``event``."""
    if not logger.isEnabledFor(level):
        return
    record: dict[str, Any] = {"event": event}
    for key, value in fields.items():
        record[key] = _coerce_field(value)
    if exc is not None:
        record["error"] = str(exc)
        record["error_type"] = type(exc).__name__
    logger.log(
        level,
        json.dumps(record, sort_keys=False),
        exc_info=(type(exc), exc, exc.__traceback__) if exc is not None else None,
    )


def setup_logging(level: str | int = "INFO") -> None:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO
    else:
        resolved = level
    logging.basicConfig(level=resolved, format=_LOG_FORMAT)
    logging.getLogger("slashkit").setLevel(resolved)
