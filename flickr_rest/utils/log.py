"""Structured logging helpers."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any


def _serialize(obj: Any) -> Any:
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, bytes):
        return obj.decode("utf-8", errors="replace")
    return str(obj)


def structured_log(
    logger: logging.Logger, event: str, *, level: int = logging.INFO, **fields: Any
) -> None:
    """Emit ``event`` and ``fields`` as one JSON object.

    Callers never pass credentials here; the API secret and ``api_sig``
    stay out of the log stream.
    """
    payload = {"timestamp": datetime.now(timezone.utc).isoformat(), "event": event}
    payload.update(fields)
    logger.log(level, json.dumps(payload, default=_serialize))
