"""Shared helpers for structured grid logging."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import numpy as np


def _plain(value: Any) -> Any:
    # numpy scalars (e.g. offsets computed from arrays) are not JSON serializable.
    if isinstance(value, np.generic):
        return value.item()
    return value


def _encode_context(context: Mapping[str, Any]) -> str:
    return json.dumps(context, default=str, sort_keys=True)


def log_event(
    logger: logging.Logger,
    event: str,
    message: str,
    *,
    level: str = "info",
    **fields: Any,
) -> None:
    """Emit `[event] message | {context}` with the context also attached as `extra`.

    Fields set to None are dropped. Nothing is formatted when `level` is
    disabled for `logger`.

    Example:
        log_event(LOGGER, "geogrid.crop.out_of_bounds", "Crop outside grid", level="warning", start_x=-4)
    """
    levelno = logging.getLevelName(level.upper())
    if not isinstance(levelno, int):
        raise ValueError(f"Unknown log level: {level!r}")
    if not logger.isEnabledFor(levelno):
        return

    context = {k: _plain(v) for k, v in fields.items() if v is not None}
    payload = f"[{event}] {message}"
    if context:
        payload = f"{payload} | {_encode_context(context)}"
    logger.log(levelno, payload, extra={"event": event, **context})
