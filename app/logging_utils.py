"""
Structured logging helpers for the CSV analysis pipeline.

Every event line carries the emitting pipeline stage (the last segment of
the logger name) so upload diagnostics can be filtered per stage.
"""

from __future__ import annotations

import json
import logging
from typing import Any

PIPELINE_NAME = "csv_analysis"


def pipeline_stage(logger: logging.Logger) -> str:
    return logger.name.rsplit(".", 1)[-1]


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured pipeline event as compact JSON.

    Fields whose value is None are dropped; ``pipeline``, ``stage`` and
    ``event`` are always present and cannot be overridden by *fields*.
    """

    if not logger.isEnabledFor(level):
        return
    payload = {key: value for key, value in fields.items() if value is not None}
    payload.update(
        pipeline=PIPELINE_NAME,
        stage=pipeline_stage(logger),
        event=event,
    )
    logger.log(level, json.dumps(payload, default=str, sort_keys=True))
