# Copyright 2025-2026 Dimensional Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Structured logging for the planner.

Modules call ``logger = setup_logger()`` at import time and log events with
key/value fields. Console lines show the planner fields (edge, reason,
components, nodes) right after the event; other fields follow after a bar,
sorted by key. When ``MANIP_PLANNER_LOG_DIR`` is set, events are also written
as JSON lines to ``manip_planner.jsonl`` in that directory.
"""

from __future__ import annotations

from collections.abc import Mapping
import inspect
import logging
import logging.handlers
import os
from pathlib import Path
import sys
from typing import Any

import structlog

# Shown first on console lines, in this order.
PLANNER_FIELDS = ("edge", "reason", "components", "nodes")

LOG_FILE_NAME = "manip_planner.jsonl"

_configured = False


def _configure_structlog() -> None:
    global _configured

    if _configured:
        return

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="%H:%M:%S.%f", utc=False),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _configured = True


def _format_value(value: Any) -> str:
    # Reason labels contain spaces.
    if isinstance(value, str) and " " in value:
        return repr(value)
    return str(value)


def _console_renderer(logger: Any, method_name: str, event_dict: Mapping[str, Any]) -> str:
    """Render ``HH:MM:SS.mmm [lvl] module: event planner=fields | other=fields``."""
    fields = dict(event_dict)
    timestamp = str(fields.pop("timestamp", ""))[:12]
    level = str(fields.pop("level", "???"))[:3]
    name = fields.pop("logger", "")
    event = fields.pop("event", "")
    exception = fields.pop("exception", None)

    line = f"{timestamp} [{level}] {name}: {event}"
    leading = [f"{key}={_format_value(fields.pop(key))}" for key in PLANNER_FIELDS if key in fields]
    if leading:
        line += " " + " ".join(leading)
    if fields:
        line += " | " + " ".join(f"{k}={_format_value(v)}" for k, v in sorted(fields.items()))
    if exception:
        line += "\n" + exception
    return line


def _file_handler(log_dir: Path, level: int) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ]
        )
    )
    return handler


def setup_logger(*, level: int | None = None) -> Any:
    """Return a structlog logger named after the calling module.

    Args:
        level: The logging level. Defaults to ``MANIP_PLANNER_LOG_LEVEL`` or INFO.
    """
    caller = inspect.stack()[1].frame
    name = caller.f_globals.get("__name__", "manip_planner")

    _configure_structlog()

    if level is None:
        level_name = os.getenv("MANIP_PLANNER_LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_name, None)
        if not isinstance(level, int):
            level = logging.INFO

    stdlib_logger = logging.getLogger(name)
    for handler in stdlib_logger.handlers:
        handler.close()
    stdlib_logger.handlers.clear()
    stdlib_logger.setLevel(level)
    stdlib_logger.propagate = False

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _console_renderer,
            ]
        )
    )
    stdlib_logger.addHandler(console_handler)

    log_dir = os.getenv("MANIP_PLANNER_LOG_DIR")
    if log_dir:
        stdlib_logger.addHandler(_file_handler(Path(log_dir), level))

    return structlog.get_logger(name)
