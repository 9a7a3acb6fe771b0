"""
Root logger setup for the ``site-analyzer`` CLI.

Library modules only ever do ``logger = logging.getLogger(__name__)``. The CLI
calls ``configure_logging(config.logging)`` once per command, before the
analysis runs. Console output goes to stderr so ``analyze --json`` keeps a
clean stdout.

With ``json_format = true`` each record becomes one line such as::

    {"ts": "2026-03-02T09:30:00Z", "level": "INFO", "logger": "site_analyzer.pipeline.orchestrator", "msg": "..."}

Keys passed through ``extra=`` (for example ``retailer_id``) are added to the
object as-is.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from site_analyzer.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_BUILTIN_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record: ``ts``, ``level``, ``logger``, ``msg``,
    ``exc`` when an exception is attached, plus any ``extra=`` keys."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "ts": created.strftime(LOG_DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        entry.update(
            (k, v) for k, v in vars(record).items()
            if k not in _BUILTIN_ATTRS and not k.startswith("_")
        )
        return json.dumps(entry, default=str)


def _build_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return JsonLineFormatter()
    return logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def _build_handlers(config: "LoggingConfig") -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        path = Path(config.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    return handlers


def configure_logging(config: "LoggingConfig") -> None:
    """Replace the root logger's handlers according to ``config``.

    A stderr handler is always installed; a file handler is added when
    ``config.log_file`` is non-empty (its directory is created). Both share
    the level and formatter.
    """
    level = logging.getLevelName(config.level)
    if not isinstance(level, int):
        level = logging.INFO

    formatter = _build_formatter(config.json_format)
    handlers = _build_handlers(config)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
