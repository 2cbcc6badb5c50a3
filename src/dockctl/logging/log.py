# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/logging/log.py

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(run)s | %(message)s"


class RunTagFilter(logging.Filter):
    """Stamps every record with the short id of the current run."""

    def __init__(self, run_id: str):
        super().__init__()
        self.run = run_id[:8]

    def filter(self, record: logging.LogRecord) -> bool:
        record.run = self.run
        return True


def init_logging(
    *,
    base_dir: Path | None = None,
    name: str = "dockctl",
    verbose: bool = False,
    tool: str = "docker",
    dry_run: bool = False,
) -> tuple[logging.Logger, str, Path]:
    """
    Initializes:
      - full-trace log file (every docker invocation, redacted)
      - console output at INFO, or DEBUG with --debug
      - a run tag on every line, so interleaved runs can be told apart
      - returns run_id so a pipeline report can reference it

    The first lines of each log record which executable is driven and
    whether commands are only being rendered.
    """
    run_id = str(uuid.uuid4())

    if base_dir is None:
        base_dir = Path.home() / ".dockctl" / "logs"
    base_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    mode = "dry" if dry_run else "live"
    log_path = base_dir / f"{name}-{ts}-{mode}-{run_id}.log"

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    for h in list(logger.handlers):
        h.close()
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    tag = RunTagFilter(run_id)

    fh = logging.FileHandler(log_path)
    fh.setLevel(logging.DEBUG)

    ch = logging.StreamHandler()
    ch.setLevel(logging.DEBUG if verbose else logging.INFO)

    for handler in (fh, ch):
        handler.setFormatter(formatter)
        handler.addFilter(tag)
        logger.addHandler(handler)

    logger.debug("run_id=%s log_file=%s", run_id, log_path)
    logger.debug("tool=%s mode=%s", tool, mode)
    if dry_run:
        logger.info("[dockctl] dry run: %s commands are printed, not executed", tool)

    return logger, run_id, log_path
