"""
# ocw-to-hugo
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

logging_utils.py - Logging setup with icons

Console records are message-only with a level icon in front. Errors can
also go to a log file, and a MemoryHandler keeps every record of a run so
the CLI can print a summary at the end.
"""

import logging
from pathlib import Path
from typing import List, Optional

from ocw_to_hugo.icons import LEVEL_ICONS, INFO

# Message-only; no per-line timestamps
LOG_FORMAT = "%(message)s"
FILE_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

PACKAGE_LOGGER = "ocw_to_hugo"


class IconLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        icon = LEVEL_ICONS.get(record.levelno, INFO)
        base = super().format(record)
        return f"{icon} {base}"


class MemoryHandler(logging.Handler):
    """Keep log records in memory for end-of-run reporting"""

    def __init__(self, level: int = logging.WARNING):
        super().__init__(level)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def count(self, level: int) -> int:
        return sum(1 for r in self.records if r.levelno == level)


def setup_logging(verbosity: int, error_log: Optional[Path] = None) -> MemoryHandler:
    """
    Configure the package logger.

    Args:
        verbosity: 0 = warnings only, 1 = info, 2+ = debug
        error_log: Optional file that receives ERROR records

    Returns:
        The MemoryHandler attached for this run
    """
    level = logging.INFO
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler()
    handler.setFormatter(IconLogFormatter(LOG_FORMAT))

    root = logging.getLogger(PACKAGE_LOGGER)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.setLevel(level)
    root.addHandler(handler)

    if error_log:
        file_handler = logging.FileHandler(error_log, encoding="utf-8")
        file_handler.setLevel(logging.ERROR)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        root.addHandler(file_handler)

    memory = MemoryHandler()
    root.addHandler(memory)
    return memory
