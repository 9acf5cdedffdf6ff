"""
via_periph — Logging Setup

Same pattern as the vECU tools: one timestamped log file that captures
everything, plus a rich console handler that only shows what matters.
Library modules never configure logging themselves; they just call
``logging.getLogger(__name__)``. The CLI calls setup_logging() once per run.
"""

from __future__ import annotations
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from . import config


def _file_handler(log_file: Path) -> logging.FileHandler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    return fh


def setup_logging(
    name: str = config.LOG_NAME,
    level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
    log_dir: Optional[Path] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure and return the package logger.

    Log files: ``<log_dir>/<name>_YYYYMMDD_HHMMSS.log``, with log_dir
    defaulting to ``./logs``, unless an explicit ``log_file`` is given.
    Calling again adjusts the console level; an explicit log_file or
    log_dir replaces the current file handler.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # ── File handler: captures everything (DEBUG+) ──
    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    if log_file is not None or log_dir is not None or not file_handlers:
        for handler in file_handlers:
            logger.removeHandler(handler)
            handler.close()
        if log_file is None:
            log_dir = Path(log_dir) if log_dir else Path.cwd() / config.LOG_DIR_NAME
            ts = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = log_dir / f"{name}_{ts}.log"
        log_file = Path(log_file)
        logger.addHandler(_file_handler(log_file))
        logger.debug("Log file: %s", log_file)

    # ── Console handler: WARNING+ by default ──
    consoles = [h for h in logger.handlers if isinstance(h, RichHandler)]
    if not consoles:
        ch = RichHandler(show_time=True, show_path=False, markup=False,
                         rich_tracebacks=True)
        logger.addHandler(ch)
        consoles = [ch]
    for ch in consoles:
        ch.setLevel(console_level)

    return logger
