"""Log sink: append-only file in the config directory plus console mirror."""
from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import List
from config.settings import LOG_FILE_FORMAT, LOG_CONSOLE_FORMAT
from .paths import log_path

LOGGER_NAME = "bkp"


def setup_logging(cfg: Path, console_level: int = logging.INFO) -> logging.Logger:
	"""Attach file and console handlers to the `bkp` logger and return it.

	The file receives everything from INFO up with timestamps; the console
	(stderr) shows console_level and above without them.
	"""
	logger = logging.getLogger(LOGGER_NAME)
	teardown_logging(logger)
	logger.setLevel(min(logging.INFO, console_level))
	logger.propagate = False

	file_handler = logging.FileHandler(log_path(cfg), mode='a', encoding='utf-8')
	file_handler.setLevel(logging.INFO)
	file_handler.setFormatter(logging.Formatter(LOG_FILE_FORMAT))

	console = logging.StreamHandler(sys.stderr)
	console.setLevel(console_level)
	console.setFormatter(logging.Formatter(LOG_CONSOLE_FORMAT))

	logger.addHandler(file_handler)
	logger.addHandler(console)
	return logger


def teardown_logging(logger: logging.Logger) -> None:
	handlers: List[logging.Handler] = list(logger.handlers)
	for h in handlers:
		logger.removeHandler(h)
		h.close()
