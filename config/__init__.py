"""Configuration constants for bkp.

The values live in `config.settings`; they are re-exported here so that
callers may write `from config import MANIFEST_NAME`. Keep new constants in
settings.py and list them below.
"""
from .settings import (
	APP_NAME, CONFIG_DIR_ENV, MANIFEST_NAME, LOG_NAME,
	DEFAULT_DESTINATION, COMMENT_PREFIXES, FIELD_COUNT,
	SNAPSHOT_STAMP_FORMAT, REPORT_TIME_FORMAT, LOG_FILE_FORMAT, LOG_CONSOLE_FORMAT,
	EXIT_OK, EXIT_CONFIG_DIR, EXIT_MANIFEST, EXIT_FATAL,
)

__all__ = [
	'APP_NAME', 'CONFIG_DIR_ENV', 'MANIFEST_NAME', 'LOG_NAME',
	'DEFAULT_DESTINATION', 'COMMENT_PREFIXES', 'FIELD_COUNT',
	'SNAPSHOT_STAMP_FORMAT', 'REPORT_TIME_FORMAT', 'LOG_FILE_FORMAT', 'LOG_CONSOLE_FORMAT',
	'EXIT_OK', 'EXIT_CONFIG_DIR', 'EXIT_MANIFEST', 'EXIT_FATAL',
]
