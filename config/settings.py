"""Project configuration settings.

Constants shared by the CLI and the backup engine. The configuration
directory itself is resolved at runtime (see bkp.lib.paths) so that tests
can point it at a temporary directory through BKP_CONFIG_DIR.
"""

# Application
APP_NAME = "bkp"
CONFIG_DIR_ENV = "BKP_CONFIG_DIR"

# Files inside the configuration directory
MANIFEST_NAME = "bkp.txt"
LOG_NAME = "bkp.log"

# Manifest grammar
DEFAULT_DESTINATION = "default"
COMMENT_PREFIXES = ("#", "//")
FIELD_COUNT = 3

# Clock formats
SNAPSHOT_STAMP_FORMAT = "%d%b%Y_%H%M%S_%f"  # 19Oct2026_143005_123456
REPORT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Logging
LOG_FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
LOG_CONSOLE_FORMAT = "%(levelname)s %(message)s"

# Exit codes
EXIT_OK = 0
EXIT_CONFIG_DIR = 1
EXIT_MANIFEST = 2
EXIT_FATAL = 3

__all__ = [
	'APP_NAME','CONFIG_DIR_ENV','MANIFEST_NAME','LOG_NAME',
	'DEFAULT_DESTINATION','COMMENT_PREFIXES','FIELD_COUNT',
	'SNAPSHOT_STAMP_FORMAT','REPORT_TIME_FORMAT','LOG_FILE_FORMAT','LOG_CONSOLE_FORMAT',
	'EXIT_OK','EXIT_CONFIG_DIR','EXIT_MANIFEST','EXIT_FATAL'
]
