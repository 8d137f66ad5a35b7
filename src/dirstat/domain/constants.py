from __future__ import annotations

"""
Domain Constants.

Centralizes application identity, versioning and the default values that
seed the session configuration.
"""

APP_NAME = "DirStat"
APP_DIR_NAME = "DirStat"
UNIX_APP_DIR_NAME = ".dirstat"
LOG_FILE_NAME = "dirstat.log"

CURRENT_CONFIG_VERSION = "1.0.0"

# Scan defaults (0 workers means "let the executor decide")
DEFAULT_MAX_WORKERS = 0
DEFAULT_FOLLOW_SYMLINKS = True

# Report defaults
DEFAULT_TOP_N = 10
DEFAULT_EXTENT = 100.0
DEFAULT_LOG_LEVEL = "INFO"
