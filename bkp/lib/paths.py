"""Per-user configuration directory."""
from __future__ import annotations
import os
from pathlib import Path
import click
from config.settings import APP_NAME, CONFIG_DIR_ENV, MANIFEST_NAME, LOG_NAME
from .errors import ConfigDirError


def config_dir(override: Path | str | None = None) -> Path:
	"""Return (and create) the bkp config directory.

	Order: explicit override, $BKP_CONFIG_DIR, platform config root + /bkp.
	"""
	if override is not None:
		path = Path(override)
	else:
		env_path = os.environ.get(CONFIG_DIR_ENV)
		path = Path(env_path) if env_path else Path(click.get_app_dir(APP_NAME))
	path = path.expanduser()
	try:
		path.mkdir(parents=True, exist_ok=True)
	except OSError as e:
		raise ConfigDirError(f"Unable to find or create a config directory {path}: {e}") from e
	if not path.is_dir():
		raise ConfigDirError(f"Config path {path} is not a directory")
	return path


def manifest_path(cfg: Path) -> Path:
	return cfg / MANIFEST_NAME


def log_path(cfg: Path) -> Path:
	return cfg / LOG_NAME
