"""Destination resolution for manifest entries."""
from __future__ import annotations
from dataclasses import replace
from pathlib import Path
from config.settings import DEFAULT_DESTINATION
from .manifest import BackupEntry, Manifest


def is_default(token: str) -> bool:
	return token.strip().lower() == DEFAULT_DESTINATION


def resolve(entry: BackupEntry, config_dir: Path) -> BackupEntry:
	"""Replace the `default` destination with config_dir; anything else is kept as is."""
	if is_default(entry.destination):
		return replace(entry, destination=str(config_dir))
	return replace(entry, destination=entry.destination.strip())


def resolve_all(manifest: Manifest, config_dir: Path) -> Manifest:
	resolved = Manifest()
	for entry in manifest:
		resolved.add(resolve(entry, config_dir))
	return resolved
