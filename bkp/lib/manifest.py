"""Manifest parsing.

A manifest is a plain text file with one backup entry per line:

	name = source, destination, overwrite

Blank lines and lines starting with `#` or `//` are ignored. Parsing is
fail-fast: the first malformed line raises a ManifestError and no entry of
that manifest is returned.
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional
from config.settings import COMMENT_PREFIXES, FIELD_COUNT, DEFAULT_DESTINATION
from .errors import (
	MissingSeparatorError, WrongArityError, InvalidOverwriteTokenError, EmptyNameError, DuplicateEntryError,
	InvalidEntryNameError,
)

DEFAULT_TEMPLATE = f"""\
# bkp manifest
#
# Usage:
# <name> = <source>, <destination>, <overwrite>
#
#   name         label used in the log and as prefix of snapshot folders
#   source       file or folder to back up (~ is expanded)
#   destination  folder receiving the copy, or "{DEFAULT_DESTINATION}" for the bkp config folder
#   overwrite    true:  copy straight into destination, existing items are left untouched
#                false: copy into a new folder <name>_<timestamp> inside destination
#
# Lines starting with # or // are comments.
#
# Examples:
# documents = ~/Documents, {DEFAULT_DESTINATION}, false
// photos = ~/Pictures/holiday, /mnt/backup/photos, true
"""


@dataclass(frozen=True)
class BackupEntry:
	name: str
	source: str
	destination: str
	overwrite: bool


class Manifest:
	"""Backup entries keyed by name, iterated in name order."""

	def __init__(self, entries: Optional[Dict[str, BackupEntry]] = None):
		self._entries: Dict[str, BackupEntry] = dict(entries or {})

	def add(self, entry: BackupEntry) -> None:
		self._entries[entry.name] = entry

	def names(self) -> List[str]:
		return sorted(self._entries)

	def __iter__(self) -> Iterator[BackupEntry]:
		return (self._entries[n] for n in self.names())

	def __len__(self) -> int:
		return len(self._entries)

	def __contains__(self, name: object) -> bool:
		return name in self._entries

	def __getitem__(self, name: str) -> BackupEntry:
		return self._entries[name]


def is_ignored(line: str) -> bool:
	stripped = line.strip()
	return not stripped or stripped.startswith(COMMENT_PREFIXES)


def is_safe_name(name: str) -> bool:
	"""Names become folder name prefixes, so they must stay a single path component."""
	return name not in ('.', '..') and not any(c in name for c in '/\\\0')


def split_name(line: str) -> tuple[str, str] | None:
	"""Split at the first unescaped `=`; `\\=` in the name is a literal `=`."""
	name: List[str] = []
	i = 0
	while i < len(line):
		ch = line[i]
		if ch == '\\' and line[i + 1:i + 2] == '=':
			name.append('='); i += 2
			continue
		if ch == '=':
			return ''.join(name), line[i + 1:]
		name.append(ch); i += 1
	return None


def parse_overwrite(token: str, lineno: int | None = None, line: str | None = None) -> bool:
	value = token.strip().lower()
	if value == 'true': return True
	if value == 'false': return False
	raise InvalidOverwriteTokenError(f"overwrite must be true or false, got {token.strip()!r}", lineno, line)


def parse_line(line: str, lineno: int | None = None) -> BackupEntry:
	parts = split_name(line)
	if parts is None:
		raise MissingSeparatorError("missing '=' between name and fields", lineno, line)
	raw_name, rhs = parts
	name = raw_name.strip()
	if not name:
		raise EmptyNameError("entry name is empty", lineno, line)
	if not is_safe_name(name):
		raise InvalidEntryNameError(
			f"entry name {name!r} must not contain path separators or be . or ..", lineno, line)
	fields = [f.strip() for f in rhs.split(',')]
	if len(fields) != FIELD_COUNT:
		raise WrongArityError(
			f"expected {FIELD_COUNT} comma separated fields (source, destination, overwrite), got {len(fields)}",
			lineno, line)
	source, destination, overwrite = fields
	return BackupEntry(name, source, destination, parse_overwrite(overwrite, lineno, line))


def parse(lines: Iterable[str]) -> Manifest:
	manifest = Manifest()
	for lineno, raw in enumerate(lines, start=1):
		line = raw.rstrip('\r\n')
		if lineno == 1:
			line = line.lstrip('\ufeff')
		if is_ignored(line):
			continue
		entry = parse_line(line, lineno)
		if entry.name in manifest:
			raise DuplicateEntryError(f"entry {entry.name!r} is defined more than once", lineno, line)
		manifest.add(entry)
	return manifest


def ensure_manifest(path: Path) -> bool:
	"""Write the default template if no manifest exists. Returns True if created."""
	if path.exists():
		return False
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(DEFAULT_TEMPLATE, encoding='utf-8')
	return True


def read_manifest(path: Path) -> Manifest:
	with path.open('r', encoding='utf-8-sig') as fh:
		return parse(fh)
