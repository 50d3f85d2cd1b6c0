"""Recursive copy of files and folders into a target directory.

copy_items() copies every source *into* target (target/<source name>).
Flags:

- overwrite     replace files that already exist at the destination
- skip_exist    leave existing files untouched; wins over overwrite
- copy_inside   if target does not exist, the source folder becomes target
- content_only  copy the contents of a source folder, not the folder itself

Existing destination folders are merged. Any OSError is translated into a
CopyFailure with a CopyErrorKind.
"""
from __future__ import annotations
import errno
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Set
from .errors import CopyFailure, CopyErrorKind

log = logging.getLogger(__name__)

_INVALID_NAME_ERRNOS = {errno.ENAMETOOLONG, errno.EINVAL, getattr(errno, 'EILSEQ', errno.EINVAL)}


@dataclass(frozen=True)
class CopyOptions:
	overwrite: bool = False
	skip_exist: bool = False
	copy_inside: bool = False
	content_only: bool = False


@dataclass
class CopyResult:
	copied: int = 0
	skipped: int = 0


def classify(exc: OSError) -> CopyErrorKind:
	if isinstance(exc, FileNotFoundError): return CopyErrorKind.NOT_FOUND
	if isinstance(exc, PermissionError): return CopyErrorKind.PERMISSION_DENIED
	if isinstance(exc, FileExistsError): return CopyErrorKind.ALREADY_EXISTS
	if exc.errno in _INVALID_NAME_ERRNOS: return CopyErrorKind.INVALID_NAME
	return CopyErrorKind.OTHER


def copy_items(sources: Iterable[str | Path], target: str | Path, options: CopyOptions = CopyOptions(),
		exclude: Iterable[str | Path] = ()) -> CopyResult:
	"""Copy each source into target, raising CopyFailure on the first error.

	Folders listed in exclude are never descended into.
	"""
	skip = {Path(p).expanduser().resolve() for p in exclude}
	target = Path(target)
	result = CopyResult()
	for source in sources:
		try:
			_copy_one(source, target, options, result, skip)
		except OSError as e:
			path = Path(e.filename) if getattr(e, 'filename', None) else None
			raise CopyFailure(classify(e), str(e), path) from e
		except ValueError as e:
			# embedded null byte and similar unusable paths
			raise CopyFailure(CopyErrorKind.INVALID_NAME, str(e)) from e
	return result


def _copy_one(source: str | Path, target: Path, options: CopyOptions, result: CopyResult, skip: Set[Path]) -> None:
	if not str(source).strip():
		raise CopyFailure(CopyErrorKind.NOT_FOUND, "source path is empty")
	if '\0' in str(source):
		raise CopyFailure(CopyErrorKind.INVALID_NAME, f"source path contains a null byte: {source!r}")
	src = Path(source).expanduser()
	if not src.exists():
		raise CopyFailure(CopyErrorKind.NOT_FOUND, f"source does not exist: {src}", src)
	name = src.resolve().name
	if not name:
		raise CopyFailure(CopyErrorKind.INVALID_NAME, f"cannot derive a name from {src}", src)

	if src.is_dir():
		into_target = options.content_only or (options.copy_inside and not target.exists())
		dest = target if into_target else target / name
		if not into_target:
			_require_folder(target)
		if not into_target and dest.exists():
			if not dest.is_dir():
				raise CopyFailure(CopyErrorKind.ALREADY_EXISTS, f"{dest} exists and is not a folder", dest)
			if not (options.overwrite or options.skip_exist):
				raise CopyFailure(CopyErrorKind.ALREADY_EXISTS, f"{dest} already exists", dest)
		# target may live inside src (e.g. ~/.config into the bkp config folder)
		exclude = {target.resolve(), dest.resolve()} | skip
		_copy_tree(src, dest, options, result, exclude)
	else:
		_require_folder(target)
		_copy_file(src, target / name, options, result)


def _require_folder(target: Path) -> None:
	if not target.exists():
		raise CopyFailure(CopyErrorKind.NOT_FOUND, f"destination does not exist: {target}", target)
	if not target.is_dir():
		raise CopyFailure(CopyErrorKind.NOT_FOUND, f"destination is not a folder: {target}", target)


def _copy_tree(src: Path, dest: Path, options: CopyOptions, result: CopyResult, exclude: Set[Path]) -> None:
	dest.mkdir(parents=True, exist_ok=True)
	for child in sorted(src.iterdir()):
		if child.resolve() in exclude:
			log.debug("not descending into destination %s", child)
			continue
		if child.is_dir():
			sub = dest / child.name
			if sub.exists() and not sub.is_dir():
				raise CopyFailure(CopyErrorKind.ALREADY_EXISTS, f"{sub} exists and is not a folder", sub)
			_copy_tree(child, sub, options, result, exclude)
		else:
			_copy_file(child, dest / child.name, options, result)


def _copy_file(src: Path, dest: Path, options: CopyOptions, result: CopyResult) -> None:
	if dest.exists():
		if options.skip_exist:
			log.debug("skip existing %s", dest)
			result.skipped += 1
			return
		if not options.overwrite:
			raise CopyFailure(CopyErrorKind.ALREADY_EXISTS, f"{dest} already exists", dest)
	shutil.copy2(src, dest)
	result.copied += 1
