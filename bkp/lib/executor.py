"""Backup execution for a single manifest entry.

Strategies:
- overwrite=True: copy source straight into destination.
- overwrite=False: copy source into a new snapshot folder
  <destination>/<name>_<timestamp>.

A snapshot folder exists on disk only after its copy succeeded; on failure
the folder created for the attempt is removed again.
"""
from __future__ import annotations
import glob
import logging
import shutil
from pathlib import Path
from typing import Callable, List, Optional
from .clock import Clock
from .copier import CopyOptions, CopyResult, classify, copy_items
from .errors import CopyErrorKind, CopyFailure
from .manifest import BackupEntry

log = logging.getLogger(__name__)

# skip_exist wins over overwrite: items already at the destination stay untouched
BACKUP_OPTIONS = CopyOptions(overwrite=True, skip_exist=True, copy_inside=False, content_only=False)

Copier = Callable[..., CopyResult]


class BackupExecutor:
	def __init__(self, clock: Optional[Clock] = None, copier: Optional[Copier] = None):
		self.clock = clock or Clock()
		self.copier = copier or copy_items

	def snapshot_dir(self, entry: BackupEntry) -> Path:
		return self._destination(entry) / f"{entry.name}_{self.clock.snapshot_stamp()}"

	def execute(self, entry: BackupEntry) -> Path:
		"""Back up one entry and return the folder the source was copied into.

		Raises CopyFailure; the caller decides whether the run continues.
		"""
		root = self._destination(entry)
		if entry.overwrite:
			self._copy(entry, root, root)
			return root

		target = self.snapshot_dir(entry)
		try:
			target.mkdir()
		except OSError as e:
			raise CopyFailure(classify(e), f"cannot create snapshot folder: {e}", target) from e
		try:
			# earlier snapshots live under root; never copy them into the new one
			self._copy(entry, target, root)
		except CopyFailure:
			self._rollback(target)
			raise
		return target

	def earlier_snapshots(self, entry: BackupEntry, root: Path) -> List[Path]:
		if not root.is_dir():
			return []
		return sorted(p for p in root.glob(f"{glob.escape(entry.name)}_*") if p.is_dir())

	def _destination(self, entry: BackupEntry) -> Path:
		if not entry.destination.strip():
			raise CopyFailure(CopyErrorKind.NOT_FOUND, "destination path is empty")
		return Path(entry.destination).expanduser()

	def _copy(self, entry: BackupEntry, target: Path, root: Path) -> None:
		log.debug("%s: copying %s into %s", entry.name, entry.source, target)
		exclude = [root, *self.earlier_snapshots(entry, root)]
		result = self.copier([entry.source], target, BACKUP_OPTIONS, exclude=exclude)
		log.debug("%s: %d copied, %d skipped", entry.name, result.copied, result.skipped)

	def _rollback(self, target: Path) -> None:
		try:
			shutil.rmtree(target)
		except OSError as e:
			log.warning("Could not remove incomplete snapshot %s: %s", target, e)
