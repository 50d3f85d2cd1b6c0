"""Backup run orchestration: manifest -> resolve -> execute -> report."""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional
from .clock import Clock
from .errors import CopyFailure, ManifestError
from .executor import BackupExecutor
from .manifest import Manifest, ensure_manifest, read_manifest
from .paths import manifest_path
from .report import RunOutcome, RunReport, RunReporter, Succeeded
from .resolver import resolve_all


class BackupRunner:
	"""Runs every manifest entry of one configuration directory.

	The config directory and the logger are passed in, so a run can be
	pointed at a temporary folder and a captured logger.
	"""

	def __init__(self, config_dir: Path, logger: Optional[logging.Logger] = None,
			executor: Optional[BackupExecutor] = None, clock: Optional[Clock] = None):
		self.config_dir = Path(config_dir)
		self.log = logger or logging.getLogger(__name__)
		self.clock = clock or Clock()
		self.executor = executor or BackupExecutor(self.clock)

	@property
	def manifest_path(self) -> Path:
		return manifest_path(self.config_dir)

	def load(self) -> Manifest:
		"""Read, validate and resolve the manifest; creates the template if missing.

		Raises ManifestError for malformed or unreadable manifests.
		"""
		path = self.manifest_path
		try:
			if ensure_manifest(path):
				self.log.info("No manifest found, created a template at %s", path)
			manifest = read_manifest(path)
		except (OSError, UnicodeDecodeError) as e:
			raise ManifestError(f"cannot read manifest {path}: {e}") from e
		return resolve_all(manifest, self.config_dir)

	def run(self) -> RunReport:
		manifest = self.load()
		reporter = RunReporter(self.manifest_path, self.log, self.clock)
		for entry in manifest:
			try:
				target = self.executor.execute(entry)
				outcome: RunOutcome = Succeeded(target=target)
			except CopyFailure as e:
				outcome = RunOutcome.from_failure(e)
			if not reporter.record(entry, outcome):
				break
		return reporter.finish()
