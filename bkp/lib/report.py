"""Per-entry outcomes and how they are reported."""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple
from config.settings import EXIT_OK, EXIT_FATAL
from .clock import Clock
from .errors import CopyFailure
from .manifest import BackupEntry


@dataclass(frozen=True)
class RunOutcome:
	reason: str = ''

	@classmethod
	def from_failure(cls, failure: CopyFailure) -> 'RunOutcome':
		reason = f"{failure.kind.value}: {failure}"
		return SkippedRecoverable(reason) if failure.recoverable else Fatal(reason)

@dataclass(frozen=True)
class Succeeded(RunOutcome):
	target: Optional[Path] = None

@dataclass(frozen=True)
class SkippedRecoverable(RunOutcome): ...

@dataclass(frozen=True)
class Fatal(RunOutcome): ...


@dataclass
class RunReport:
	manifest_path: Path
	outcomes: List[Tuple[BackupEntry, RunOutcome]] = field(default_factory=list)
	exit_code: int = EXIT_OK

	@property
	def succeeded(self) -> List[BackupEntry]:
		return [e for e, o in self.outcomes if isinstance(o, Succeeded)]

	@property
	def skipped(self) -> List[BackupEntry]:
		return [e for e, o in self.outcomes if isinstance(o, SkippedRecoverable)]

	@property
	def fatal(self) -> Optional[BackupEntry]:
		return next((e for e, o in self.outcomes if isinstance(o, Fatal)), None)


class RunReporter:
	"""Turn outcomes into log records and keep the exit code.

	record() returns False once a Fatal outcome was seen; the caller must
	stop processing further entries.
	"""

	def __init__(self, manifest_path: Path, logger: logging.Logger, clock: Optional[Clock] = None):
		self.log = logger
		self.clock = clock or Clock()
		self.report = RunReport(manifest_path)

	def record(self, entry: BackupEntry, outcome: RunOutcome) -> bool:
		self.report.outcomes.append((entry, outcome))
		if isinstance(outcome, Succeeded):
			self.log.info("%s: successfully secured, %s", entry.name, self.clock.report_time())
			return True
		if isinstance(outcome, SkippedRecoverable):
			self.log.warning("%s: skipped, %s", entry.name, outcome.reason)
			return True
		self.log.error(
			"%s: backup failed, aborting run (source=%s, destination=%s): %s",
			entry.name, entry.source, entry.destination, outcome.reason)
		self.report.exit_code = EXIT_FATAL
		return False

	def finish(self) -> RunReport:
		if not self.report.outcomes:
			self.log.info("nothing to back up, edit file at %s", self.report.manifest_path)
		return self.report
