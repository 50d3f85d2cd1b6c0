"""Timestamps for run reports and snapshot folder names."""
from __future__ import annotations
from datetime import datetime, timedelta
from typing import Callable, Optional
from config.settings import SNAPSHOT_STAMP_FORMAT, REPORT_TIME_FORMAT


class Clock:
	"""Local wall clock whose snapshot stamps never repeat within a process.

	Two calls inside the same microsecond (or after the system clock moved
	backwards) get the previous stamp plus one microsecond.
	"""

	def __init__(self, now: Optional[Callable[[], datetime]] = None):
		self._now = now or datetime.now
		self._last: Optional[datetime] = None

	def now(self) -> datetime:
		return self._now()

	def report_time(self) -> str:
		return self.now().strftime(REPORT_TIME_FORMAT)

	def snapshot_stamp(self) -> str:
		current = self.now()
		if self._last is not None and current <= self._last:
			current = self._last + timedelta(microseconds=1)
		self._last = current
		return current.strftime(SNAPSHOT_STAMP_FORMAT)
