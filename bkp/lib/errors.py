"""Error hierarchy for bkp.

ManifestError subclasses abort a run before anything is copied.
CopyFailure is raised per entry; its kind decides whether the run continues.
"""
from __future__ import annotations
import enum
from pathlib import Path


class BkpError(Exception): ...
class ConfigDirError(BkpError): ...


class ManifestError(BkpError):
	def __init__(self, message: str, lineno: int | None = None, line: str | None = None):
		self.lineno = lineno
		self.line = line
		if lineno is not None:
			message = f"line {lineno}: {message}"
		super().__init__(message)

class MissingSeparatorError(ManifestError): ...
class WrongArityError(ManifestError): ...
class InvalidOverwriteTokenError(ManifestError): ...
class EmptyNameError(ManifestError): ...
class InvalidEntryNameError(ManifestError): ...
class DuplicateEntryError(ManifestError): ...


class CopyErrorKind(enum.Enum):
	NOT_FOUND = "not found"
	PERMISSION_DENIED = "permission denied"
	ALREADY_EXISTS = "already exists"
	INVALID_NAME = "invalid name"
	OTHER = "other"

	@property
	def recoverable(self) -> bool:
		return self is not CopyErrorKind.OTHER


class CopyFailure(BkpError):
	"""A failed copy of one manifest entry."""

	def __init__(self, kind: CopyErrorKind, message: str, path: Path | None = None):
		self.kind = kind
		self.path = path
		super().__init__(message)

	@property
	def recoverable(self) -> bool:
		return self.kind.recoverable
