from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class JSSError(Exception):
	pass


class ConfigError(JSSError, ValueError):
	"""Raised when a custom plugin registration is malformed.

	Registration errors are caller bugs: they are raised synchronously by
	``Registry.register`` and never deferred to encode or decode time.
	"""

	tag: Any

	def __init__(self, message: str, *, tag: Any = None) -> None:
		super().__init__(message)
		self.tag = tag


class PointerResolutionError(JSSError, LookupError):
	"""Raised when a decoded pointer path does not exist in the decoded tree."""

	target: tuple[str | int, ...]
	source: tuple[str | int, ...]

	def __init__(
		self,
		message: str,
		*,
		target: Sequence[str | int],
		source: Sequence[str | int],
	) -> None:
		super().__init__(message)
		self.target = tuple(target)
		self.source = tuple(source)


__all__ = ["JSSError", "ConfigError", "PointerResolutionError"]
