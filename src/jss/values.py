"""Python stand-ins for JavaScript values without a direct Python twin.

JSS documents are shared with JavaScript producers and consumers, so a few
JavaScript kinds need a Python representation of their own:

- ``undefined``: a falsy singleton distinct from ``None`` (``null``).
- ``RegExp``: source and flags kept verbatim, since flags such as ``g`` or ``y``
  have no ``re`` equivalent. ``RegExp.compile()`` gives a usable pattern.
- ``Map``: a ``dict`` subclass, so it can be told apart from a plain object.
- ``JSError``: the generic ``Error`` used when an error name does not resolve
  to a Python builtin exception.

``classify`` maps any Python value onto the closed set of kinds the encoder
dispatches on.
"""

from __future__ import annotations

import dataclasses
import datetime as dt
import math
import re
import types
from dataclasses import dataclass
from typing import Any, Final, Literal, TypeAlias

JSONPrimitive: TypeAlias = bool | int | float | str | None
Path: TypeAlias = tuple[str | int, ...]

ValueKind = Literal[
	"primitive",
	"undefined",
	"date",
	"regexp",
	"error",
	"map",
	"set",
	"array",
	"object",
	"record",
	"unsupported",
	"opaque",
]

# Kinds the encoder walks member by member (and tracks for cycles)
WALKABLE: Final[frozenset[ValueKind]] = frozenset({"array", "object", "record"})


class Undefined:
	"""The JavaScript ``undefined`` value. Use the ``undefined`` singleton."""

	__slots__: tuple[str, ...] = ()
	_instance: Undefined | None = None

	def __new__(cls) -> Undefined:
		if cls._instance is None:
			cls._instance = super().__new__(cls)
		return cls._instance

	def __repr__(self) -> str:
		return "undefined"

	def __bool__(self) -> bool:
		return False

	def __reduce__(self) -> str:
		return "undefined"


undefined: Final[Undefined] = Undefined()


_JS_TO_RE_FLAGS: dict[str, re.RegexFlag] = {
	"i": re.IGNORECASE,
	"m": re.MULTILINE,
	"s": re.DOTALL,
}


@dataclass(frozen=True, slots=True)
class RegExp:
	"""A JavaScript regular expression literal ``/source/flags``."""

	source: str
	flags: str = ""

	@classmethod
	def from_pattern(cls, pattern: re.Pattern[Any]) -> RegExp:
		source = pattern.pattern
		if isinstance(source, bytes):
			source = source.decode("latin-1")
		flags = "".join(
			letter for letter, flag in _JS_TO_RE_FLAGS.items() if pattern.flags & flag
		)
		return cls(source, flags)

	def compile(self) -> re.Pattern[str]:
		"""Compile to a Python pattern. Flags without an ``re`` equivalent are ignored."""
		flags = 0
		for letter in self.flags:
			flags |= _JS_TO_RE_FLAGS.get(letter, 0)
		return re.compile(self.source, flags)

	def __str__(self) -> str:
		return f"/{self.source}/{self.flags}"


class Map(dict[Any, Any]):
	"""A JavaScript ``Map``.

	Behaves exactly like ``dict``; the subclass only marks the value so the
	encoder tags it ``M`` instead of walking it as a plain object.
	"""

	__slots__: tuple[str, ...] = ()

	def __repr__(self) -> str:
		return f"Map({dict.__repr__(self)})"


class JSError(Exception):
	"""Generic JavaScript ``Error`` carrying an arbitrary ``name``."""

	name: str
	message: str
	stack: str | None

	def __init__(
		self, message: str = "", *, name: str = "Error", stack: str | None = None
	) -> None:
		super().__init__(message)
		self.message = message
		self.name = name
		self.stack = stack

	def __str__(self) -> str:
		return self.message

	def __repr__(self) -> str:
		return f"JSError(name={self.name!r}, message={self.message!r})"


def classify(value: Any) -> ValueKind:
	if value is None or isinstance(value, (bool, int, float, str)):
		return "primitive"
	if value is undefined:
		return "undefined"
	if isinstance(value, dt.datetime):
		return "date"
	if isinstance(value, (RegExp, re.Pattern)):
		return "regexp"
	if isinstance(value, BaseException):
		return "error"
	if isinstance(value, Map):
		return "map"
	if isinstance(value, (set, frozenset)):
		return "set"
	if isinstance(value, dict):
		return "object"
	if isinstance(value, (list, tuple)):
		return "array"
	if callable(value) or isinstance(value, (type, types.ModuleType)):
		return "unsupported"
	if dataclasses.is_dataclass(value) or hasattr(value, "__dict__"):
		return "record"
	return "opaque"


def js_key(key: Any) -> str:
	"""Coerce a mapping key to a property name the way JavaScript's ``String()`` does."""
	if isinstance(key, str):
		return key
	if key is None:
		return "null"
	if key is undefined:
		return "undefined"
	if isinstance(key, bool):
		return "true" if key else "false"
	if isinstance(key, float):
		if math.isnan(key):
			return "NaN"
		if math.isinf(key):
			return "Infinity" if key > 0 else "-Infinity"
		if key.is_integer():
			return str(int(key))
		return repr(key)
	return str(key)


__all__ = [
	"JSONPrimitive",
	"Path",
	"ValueKind",
	"WALKABLE",
	"Undefined",
	"undefined",
	"RegExp",
	"Map",
	"JSError",
	"classify",
	"js_key",
]
