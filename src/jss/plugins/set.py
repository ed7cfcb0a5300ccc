from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from jss.plugins import BuiltinPlugin, DecodeContext, EncodeContext, Key
from jss.values import Path


class SetPlugin(BuiltinPlugin):
	"""``set`` / ``frozenset`` <-> list in iteration order."""

	tag = "S"
	name = "set"
	kind = "set"

	@staticmethod
	def check(key: Key, value: Any) -> bool:
		return isinstance(value, (set, frozenset))

	@staticmethod
	def encode(
		path: Path, key: Key, value: set[Any] | frozenset[Any], context: EncodeContext
	) -> list[Any]:
		return list(value)

	@staticmethod
	def decode(value: Iterable[Any], path: Path, context: DecodeContext) -> set[Any]:
		return set(value)


__all__ = ["SetPlugin"]
