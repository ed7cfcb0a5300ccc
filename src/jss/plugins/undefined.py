from __future__ import annotations

from typing import Any

from jss.plugins import BuiltinPlugin, DecodeContext, EncodeContext, Key
from jss.values import Path, Undefined, undefined


class UndefinedPlugin(BuiltinPlugin):
	"""``undefined`` travels as ``null`` under the ``U`` tag."""

	tag = "U"
	name = "undefined"
	kind = "undefined"

	@staticmethod
	def check(key: Key, value: Any) -> bool:
		return value is undefined

	@staticmethod
	def encode(path: Path, key: Key, value: Any, context: EncodeContext) -> None:
		return None

	@staticmethod
	def decode(value: Any, path: Path, context: DecodeContext) -> Undefined:
		return undefined


__all__ = ["UndefinedPlugin"]
