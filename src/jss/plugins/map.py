from __future__ import annotations

from typing import Any

from jss.plugins import BuiltinPlugin, DecodeContext, EncodeContext, Key
from jss.values import Map, Path, js_key


class MapPlugin(BuiltinPlugin):
	"""``Map`` <-> plain object of its entries.

	Keys are coerced with JavaScript's ``String()`` rules, so non-string keys
	come back as strings. Entry values are emitted as they are.
	"""

	tag = "M"
	name = "map"
	kind = "map"

	@staticmethod
	def check(key: Key, value: Any) -> bool:
		return isinstance(value, Map)

	@staticmethod
	def encode(
		path: Path, key: Key, value: Map, context: EncodeContext
	) -> dict[str, Any]:
		return {js_key(entry_key): entry for entry_key, entry in value.items()}

	@staticmethod
	def decode(value: dict[str, Any], path: Path, context: DecodeContext) -> Map:
		return Map(value)


__all__ = ["MapPlugin"]
