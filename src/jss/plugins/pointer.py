from __future__ import annotations

from typing import Any

from jss.errors import PointerResolutionError
from jss.plugins import BuiltinPlugin, DecodeContext, EncodeContext, Key
from jss.values import Path


class PointerPlugin(BuiltinPlugin):
	"""References to an object or array that was already emitted.

	The encoder selects this plugin itself when it meets an object for the
	second time; ``check`` never matches. The payload is the path where the
	target was first seen. Decoding only records the pointer and leaves ``None``
	in place; the decoder patches it once the whole tree exists.
	"""

	tag = "P"
	name = "pointer"

	@staticmethod
	def check(key: Key, value: Any) -> bool:
		return False

	@staticmethod
	def encode(
		path: Path, key: Key, value: Any, context: EncodeContext
	) -> list[str | int]:
		return list(context.visited[id(value)])

	@staticmethod
	def decode(value: Any, path: Path, context: DecodeContext) -> None:
		if not isinstance(value, list):
			raise PointerResolutionError(
				f"Pointer payload must be a path array, got {type(value).__name__}",
				target=(),
				source=path,
			)
		context.pointers.append((tuple(value), path))
		return None


__all__ = ["PointerPlugin"]
