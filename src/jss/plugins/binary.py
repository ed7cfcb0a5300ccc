from __future__ import annotations

import base64
from typing import Any, NoReturn

from jss.plugins import BuiltinPlugin, DecodeContext, EncodeContext, Key
from jss.values import Path


class BinaryPlugin(BuiltinPlugin):
	"""Inline binary data, base64 encoded by an external producer.

	Decode only: nothing in the encoder emits the ``I`` tag.
	"""

	tag = "I"
	name = "binary"
	decode_only = True

	@staticmethod
	def check(key: Key, value: Any) -> bool:
		return False

	@staticmethod
	def encode(path: Path, key: Key, value: Any, context: EncodeContext) -> NoReturn:
		raise NotImplementedError("Inline binary values can only be decoded")

	@staticmethod
	def decode(value: str, path: Path, context: DecodeContext) -> bytes:
		return base64.b64decode(value)


__all__ = ["BinaryPlugin"]
