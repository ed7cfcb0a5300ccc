from __future__ import annotations

import re
from typing import Any

from jss.plugins import BuiltinPlugin, DecodeContext, EncodeContext, Key
from jss.values import Path, RegExp

# Same shape as RegExp.prototype.toString(): "/source/flags"
_LITERAL = re.compile(r"/(.*)/([dgimsuvy]*)", re.DOTALL)


class RegExpPlugin(BuiltinPlugin):
	"""Regular expressions <-> their ``/source/flags`` literal."""

	tag = "R"
	name = "regexp"
	kind = "regexp"

	@staticmethod
	def check(key: Key, value: Any) -> bool:
		return isinstance(value, (RegExp, re.Pattern))

	@staticmethod
	def encode(
		path: Path, key: Key, value: RegExp | re.Pattern[Any], context: EncodeContext
	) -> str:
		if isinstance(value, re.Pattern):
			value = RegExp.from_pattern(value)
		return str(value)

	@staticmethod
	def decode(value: str, path: Path, context: DecodeContext) -> RegExp:
		match = _LITERAL.fullmatch(value)
		if match is None:
			# Not a literal: the whole string is the source
			return RegExp(value)
		return RegExp(match.group(1), match.group(2))


__all__ = ["RegExpPlugin"]
