"""Dates travel as milliseconds since the Unix epoch (UTC).

JavaScript writes an invalid ``Date`` as ``null``; it decodes to ``None``.
Timestamps Python's ``datetime`` cannot hold (JavaScript allows up to
8.64e15 ms either side of the epoch) and non-numeric payloads are returned as
they are.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any

from jss.plugins import BuiltinPlugin, DecodeContext, EncodeContext, Key
from jss.values import Path

logger = logging.getLogger(__name__)

_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)
_MILLISECOND = dt.timedelta(milliseconds=1)


class DatePlugin(BuiltinPlugin):
	"""``datetime`` <-> milliseconds since the Unix epoch (UTC)."""

	tag = "D"
	name = "date"
	kind = "date"

	@staticmethod
	def check(key: Key, value: Any) -> bool:
		return isinstance(value, dt.datetime)

	@staticmethod
	def encode(
		path: Path, key: Key, value: dt.datetime, context: EncodeContext
	) -> int:
		return datetime_to_millis(value)

	@staticmethod
	def decode(value: Any, path: Path, context: DecodeContext) -> Any:
		if value is None:
			return None
		try:
			return datetime_from_millis(value)
		except (OverflowError, TypeError, ValueError):
			logger.debug(
				"Date payload %r at %s is not a representable datetime, keeping it as is",
				value,
				path,
				exc_info=True,
			)
			return value


def datetime_to_millis(value: dt.datetime) -> int:
	# Naive datetimes are taken as UTC
	if value.tzinfo is None:
		value = value.replace(tzinfo=dt.timezone.utc)
	return (value - _EPOCH) // _MILLISECOND


def datetime_from_millis(value: int | float) -> dt.datetime:
	return _EPOCH + dt.timedelta(milliseconds=value)


__all__ = ["DatePlugin", "datetime_to_millis", "datetime_from_millis"]
