"""Errors travel as ``[name, message, stack]``.

On the way back the name is looked up among Python's builtin exceptions, so
``TypeError`` or ``ValueError`` come back as themselves. Names that do not
resolve (``RangeError``, application error classes, garbage) degrade to a
``JSError`` carrying the name; decoding an error never raises.
"""

from __future__ import annotations

import builtins
import logging
import traceback
from typing import Any

from jss.plugins import BuiltinPlugin, DecodeContext, EncodeContext, Key
from jss.values import JSError, Path

logger = logging.getLogger(__name__)


class ErrorPlugin(BuiltinPlugin):
	tag = "E"
	name = "error"
	kind = "error"

	@staticmethod
	def check(key: Key, value: Any) -> bool:
		return isinstance(value, BaseException)

	@staticmethod
	def encode(
		path: Path, key: Key, value: BaseException, context: EncodeContext
	) -> list[str]:
		return [error_name(value), error_message(value), error_stack(value)]

	@staticmethod
	def decode(value: Any, path: Path, context: DecodeContext) -> BaseException:
		fields = list(value) if isinstance(value, (list, tuple)) else []
		name, message, stack = (fields + [None, None, None])[:3]
		message = "" if message is None else str(message)
		err = _construct(name, message)
		err.stack = stack  # pyright: ignore[reportAttributeAccessIssue]
		return err


def error_name(exc: BaseException) -> str:
	if isinstance(exc, JSError):
		return exc.name
	return type(exc).__name__


def error_message(exc: BaseException) -> str:
	if isinstance(exc, JSError):
		return exc.message
	if len(exc.args) == 1:
		return str(exc.args[0])
	return str(exc)


def error_stack(exc: BaseException) -> str:
	stack = getattr(exc, "stack", None)
	if isinstance(stack, str):
		return stack
	return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def _construct(name: Any, message: str) -> BaseException:
	candidate = getattr(builtins, name, None) if isinstance(name, str) else None
	if isinstance(candidate, type) and issubclass(candidate, BaseException):
		try:
			return candidate(message)
		except Exception:
			logger.debug(
				"Could not construct builtin %s, falling back to JSError",
				name,
				exc_info=True,
			)
	else:
		logger.debug("Error name %r is not a builtin exception, using JSError", name)
	return JSError(message, name=name if isinstance(name, str) else "Error")


__all__ = ["ErrorPlugin", "error_name", "error_message", "error_stack"]
