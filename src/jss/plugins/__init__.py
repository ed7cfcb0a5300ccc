"""Plugin protocol for JSS type handlers.

A plugin teaches the encoder and decoder about one kind of value:

- ``check(key, value)`` decides whether the plugin handles ``value`` found
  under ``key`` (an object key or an array index).
- ``encode(path, key, value, context)`` returns a JSON-safe replacement.
- ``decode(value, path, context)`` restores the original value.

Custom plugins may also carry ``on_send`` / ``on_receive`` hooks. The core only
validates and stores them; transports that move large payloads out of band
call them.

Example:

```python
import jss

jss.custom(
	"X",
	check=lambda key, value: isinstance(value, Point),
	encode=lambda path, key, value, ctx: [value.x, value.y],
	decode=lambda value, path, ctx: Point(*value),
)
```
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Protocol, TypeAlias

from jss.errors import ConfigError
from jss.values import Path, ValueKind

Key: TypeAlias = str | int | None


@dataclass(slots=True)
class EncodeContext:
	"""Traversal state of one ``encode`` call.

	Attributes:
		visited: ``id()`` of every walked object or array, mapped to the path
			where it was first seen.
	"""

	visited: dict[int, Path] = field(default_factory=dict)


@dataclass(slots=True)
class DecodeContext:
	"""Traversal state of one ``decode`` call.

	Attributes:
		pointers: ``(target_path, source_path)`` pairs waiting for the second
			pass, in the order they were found.
	"""

	pointers: list[tuple[Path, Path]] = field(default_factory=list)


class Plugin(Protocol):
	"""Contract shared by built-in and custom type handlers."""

	@property
	def tag(self) -> str: ...

	@property
	def name(self) -> str: ...

	def check(self, key: Key, value: Any) -> bool: ...

	def encode(
		self, path: Path, key: Key, value: Any, context: EncodeContext
	) -> Any: ...

	def decode(self, value: Any, path: Path, context: DecodeContext) -> Any: ...


class BuiltinPlugin:
	"""Base for the plugins shipped with JSS.

	``kind`` links the plugin to a ``ValueKind`` so the encoder can dispatch on
	it directly. Plugins without a kind are never selected while encoding.
	"""

	tag: ClassVar[str]
	name: ClassVar[str]
	kind: ClassVar[ValueKind | None] = None
	decode_only: ClassVar[bool] = False

	def __repr__(self) -> str:
		return f"<{type(self).__name__} tag={self.tag!r}>"


@dataclass(frozen=True, slots=True)
class CustomPlugin:
	"""A user supplied type handler, validated at registration."""

	tag: str
	check: Callable[[Key, Any], bool]
	encode: Callable[[Path, Key, Any, EncodeContext], Any]
	decode: Callable[[Any, Path, DecodeContext], Any]
	on_send: Callable[..., Any] | None = None
	on_receive: Callable[..., Any] | None = None
	name: str = "custom"


_REQUIRED_HANDLERS = ("check", "encode", "decode")
_OPTIONAL_HANDLERS = ("on_send", "on_receive")


def _read(config: Any, attr: str) -> Any:
	if isinstance(config, Mapping):
		return config.get(attr)
	return getattr(config, attr, None)


def plugin_from_config(tag: str, config: Any) -> CustomPlugin:
	"""Build a ``CustomPlugin`` from a mapping or an object exposing the handlers.

	Raises:
		ConfigError: If a required handler is missing or not callable, or if an
			optional hook is present but not callable.
	"""
	handlers: dict[str, Any] = {}
	for attr in _REQUIRED_HANDLERS:
		handler = _read(config, attr)
		if not callable(handler):
			raise ConfigError(f"Plugin must provide a '{attr}' function", tag=tag)
		handlers[attr] = handler
	for attr in _OPTIONAL_HANDLERS:
		handler = _read(config, attr)
		if handler is not None and not callable(handler):
			raise ConfigError(f"Plugin '{attr}' must be callable if provided", tag=tag)
		handlers[attr] = handler
	name = _read(config, "name")
	if not isinstance(name, str) or not name:
		name = f"custom:{tag}"
	return CustomPlugin(tag=tag, name=name, **handlers)


__all__ = [
	"Key",
	"EncodeContext",
	"DecodeContext",
	"Plugin",
	"BuiltinPlugin",
	"CustomPlugin",
	"plugin_from_config",
]
