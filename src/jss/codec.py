from __future__ import annotations

from typing import Any

from jss import decoder, encoder
from jss.plugins import CustomPlugin
from jss.registry import Registry


class Codec:
	"""Encoder and decoder bound to one plugin registry.

	Each codec owns its registry, so plugins registered on one codec are
	invisible to another. The module-level functions of ``jss`` use a shared
	default codec (see ``get_default_codec``).

	Example:

	```python
	codec = Codec()
	codec.custom("X", check=is_point, encode=point_to_list, decode=list_to_point)
	text = codec.stringify({"origin": Point(0, 0)})
	```
	"""

	__slots__ = ("registry",)  # pyright: ignore[reportUnannotatedClassAttribute]
	registry: Registry

	def __init__(self, registry: Registry | None = None) -> None:
		self.registry = registry if registry is not None else Registry()

	def encode(self, value: Any) -> dict[str, Any]:
		return encoder.encode(value, self.registry)

	def decode(self, data: Any) -> Any:
		return decoder.decode(data, self.registry)

	def stringify(self, value: Any) -> str:
		return encoder.stringify(value, self.registry)

	def parse(self, text: str | bytes) -> Any:
		return decoder.parse(text, self.registry)

	def custom(self, tag: str, config: Any = None, /, **handlers: Any) -> CustomPlugin:
		"""Register a custom plugin.

		Handlers are given either as one config (a mapping or an object with
		``check``/``encode``/``decode`` attributes) or as keyword arguments.

		Raises:
			ConfigError: See ``Registry.register``.
			TypeError: If both a config and keyword handlers are given.
		"""
		if config is None:
			config = handlers
		elif handlers:
			raise TypeError("Pass either a plugin config or handler keywords, not both")
		return self.registry.register(tag, config)

	def clear_custom(self) -> None:
		self.registry.clear_custom()


_DEFAULT_CODEC = Codec()


def get_default_codec() -> Codec:
	return _DEFAULT_CODEC


def encode(value: Any) -> dict[str, Any]:
	return _DEFAULT_CODEC.encode(value)


def decode(data: Any) -> Any:
	return _DEFAULT_CODEC.decode(data)


def stringify(value: Any) -> str:
	return _DEFAULT_CODEC.stringify(value)


def parse(text: str | bytes) -> Any:
	return _DEFAULT_CODEC.parse(text)


def custom(tag: str, config: Any = None, /, **handlers: Any) -> CustomPlugin:
	return _DEFAULT_CODEC.custom(tag, config, **handlers)


def clear_custom() -> None:
	_DEFAULT_CODEC.clear_custom()


__all__ = [
	"Codec",
	"get_default_codec",
	"encode",
	"decode",
	"stringify",
	"parse",
	"custom",
	"clear_custom",
]
