from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Final

from jss.errors import ConfigError
from jss.plugins import BuiltinPlugin, CustomPlugin, Plugin, plugin_from_config
from jss.plugins.binary import BinaryPlugin
from jss.plugins.date import DatePlugin
from jss.plugins.error import ErrorPlugin
from jss.plugins.map import MapPlugin
from jss.plugins.pointer import PointerPlugin
from jss.plugins.regexp import RegExpPlugin
from jss.plugins.set import SetPlugin
from jss.plugins.undefined import UndefinedPlugin
from jss.values import ValueKind

logger = logging.getLogger(__name__)

BUILTIN_PLUGINS: Final[Mapping[str, BuiltinPlugin]] = MappingProxyType(
	{
		"D": DatePlugin(),
		"R": RegExpPlugin(),
		"E": ErrorPlugin(),
		"U": UndefinedPlugin(),
		"M": MapPlugin(),
		"S": SetPlugin(),
		"P": PointerPlugin(),
		"I": BinaryPlugin(),
	}
)


class Registry:
	"""Which tags are taken, and by which plugin.

	Built-in plugins are fixed at construction. Custom plugins are added with
	``register`` and kept in registration order, which is the order the encoder
	tries their ``check`` in. A registry is not synchronized: register every
	plugin before encoding or decoding with it.
	"""

	__slots__ = ("_builtins", "_kind_tags", "_custom")  # pyright: ignore[reportUnannotatedClassAttribute]
	_builtins: dict[str, BuiltinPlugin]
	_kind_tags: dict[ValueKind, str]
	_custom: dict[str, CustomPlugin]

	def __init__(self, builtins: Mapping[str, BuiltinPlugin] = BUILTIN_PLUGINS) -> None:
		self._builtins = dict(builtins)
		self._kind_tags = {
			plugin.kind: tag
			for tag, plugin in self._builtins.items()
			if plugin.kind is not None
		}
		self._custom = {}

	@property
	def builtin_tags(self) -> tuple[str, ...]:
		return tuple(self._builtins)

	def builtin(self, tag: str | None) -> BuiltinPlugin | None:
		if tag is None:
			return None
		return self._builtins.get(tag)

	def builtin_plugins(self) -> list[tuple[str, BuiltinPlugin]]:
		return list(self._builtins.items())

	def tag_for_kind(self, kind: ValueKind) -> str | None:
		return self._kind_tags.get(kind)

	def register(self, tag: str, config: Any) -> CustomPlugin:
		"""Register a custom plugin under a one-character tag.

		Args:
			tag: Single character that will appear as ``key<!tag>`` on the wire.
			config: Mapping or object providing ``check``, ``encode``, ``decode``
				and optionally ``on_send``, ``on_receive`` and ``name``.

		Returns:
			The validated plugin.

		Raises:
			ConfigError: If the tag is not a single character, collides with a
				built-in or custom tag, or if the handlers are malformed.
		"""
		if not isinstance(tag, str) or len(tag) != 1:
			raise ConfigError(f"Tag must be a single character, got: {tag!r}", tag=tag)
		if tag in self._builtins:
			raise ConfigError(f"Tag '{tag}' conflicts with built-in type", tag=tag)
		if tag in self._custom:
			raise ConfigError(f"Tag '{tag}' is already registered", tag=tag)
		plugin = plugin_from_config(tag, config)
		self._custom[tag] = plugin
		logger.debug("Registered custom plugin %s for tag '%s'", plugin.name, tag)
		return plugin

	def get(self, tag: str | None) -> CustomPlugin | None:
		if tag is None:
			return None
		return self._custom.get(tag)

	def lookup(self, tag: str | None) -> Plugin | None:
		"""Resolve a tag to its plugin, built-ins first."""
		plugin = self.builtin(tag)
		if plugin is not None:
			return plugin
		return self.get(tag)

	def has(self, tag: str) -> bool:
		return tag in self._custom

	def custom_plugins(self) -> list[tuple[str, CustomPlugin]]:
		return list(self._custom.items())

	def clear_custom(self) -> None:
		if self._custom:
			logger.debug("Clearing %d custom plugin(s)", len(self._custom))
		self._custom.clear()


__all__ = ["BUILTIN_PLUGINS", "Registry"]
