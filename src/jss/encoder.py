"""JSS encoder.

Walks a Python value and produces a JSON-safe structure in which every value
JSON cannot carry is replaced by a plugin payload, and the key it sits under
gets a ``<!TAG>`` suffix::

	{"created": datetime(2024, 1, 1, tzinfo=UTC), "pattern": RegExp("a", "i")}
	->  {"created<!D>": 1704067200000, "pattern<!R>": "/a/i"}

Arrays do not have keys, so the tags of their elements are folded into the
tag of the key holding the array: ``[D,,S]`` lists one tag per slot and
``[*D]`` says every slot carries ``D``. Both forms nest (``[,[*D]]``).

Objects and arrays are tracked by identity. The second time one is reached it
is emitted as a pointer (``P``) holding the path of its first occurrence, which
keeps shared references shared and makes cycles finite.
"""

from __future__ import annotations

import dataclasses
import datetime as dt
import json
import logging
import math
import re
from collections.abc import Iterable
from typing import Any

from jss.plugins import EncodeContext
from jss.registry import Registry
from jss.values import (
	WALKABLE,
	Path,
	RegExp,
	ValueKind,
	classify,
	js_key,
	undefined,
)

logger = logging.getLogger(__name__)

# Marks values JSON has no room for (functions, classes, modules)
_DROP: Any = object()


def encode(data: Any, registry: Registry) -> dict[str, Any]:
	"""Encode ``data`` into a tagged, JSON-safe ``dict``.

	The root is always encoded as an object: a root array exposes its indices as
	keys (``"0<!D>"``), and a root that has no members encodes to ``{}``.
	Object properties holding ``undefined`` are dropped.
	"""
	context = EncodeContext()
	custom_plugins = registry.custom_plugins()

	def process(value: Any, path: Path) -> tuple[str, Any]:
		key = path[-1]
		kind = classify(value)

		tag = registry.tag_for_kind(kind)
		if tag is not None:
			plugin = registry.builtin(tag)
			assert plugin is not None
			return tag, plugin.encode(path, key, value, context)

		for custom_tag, custom in custom_plugins:
			if custom.check(key, value):
				return custom_tag, custom.encode(path, key, value, context)

		if kind in WALKABLE:
			if id(value) in context.visited:
				pointer = registry.builtin("P")
				assert pointer is not None
				return "P", pointer.encode(path, key, value, context)
			context.visited[id(value)] = path
			if kind == "array":
				return process_array(value, path)
			return "", process_members(value, kind, path)

		if kind == "unsupported":
			logger.debug("Dropping unsupported value of type %s at %s", type(value), path)
			return "", _DROP
		if kind == "opaque":
			logger.debug(
				"Value of type %s at %s has no JSON form, passing it through", type(value), path
			)
		return "", value

	def process_array(items: Iterable[Any], path: Path) -> tuple[str, list[Any]]:
		tags: list[str] = []
		result: list[Any] = []
		for index, item in enumerate(items):
			tag, encoded = process(item, (*path, index))
			tags.append(tag)
			result.append(None if encoded is _DROP else encoded)
		return array_tag(tags), result

	def process_members(value: Any, kind: ValueKind, path: Path) -> dict[str, Any]:
		result: dict[str, Any] = {}
		for key, entry in _members(value, kind):
			if entry is undefined:
				continue
			name = js_key(key)
			tag, encoded = process(entry, (*path, name))
			if encoded is _DROP:
				continue
			result[tagged_key(name, tag)] = encoded
		return result

	root_kind = classify(data)
	if root_kind not in WALKABLE:
		logger.debug("Root value of kind %s has no members, encoding as {}", root_kind)
		return {}
	context.visited[id(data)] = ()
	return process_members(data, root_kind, ())


def stringify(data: Any, registry: Registry) -> str:
	return json.dumps(
		_finite(encode(data, registry), set()),
		separators=(",", ":"),
		ensure_ascii=False,
		allow_nan=False,
		default=_json_default,
	)


def array_tag(tags: list[str]) -> str:
	"""Fold per-element tags into an array tag; ``""`` when nothing is tagged."""
	if not any(tags):
		return ""
	first = tags[0]
	if all(tag == first for tag in tags):
		return f"[*{first}]"
	return f"[{','.join(tags)}]"


def tagged_key(name: str, tag: str) -> str:
	if not tag:
		return name
	return f"{name}<!{tag}>"


def _members(value: Any, kind: ValueKind) -> Iterable[tuple[str | int, Any]]:
	if kind == "object":
		return ((js_key(key), entry) for key, entry in value.items())
	if kind == "array":
		return enumerate(value)
	if dataclasses.is_dataclass(value):
		return (
			(field.name, getattr(value, field.name))
			for field in dataclasses.fields(value)
		)
	return (
		(key, entry) for key, entry in vars(value).items() if not key.startswith("_")
	)


def _finite(value: Any, active: set[int]) -> Any:
	# NaN and Infinity are not JSON; JSON.stringify writes them as null
	if isinstance(value, float) and not math.isfinite(value):
		return None
	if isinstance(value, (dict, list, tuple)):
		if id(value) in active:
			raise ValueError("Circular reference detected")
		active.add(id(value))
		try:
			if isinstance(value, dict):
				return {key: _finite(entry, active) for key, entry in value.items()}
			return [_finite(item, active) for item in value]
		finally:
			active.discard(id(value))
	return value


def _json_default(value: Any) -> Any:
	# Map and Set payloads are not walked; degrade their members the way
	# JSON.stringify does
	if isinstance(value, dt.datetime):
		if value.tzinfo is None:
			value = value.replace(tzinfo=dt.timezone.utc)
		value = value.astimezone(dt.timezone.utc)
		return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
	if isinstance(value, (set, frozenset, RegExp, re.Pattern, BaseException)):
		return {}
	return None


__all__ = ["encode", "stringify", "array_tag", "tagged_key"]
