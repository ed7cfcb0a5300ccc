"""JSS decoder.

Reverses ``jss.encoder``. Decoding runs in two passes:

1. Walk the tagged structure. Keys are split into ``(name, tag)``; tagged
   values go through their plugin, arrays hand each slot the tag derived from
   the array tag, and everything else is copied. Pointers cannot be resolved
   yet (their target may not exist), so they leave ``None`` behind and are
   queued on the ``DecodeContext``.
2. Patch every queued pointer by walking the decoded tree.

Unknown tags are not an error: the value passes through as if untagged.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Sequence
from typing import Any

from jss.errors import PointerResolutionError
from jss.plugins import DecodeContext
from jss.registry import Registry
from jss.values import Path, js_key

logger = logging.getLogger(__name__)

_TAGGED_KEY = re.compile(r"(.+)<!(.*)>")


def decode(data: Any, registry: Registry) -> Any:
	"""Restore the value encoded in ``data``.

	Raises:
		PointerResolutionError: If a pointer refers to a path that does not
			exist in the decoded tree.
	"""
	context = DecodeContext()

	def process(value: Any, tag: str | None, path: Path) -> Any:
		if tag:
			plugin = registry.lookup(tag)
			if plugin is not None:
				return plugin.decode(value, path, context)
			if not tag.startswith("["):
				logger.debug("Unknown tag %r at %s, passing value through", tag, path)

		if isinstance(value, list):
			tags = element_tags(tag, len(value))
			return [
				process(item, item_tag, (*path, index))
				for index, (item, item_tag) in enumerate(zip(value, tags))
			]

		if isinstance(value, dict):
			result: dict[str, Any] = {}
			for key, entry in value.items():
				name, entry_tag = split_tagged_key(key)
				result[name] = process(entry, entry_tag, (*path, name))
			return result

		return value

	result = process(data, None, ())
	for target, source in context.pointers:
		resolve_pointer(result, target, source)
	return result


def parse(text: str | bytes, registry: Registry) -> Any:
	return decode(json.loads(text), registry)


def split_tagged_key(key: str) -> tuple[str, str | None]:
	"""Split ``"name<!tag>"`` into ``("name", "tag")``; untagged keys give ``None``.

	Array tags that lost their closing bracket (``"items<![D,D>"``) get it back.
	"""
	match = _TAGGED_KEY.search(key)
	if match is None:
		return key, None
	name, tag = match.group(1), match.group(2)
	if tag.startswith("[") and not tag.endswith("]"):
		tag += "]"
	return name, tag


def split_array_tag(tag: str) -> list[str]:
	"""Split a per-element array tag on its top-level commas.

	>>> split_array_tag("[D,[D],D]")
	['D', '[D]', 'D']
	>>> split_array_tag("[,,[D]]")
	['', '', '[D]']
	"""
	parts: list[str] = []
	current: list[str] = []
	depth = 0
	for char in tag[1:-1]:
		if char == "[":
			depth += 1
		elif char == "]":
			depth -= 1
		if char == "," and depth == 0:
			parts.append("".join(current))
			current = []
		else:
			current.append(char)
	parts.append("".join(current))
	return parts


def element_tags(tag: str | None, length: int) -> list[str | None]:
	if tag and tag.startswith("[*"):
		return [tag[2:-1]] * length
	if tag and tag.startswith("["):
		parts = split_array_tag(tag)
		return [parts[index] if index < len(parts) else None for index in range(length)]
	return [None] * length


def resolve_pointer(root: Any, target: Sequence[str | int], source: Path) -> None:
	try:
		reference = root
		for segment in target:
			reference = _step(reference, segment)
		parent = root
		for segment in source[:-1]:
			parent = _step(parent, segment)
		_assign(parent, source[-1], reference)
	except (KeyError, IndexError, TypeError, ValueError) as exc:
		raise PointerResolutionError(
			f"Cannot resolve pointer to {list(target)!r} from {list(source)!r}",
			target=target,
			source=source,
		) from exc


def _index(segment: str | int) -> int:
	index = int(segment)
	if index < 0:
		raise IndexError(f"Negative array index {index}")
	return index


def _step(container: Any, segment: str | int) -> Any:
	if isinstance(container, list):
		return container[_index(segment)]
	if isinstance(container, dict):
		return container[js_key(segment)]
	raise TypeError(f"Cannot walk into {type(container).__name__}")


def _assign(container: Any, segment: str | int, value: Any) -> None:
	if isinstance(container, list):
		container[_index(segment)] = value
	elif isinstance(container, dict):
		container[js_key(segment)] = value
	else:
		raise TypeError(f"Cannot assign into {type(container).__name__}")


__all__ = [
	"decode",
	"parse",
	"split_tagged_key",
	"split_array_tag",
	"element_tags",
	"resolve_pointer",
]
