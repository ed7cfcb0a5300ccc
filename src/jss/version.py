"""
Exposes `__version__`, the installed distribution version of jss.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

__all__ = ["__version__"]


def _resolve_version() -> str:
	try:
		return _pkg_version("jss")
	except PackageNotFoundError:
		# Running from a source checkout without an install
		return "0.0.0"


__version__: str = _resolve_version()
