"""JSS: JSON Super Set.

Round-trips values plain JSON cannot carry (dates, regular expressions,
errors, ``undefined``, maps, sets, shared and circular references, custom
types) by tagging the keys they sit under.
"""

from jss.codec import (
	Codec,
	clear_custom,
	custom,
	decode,
	encode,
	get_default_codec,
	parse,
	stringify,
)
from jss.errors import ConfigError, JSSError, PointerResolutionError
from jss.plugins import (
	BuiltinPlugin,
	CustomPlugin,
	DecodeContext,
	EncodeContext,
	Plugin,
)
from jss.registry import BUILTIN_PLUGINS, Registry
from jss.values import JSError, Map, RegExp, Undefined, undefined
from jss.version import __version__

__all__ = [
	"__version__",
	# Operations
	"encode",
	"decode",
	"stringify",
	"parse",
	"custom",
	"clear_custom",
	"Codec",
	"get_default_codec",
	# Plugins
	"BUILTIN_PLUGINS",
	"Registry",
	"Plugin",
	"BuiltinPlugin",
	"CustomPlugin",
	"EncodeContext",
	"DecodeContext",
	# Values
	"undefined",
	"Undefined",
	"RegExp",
	"Map",
	"JSError",
	# Errors
	"JSSError",
	"ConfigError",
	"PointerResolutionError",
]
