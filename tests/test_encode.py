import datetime as dt
import json
import math
import re
from dataclasses import dataclass

import jss
import pytest
from jss import Map, RegExp, undefined
from jss.encoder import array_tag, tagged_key

EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.UTC)
ONE_SECOND = EPOCH + dt.timedelta(seconds=1)


def test_encodes_date_as_epoch_millis():
	assert jss.encode({"d": EPOCH}) == {"d<!D>": 0}


def test_naive_datetime_is_taken_as_utc():
	assert jss.encode({"d": dt.datetime(1970, 1, 1, 0, 0, 1)}) == {"d<!D>": 1000}


def test_aware_datetime_is_converted_to_utc():
	plus_two = dt.timezone(dt.timedelta(hours=2))
	when = dt.datetime(1970, 1, 1, 2, 0, tzinfo=plus_two)
	assert jss.encode({"d": when}) == {"d<!D>": 0}


def test_primitives_pass_through_untagged():
	data = {"s": "text", "i": 1, "f": 1.5, "b": True, "n": None}
	assert jss.encode(data) == data


def test_encodes_regexp_values():
	encoded = jss.encode(
		{"js": RegExp("a+", "gi"), "py": re.compile("ab", re.IGNORECASE | re.MULTILINE)}
	)
	assert encoded == {"js<!R>": "/a+/gi", "py<!R>": "/ab/im"}


def test_encodes_error_as_name_message_stack():
	encoded = jss.encode({"e": TypeError("bad input")})
	assert encoded == {"e<!E>": ["TypeError", "bad input", "TypeError: bad input\n"]}


def test_encodes_raised_error_with_traceback():
	try:
		raise ValueError("boom")
	except ValueError as exc:
		err = exc
	name, message, stack = jss.encode({"e": err})["e<!E>"]
	assert name == "ValueError"
	assert message == "boom"
	assert stack.startswith("Traceback (most recent call last):")
	assert stack.endswith("ValueError: boom\n")


def test_encodes_set_as_list():
	encoded = jss.encode({"tags": {"a"}})
	assert encoded == {"tags<!S>": ["a"]}


def test_encodes_map_with_stringified_keys():
	encoded = jss.encode({"m": Map({1: "one", False: "no", None: "nil", "k": 2})})
	assert encoded == {"m<!M>": {"1": "one", "false": "no", "null": "nil", "k": 2}}


def test_plain_dict_keys_are_stringified():
	assert jss.encode({"outer": {1: "a", 2.0: "b"}}) == {"outer": {"1": "a", "2": "b"}}


def test_undefined_properties_are_dropped_at_root():
	assert jss.encode({"a": 1, "b": undefined, "c": 3}) == {"a": 1, "c": 3}


def test_undefined_properties_are_dropped_in_nested_objects():
	assert jss.encode({"nested": {"a": 1, "b": undefined}}) == {"nested": {"a": 1}}


def test_undefined_in_arrays_is_tagged():
	assert jss.encode({"arr": [1, undefined]}) == {"arr<![,U]>": [1, None]}


def test_homogeneous_array_uses_star_shorthand():
	assert jss.encode({"dates": [EPOCH, ONE_SECOND]}) == {"dates<![*D]>": [0, 1000]}


def test_single_element_array_uses_star_shorthand():
	assert jss.encode({"dates": [EPOCH]}) == {"dates<![*D]>": [0]}


def test_homogeneous_sets_use_star_shorthand():
	encoded = jss.encode({"sets": [{1}, {2}, {3}]})
	assert encoded == {"sets<![*S]>": [[1], [2], [3]]}


def test_one_untagged_element_forces_per_element_form():
	encoded = jss.encode({"mixed": [EPOCH, "string", ONE_SECOND]})
	assert encoded == {"mixed<![D,,D]>": [0, "string", 1000]}


def test_mixed_tags_use_per_element_form():
	encoded = jss.encode({"mixed": [EPOCH, {1}]})
	assert encoded == {"mixed<![D,S]>": [0, [1]]}


def test_untagged_arrays_carry_no_tag():
	assert jss.encode({"arr": [1, "a", [2]]}) == {"arr": [1, "a", [2]]}


def test_nested_array_tags():
	assert jss.encode({"arr": ["a", "b", [EPOCH]]}) == {"arr<![,,[*D]]>": ["a", "b", [0]]}
	assert jss.encode({"arr": [[EPOCH], [ONE_SECOND]]}) == {
		"arr<![*[*D]]>": [[0], [1000]]
	}
	assert jss.encode({"arr": [EPOCH, [EPOCH], EPOCH]}) == {
		"arr<![D,[*D],D]>": [0, [0], 0]
	}


def test_tuples_are_encoded_as_arrays():
	assert jss.encode({"pair": (EPOCH, 1)}) == {"pair<![D,]>": [0, 1]}


def test_root_array_exposes_indices_as_keys():
	assert jss.encode([EPOCH, ONE_SECOND, "x"]) == {"0<!D>": 0, "1<!D>": 1000, "2": "x"}


def test_root_without_members_encodes_to_empty_object():
	assert jss.encode(42) == {}
	assert jss.encode("text") == {}
	assert jss.encode(EPOCH) == {}


def test_empty_containers():
	assert jss.encode({"arr": [], "obj": {}}) == {"arr": [], "obj": {}}
	assert jss.encode({}) == {}


def test_self_reference_becomes_root_pointer():
	obj: dict[str, object] = {"name": "root"}
	obj["self"] = obj
	assert jss.encode(obj) == {"name": "root", "self<!P>": []}


def test_shared_reference_becomes_pointer_to_first_path():
	shared = {"v": 1}
	assert jss.encode({"a": shared, "b": shared}) == {"a": {"v": 1}, "b<!P>": ["a"]}


def test_shared_reference_in_array():
	shared = {"id": "shared"}
	encoded = jss.encode({"items": [shared, shared, shared]})
	assert encoded == {
		"items<![,P,P]>": [{"id": "shared"}, ["items", 0], ["items", 0]]
	}


def test_mutual_references():
	a: dict[str, object] = {"name": "a"}
	b: dict[str, object] = {"name": "b", "ref": a}
	a["ref"] = b
	assert jss.encode({"a": a, "b": b}) == {
		"a": {"name": "a", "ref": {"name": "b", "ref<!P>": ["a"]}},
		"b<!P>": ["a", "ref"],
	}


def test_unsupported_values_are_dropped_from_objects_and_nulled_in_arrays():
	encoded = jss.encode({"f": lambda: 1, "cls": int, "arr": [len, 1]})
	assert encoded == {"arr": [None, 1]}


@dataclass
class Point:
	x: int
	y: int


class Plain:
	def __init__(self) -> None:
		self.visible = 1
		self._hidden = 2


def test_dataclasses_and_plain_objects_are_walked_as_objects():
	encoded = jss.encode({"p": Point(1, 2), "o": Plain()})
	assert encoded == {"p": {"x": 1, "y": 2}, "o": {"visible": 1}}


def test_dataclass_root_is_walked():
	assert jss.encode(Point(3, EPOCH)) == {"x": 3, "y<!D>": 0}  # pyright: ignore[reportArgumentType]


def test_stringify_is_compact_json():
	assert jss.stringify({"d": EPOCH, "s": "é"}) == '{"d<!D>":0,"s":"é"}'


def test_stringify_degrades_unwalked_set_members_like_json_stringify():
	text = jss.stringify({"s": {EPOCH}})
	assert text == '{"s<!S>":["1970-01-01T00:00:00.000Z"]}'


def _reject_constant(name):
	raise ValueError(f"{name} is not JSON")


@pytest.mark.parametrize("number", [math.nan, math.inf, -math.inf])
def test_stringify_writes_non_finite_floats_as_null(number):
	text = jss.stringify({"x": number, "arr": [1, number], "m": Map({"k": number})})
	assert json.loads(text, parse_constant=_reject_constant) == {
		"x": None,
		"arr": [1, None],
		"m<!M>": {"k": None},
	}


def test_encode_keeps_non_finite_floats():
	assert math.isnan(jss.encode({"x": math.nan})["x"])


def test_stringify_rejects_cycles_inside_map_payloads():
	inner: dict[str, object] = {}
	inner["self"] = inner
	with pytest.raises(ValueError, match="Circular reference"):
		jss.stringify({"m": Map({"k": inner})})


def test_pointers_into_root_array_use_string_indices():
	shared = {"v": 1}
	assert jss.encode([shared, shared]) == {"0": {"v": 1}, "1<!P>": ["0"]}
	assert jss.encode([{"items": [shared]}, shared]) == {
		"0": {"items": [{"v": 1}]},
		"1<!P>": ["0", "items", 0],
	}


def test_values_without_json_form_pass_through_and_are_logged(caplog: pytest.LogCaptureFixture):
	day = dt.date(2024, 1, 1)
	with caplog.at_level("DEBUG", logger="jss.encoder"):
		assert jss.encode({"day": day}) == {"day": day}
	assert any("has no JSON form" in record.getMessage() for record in caplog.records)
	assert jss.stringify({"day": day}) == '{"day":null}'


def test_array_tag_folding():
	assert array_tag(["", ""]) == ""
	assert array_tag(["D", "D"]) == "[*D]"
	assert array_tag(["D", ""]) == "[D,]"
	assert array_tag(["", "D"]) == "[,D]"
	assert array_tag([]) == ""


def test_tagged_key():
	assert tagged_key("name", "") == "name"
	assert tagged_key("name", "D") == "name<!D>"
	assert tagged_key("items", "[*D]") == "items<![*D]>"
