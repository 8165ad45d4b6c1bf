from collections import OrderedDict, namedtuple
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import pytest
from pydantic import BaseModel

from form_data.utils.files import FormFile
from form_data.utils.flatten import CoercionError, coerce_pairs, flatten_payload, not_nil, to_form


@dataclass
class Address:
    city: str
    zip: Optional[str] = None


class Profile(BaseModel):
    name: str
    address: Address
    tags: list = []


Point = namedtuple("Point", ["x", "y"])


class Color(Enum):
    RED = "red"


def test_depth_first_left_to_right_order():
    result = list(flatten_payload([("a", 1), ("b", [2, 3])]))
    assert result == [("a", 1), ("b[0]", 2), ("b[1]", 3)]


def test_nil_values_are_removed():
    assert list(flatten_payload({"a": None, "b": 1})) == [("b", 1)]


def test_nil_key_drops_whole_subtree():
    assert list(flatten_payload([(None, {"x": 1}), ("b", 2)])) == [("b", 2)]


def test_top_level_names_are_bare():
    assert list(flatten_payload({"key": "one"})) == [("key", "one")]


def test_nested_mapping_is_bracketed():
    assert list(flatten_payload({"key": {"inner": "v"}})) == [("key[inner]", "v")]


def test_deep_nesting_mixes_lists_and_mappings():
    data = {"user": {"addresses": [{"city": "Austin"}, {"city": "Oslo", "zip": None}]}}
    assert list(flatten_payload(data)) == [
        ("user[addresses][0][city]", "Austin"),
        ("user[addresses][1][city]", "Oslo"),
    ]


def test_tuples_are_indexed_like_lists():
    assert list(flatten_payload({"pos": (1, "b")})) == [("pos[0]", 1), ("pos[1]", "b")]


def test_nested_pair_list_is_indexed_not_keyed():
    assert list(flatten_payload({"kw": [("a", 1)]})) == [("kw[0][0]", "a"), ("kw[0][1]", 1)]


def test_records_use_field_order():
    profile = Profile(name="ann", address=Address(city="Lima"), tags=["x"])
    assert list(flatten_payload(profile)) == [
        ("name", "ann"),
        ("address[city]", "Lima"),
        ("tags[0]", "x"),
    ]


def test_named_tuple_is_a_record():
    assert list(flatten_payload({"p": Point(1, 2)})) == [("p[x]", 1), ("p[y]", 2)]


def test_file_reference_is_terminal():
    upload = FormFile("/tmp/report.pdf")
    assert list(flatten_payload({"doc": {"file": upload}})) == [("doc[file]", upload)]


def test_strings_and_sets_are_scalars():
    tags = frozenset({"a"})
    assert list(flatten_payload({"s": "abc", "t": tags})) == [("s", "abc"), ("t", tags)]


def test_enum_and_integer_keys_are_stringified():
    assert list(flatten_payload({Color.RED: {1: True}})) == [("red[1]", True)]


def test_bracket_characters_in_keys_are_not_escaped():
    assert list(flatten_payload({"a[b]": {"c]": 1}})) == [("a[b][c]]", 1)]


def test_already_flat_input_round_trips():
    pairs = [("a", "1"), ("b", 2), ("c", None), ("a", "3")]
    assert list(flatten_payload(pairs)) == [("a", "1"), ("b", 2), ("a", "3")]


def test_coercion_of_pairs_is_idempotent():
    pairs = [("z", 1), ("a", 2)]
    first = coerce_pairs(pairs)
    assert first.ok
    assert first.value == pairs
    assert coerce_pairs(first.value).value == pairs


def test_coercion_accepts_mappings_and_json_style_pairs():
    assert coerce_pairs(OrderedDict([("b", 1), ("a", 2)])).value == [("b", 1), ("a", 2)]
    assert coerce_pairs([["a", 1]]).value == [("a", 1)]
    assert coerce_pairs([]).value == []


@pytest.mark.parametrize(
    "value",
    [42, "text", b"raw", {1, 2}, len, [1, 2], [("a", 1, 2)], [([1], 2)], FormFile("x")],
)
def test_coercion_rejects_unsupported_roots(value):
    result = coerce_pairs(value)
    assert not result.ok
    assert isinstance(result.error, CoercionError)
    assert result.error.value is value


def test_flatten_payload_raises_before_yielding():
    with pytest.raises(CoercionError, match="expected record, mapping, or sequence of pairs"):
        flatten_payload(7)


def test_to_form_is_lazy():
    def pairs():
        yield ("a", 1)
        raise AssertionError("consumed too far")

    stream = to_form(pairs())
    assert next(stream) == ("a", 1)


def test_not_nil():
    assert not_nil(("a", 1))
    assert not not_nil(("a", None))
    assert not not_nil((None, 1))
    assert not not_nil(None)


def test_mapping_root_with_non_scalar_key_is_rejected():
    result = coerce_pairs({(1, 2): "v"})
    assert not result.ok
    assert isinstance(result.error, CoercionError)
    assert not coerce_pairs([((1, 2), "v")]).ok


def test_nested_nil_key_drops_subtree():
    data = {"a": {None: 1, "b": {None: {"c": 2}}, "d": 3}}
    assert list(flatten_payload(data)) == [("a[d]", 3)]


def test_model_extra_fields_follow_declared_fields():
    class Loose(BaseModel):
        model_config = {"extra": "allow"}

        name: str

    record = Loose(name="ann", nickname="an")
    assert list(flatten_payload({"user": record})) == [("user[name]", "ann"), ("user[nickname]", "an")]
