from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterable, Iterator, List, Tuple

from pydantic import BaseModel

from form_data.utils.files import FormFile
from form_data.utils.result import Result

Pair = Tuple[Any, Any]

_SCALAR_KEYS = (str, int, float, Enum)


class CoercionError(TypeError):
    """Raised when a value is not a record, mapping, or sequence of pairs."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"expected record, mapping, or sequence of pairs, got: {value!r}")


def _is_record(obj: Any) -> bool:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return True
    if isinstance(obj, BaseModel):
        return True
    return isinstance(obj, tuple) and hasattr(obj, "_fields")


def _record_pairs(obj: Any) -> List[Pair]:
    if isinstance(obj, BaseModel):
        pairs = [(name, getattr(obj, name)) for name in type(obj).model_fields]
        return pairs + list((obj.model_extra or {}).items())
    if isinstance(obj, tuple):
        return list(zip(obj._fields, obj))
    # shallow; nested records and files are handled by the traversal
    return [(f.name, getattr(obj, f.name)) for f in dataclasses.fields(obj)]


def _is_scalar_key(key: Any) -> bool:
    return key is None or isinstance(key, _SCALAR_KEYS)


def _is_pair(item: Any) -> bool:
    return isinstance(item, (tuple, list)) and len(item) == 2


def _pairs_of(obj: Any) -> List[Pair]:
    if _is_record(obj):
        return _record_pairs(obj)
    return list(obj.items())


def coerce_pairs(obj: Any) -> Result:
    """Coerce a root value into an ordered list of ``(key, value)`` pairs.

    Records keep their field declaration order, mappings their iteration
    order, and sequences of pairs are returned in the order given. Never
    raises; an unsupported shape comes back as a failed ``Result`` carrying
    a :class:`CoercionError`.
    """

    if isinstance(obj, FormFile):
        return Result(error=CoercionError(obj))
    if _is_record(obj):
        return Result(value=_pairs_of(obj))
    if isinstance(obj, Mapping):
        items = _pairs_of(obj)
        if not all(_is_scalar_key(key) for key, _ in items):
            return Result(error=CoercionError(obj))
        return Result(value=items)
    if isinstance(obj, (list, tuple)):
        pairs: List[Pair] = []
        for item in obj:
            if not _is_pair(item):
                return Result(error=CoercionError(obj))
            key, value = item
            if not _is_scalar_key(key):
                return Result(error=CoercionError(obj))
            pairs.append((key, value))
        return Result(value=pairs)
    return Result(error=CoercionError(obj))


def stringify_key(key: Any) -> str:
    if isinstance(key, Enum):
        return str(key.value)
    return str(key)


def flatten_value(value: Any, name: str) -> Iterator[Pair]:
    """Yield ``(name, leaf)`` pairs for ``value`` depth-first, left to right.

    Files are leaves and must be matched before records since a ``FormFile``
    is itself a dataclass. Tuples index like lists. A ``None`` key drops
    its value and everything below it, at any depth. Keys are interpolated
    as-is, so a key containing ``[`` or ``]`` produces an ambiguous name.
    """

    if isinstance(value, FormFile):
        yield name, value
    elif _is_record(value) or isinstance(value, Mapping):
        for key, child in _pairs_of(value):
            if key is None:
                continue
            yield from flatten_value(child, f"{name}[{stringify_key(key)}]")
    elif isinstance(value, (tuple, list)):
        for idx, child in enumerate(value):
            yield from flatten_value(child, f"{name}[{idx}]")
    else:
        yield name, value


def _pair_to_form(pair: Pair) -> Iterator[Pair]:
    key, value = pair
    if key is None:
        # dropped by not_nil, subtree included
        yield None, value
        return
    yield from flatten_value(value, stringify_key(key))


def to_form(pairs: Iterable[Pair]) -> Iterator[Pair]:
    """Flatten already-coerced root pairs; top-level names carry no brackets."""

    for pair in pairs:
        yield from _pair_to_form(pair)


def not_nil(pair: Pair | None) -> bool:
    if pair is None:
        return False
    name, value = pair
    return name is not None and value is not None


def flatten_payload(obj: Any) -> Iterator[Pair]:
    """Coerce ``obj`` and lazily yield its non-nil flat form fields.

    Raises :class:`CoercionError` immediately when ``obj`` has an
    unsupported shape, before any pair is produced.
    """

    pairs = coerce_pairs(obj).unwrap()
    return filter(not_nil, to_form(pairs))
