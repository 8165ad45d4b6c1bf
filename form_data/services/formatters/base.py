from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional, Tuple

FieldPair = Tuple[str, Any]
Options = Optional[Mapping[str, Any]]


class Formatter:
    """Turns a flat sequence of ``(name, value)`` fields into a payload.

    Fields arrive fully flattened and nil-free; implementations must not
    parse names for nesting.
    """

    content_type: str = "application/octet-stream"

    def output(self, pairs: Iterable[FieldPair], options: Options = None):  # noqa: ANN201
        raise NotImplementedError


class CallableFormatter(Formatter):
    """Adapts a plain ``fn(pairs, options)`` into a formatter."""

    def __init__(self, fn: Callable[[Iterable[FieldPair], Options], Any]):
        self.fn = fn
        self.content_type = getattr(fn, "content_type", Formatter.content_type)

    def output(self, pairs: Iterable[FieldPair], options: Options = None):  # noqa: ANN201
        return self.fn(pairs, options)
