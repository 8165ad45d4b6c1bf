"""Form payload builder tying root coercion, flattening and output formatting."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from form_data.logging import get_logger
from form_data.services.formatters import FORMATTERS, CallableFormatter, Formatter
from form_data.utils.flatten import coerce_pairs, not_nil, to_form
from form_data.utils.result import Result


def resolve_formatter(selector: Any) -> Formatter:
    """Map a formatter name to a built-in, or accept a formatter object as-is.

    Objects exposing ``output`` are used directly and bare callables are
    wrapped, so third-party formatters need no registration.
    """

    if isinstance(selector, str):
        formatter = FORMATTERS.get(selector)
        if formatter is None:
            raise ValueError(f"Unknown formatter: {selector!r}")
        return formatter
    if hasattr(selector, "output"):
        return selector
    if callable(selector):
        return CallableFormatter(selector)
    raise ValueError(f"Unknown formatter: {selector!r}")


def _build(pairs, formatter: Formatter, options: Optional[Mapping[str, Any]]):  # noqa: ANN001, ANN202
    fields = filter(not_nil, to_form(pairs))
    return formatter.output(fields, options or {})


def create(obj: Any, formatter: Any, options: Optional[Mapping[str, Any]] = None) -> Result:
    """Build a form payload from ``obj``.

    Returns a ``Result`` holding the formatter's payload, or the
    ``CoercionError`` when ``obj`` is not a record, mapping or sequence of
    pairs. The formatter is not invoked on failure.
    """

    coerced = coerce_pairs(obj)
    if not coerced.ok:
        get_logger().debug("Form data coercion failed", value_type=type(obj).__name__)
        return coerced
    payload = _build(coerced.value, resolve_formatter(formatter), options)
    return Result(value=payload)


def create_or_raise(obj: Any, formatter: Any, options: Optional[Mapping[str, Any]] = None) -> Any:
    """Like :func:`create` but returns the payload and raises ``CoercionError``."""

    return create(obj, formatter, options).unwrap()
