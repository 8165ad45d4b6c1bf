from __future__ import annotations

import os
from typing import Any, Iterable
from urllib.parse import quote, quote_plus, urlencode

from form_data.services.formatters.base import FieldPair, Formatter, Options
from form_data.settings import settings
from form_data.utils.files import FormFile


def _text(value: Any) -> Any:
    if isinstance(value, bytes):
        return value
    if isinstance(value, FormFile):
        return os.fspath(value.path)
    return str(value)


class UrlEncodedFormatter(Formatter):
    """Serializes fields into an ``application/x-www-form-urlencoded`` body.

    Recognized options: ``encoding`` and ``quote_plus``. Defaults come from
    settings.
    """

    content_type = "application/x-www-form-urlencoded"

    def output(self, pairs: Iterable[FieldPair], options: Options = None) -> bytes:
        options = options or {}
        encoding = options.get("encoding") or settings.url_encoding
        use_plus = options.get("quote_plus", settings.url_quote_plus)
        query = urlencode(
            [(str(name), _text(value)) for name, value in pairs],
            encoding=encoding,
            quote_via=quote_plus if use_plus else quote,
        )
        return query.encode("ascii")
