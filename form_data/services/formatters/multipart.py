from __future__ import annotations

from typing import Any, Iterable, List, Tuple

from form_data.services.formatters.base import FieldPair, Formatter, Options
from form_data.utils.files import FormFile

FILE_KIND = "file"
FIELD_KIND = ""
MULTIPART_TAG = "multipart"
DISPOSITION = "form-data"

Metadata = Tuple[str, str]
Entry = Tuple[str, Any, Tuple[str, List[Metadata]], list]


def _quote(value: Any) -> str:
    return f'"{value}"'


def format_entry(name: str, value: Any) -> Entry:
    """Build one multipart entry for a flat field.

    >>> format_entry("key", "one")
    ('', 'one', ('form-data', [('name', '"key"')]), [])
    """

    if isinstance(value, FormFile):
        metadata = [("name", _quote(name)), ("filename", _quote(value.filename))]
        return (FILE_KIND, value.path, (DISPOSITION, metadata), [])
    content = value if isinstance(value, bytes) else str(value)
    return (FIELD_KIND, content, (DISPOSITION, [("name", _quote(name))]), [])


class MultipartFormatter(Formatter):
    """Produces ``("multipart", [entry, ...])`` for multipart/form-data encoders.

    Each entry is ``(kind, content, ("form-data", metadata), [])`` where kind
    is ``"file"`` for uploads and ``""`` for plain fields. Options are ignored.
    """

    content_type = "multipart/form-data"

    def output(self, pairs: Iterable[FieldPair], options: Options = None) -> Tuple[str, List[Entry]]:
        return (MULTIPART_TAG, [format_entry(name, value) for name, value in pairs])
