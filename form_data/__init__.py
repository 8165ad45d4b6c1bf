"""Build multipart and url-encoded form fields from nested Python data."""

from form_data.services.builder import create, create_or_raise, resolve_formatter
from form_data.services.formatters import FORMATTERS, Formatter
from form_data.utils.files import FormFile
from form_data.utils.flatten import CoercionError, flatten_payload
from form_data.utils.result import Result
from form_data.version import __version__

__all__ = [
    "FORMATTERS",
    "CoercionError",
    "FormFile",
    "Formatter",
    "Result",
    "create",
    "create_or_raise",
    "flatten_payload",
    "resolve_formatter",
    "__version__",
]
