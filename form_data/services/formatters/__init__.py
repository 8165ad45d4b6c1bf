"""Built-in output formatters and the name registry used by the builder."""

from .base import CallableFormatter, FieldPair, Formatter
from .multipart import MultipartFormatter
from .url_encoded import UrlEncodedFormatter

FORMATTERS = {
    "multipart": MultipartFormatter(),
    "url_encoded": UrlEncodedFormatter(),
}

__all__ = [
    "FORMATTERS",
    "CallableFormatter",
    "FieldPair",
    "Formatter",
    "MultipartFormatter",
    "UrlEncodedFormatter",
]
