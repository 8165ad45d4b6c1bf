from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel


class MultipartEntryModel(BaseModel):
    kind: str
    content: str
    disposition: str
    metadata: List[Tuple[str, str]]


class EncodeResponse(BaseModel):
    formatter: str
    content_type: str
    body: Optional[str] = None
    entries: Optional[List[MultipartEntryModel]] = None


class InfoResponse(BaseModel):
    service_version: str
    formatters: List[str]
    default_formatter: str
    url_encoding: str
    url_quote_plus: bool
    uptime_seconds: float
