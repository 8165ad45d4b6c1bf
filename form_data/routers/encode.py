from __future__ import annotations

import os
from typing import Any, List

from fastapi import APIRouter, HTTPException

from form_data.logging import bind_formatter, get_logger
from form_data.models.requests import EncodeRequest
from form_data.models.responses import EncodeResponse, MultipartEntryModel
from form_data.services.builder import create, resolve_formatter
from form_data.services.formatters import MultipartFormatter
from form_data.settings import settings
from form_data.utils.files import FormFile
from form_data.utils.flatten import coerce_pairs
from form_data.utils.result import Result

router = APIRouter(prefix="/encode", tags=["encode"])


def _with_files(payload: EncodeRequest) -> Result:
    coerced = coerce_pairs(payload.data)
    if not coerced.ok or not payload.files:
        return coerced
    uploads = [(name, FormFile(path)) for name, path in payload.files.items()]
    return Result(value=coerced.value + uploads)


def _entry_model(entry: Any) -> MultipartEntryModel:
    kind, content, (disposition, metadata), _extra = entry
    return MultipartEntryModel(
        kind=kind,
        content=os.fspath(content),
        disposition=disposition,
        metadata=list(metadata),
    )


@router.post("", response_model=EncodeResponse)
async def encode(payload: EncodeRequest):
    """Flatten the supplied data and render it with the selected formatter."""
    name = payload.formatter or settings.default_formatter
    try:
        formatter = resolve_formatter(name)
    except ValueError as exc:
        get_logger().warning("Unknown formatter requested", formatter=name)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    bind_formatter(name)
    log = get_logger()

    root = _with_files(payload)
    if not root.ok:
        log.warning("Encode payload rejected", error=str(root.error))
        raise HTTPException(status_code=422, detail=str(root.error))

    result = create(root.value, formatter, payload.options)
    if isinstance(formatter, MultipartFormatter):
        _tag, entries = result.unwrap()
        models: List[MultipartEntryModel] = [_entry_model(entry) for entry in entries]
        log.debug("Encoded multipart form", entry_count=len(models))
        return EncodeResponse(formatter=name, content_type=formatter.content_type, entries=models)

    body = result.unwrap()
    log.debug("Encoded url-encoded form", body_length=len(body))
    return EncodeResponse(formatter=name, content_type=formatter.content_type, body=body.decode("ascii"))
