from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class EncodeRequest(BaseModel):
    data: Any = Field(
        ..., description="Object or list of [name, value] pairs to encode (supports nesting)"
    )
    formatter: Optional[str] = Field(
        default=None, description="Formatter name; defaults to the configured formatter"
    )
    options: Dict[str, Any] = Field(default_factory=dict)
    files: Dict[str, str] = Field(
        default_factory=dict, description="Top-level field name to file path for multipart uploads"
    )
