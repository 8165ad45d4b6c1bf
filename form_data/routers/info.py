from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter

from form_data.models.responses import InfoResponse
from form_data.services.formatters import FORMATTERS
from form_data.settings import settings
from form_data.version import __version__

router = APIRouter(prefix="/info", tags=["info"])

_STARTED_AT = datetime.utcnow()


@router.get("", response_model=InfoResponse)
async def get_info():
    """Describe the registered formatters and encoding defaults."""
    return InfoResponse(
        service_version=__version__,
        formatters=sorted(FORMATTERS),
        default_formatter=settings.default_formatter,
        url_encoding=settings.url_encoding,
        url_quote_plus=settings.url_quote_plus,
        uptime_seconds=(datetime.utcnow() - _STARTED_AT).total_seconds(),
    )
