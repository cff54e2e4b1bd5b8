"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from boardread import __version__
from boardread.dependencies import get_catalog, get_settings
from boardread.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings=Depends(get_settings), catalog=Depends(get_catalog)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        catalog_size=len(catalog),
        llm_configured=bool(settings.anthropic_api_key),
    )


@router.get("/prompts")
async def prompts() -> dict[str, str]:
    from boardread.llm.prompts import get_all_templates

    return get_all_templates()
