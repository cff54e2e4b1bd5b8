"""POST /api/analyze: readability analysis of an uploaded creative."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from boardread.analysis.pipeline import analyze_billboard
from boardread.dependencies import get_analyzer, get_catalog
from boardread.engine.catalog import BillboardCatalog
from boardread.errors import InvalidImageError
from boardread.llm.client import RemoteAnalyzer
from boardread.llm.images import prepare_image
from boardread.models.analysis import AnalysisResult

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/analyze", response_model=AnalysisResult)
async def analyze(
    file: UploadFile = File(...),
    location: str = Form(""),
    distance: float | None = Form(None),
    location_id: str | None = Form(None),
    catalog: BillboardCatalog = Depends(get_catalog),
    analyzer: RemoteAnalyzer = Depends(get_analyzer),
) -> AnalysisResult:
    billboard = None
    if location_id:
        billboard = catalog.lookup(location_id)
        if billboard is None:
            raise HTTPException(status_code=404, detail=f"Unknown location id: {location_id}")

    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    try:
        image = prepare_image(raw)
    except InvalidImageError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    place = location or (billboard.location_name if billboard else "")
    logger.info(
        "Analyze %s (%dx%d, %s) at %r, distance=%s",
        file.filename,
        image.width,
        image.height,
        image.media_type,
        place,
        distance,
    )
    return await analyze_billboard(
        image.data,
        place,
        distance,
        billboard,
        file_name=file.filename or "upload",
        analyzer=analyzer,
    )
