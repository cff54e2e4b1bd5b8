"""Public entry point: analyze one billboard creative.

    prompts -> retry loop -> ScoreMapper | text salvage | fallback

``analyze_billboard`` never raises. Whatever happens upstream the caller
gets an AnalysisResult whose ``source`` and ``api_note`` say where the
numbers came from.
"""

from __future__ import annotations

import asyncio
import logging

from boardread.analysis.fallback import synthesize_fallback
from boardread.analysis.retry import Phase, run_with_retries
from boardread.analysis.salvage import salvage_text
from boardread.analysis.score_mapper import map_candidate
from boardread.analysis.validator import ResponseValidator
from boardread.config import settings
from boardread.engine.catalog import generate_metadata
from boardread.llm.client import RemoteAnalyzer, get_vision_response
from boardread.llm.prompts import build_prompts
from boardread.models.analysis import AnalysisResult
from boardread.models.billboard import BillboardLocation

logger = logging.getLogger(__name__)


def _usable_distance(distance: float | None) -> float:
    try:
        value = float(distance) if distance is not None else 0.0
    except (TypeError, ValueError):
        value = 0.0
    if not value > 0 or value == float("inf"):
        return settings.default_viewing_distance_m
    return value


async def analyze_billboard(
    image: bytes,
    location: str,
    distance: float | None,
    billboard: BillboardLocation | None = None,
    *,
    file_name: str = "upload",
    analyzer: RemoteAnalyzer | None = None,
    validator: ResponseValidator | None = None,
    max_retries: int | None = None,
    backoff_ms: int | None = None,
    timeout_s: float | None = None,
    cancel_event: asyncio.Event | None = None,
) -> AnalysisResult:
    distance_m = _usable_distance(distance)
    metadata = None
    try:
        metadata = generate_metadata(billboard) if billboard is not None else None
        system_prompt, user_prompt = build_prompts(billboard, distance_m)

        state = await run_with_retries(
            analyzer or get_vision_response,
            image,
            system_prompt,
            user_prompt,
            validator=validator,
            max_retries=settings.max_retries if max_retries is None else max_retries,
            backoff_ms=settings.retry_backoff_ms if backoff_ms is None else backoff_ms,
            timeout_s=settings.analyzer_timeout_s if timeout_s is None else timeout_s,
            cancel_event=cancel_event,
        )

        if state.phase is Phase.ACCEPTED and state.candidate is not None:
            logger.info("Model analysis accepted after %d call(s)", state.calls)
            return map_candidate(state.candidate, metadata, state.raw_text or "")

        if state.phase is Phase.SALVAGE:
            result, error = salvage_text(
                state.raw_text or "", file_name, metadata, distance_m, state.last_error
            )
            if result is not None:
                return result
            logger.warning("Salvage failed: %s", error)
            cause = f"unusable model response after {state.calls} attempts ({state.last_error}); {error}"
        else:
            cause = state.last_error or "vision model unavailable"

    except asyncio.CancelledError:
        raise
    except Exception as exc:
        logger.exception("Analysis pipeline failed")
        cause = f"internal error: {exc}"

    return synthesize_fallback(file_name, location, distance_m, metadata, cause)
