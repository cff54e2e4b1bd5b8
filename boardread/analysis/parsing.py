"""Extract the JSON object from a raw model reply and validate its shape."""

from __future__ import annotations

import json
import re

from pydantic import ValidationError

from boardread.models.analysis import AnalysisCandidate

_FENCE_RE = re.compile(r"```(?:json)?\s*\n?", re.IGNORECASE)
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def extract_json_object(text: str) -> tuple[dict | None, str | None]:
    """Return (object, None) or (None, reason)."""
    cleaned = _FENCE_RE.sub("", text or "").strip()
    match = _OBJECT_RE.search(cleaned)
    if not match:
        return None, "no JSON object found in response"
    try:
        data = json.loads(match.group())
    except json.JSONDecodeError as exc:
        return None, f"invalid JSON: {exc.msg} at position {exc.pos}"
    if not isinstance(data, dict):
        return None, "response JSON is not an object"
    return data, None


def parse_candidate(text: str) -> tuple[AnalysisCandidate | None, str | None]:
    """Return (candidate, None) or (None, reason). Never raises."""
    data, error = extract_json_object(text)
    if error:
        return None, error
    try:
        return AnalysisCandidate.model_validate(data), None
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(p) for p in first.get("loc", ()))
        return None, f"unexpected response shape at {loc or 'root'}: {first.get('msg')}"
