"""Vision-model response pipeline: validate, retry, map, salvage, fall back."""

from boardread.analysis.pipeline import analyze_billboard

__all__ = ["analyze_billboard"]
