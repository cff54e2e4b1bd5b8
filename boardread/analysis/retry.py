"""Call / parse / validate loop as an explicit state machine.

Each step is a pure function from one ``RetryState`` to the next; only
``run_with_retries`` performs I/O (the analyzer call and backoff sleeps).

    CALLING -> PARSING -> VALIDATING -> ACCEPTED
                  |            |
                  +-> REJECTED <+--> CALLING (attempts left, linear backoff)
                         |
                         +-> SALVAGE (attempts exhausted)

    transport failure, timeout or cancellation -> ESCALATED

Never more than ``max_retries + 1`` analyzer calls.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass, replace

from boardread.analysis.parsing import parse_candidate
from boardread.analysis.validator import ResponseValidator, Verdict
from boardread.errors import TransportError
from boardread.llm.client import RemoteAnalyzer
from boardread.models.analysis import AnalysisCandidate

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    CALLING = "calling"
    PARSING = "parsing"
    VALIDATING = "validating"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    SALVAGE = "salvage"
    ESCALATED = "escalated"


TERMINAL_PHASES = frozenset({Phase.ACCEPTED, Phase.SALVAGE, Phase.ESCALATED})


@dataclass(frozen=True)
class RetryState:
    attempt: int = 0
    phase: Phase = Phase.CALLING
    calls: int = 0
    raw_text: str | None = None
    candidate: AnalysisCandidate | None = None
    last_error: str | None = None

    @property
    def terminal(self) -> bool:
        return self.phase in TERMINAL_PHASES


# ---------- Transitions ----------


def on_response(state: RetryState, raw_text: str) -> RetryState:
    return replace(state, phase=Phase.PARSING, calls=state.calls + 1, raw_text=raw_text)


def on_transport_error(state: RetryState, error: str, *, called: bool = True) -> RetryState:
    return replace(
        state,
        phase=Phase.ESCALATED,
        calls=state.calls + 1 if called else state.calls,
        last_error=error,
    )


def on_parsed(
    state: RetryState, candidate: AnalysisCandidate | None, error: str | None
) -> RetryState:
    if candidate is None:
        return replace(state, phase=Phase.REJECTED, candidate=None, last_error=error)
    return replace(state, phase=Phase.VALIDATING, candidate=candidate)


def on_verdict(state: RetryState, verdict: Verdict) -> RetryState:
    if verdict.accepted:
        return replace(state, phase=Phase.ACCEPTED, last_error=None)
    return replace(state, phase=Phase.REJECTED, last_error=verdict.reason)


def after_rejection(state: RetryState, max_retries: int) -> RetryState:
    if state.attempt < max_retries:
        return replace(state, phase=Phase.CALLING, attempt=state.attempt + 1)
    return replace(state, phase=Phase.SALVAGE)


def backoff_seconds(attempt: int, backoff_ms: int) -> float:
    """Linear backoff before the retry that follows ``attempt``."""
    return backoff_ms * (attempt + 1) / 1000


# ---------- Driver ----------


async def run_with_retries(
    analyzer: RemoteAnalyzer,
    image: bytes,
    system_prompt: str,
    user_prompt: str,
    *,
    validator: ResponseValidator | None = None,
    max_retries: int = 2,
    backoff_ms: int = 100,
    timeout_s: float | None = None,
    cancel_event: asyncio.Event | None = None,
) -> RetryState:
    """Drive the loop until ACCEPTED, SALVAGE or ESCALATED."""
    validator = validator or ResponseValidator()
    max_retries = max(0, max_retries)
    state = RetryState()

    while not state.terminal:
        if state.phase is Phase.CALLING:
            if cancel_event is not None and cancel_event.is_set():
                state = on_transport_error(state, "analysis cancelled", called=False)
                logger.info("Analysis cancelled before attempt %d", state.attempt + 1)
                continue
            logger.info("Analyzer call, attempt %d/%d", state.attempt + 1, max_retries + 1)
            try:
                call = analyzer(image, system_prompt, user_prompt)
                if timeout_s:
                    raw_text = await asyncio.wait_for(call, timeout=timeout_s)
                else:
                    raw_text = await call
            except asyncio.TimeoutError:
                state = on_transport_error(state, f"analyzer timed out after {timeout_s}s")
            except TransportError as exc:
                state = on_transport_error(state, str(exc))
            else:
                state = on_response(state, raw_text or "")
            if state.phase is Phase.ESCALATED:
                logger.warning("Escalating to fallback: %s", state.last_error)

        elif state.phase is Phase.PARSING:
            candidate, error = parse_candidate(state.raw_text or "")
            state = on_parsed(state, candidate, error)
            if error:
                logger.info("Attempt %d unparseable: %s", state.attempt + 1, error)

        elif state.phase is Phase.VALIDATING:
            state = on_verdict(state, validator.validate(state.candidate, state.raw_text or ""))

        elif state.phase is Phase.REJECTED:
            previous = state.attempt
            state = after_rejection(state, max_retries)
            if state.phase is Phase.CALLING:
                await asyncio.sleep(backoff_seconds(previous, backoff_ms))
            else:
                logger.warning(
                    "Retries exhausted after %d calls (%s); salvaging text",
                    state.calls,
                    state.last_error,
                )

    return state
