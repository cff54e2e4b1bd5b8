"""Tests for the retry state machine."""

from __future__ import annotations

import asyncio

from boardread.analysis.retry import (
    Phase,
    RetryState,
    after_rejection,
    backoff_seconds,
    on_parsed,
    on_response,
    on_transport_error,
    on_verdict,
    run_with_retries,
)
from boardread.analysis.validator import Verdict
from tests.conftest import SAMPLE_JPEG, make_analyzer


def _run(analyzer, **kwargs) -> RetryState:
    kwargs.setdefault("backoff_ms", 0)
    return asyncio.run(run_with_retries(analyzer, SAMPLE_JPEG, "system", "user", **kwargs))


class TestTransitions:
    def test_states_are_immutable(self):
        start = RetryState()
        nxt = on_response(start, "{}")
        assert start.phase is Phase.CALLING and start.calls == 0
        assert nxt.phase is Phase.PARSING and nxt.calls == 1

    def test_parse_failure_rejects(self):
        state = on_parsed(RetryState(phase=Phase.PARSING), None, "no JSON")
        assert state.phase is Phase.REJECTED
        assert state.last_error == "no JSON"

    def test_verdict(self):
        validating = RetryState(phase=Phase.VALIDATING)
        assert on_verdict(validating, Verdict.accept()).phase is Phase.ACCEPTED
        assert on_verdict(validating, Verdict.reject("x")).phase is Phase.REJECTED

    def test_after_rejection(self):
        rejected = RetryState(phase=Phase.REJECTED, attempt=1)
        assert after_rejection(rejected, 2) == RetryState(phase=Phase.CALLING, attempt=2)
        assert after_rejection(rejected, 1).phase is Phase.SALVAGE

    def test_transport_error_is_terminal(self):
        state = on_transport_error(RetryState(), "boom")
        assert state.terminal
        assert state.phase is Phase.ESCALATED

    def test_linear_backoff(self):
        assert [backoff_seconds(a, 100) for a in range(3)] == [0.1, 0.2, 0.3]


class TestLoop:
    def test_accepts_first_good_reply(self, good_response):
        analyzer = make_analyzer(good_response)
        state = _run(analyzer)
        assert state.phase is Phase.ACCEPTED
        assert state.calls == 1
        assert analyzer.calls == 1

    def test_retries_generic_then_accepts(self, generic_response, good_response):
        analyzer = make_analyzer(generic_response, good_response)
        state = _run(analyzer)
        assert state.phase is Phase.ACCEPTED
        assert state.calls == 2
        assert state.attempt == 1

    def test_bounded_by_max_retries(self, generic_response):
        for max_retries in (0, 1, 2, 4):
            analyzer = make_analyzer(generic_response)
            state = _run(analyzer, max_retries=max_retries)
            assert state.phase is Phase.SALVAGE
            assert analyzer.calls == max_retries + 1
            assert "generic" in state.last_error

    def test_unparseable_goes_to_salvage_with_raw_text(self):
        analyzer = make_analyzer("Score: 6/10, the headline is too small")
        state = _run(analyzer, max_retries=1)
        assert state.phase is Phase.SALVAGE
        assert state.raw_text.startswith("Score: 6/10")
        assert analyzer.calls == 2

    def test_transport_error_escalates_without_retry(self, transport_error, good_response):
        analyzer = make_analyzer(transport_error, good_response)
        state = _run(analyzer)
        assert state.phase is Phase.ESCALATED
        assert analyzer.calls == 1
        assert "503" in state.last_error

    def test_transport_error_after_rejection(self, generic_response, transport_error):
        analyzer = make_analyzer(generic_response, transport_error)
        state = _run(analyzer)
        assert state.phase is Phase.ESCALATED
        assert analyzer.calls == 2

    def test_timeout_escalates(self):
        async def slow(image, system_prompt, user_prompt):
            await asyncio.sleep(1)
            return "{}"

        state = _run(slow, timeout_s=0.01)
        assert state.phase is Phase.ESCALATED
        assert "timed out" in state.last_error

    def test_cancellation_before_call(self, good_response):
        analyzer = make_analyzer(good_response)

        async def go():
            event = asyncio.Event()
            event.set()
            return await run_with_retries(
                analyzer, SAMPLE_JPEG, "s", "u", backoff_ms=0, cancel_event=event
            )

        state = asyncio.run(go())
        assert state.phase is Phase.ESCALATED
        assert state.calls == 0
        assert analyzer.calls == 0
