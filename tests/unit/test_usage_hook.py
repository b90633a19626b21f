"""Tests for per-context usage accounting."""

from __future__ import annotations

import asyncio

import pytest

from consentlab.hooks.usage import get_current_usage, record_call, reset_usage


def test_record_call_accumulates():
    record_call("analysis", {"prompt_tokens": 100, "completion_tokens": 20})
    record_call("translation", {"prompt_tokens": 30, "completion_tokens": 10})
    record_call("translation", failed=True)

    usage = get_current_usage()
    assert usage.call_count == 3
    assert usage.failed_call_count == 1
    assert usage.total_tokens == 160
    assert usage.calls_by_operation == {"analysis": 1, "translation": 2}
    assert usage.failure_rate == pytest.approx(1 / 3)


def test_reset_returns_fresh_summary():
    record_call("qa")
    summary = reset_usage()
    assert summary.call_count == 0
    assert get_current_usage() is summary
    assert summary.failure_rate == 0.0


@pytest.mark.asyncio
async def test_tasks_track_separately_after_reset():
    async def worker(n: int) -> int:
        reset_usage()
        for _ in range(n):
            record_call("qa")
        await asyncio.sleep(0)
        return get_current_usage().call_count

    assert await asyncio.gather(worker(1), worker(3)) == [1, 3]
