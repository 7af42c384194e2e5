# ============================================================================
# STATUS TESTS
# ============================================================================
# STATUS: Tests - Result accumulator
# PURPOSE: Verify aggregation, labeling and thread safety of Status
# CREATED: 06 MAR 2026
# ============================================================================
"""
Status Tests

Tests Status, CheckStatus, Message and HealthResponse.

Run with:
    pytest tests/test_status.py -v
"""

import threading
import time

import pytest

from health.core import (
    CheckStatus,
    HealthResponse,
    Message,
    Outcome,
    Status,
)


# ============================================================================
# AGGREGATION
# ============================================================================

class TestStatusAggregation:
    """Tests for the aggregate success flag."""

    def test_starts_successful_and_empty(self):
        status = Status()
        assert status.success is True
        assert status.messages == ()

    def test_ok_keeps_success(self):
        status = Status()
        status.for_check("db").ok("connected")
        assert status.success is True

    def test_fail_flips_success(self):
        status = Status()
        status.for_check("db").fail("refused")
        assert status.success is False

    def test_fail_is_permanent(self):
        status = Status()
        check = status.for_check("db")
        check.fail("refused")
        check.ok("connected after all")
        check.fail("refused again")
        assert status.success is False

    def test_info_does_not_change_success(self):
        status = Status()
        status.for_check("db").info("pool size 10")
        assert status.success is True
        assert status.messages[0].outcome is Outcome.INFO

    def test_failure_in_one_check_fails_aggregate(self):
        status = Status()
        status.for_check("a").fail("down")
        status.for_check("b").ok("up")
        assert status.success is False


# ============================================================================
# CHECK STATUS
# ============================================================================

class TestCheckStatus:
    """Tests for the per-check view."""

    def test_messages_carry_check_label(self):
        status = Status()
        status.for_check("cache").ok("warm")

        message = status.messages[0]
        assert message.label == "cache"
        assert message.outcome is Outcome.OK
        assert message.text == "warm"
        assert message.elapsed_ms is not None
        assert message.elapsed_ms >= 0

    def test_scoped_suffixes_label(self):
        status = Status()
        check = status.for_check("db")
        check.scoped("replica").fail("lagging")

        assert status.messages[0].label == "db replica"
        assert check.success is False

    def test_success_is_per_check(self):
        status = Status()
        broken = status.for_check("a")
        healthy = status.for_check("b")
        broken.fail("down")
        healthy.ok("up")

        assert broken.success is False
        assert healthy.success is True
        assert len(healthy.messages) == 1

    def test_abandoned_check_is_ignored(self):
        status = Status()
        check = status.for_check("slow")
        check.abandon()
        check.fail("too late")

        assert check.abandoned is True
        assert status.success is True
        assert len(status) == 0

    def test_text_is_stringified(self):
        status = Status()
        status.for_check("count").ok(42)
        assert status.messages[0].text == "42"


# ============================================================================
# LIFECYCLE
# ============================================================================

class TestStatusLifecycle:
    """Tests for closing and timing."""

    def test_closed_status_drops_messages(self):
        status = Status()
        check = status.for_check("late")
        status.close()
        check.fail("after render")

        assert status.closed is True
        assert status.success is True
        assert status.messages == ()

    def test_record_reports_dropped(self):
        status = Status()
        status.close()
        assert status.record("x", Outcome.OK, "late") is False

    def test_elapsed_frozen_after_close(self):
        status = Status()
        status.close()
        elapsed = status.elapsed
        time.sleep(0.01)
        assert status.elapsed == elapsed

    def test_close_is_idempotent(self):
        status = Status()
        status.close()
        elapsed = status.elapsed
        time.sleep(0.01)
        status.close()
        assert status.elapsed == elapsed


# ============================================================================
# THREAD SAFETY
# ============================================================================

class TestStatusConcurrency:
    """Concurrent appends from many probe threads."""

    def test_no_messages_lost(self):
        status = Status()
        barrier = threading.Barrier(8)

        def probe(index: int):
            check = status.for_check(f"check-{index}")
            barrier.wait()
            for n in range(200):
                check.ok(f"message {n}")

        threads = [threading.Thread(target=probe, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(status.messages) == 1600
        assert status.success is True

    def test_concurrent_failure_is_kept(self):
        status = Status()

        def probe(index: int):
            check = status.for_check(f"check-{index}")
            if index == 3:
                check.fail("broken")
            else:
                check.ok("fine")

        threads = [threading.Thread(target=probe, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert status.success is False
        assert len(status.messages) == 8


# ============================================================================
# RENDERING
# ============================================================================

class TestMessage:
    """Tests for report line formatting."""

    def test_render_ok(self):
        message = Message("db", Outcome.OK, "up", 1.5)
        assert message.render() == "OK:   db - up (1.5ms)"

    def test_render_fail_without_timing(self):
        message = Message("db", Outcome.FAIL, "down")
        assert message.render() == "FAIL: db - down (?ms)"
        assert message.ok is False

    def test_render_info(self):
        message = Message("db", Outcome.INFO, "10 connections", 0.0)
        assert message.render() == "INFO: db - 10 connections (0.0ms)"
        assert message.ok is True


class TestHealthResponse:
    """Tests for the rendered response tuple."""

    def test_unpacks_to_code_and_lines(self):
        code, lines = HealthResponse(500, ["a", "b"])
        assert code == 500
        assert lines == ["a", "b"]

    def test_body_and_headers(self):
        response = HealthResponse(200, ["Host: x", "", "OK:   a - b (1.0ms)"])
        assert response.success is True
        assert response.body == "Host: x\n\nOK:   a - b (1.0ms)"
        assert response.headers["Content-Type"].startswith("text/plain")
        assert response.headers["Cache-Control"] == "no-cache"
