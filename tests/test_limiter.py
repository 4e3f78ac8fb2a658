"""
Tests for the outbound request throttle.
"""
import asyncio

import pytest

from dedlift.core.limiter import RequestThrottle


class TestRequestThrottle:
    """Tests for RequestThrottle spacing."""

    def test_first_call_does_not_wait(self, fake_clock):
        throttle = RequestThrottle(0.2, clock=fake_clock, sleep=fake_clock.sleep)

        waited = asyncio.run(throttle.wait())

        assert waited == 0.0
        assert fake_clock.sleeps == []

    def test_back_to_back_calls_wait_the_remaining_interval(self, fake_clock):
        throttle = RequestThrottle(0.2, clock=fake_clock, sleep=fake_clock.sleep)

        async def two_calls():
            await throttle.wait()
            fake_clock.now += 0.05
            return await throttle.wait()

        waited = asyncio.run(two_calls())

        assert waited == pytest.approx(0.15)
        assert fake_clock.sleeps == [pytest.approx(0.15)]

    def test_no_wait_once_interval_has_passed(self, fake_clock):
        throttle = RequestThrottle(0.5, clock=fake_clock, sleep=fake_clock.sleep)

        async def spaced_calls():
            await throttle.wait()
            fake_clock.now += 0.6
            return await throttle.wait()

        assert asyncio.run(spaced_calls()) == 0.0
        assert fake_clock.sleeps == []

    def test_concurrent_callers_are_serialised(self, fake_clock):
        """Three callers issued at once end up spaced one interval apart."""
        throttle = RequestThrottle(0.5, clock=fake_clock, sleep=fake_clock.sleep)
        starts = []

        async def caller():
            await throttle.wait()
            starts.append(fake_clock.now)

        async def burst():
            await asyncio.gather(caller(), caller(), caller())

        asyncio.run(burst())

        assert starts == [pytest.approx(100.0), pytest.approx(100.5), pytest.approx(101.0)]
        assert fake_clock.sleeps == [pytest.approx(0.5), pytest.approx(0.5)]

    def test_real_clock_spacing(self):
        """Default monotonic clock and asyncio.sleep enforce the gap."""
        import time

        throttle = RequestThrottle(0.05)

        async def two_calls():
            await throttle.wait()
            start = time.monotonic()
            await throttle.wait()
            return time.monotonic() - start

        assert asyncio.run(two_calls()) >= 0.04
