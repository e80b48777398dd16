import asyncio

import pytest

from conftest import FakeClock
from uniwise_cbt.services.timer import ExamTimer


def _timer(clock, fired, duration=1800):
    return ExamTimer(lambda: fired.append(clock()), duration=duration, clock=clock)


def test_remaining_counts_down_once_per_second():
    clock, fired = FakeClock(), []
    timer = _timer(clock, fired)
    assert timer.remaining == 1800

    timer.start()
    assert timer.remaining == 1800
    clock.advance(0.5)
    assert timer.remaining == 1800
    clock.advance(0.5)
    assert timer.remaining == 1799
    clock.advance(61)
    assert timer.remaining == 1738


def test_expiry_fires_exactly_once():
    clock, fired = FakeClock(), []
    timer = _timer(clock, fired, duration=10)
    timer.start()

    clock.advance(9.9)
    assert timer.check() is False
    clock.advance(0.1)
    assert timer.check() is True
    assert timer.check() is True
    clock.advance(5)
    timer.check()

    assert len(fired) == 1
    assert timer.remaining == 0
    assert not timer.running


def test_stop_freezes_and_prevents_expiry():
    clock, fired = FakeClock(), []
    timer = _timer(clock, fired, duration=60)
    timer.start()
    clock.advance(10)
    timer.stop()
    clock.advance(100)

    assert timer.remaining == 50
    assert timer.check() is False
    assert fired == []
    timer.stop()
    assert timer.remaining == 50


def test_armed_timer_fires_on_event_loop():
    clock, fired = FakeClock(), []
    timer = _timer(clock, fired, duration=60)
    timer.start()
    clock.advance(59.99)

    async def main():
        timer.arm()
        assert timer.scheduled
        await asyncio.sleep(0.1)
        timer.check()

    asyncio.run(main())
    assert len(fired) == 1
    assert not timer.scheduled


def test_stop_cancels_scheduled_task():
    clock, fired = FakeClock(), []
    timer = _timer(clock, fired, duration=60)
    timer.start()
    clock.advance(59.99)

    async def main():
        timer.arm()
        timer.stop()
        await asyncio.sleep(0.1)

    asyncio.run(main())
    assert fired == []
    assert not timer.scheduled


def test_arm_is_noop_when_not_running():
    clock, fired = FakeClock(), []
    timer = _timer(clock, fired)

    async def main():
        timer.arm()

    asyncio.run(main())
    assert not timer.scheduled


def test_invalid_use():
    with pytest.raises(ValueError):
        ExamTimer(lambda: None, duration=0)
    timer = ExamTimer(lambda: None, duration=5, clock=FakeClock())
    timer.start()
    with pytest.raises(RuntimeError):
        timer.start()


def test_stop_from_another_thread_cancels_via_loop():
    clock, fired = FakeClock(), []
    timer = _timer(clock, fired, duration=60)
    timer.start()
    clock.advance(59.99)

    loop = asyncio.new_event_loop()
    try:
        timer.arm(loop=loop)
        # no loop is running in this thread, like the cleanup thread
        timer.stop()
        assert not timer.scheduled
        loop.run_until_complete(asyncio.sleep(0.1))
    finally:
        loop.close()

    assert fired == []
    assert timer.remaining == 1


def test_stop_after_loop_closed():
    clock, fired = FakeClock(), []
    timer = _timer(clock, fired, duration=60)
    timer.start()
    loop = asyncio.new_event_loop()
    timer.arm(loop=loop)
    loop.close()

    timer.stop()
    assert fired == [] and not timer.scheduled
