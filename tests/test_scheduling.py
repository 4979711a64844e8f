import asyncio

from pos_highlighter.scheduling import AsyncioScheduler, VirtualScheduler


def test_virtual_scheduler_fires_in_due_order():
    scheduler = VirtualScheduler()
    fired: list[str] = []
    scheduler.call_later(300, lambda: fired.append("late"))
    scheduler.call_later(100, lambda: fired.append("early"))
    scheduler.call_later(100, lambda: fired.append("early-second"))
    scheduler.advance(299)
    assert fired == ["early", "early-second"]
    scheduler.advance(1)
    assert fired == ["early", "early-second", "late"]
    assert scheduler.now_ms == 300


def test_virtual_scheduler_cancel_and_nested_timers():
    scheduler = VirtualScheduler()
    fired: list[int] = []
    handle = scheduler.call_later(50, lambda: fired.append(50))
    handle.cancel()
    assert handle.cancelled
    scheduler.call_later(10, lambda: scheduler.call_later(20, lambda: fired.append(30)))
    assert scheduler.pending() == 1
    scheduler.advance(100)
    assert fired == [30]
    assert scheduler.pending() == 0


def test_asyncio_scheduler_runs_and_cancels():
    fired: list[str] = []

    async def scenario() -> None:
        scheduler = AsyncioScheduler()
        scheduler.call_later(1, lambda: fired.append("kept"))
        dropped = scheduler.call_later(1, lambda: fired.append("dropped"))
        dropped.cancel()
        assert dropped.cancelled
        await asyncio.sleep(0.05)

    asyncio.run(scenario())
    assert fired == ["kept"]
