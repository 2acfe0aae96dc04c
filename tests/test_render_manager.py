#!/usr/bin/env python3
"""Unit tests for RenderManager frame stepping."""

import asyncio

import pytest

from vault.managers.render_manager import RenderManager


class MockAnimator:
    def __init__(self, log):
        self.log = log
        self.steps = []

    async def animate_loop(self, dt):
        self.steps.append(dt)
        self.log.append("animate")


def test_rejects_low_frame_rate():
    with pytest.raises(ValueError):
        RenderManager(frame_rate=5)


@pytest.mark.asyncio
async def test_step_frame_runs_animators_before_callbacks():
    render = RenderManager()
    log = []
    animator = MockAnimator(log)
    render.add_animator(animator)
    render.add_frame_callback(lambda: log.append("callback"))

    await render.step_frame(0.016)
    await render.step_frame(0.02)

    assert log == ["animate", "callback", "animate", "callback"]
    assert animator.steps == [0.016, 0.02]
    assert render.frame_counter == 2


@pytest.mark.asyncio
async def test_disposed_callback_stops_running():
    render = RenderManager()
    calls = []
    sub = render.add_frame_callback(lambda: calls.append(1))
    await render.step_frame(0.016)
    sub.dispose()
    await render.step_frame(0.016)

    assert calls == [1]
    assert render.frame_callback_count == 0


@pytest.mark.asyncio
async def test_callback_disposed_mid_frame_is_skipped():
    render = RenderManager()
    calls = []
    second = None

    def first():
        calls.append("first")
        second.dispose()

    render.add_frame_callback(first)
    second = render.add_frame_callback(lambda: calls.append("second"))
    await render.step_frame(0.016)
    assert calls == ["first"]


@pytest.mark.asyncio
async def test_run_loop_advances_frames_until_stopped():
    render = RenderManager(frame_rate=60)
    animator = MockAnimator([])
    render.add_animator(animator)

    task = asyncio.create_task(render.run())
    await asyncio.sleep(0.1)
    render.stop()
    await asyncio.wait_for(task, timeout=1.0)

    assert render.frame_counter > 0
    assert all(0.0 <= dt <= RenderManager.MAX_FRAME_DT for dt in animator.steps)
