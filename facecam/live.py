# facecam/live.py
"""
Live (real-time) detection loop.

- DetectionCycle: one frame -> detector -> canvas resize -> overlay -> state update
- DetectionScheduler: fixed-cadence timer that runs cycles, never more than one
  in flight; ticks that land while a cycle is pending are skipped, not queued

Everything here runs on a single asyncio event loop. The only suspension point
is the detector call, so a cycle's resize/render/state update is never
interleaved with another cycle's.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional

from facecam.camera import Frame
from facecam.models import Detection, SessionState
from facecam.visual import draw_overlays

logger = logging.getLogger(__name__)


class DetectionCycle:
    """One atomic unit of detection work against a frame source."""

    def __init__(self, frame_source: Callable[[], Optional[Frame]], detector, canvas,
                 state: SessionState):
        self.frame_source = frame_source
        self.detector = detector
        self.canvas = canvas
        self.state = state

    async def run(self, is_current: Callable[[], bool] = lambda: True) -> bool:
        """Run one cycle; returns True when the canvas and state were updated."""
        frame = self.frame_source()
        if frame is None or not frame.ready:
            logger.debug("[cycle] frame not ready; skipping")
            return False

        try:
            detections: List[Detection] = await self.detector.analyze(frame)
        except Exception:
            logger.exception("[cycle] detector failed; keeping previous results")
            return False

        if not is_current():
            logger.debug(f"[cycle] discarding stale result ({len(detections)} faces)")
            return False

        # The source may have changed resolution (or gone away) while we waited
        latest = self.frame_source()
        target = latest if (latest is not None and latest.ready) else frame
        self.canvas.set_size(target.width, target.height)
        draw_overlays(self.canvas, detections)
        self.state.record_detections(detections)
        logger.debug(f"[cycle] faces={self.state.face_count} dominant={self.state.dominant_expression}")
        return True

    def reset(self) -> None:
        self.state.clear_detections()
        self.canvas.clear()


class DetectionScheduler:
    """Runs a DetectionCycle every `period` seconds while started."""

    def __init__(self, cycle: DetectionCycle, period: float):
        self.cycle = cycle
        self.period = float(period)
        self.skipped_ticks = 0
        self._timer: Optional[asyncio.Task] = None
        self._cycle_task: Optional[asyncio.Task] = None
        self._in_flight = False
        self._generation = 0

    # ---- lifecycle ----
    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def start(self) -> bool:
        if self.running:
            return False
        loop = asyncio.get_running_loop()
        self._generation += 1
        self._timer = loop.create_task(self._tick_loop(self._generation))
        logger.info(f"[scheduler] started (period={self.period:.3f}s)")
        return True

    def stop(self) -> None:
        """Cancel future ticks and clear results without waiting for a pending cycle."""
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            logger.info("[scheduler] stopped")
        self.cycle.reset()

    async def wait_idle(self) -> None:
        task = self._cycle_task
        if task is not None and not task.done():
            await asyncio.gather(task, return_exceptions=True)

    # ---- loop ----
    async def _tick_loop(self, generation: int) -> None:
        loop = asyncio.get_running_loop()
        next_t = loop.time() + self.period
        while True:
            await asyncio.sleep(max(0.0, next_t - loop.time()))
            now = loop.time()
            # skip deadlines we already missed instead of firing them back-to-back
            while next_t <= now:
                next_t += self.period
            self._tick(generation)

    def _tick(self, generation: int) -> None:
        if self._in_flight:
            self.skipped_ticks += 1
            logger.debug("[scheduler] cycle still in flight; skipping tick")
            return
        self._in_flight = True
        self._cycle_task = asyncio.get_running_loop().create_task(self._run_cycle(generation))

    async def _run_cycle(self, generation: int) -> None:
        try:
            await self.cycle.run(lambda: self._generation == generation)
        except Exception:
            logger.exception("[scheduler] detection cycle raised")
        finally:
            self._in_flight = False
