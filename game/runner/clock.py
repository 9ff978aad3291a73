"""
Frame clock that drives a RunnerSimulation

The clock owns no timing primitive itself: a real-time host (the arcade
window's on_update) or a fixed-step loop (run()) calls tick() once per frame.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .simulation import RunnerSimulation, RunSnapshot

logger = logging.getLogger(__name__)

Renderer = Callable[[RunSnapshot], None]


class SimulationClock:
    """Runs update-then-render once per tick while the run is active"""

    def __init__(self, simulation: RunnerSimulation, renderers: Optional[List[Renderer]] = None):
        self.simulation = simulation
        self.renderers: List[Renderer] = list(renderers or [])
        self.running = False
        self.ticks = 0

    def add_renderer(self, renderer: Renderer) -> None:
        self.renderers.append(renderer)

    def start(self, seed: Optional[int] = None) -> None:
        """Reset the run and begin ticking"""
        self.simulation.start(seed=seed)
        self.running = True
        self.ticks = 0
        self._render()

    def stop(self) -> None:
        """Stop ticking; the simulation state is left untouched"""
        self.running = False

    def tick(self) -> bool:
        """Execute one frame. Returns False when there was nothing to do."""
        if not self.running or not self.simulation.active:
            return False

        self.simulation.update()
        self.ticks += 1
        self._render()

        if not self.simulation.active:
            self.running = False
            logger.debug("Clock stopped after %d ticks, run is over", self.ticks)
        return True

    def run(self, max_frames: Optional[int] = None) -> int:
        """Fixed-step headless loop. Returns the number of ticks executed."""
        executed = 0
        while max_frames is None or executed < max_frames:
            if not self.tick():
                break
            executed += 1
        return executed

    def _render(self):
        if not self.renderers:
            return
        snap = self.simulation.snapshot()
        for renderer in self.renderers:
            renderer(snap)
