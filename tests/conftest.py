from __future__ import annotations

from typing import Callable

import pytest

from game.runner.config import RunnerConfig
from game.runner.entities import Hazard
from game.runner.simulation import RunnerSimulation

# Intervals this long keep natural spawns out of short tests
NEVER = 100_000


@pytest.fixture
def quiet_config() -> RunnerConfig:
    """Default game with obstacle and antagonist spawning pushed out of reach."""
    return RunnerConfig(base_spawn_interval=NEVER, min_spawn_interval=NEVER, attack_period=NEVER)


@pytest.fixture
def sim(quiet_config: RunnerConfig) -> RunnerSimulation:
    simulation = RunnerSimulation(quiet_config, seed=0)
    simulation.start()
    return simulation


@pytest.fixture
def hazard_on_player() -> Callable[[RunnerSimulation], Hazard]:
    """Drop a hazard onto the player that stays put during the next update."""

    def _drop(simulation: RunnerSimulation) -> Hazard:
        p = simulation.player
        hz = Hazard(x=p.x, y=p.y, width=p.width, height=p.height, speed=simulation.speed)
        simulation.hazards.append(hz)
        return hz

    return _drop
