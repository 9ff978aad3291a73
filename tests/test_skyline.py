from types import SimpleNamespace

import pytest

from game.runner.clock import SimulationClock
from game.runner.simulation import RunnerSimulation
from game.runner.skyline import Skyline


def test_buildings_start_evenly_spaced() -> None:
    skyline = Skyline(count=5, seed=0)
    assert [b.x for b in skyline.buildings] == [0.0, 80.0, 160.0, 240.0, 320.0]
    assert skyline.road_offset == 0.0


def test_scroll_moves_buildings_with_parallax() -> None:
    skyline = Skyline(count=3, seed=0)
    skyline.scroll(10.0)
    assert skyline.buildings[1].x == pytest.approx(80.0 - 3.0)
    assert skyline.road_offset == pytest.approx(10.0)


def test_scrolled_off_buildings_are_recycled_on_the_right() -> None:
    skyline = Skyline(count=15, seed=0)
    for _ in range(500):
        skyline.scroll(5.0)
    assert len(skyline.buildings) == 15
    assert all(b.x + b.width >= 0 for b in skyline.buildings)


def test_reset_restores_the_starting_layout() -> None:
    skyline = Skyline(count=6, seed=1)
    for _ in range(300):
        skyline.scroll(7.0)

    skyline.reset()
    assert [b.x for b in skyline.buildings] == [i * Skyline.SPACING for i in range(6)]
    assert skyline.road_offset == 0.0


def test_restarting_the_window_rebuilds_the_skyline(quiet_config) -> None:
    render = pytest.importorskip("game.runner.render")

    sim = RunnerSimulation(quiet_config)
    skyline = Skyline(count=4, seed=2)
    for _ in range(200):
        skyline.scroll(5.0)
    window = SimpleNamespace(sim=sim, skyline=skyline, clock=SimulationClock(sim), _final_score=12)

    render.RunnerWindow._start(window)
    assert sim.active
    assert window._final_score is None
    assert [b.x for b in skyline.buildings] == [0.0, 80.0, 160.0, 240.0]
    assert skyline.road_offset == 0.0
