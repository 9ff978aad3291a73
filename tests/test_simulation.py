import dataclasses
import math

import pytest

from game.runner.config import RunnerConfig
from game.runner.entities import Hazard, Obstacle
from game.runner.simulation import RunListener, RunnerSimulation, RunPhase


class RecordingListener(RunListener):
    def __init__(self):
        self.scores = []
        self.lives = []
        self.ended = []

    def on_score_changed(self, score):
        self.scores.append(score)

    def on_lives_changed(self, lives):
        self.lives.append(lives)

    def on_run_ended(self, final_score):
        self.ended.append(final_score)


# ----------------------------
# Run state machine
# ----------------------------

def test_new_simulation_is_idle_and_does_not_update(quiet_config) -> None:
    sim = RunnerSimulation(quiet_config)
    assert sim.phase is RunPhase.IDLE
    sim.update()
    assert sim.frame == 0
    assert sim.score == 0.0


def test_start_resets_run_state(sim) -> None:
    for _ in range(30):
        sim.update()
    sim.obstacles.append(Obstacle(x=500, y=300, width=30, height=50))
    sim.take_damage()

    sim.start()
    assert sim.active
    assert sim.frame == 0
    assert sim.score == 0.0
    assert sim.lives == 3
    assert sim.speed == 5.0
    assert sim.obstacles == []
    assert sim.hazards == []
    assert not sim.player.invincible
    assert sim.player.grounded
    assert sim.player.y == sim.config.ground_y - sim.player.height


def test_request_start_is_ignored_while_active(sim) -> None:
    sim.update()
    assert sim.request_start() is False
    assert sim.frame == 1


def test_request_start_restarts_after_game_over(sim) -> None:
    for _ in range(3):
        sim.player.invincible = False
        sim.take_damage()
    assert sim.phase is RunPhase.ENDED

    assert sim.request_start() is True
    assert sim.phase is RunPhase.ACTIVE
    assert sim.lives == 3


def test_score_and_speed_progress(quiet_config) -> None:
    cfg = dataclasses.replace(quiet_config, speed_ramp_interval=10)
    sim = RunnerSimulation(cfg)
    sim.start()

    for _ in range(25):
        sim.update()

    assert sim.frame == 25
    assert sim.display_score == 2
    assert sim.speed == pytest.approx(6.0)


# ----------------------------
# Physics & input
# ----------------------------

def test_jump_only_when_active_and_grounded(quiet_config) -> None:
    sim = RunnerSimulation(quiet_config)
    assert sim.request_jump() is False

    sim.start()
    assert sim.request_jump() is True
    assert sim.player.dy == -12.0
    assert not sim.player.grounded
    assert sim.request_jump() is False


def test_jump_arc_lands_back_on_the_ground(sim) -> None:
    ground_top = sim.config.ground_y - sim.player.height
    sim.request_jump()
    sim.update()
    assert sim.player.y == pytest.approx(ground_top - 11.4)
    assert sim.player.dy == pytest.approx(-11.4)

    peak = sim.player.y
    for _ in range(60):
        sim.update()
        peak = min(peak, sim.player.y)

    assert peak < ground_top - 100
    assert sim.player.grounded
    assert sim.player.y == ground_top
    assert sim.player.dy == 0.0


# ----------------------------
# Damage & invincibility
# ----------------------------

def test_invincibility_window_is_exact(sim, hazard_on_player) -> None:
    hazard_on_player(sim)
    sim.update()
    assert sim.lives == 2
    assert sim.player.invincible

    # Every further contact in the next 60 frames is ignored
    for _ in range(sim.config.invincibility_frames):
        hazard_on_player(sim)
        sim.update()
        assert sim.lives == 2
        assert sim.hazards == []

    hazard_on_player(sim)
    sim.update()
    assert sim.lives == 1


def test_take_damage_is_ignored_when_not_active(quiet_config) -> None:
    sim = RunnerSimulation(quiet_config)
    assert sim.take_damage() is False
    assert sim.lives == 3


def test_three_hits_end_the_run(sim, hazard_on_player) -> None:
    hit_frames = {1, 100, 200}
    while sim.active:
        if sim.frame + 1 in hit_frames:
            hazard_on_player(sim)
        sim.update()

    assert sim.phase is RunPhase.ENDED
    assert sim.frame == 200
    assert sim.lives == 0
    assert sim.final_score == math.floor(0.1 * 200)

    # Ended runs do not tick
    sim.update()
    assert sim.frame == 200


def test_obstacle_survives_collision(sim) -> None:
    p = sim.player
    obs = Obstacle(x=p.x + sim.speed, y=p.y, width=30, height=40)
    sim.obstacles.append(obs)

    sim.update()
    assert sim.lives == 2
    assert sim.obstacles == [obs]
    assert sim.events["obstacle_hits"] == 1


def test_hazard_is_consumed_on_hit(sim, hazard_on_player) -> None:
    hazard_on_player(sim)
    sim.update()
    assert sim.hazards == []
    assert sim.snapshot().hazards == ()
    assert sim.events["hazard_hits"] == 1


def test_obstacle_keeps_hurting_while_in_contact(quiet_config) -> None:
    cfg = dataclasses.replace(quiet_config, invincibility_frames=0)
    sim = RunnerSimulation(cfg)
    sim.start()
    p = sim.player
    # A wall that does not scroll stays in contact
    sim.speed = 0.0
    sim.obstacles.append(Obstacle(x=p.x, y=p.y, width=30, height=40))

    sim.update()
    assert sim.lives == 2
    sim.update()  # invincibility clears this frame, contact hits again
    assert sim.lives == 1


# ----------------------------
# Culling
# ----------------------------

def test_obstacles_are_culled_once_fully_off_screen(sim) -> None:
    gone = Obstacle(x=-26, y=0, width=30, height=10)
    edge = Obstacle(x=-24, y=0, width=30, height=10)
    sim.obstacles.extend([gone, edge])

    sim.update()
    assert sim.obstacles == [edge]
    sim.update()
    assert sim.obstacles == []
    for _ in range(10):
        sim.update()
        assert sim.obstacles == []


def test_hazards_are_culled_past_the_left_edge(sim) -> None:
    # A hazard that does not move on its own drifts left with the world
    behind = Hazard(x=-38, y=0, width=40, height=20, speed=0)
    sim.hazards.append(behind)

    sim.update()
    assert sim.hazards == []
    for _ in range(10):
        sim.update()
        assert sim.hazards == []


def test_hazards_are_culled_past_the_right_edge(sim) -> None:
    leaving = Hazard(x=799, y=0, width=40, height=20, speed=sim.speed + 5)
    staying = Hazard(x=700, y=0, width=40, height=20, speed=sim.speed + 5)
    sim.hazards.extend([leaving, staying])

    sim.update()
    assert sim.hazards == [staying]


# ----------------------------
# Spawner
# ----------------------------

def test_spawn_interval_formula() -> None:
    sim = RunnerSimulation(RunnerConfig())
    sim.start()
    assert sim.spawn_interval == 95
    sim.speed = 5.5
    assert sim.spawn_interval == 92
    sim.speed = 20.0
    assert sim.spawn_interval == 60


def test_first_obstacle_spawns_on_interval_frame() -> None:
    sim = RunnerSimulation(RunnerConfig(), seed=3)
    sim.start()

    for _ in range(94):
        sim.update()
        assert sim.obstacles == []

    sim.update()
    assert sim.frame == 95
    assert len(sim.obstacles) == 1
    obs = sim.obstacles[0]
    assert obs.x == sim.config.width
    assert 20 <= obs.height <= 70
    assert obs.y + obs.height == sim.config.ground_y
    assert sim.events["obstacles_spawned"] == 1


def test_obstacle_heights_are_reproducible_with_a_seed() -> None:
    def heights(seed):
        sim = RunnerSimulation(RunnerConfig(min_spawn_interval=1, base_spawn_interval=1, starting_lives=1000))
        sim.start(seed=seed)
        for _ in range(30):
            sim.update()
        return [o.height for o in sim.obstacles]

    assert heights(7) == heights(7)
    assert len(heights(7)) > 0


def test_stationary_antagonist_fires_on_period(quiet_config) -> None:
    sim = RunnerSimulation(dataclasses.replace(quiet_config, attack_period=30))
    sim.start()

    for _ in range(29):
        sim.update()
    assert sim.hazards == []

    sim.update()
    assert len(sim.hazards) == 1
    flame = sim.hazards[0]
    assert flame.x == sim.antagonist.x + sim.antagonist.width
    assert flame.y == sim.antagonist.y + 20
    assert flame.speed == pytest.approx(sim.speed * 1.5)

    # Flames close in faster than the world scrolls
    before = flame.x
    sim.update()
    assert flame.x == pytest.approx(before + sim.speed * 0.5)


def test_jumping_antagonist_fires_once_per_landing(quiet_config) -> None:
    cfg = dataclasses.replace(quiet_config, antagonist="jumping", attack_period=50)
    sim = RunnerSimulation(cfg)
    sim.start()
    ground_top = cfg.ground_y - sim.antagonist.height

    for _ in range(50):
        sim.update()
    assert sim.antagonist.jumping
    assert sim.hazards == []

    airborne = 0
    while sim.antagonist.jumping:
        sim.update()
        airborne += 1
        if sim.antagonist.jumping:
            assert sim.hazards == []

    assert airborne > 1
    assert sim.antagonist.y == ground_top
    assert len(sim.hazards) == 1
    wave = sim.hazards[0]
    assert wave.y == cfg.ground_y - 20
    assert wave.speed == pytest.approx(sim.speed * 1.6)


# ----------------------------
# Snapshot & listeners
# ----------------------------

def test_snapshot_is_a_detached_copy(sim) -> None:
    sim.obstacles.append(Obstacle(x=500, y=300, width=30, height=50))
    snap = sim.snapshot()

    snap.player.y = -999
    snap.obstacles[0].x = -999
    assert sim.player.y != -999
    assert sim.obstacles[0].x == 500

    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.lives = 0
    assert snap.active
    assert snap.ground_y == sim.config.ground_y


def test_player_blinks_while_invincible(sim) -> None:
    assert sim.snapshot().player_visible
    sim.take_damage()
    sim.frame = 5
    assert not sim.snapshot().player_visible
    sim.frame = 10
    assert sim.snapshot().player_visible


def test_listeners_are_notified(quiet_config) -> None:
    sim = RunnerSimulation(quiet_config)
    listener = RecordingListener()
    sim.subscribe(listener)

    sim.start()
    assert listener.scores == [0]
    assert listener.lives == [3]

    for _ in range(20):
        sim.update()
    assert listener.scores == [0, 1, 2]

    for _ in range(3):
        sim.player.invincible = False
        sim.take_damage()
    assert listener.lives == [3, 2, 1, 0]
    assert listener.ended == [2]

    sim.unsubscribe(listener)
    sim.start()
    assert listener.lives == [3, 2, 1, 0]


def test_lives_never_increase_and_score_never_decreases() -> None:
    sim = RunnerSimulation(RunnerConfig(antagonist="jumping"), seed=11)
    sim.start()
    lives, score = sim.lives, sim.score
    while sim.active and sim.frame < 5000:
        if sim.frame % 37 == 0:
            sim.request_jump()
        sim.update()
        assert sim.lives <= lives
        assert sim.score >= score
        lives, score = sim.lives, sim.score


def test_independent_simulations_do_not_share_state() -> None:
    a = RunnerSimulation(RunnerConfig(attack_period=100_000), seed=1)
    b = RunnerSimulation(RunnerConfig(attack_period=100_000), seed=1)
    a.start()
    b.start()
    for _ in range(10):
        a.update()
    assert a.frame == 10
    assert b.frame == 0


def test_jump_is_counted_in_the_next_frame_only(sim) -> None:
    sim.request_jump()
    sim.update()
    assert sim.events["jumps"] == 1
    sim.update()
    assert sim.events["jumps"] == 0
