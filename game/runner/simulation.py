"""
RunnerSimulation - the endless-runner game core
-----------------------------------------------
- One object owns the whole run state (no module globals), so several
  simulations can coexist, e.g. vectorized RL envs or tests
- update() advances exactly one frame; whoever owns the frame clock calls it
- Renderers read a copy via snapshot(); hosts feed request_jump()/request_start()
- UI hosts subscribe() to score/lives/run-ended notifications

Per-frame order: counters -> player physics -> antagonist -> obstacles
(move, collide, cull) -> hazards (move, collide, cull) -> spawning -> notify.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .antagonist import make_behavior
from .config import RunnerConfig
from .entities import Antagonist, Hazard, Obstacle, Player
from .utils import make_rng, rects_overlap

logger = logging.getLogger(__name__)


class RunPhase(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    ENDED = "ended"


@dataclass(frozen=True)
class RunSnapshot:
    """Read-only view of one frame, safe to hand to a renderer"""
    player: Player
    antagonist: Antagonist
    obstacles: Tuple[Obstacle, ...]
    hazards: Tuple[Hazard, ...]
    score: float
    lives: int
    speed: float
    frame: int
    phase: RunPhase
    final_score: Optional[int]
    width: int
    height: int
    ground_y: int

    @property
    def active(self) -> bool:
        return self.phase is RunPhase.ACTIVE

    @property
    def player_visible(self) -> bool:
        """Blink while invincible: visible on even 5-frame blocks"""
        return not self.player.invincible or (self.frame // 5) % 2 == 0


class RunListener:
    """Hooks a UI host can override; defaults do nothing"""

    def on_score_changed(self, score: int) -> None:
        pass

    def on_lives_changed(self, lives: int) -> None:
        pass

    def on_run_ended(self, final_score: int) -> None:
        pass


class RunnerSimulation:
    """Deterministic (given a seed) endless-runner simulation"""

    def __init__(self, config: Optional[RunnerConfig] = None, seed: Optional[int] = None):
        self.config = config if config is not None else RunnerConfig()
        self.behavior = make_behavior(self.config.antagonist)
        self.rng = make_rng(seed)

        self.phase = RunPhase.IDLE
        self.player: Player = self._spawn_player()
        self.antagonist: Antagonist = self.behavior.spawn(self.config)
        self.obstacles: List[Obstacle] = []
        self.hazards: List[Hazard] = []

        self.score = 0.0
        self.lives = self.config.starting_lives
        self.speed = self.config.base_speed
        self.frame = 0
        self.final_score: Optional[int] = None

        # Per-frame event counters, reset at the start of every update
        self.events: Dict[str, int] = self._empty_events()

        self._listeners: List[RunListener] = []
        self._last_display_score = 0
        self._pending_jumps = 0

    # ----------------------------
    # Host API
    # ----------------------------

    @property
    def active(self) -> bool:
        return self.phase is RunPhase.ACTIVE

    @property
    def display_score(self) -> int:
        return int(math.floor(self.score))

    @property
    def spawn_interval(self) -> int:
        """Frames between obstacle spawns at the current speed"""
        cfg = self.config
        rate = max(cfg.min_spawn_interval, cfg.base_spawn_interval - self.speed * cfg.spawn_interval_slope)
        return int(math.floor(rate))

    def subscribe(self, listener: RunListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: RunListener) -> None:
        self._listeners.remove(listener)

    def start(self, seed: Optional[int] = None) -> None:
        """Reset every piece of run state and go ACTIVE"""
        if seed is not None:
            self.rng = make_rng(seed)

        self.score = 0.0
        self.lives = self.config.starting_lives
        self.speed = self.config.base_speed
        self.frame = 0
        self.final_score = None
        self.obstacles = []
        self.hazards = []
        self.events = self._empty_events()
        self._pending_jumps = 0

        self.player = self._spawn_player()
        self.antagonist = self.behavior.spawn(self.config)

        self.phase = RunPhase.ACTIVE
        self._last_display_score = 0
        logger.info("Run started (antagonist=%s, lives=%d)", self.behavior.name, self.lives)

        for listener in self._listeners:
            listener.on_score_changed(0)
            listener.on_lives_changed(self.lives)

    def request_start(self) -> bool:
        """Start command from the host; ignored while a run is in progress"""
        if self.active:
            return False
        self.start()
        return True

    def request_jump(self) -> bool:
        """Jump command from the host; only honored while active and grounded"""
        if not self.active or not self.player.grounded:
            return False
        self.player.dy = self.config.jump_velocity
        self.player.grounded = False
        self._pending_jumps += 1
        return True

    def snapshot(self) -> RunSnapshot:
        return RunSnapshot(
            player=replace(self.player),
            antagonist=replace(self.antagonist),
            obstacles=tuple(replace(o) for o in self.obstacles),
            hazards=tuple(replace(h) for h in self.hazards),
            score=self.score,
            lives=self.lives,
            speed=self.speed,
            frame=self.frame,
            phase=self.phase,
            final_score=self.final_score,
            width=self.config.width,
            height=self.config.height,
            ground_y=self.config.ground_y,
        )

    # ----------------------------
    # Frame update
    # ----------------------------

    def update(self) -> None:
        """Advance one frame. Does nothing unless the run is active."""
        if not self.active:
            return

        # Jumps requested since the last frame count towards this one
        self.events = self._empty_events()
        self.events["jumps"] = self._pending_jumps
        self._pending_jumps = 0

        cfg = self.config
        self.frame += 1
        self.score = self.frame * cfg.score_per_frame
        if self.frame % cfg.speed_ramp_interval == 0:
            self.speed += cfg.speed_ramp_step
            logger.debug("Speed ramped to %.2f at frame %d", self.speed, self.frame)

        self._update_player()
        self._update_antagonist()
        self._update_obstacles()
        self._update_hazards()
        self._spawn_logic()

        if self.display_score != self._last_display_score:
            self._last_display_score = self.display_score
            for listener in self._listeners:
                listener.on_score_changed(self._last_display_score)

    def take_damage(self) -> bool:
        """Apply one hit. Returns True if the hit counted."""
        if not self.active or self.player.invincible:
            return False

        self.lives -= 1
        self.events["damage"] += 1
        logger.debug("Player hit at frame %d, %d lives left", self.frame, self.lives)
        for listener in self._listeners:
            listener.on_lives_changed(self.lives)

        if self.lives <= 0:
            self._end_run()
        else:
            self.player.invincible = True
            self.player.invincibility_timer = self.config.invincibility_frames
        return True

    # ----------------------------
    # Core mechanics
    # ----------------------------

    def _update_player(self):
        p = self.player
        ground_y = self.config.ground_y

        p.dy += self.config.gravity
        p.y += p.dy

        if p.y + p.height >= ground_y:
            p.y = ground_y - p.height
            p.dy = 0.0
            p.grounded = True

        # The timer hits zero on the last protected frame and clears one frame later
        if p.invincible:
            if p.invincibility_timer <= 0:
                p.invincible = False
            else:
                p.invincibility_timer -= 1

    def _update_antagonist(self):
        if self.behavior.step_physics(self.antagonist, self.config):
            self._spawn_hazard()

    def _update_obstacles(self):
        survivors = []
        for obs in self.obstacles:
            obs.x -= self.speed

            # Buildings stay put when hit
            if rects_overlap(self.player, obs):
                self.events["obstacle_hits"] += 1
                self.take_damage()

            if obs.x + obs.width >= 0:
                survivors.append(obs)
        self.obstacles = survivors

    def _update_hazards(self):
        survivors = []
        for hz in self.hazards:
            hz.x += hz.speed - self.speed

            if rects_overlap(self.player, hz):
                self.events["hazard_hits"] += 1
                self.take_damage()
                continue

            if hz.x <= self.config.width and hz.x + hz.width >= 0:
                survivors.append(hz)
        self.hazards = survivors

    def _spawn_logic(self):
        if self.frame % self.spawn_interval == 0:
            self._spawn_obstacle()

        if self.behavior.on_frame(self.antagonist, self.frame, self.config):
            self._spawn_hazard()

    def _spawn_obstacle(self):
        cfg = self.config
        height = int(self.rng.integers(cfg.obstacle_min_height, cfg.obstacle_max_height + 1))
        self.obstacles.append(Obstacle(
            x=float(cfg.width),
            y=float(cfg.ground_y - height),
            width=float(cfg.obstacle_width),
            height=float(height),
            color=self.behavior.obstacle_color,
        ))
        self.events["obstacles_spawned"] += 1

    def _spawn_hazard(self):
        self.hazards.append(self.behavior.make_hazard(self.antagonist, self.speed, self.config))
        self.events["hazards_spawned"] += 1
        logger.debug("%s fired a hazard at frame %d", self.behavior.name, self.frame)

    def _end_run(self):
        self.phase = RunPhase.ENDED
        self.final_score = self.display_score
        logger.info("Run ended at frame %d with score %d", self.frame, self.final_score)
        for listener in self._listeners:
            listener.on_run_ended(self.final_score)

    # ----------------------------
    # Helpers
    # ----------------------------

    def _spawn_player(self) -> Player:
        size = float(self.config.player_size)
        return Player(
            x=self.config.player_x,
            y=self.config.ground_y - size,
            width=size,
            height=size,
            color=self.behavior.player_color,
        )

    @staticmethod
    def _empty_events() -> Dict[str, int]:
        return {
            "damage": 0,
            "obstacle_hits": 0,
            "hazard_hits": 0,
            "obstacles_spawned": 0,
            "hazards_spawned": 0,
            "jumps": 0,
        }
