"""
Tunable constants for the runner simulation
"""

from __future__ import annotations

from dataclasses import dataclass

ANTAGONIST_VARIANTS = ("stationary", "jumping")


@dataclass(frozen=True)
class RunnerConfig:
    """All knobs of a run. Validated once here so spawning never fails."""

    # Viewport
    width: int = 800
    height: int = 400
    ground_height: int = 50

    # Physics (px/frame, px/frame^2)
    gravity: float = 0.6
    jump_velocity: float = -12.0
    antagonist_jump_velocity: float = -14.0

    # Run
    starting_lives: int = 3
    base_speed: float = 5.0
    speed_ramp_interval: int = 600  # frames between speed bumps
    speed_ramp_step: float = 0.5
    score_per_frame: float = 0.1
    invincibility_frames: int = 60

    # Obstacles
    obstacle_width: int = 30
    obstacle_min_height: int = 20
    obstacle_max_height: int = 70
    base_spawn_interval: float = 120.0
    min_spawn_interval: float = 60.0
    spawn_interval_slope: float = 5.0

    # Antagonist
    antagonist: str = "stationary"
    attack_period: int = 180

    # Player
    player_x: float = 150.0
    player_size: int = 40

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"viewport must be positive, got {self.width}x{self.height}")
        if not 0 <= self.ground_height < self.height:
            raise ValueError(f"ground_height must be in [0, {self.height}), got {self.ground_height}")
        if self.starting_lives <= 0:
            raise ValueError(f"starting_lives must be positive, got {self.starting_lives}")
        if self.obstacle_width <= 0 or self.player_size <= 0:
            raise ValueError("entity sizes must be positive")
        if self.obstacle_min_height <= 0:
            raise ValueError(f"obstacle_min_height must be positive, got {self.obstacle_min_height}")
        if self.obstacle_min_height > self.obstacle_max_height:
            raise ValueError(
                f"obstacle height range is inverted: "
                f"[{self.obstacle_min_height}, {self.obstacle_max_height}]"
            )
        if self.obstacle_max_height > self.ground_y:
            raise ValueError(
                f"obstacle_max_height {self.obstacle_max_height} does not fit above ground line {self.ground_y}"
            )
        if self.min_spawn_interval < 1 or self.base_spawn_interval < 1:
            raise ValueError("spawn intervals must be at least one frame")
        if self.speed_ramp_interval <= 0 or self.attack_period <= 0:
            raise ValueError("speed_ramp_interval and attack_period must be positive")
        if self.invincibility_frames < 0:
            raise ValueError(f"invincibility_frames must be >= 0, got {self.invincibility_frames}")
        if self.base_speed <= 0:
            raise ValueError(f"base_speed must be positive, got {self.base_speed}")
        if self.speed_ramp_step < 0 or self.score_per_frame < 0:
            raise ValueError("speed ramp and score rates must be non-negative")
        if self.antagonist not in ANTAGONIST_VARIANTS:
            raise ValueError(
                f"Unknown antagonist variant: {self.antagonist!r} (expected one of {ANTAGONIST_VARIANTS})"
            )

    @property
    def ground_y(self) -> int:
        """Vertical coordinate of the ground line (y grows downwards)"""
        return self.height - self.ground_height
