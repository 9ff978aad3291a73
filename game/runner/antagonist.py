"""
Antagonist behaviors

The monster behind the player either breathes fire on a fixed period
(stationary) or jumps on a fixed period and sends a shockwave along the
ground each time it lands (jumping). A run uses exactly one behavior.
"""

from __future__ import annotations

from typing import Dict, Tuple, Type

from .config import RunnerConfig
from .entities import Antagonist, Hazard


class AntagonistBehavior:
    """Base class: spawn pose, per-frame physics and attack trigger"""

    name = "base"
    obstacle_color = "#555555"
    player_color = "#0055ff"
    # Drawn as a triangle ("shockwave") or a rectangle with a hot core ("flame")
    hazard_style = "flame"

    def spawn(self, config: RunnerConfig) -> Antagonist:
        raise NotImplementedError

    def step_physics(self, antagonist: Antagonist, config: RunnerConfig) -> bool:
        """Advance the antagonist one frame. Returns True on a ground impact."""
        return False

    def on_frame(self, antagonist: Antagonist, frame: int, config: RunnerConfig) -> bool:
        """Run the periodic trigger. Returns True when a hazard fires right now."""
        return False

    def make_hazard(self, antagonist: Antagonist, world_speed: float, config: RunnerConfig) -> Hazard:
        raise NotImplementedError

    def detail_rect(self, antagonist: Antagonist) -> Tuple[float, float, float, float, str]:
        """(x, y, w, h, color) of the feature drawn on top of the body"""
        raise NotImplementedError


class StationaryBreather(AntagonistBehavior):
    """Walks in place and breathes a flame every `attack_period` frames"""

    name = "stationary"

    def spawn(self, config: RunnerConfig) -> Antagonist:
        return Antagonist(x=-20.0, y=config.ground_y - 120.0, width=100.0, height=120.0, color="#2e8b57")

    def detail_rect(self, antagonist: Antagonist) -> Tuple[float, float, float, float, str]:
        # Eye
        return antagonist.x + 70.0, antagonist.y + 15.0, 10.0, 10.0, "#ff0000"

    def on_frame(self, antagonist: Antagonist, frame: int, config: RunnerConfig) -> bool:
        return frame % config.attack_period == 0

    def make_hazard(self, antagonist: Antagonist, world_speed: float, config: RunnerConfig) -> Hazard:
        # Out of the mouth, faster than the buildings
        return Hazard(
            x=antagonist.x + antagonist.width,
            y=antagonist.y + 20.0,
            width=60.0,
            height=15.0,
            speed=world_speed * 1.5,
            color="#ff4500",
        )


class GroundPounder(AntagonistBehavior):
    """Jumps every `attack_period` frames; each landing sends a shockwave"""

    name = "jumping"
    obstacle_color = "#ff2222"
    player_color = "#00ccff"
    hazard_style = "shockwave"

    def spawn(self, config: RunnerConfig) -> Antagonist:
        return Antagonist(x=-10.0, y=config.ground_y - 110.0, width=90.0, height=110.0, color="#4e342e")

    def detail_rect(self, antagonist: Antagonist) -> Tuple[float, float, float, float, str]:
        # Darker belly
        return antagonist.x + 20.0, antagonist.y + 20.0, antagonist.width - 20.0, 50.0, "#3e2723"

    def step_physics(self, antagonist: Antagonist, config: RunnerConfig) -> bool:
        if not antagonist.jumping:
            return False

        antagonist.dy += config.gravity
        antagonist.y += antagonist.dy

        if antagonist.y + antagonist.height >= config.ground_y:
            antagonist.y = config.ground_y - antagonist.height
            antagonist.dy = 0.0
            antagonist.jumping = False
            return True
        return False

    def on_frame(self, antagonist: Antagonist, frame: int, config: RunnerConfig) -> bool:
        if frame % config.attack_period == 0 and not antagonist.jumping:
            antagonist.dy = config.antagonist_jump_velocity
            antagonist.jumping = True
        return False

    def make_hazard(self, antagonist: Antagonist, world_speed: float, config: RunnerConfig) -> Hazard:
        return Hazard(
            x=antagonist.x + antagonist.width,
            y=config.ground_y - 20.0,
            width=40.0,
            height=20.0,
            speed=world_speed * 1.6,
            color="#ffeb3b",
        )


BEHAVIORS: Dict[str, Type[AntagonistBehavior]] = {
    StationaryBreather.name: StationaryBreather,
    GroundPounder.name: GroundPounder,
}


def make_behavior(name: str) -> AntagonistBehavior:
    try:
        return BEHAVIORS[name]()
    except KeyError:
        raise ValueError(f"Unknown antagonist variant: {name!r}") from None
