"""
Game entity dataclasses

All rectangles are axis-aligned, (x, y) is the top-left corner and y grows
downwards, matching screen coordinates.
"""

from dataclasses import dataclass


@dataclass
class Player:
    """Player-controlled runner"""
    x: float
    y: float
    width: float = 40.0
    height: float = 40.0
    dy: float = 0.0
    grounded: bool = True
    invincible: bool = False
    invincibility_timer: int = 0
    color: str = "#0055ff"


@dataclass
class Antagonist:
    """Background monster that fires hazards at the player"""
    x: float
    y: float
    width: float
    height: float
    dy: float = 0.0
    jumping: bool = False
    color: str = "#2e8b57"


@dataclass
class Obstacle:
    """Building that scrolls with the world"""
    x: float
    y: float
    width: float
    height: float
    color: str = "#555555"


@dataclass
class Hazard:
    """Projectile that closes in faster than the world scrolls"""
    x: float
    y: float
    width: float
    height: float
    speed: float  # absolute px/frame, on-screen delta is speed - world speed
    color: str = "#ff4500"
