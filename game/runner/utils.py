"""
Utility functions for game mechanics
"""

from __future__ import annotations
from typing import Optional, Protocol

import numpy as np


class Rect(Protocol):
    x: float
    y: float
    width: float
    height: float


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Check if two axis-aligned rectangles overlap (touching edges do not count)"""
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create an independent random generator for one simulation"""
    return np.random.default_rng(seed)
