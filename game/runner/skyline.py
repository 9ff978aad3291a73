"""
Parallax city behind the road. Purely cosmetic and owned by the renderer,
so it uses its own generator and never touches the simulation's.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np


@dataclass
class Building:
    x: float
    width: float
    height: float
    windows: List[Tuple[float, float, Tuple[int, int, int]]] = field(default_factory=list)


class Skyline:
    SPACING = 80.0
    PARALLAX = 0.3

    def __init__(self, count: int = 15, seed: Optional[int] = None):
        self.count = count
        self.rng = np.random.default_rng(seed)
        self.buildings: List[Building] = []
        self.road_offset = 0.0
        self.reset()

    def reset(self):
        """Lay the buildings out from the left edge again and rewind the road"""
        self.buildings = [self._make_building(i * self.SPACING) for i in range(self.count)]
        self.road_offset = 0.0

    def _make_building(self, x: float) -> Building:
        w = float(self.rng.uniform(60, 120))
        h = float(self.rng.uniform(80, 280))
        windows = []
        for r in range(int(h // 20)):
            for c in range(int(w // 15)):
                # About 40% of the windows are lit
                if self.rng.random() > 0.6:
                    color = (255, 235, 59) if self.rng.random() > 0.2 else (255, 193, 7)
                    windows.append((c * 15 + (w - int(w // 15) * 10) / 2, 10 + r * 20, color))
        return Building(x=x, width=w, height=h, windows=windows)

    def scroll(self, speed: float):
        self.road_offset = (self.road_offset + speed) % self.SPACING
        for i, b in enumerate(self.buildings):
            b.x -= speed * self.PARALLAX
            if b.x + b.width < 0:
                max_x = max(other.x for other in self.buildings)
                self.buildings[i] = self._make_building(max_x + self.SPACING)
