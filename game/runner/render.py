"""
Arcade front-end for the runner

The window is both the renderer (draws only from RunSnapshot) and the host:
its on_update callback is the per-refresh tick source and keyboard/mouse
events become request_jump()/request_start().

Play:
    python -m game.runner.render --antagonist jumping
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Tuple

import arcade

from .config import ANTAGONIST_VARIANTS, RunnerConfig
from .clock import SimulationClock
from .simulation import RunListener, RunnerSimulation, RunPhase, RunSnapshot
from .skyline import Skyline

SKY_C = (10, 10, 26)
BUILDING_C = (26, 26, 46)
ROAD_C = (17, 17, 17)
STRIPE_C = (85, 85, 85)
HUD_C = (220, 220, 220)


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    """'#rrggbb' -> (r, g, b)"""
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


class RunnerWindow(arcade.Window, RunListener):
    """Arcade window that renders a RunnerSimulation"""

    def __init__(self, simulation: RunnerSimulation, interactive: bool = True, title: str = "Kaiju Runner"):
        cfg = simulation.config
        super().__init__(cfg.width, cfg.height, title)
        self.sim = simulation
        self.interactive = interactive
        self.skyline = Skyline()

        self._snapshot: RunSnapshot = simulation.snapshot()
        self._hud_score = 0
        self._hud_lives = simulation.lives
        self._final_score: Optional[int] = None

        simulation.subscribe(self)
        self.clock = SimulationClock(simulation, renderers=[self._on_frame])

    # ----------------------------
    # RunListener hooks
    # ----------------------------

    def on_score_changed(self, score: int) -> None:
        self._hud_score = score

    def on_lives_changed(self, lives: int) -> None:
        self._hud_lives = lives

    def on_run_ended(self, final_score: int) -> None:
        self._final_score = final_score

    # ----------------------------
    # Host side: ticks and input
    # ----------------------------

    def _on_frame(self, snap: RunSnapshot):
        if snap.active:
            self.skyline.scroll(snap.speed)
        self._snapshot = snap

    def on_update(self, delta_time: float):
        if self.interactive:
            self.clock.tick()
        else:
            # Someone else (e.g. RunnerEnv) advances the simulation
            self._on_frame(self.sim.snapshot())

    def on_key_press(self, key, modifiers):
        if not self.interactive:
            return
        if key in (arcade.key.SPACE, arcade.key.UP):
            self.sim.request_jump()
        elif key in (arcade.key.RETURN, arcade.key.ENTER):
            self._start()
        elif key == arcade.key.ESCAPE:
            self.close()

    def on_mouse_press(self, x, y, button, modifiers):
        if self.interactive and not self.sim.active:
            self._start()

    def _start(self):
        if self.sim.active:
            return
        self._final_score = None
        self.skyline.reset()
        self.clock.start()

    # ----------------------------
    # Drawing
    # ----------------------------

    def _rect(self, x: float, y: float, w: float, h: float, color):
        # Simulation y grows downwards, arcade's grows upwards
        top = self.height - y
        arcade.draw_lrbt_rectangle_filled(x, x + w, top - h, top, color)

    def on_draw(self):
        if not self.interactive:
            self._snapshot = self.sim.snapshot()
        snap = self._snapshot
        ground_y = snap.ground_y

        self.clear()
        self._rect(0, 0, snap.width, snap.height, SKY_C)

        for b in self.skyline.buildings:
            self._rect(b.x, ground_y - b.height, b.width, b.height, BUILDING_C)
            for wx, wy, color in b.windows:
                self._rect(b.x + wx, ground_y - b.height + wy, 6, 10, color)

        self._rect(0, ground_y, snap.width, snap.height - ground_y, ROAD_C)
        stripe_x = -self.skyline.road_offset
        while stripe_x < snap.width:
            self._rect(stripe_x, ground_y + 20, 40, 10, STRIPE_C)
            stripe_x += Skyline.SPACING

        a = snap.antagonist
        self._rect(a.x, a.y, a.width, a.height, hex_to_rgb(a.color))
        dx, dy, dw, dh, detail_color = self.sim.behavior.detail_rect(a)
        self._rect(dx, dy, dw, dh, hex_to_rgb(detail_color))

        if snap.player_visible:
            p = snap.player
            self._rect(p.x, p.y, p.width, p.height, hex_to_rgb(p.color))

        for obs in snap.obstacles:
            self._rect(obs.x, obs.y, obs.width, obs.height, hex_to_rgb(obs.color))

        for hz in snap.hazards:
            self._draw_hazard(hz)

        self._draw_hud(snap)

    def _draw_hazard(self, hz):
        color = hex_to_rgb(hz.color)
        if self.sim.behavior.hazard_style == "shockwave":
            # Shockwave: a triangle sitting on its base
            base = self.height - (hz.y + hz.height)
            arcade.draw_triangle_filled(
                hz.x, base,
                hz.x + hz.width / 2, base + hz.height,
                hz.x + hz.width, base,
                color,
            )
        else:
            self._rect(hz.x, hz.y, hz.width, hz.height, color)
            self._rect(hz.x + 10, hz.y + 4, hz.width - 20, hz.height - 8, (255, 255, 0))

    def _draw_hud(self, snap: RunSnapshot):
        cx, cy = snap.width / 2, snap.height / 2
        if snap.phase is RunPhase.ACTIVE:
            arcade.draw_text(f"Score: {self._hud_score}", 12, self.height - 28, HUD_C, 16)
            arcade.draw_text(f"Lives: {self._hud_lives}", 12, self.height - 52, HUD_C, 16)
        elif snap.phase is RunPhase.IDLE:
            arcade.draw_text("KAIJU RUNNER", cx, cy + 20, HUD_C, 32, anchor_x="center")
            arcade.draw_text("Press ENTER or click to start", cx, cy - 20, HUD_C, 16, anchor_x="center")
        else:
            arcade.draw_text("GAME OVER", cx, cy + 20, (255, 80, 80), 32, anchor_x="center")
            arcade.draw_text(f"Final score: {self._final_score}", cx, cy - 14, HUD_C, 18, anchor_x="center")
            arcade.draw_text("Press ENTER or click to restart", cx, cy - 44, HUD_C, 14, anchor_x="center")


def main():
    parser = argparse.ArgumentParser(description="Play the endless runner")
    parser.add_argument(
        "--antagonist",
        type=str,
        default="stationary",
        choices=list(ANTAGONIST_VARIANTS),
        help="Antagonist behavior (default: stationary)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for obstacle heights")
    parser.add_argument("--width", type=int, default=800, help="Viewport width (default: 800)")
    parser.add_argument("--height", type=int, default=400, help="Viewport height (default: 400)")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level (default: INFO)")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config = RunnerConfig(width=args.width, height=args.height, antagonist=args.antagonist)
    RunnerWindow(RunnerSimulation(config, seed=args.seed))
    arcade.run()


if __name__ == "__main__":
    main()
