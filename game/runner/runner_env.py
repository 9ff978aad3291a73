"""
RunnerEnv - the endless runner as a Gymnasium environment
---------------------------------------------------------
- Wraps a RunnerSimulation; one env step == one simulation frame
- Discrete action space: 0 keep running, 1 jump
- Vector observation: player state + antagonist + nearest obstacles/hazards
- Reward: survive every frame, lose lives as little as possible

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.runner.runner_env
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import RunnerConfig
from .simulation import RunnerSimulation
from .utils import clamp

DEFAULT_REWARD_WEIGHTS = {
    "R_ALIVE": 0.01,   # per surviving frame
    "R_DAMAGE": 1.0,   # per life lost
    "R_JUMP": 0.002,   # discourage jump spam
    "R_DEATH": 5.0,
}


class RunnerEnv(gym.Env):
    """Endless runner environment; the agent only decides when to jump"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        config: Optional[RunnerConfig] = None,
        antagonist: Optional[str] = None,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_obstacles: int = 2,
        m_hazards: int = 2,
        reward_weights: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode: {render_mode}"
        self.render_mode = render_mode

        if config is None:
            config = RunnerConfig() if antagonist is None else RunnerConfig(antagonist=antagonist)
        self.config = config
        self.max_steps = max_steps
        self.k_obstacles = k_obstacles
        self.m_hazards = m_hazards
        self.reward_weights = dict(DEFAULT_REWARD_WEIGHTS)
        if reward_weights:
            self.reward_weights.update(reward_weights)

        self.sim = RunnerSimulation(config)

        self.action_space = spaces.Discrete(2)

        # Player: y, dy, grounded, invincibility, speed, lives (6)
        # Antagonist: y, jumping (2)
        # Each obstacle: rel x, height
        # Each hazard: rel x, y
        obs_dim = 6 + 2 + (self.k_obstacles * 2) + (self.m_hazards * 2)
        self.observation_space = spaces.Box(low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32)

        self._window = None
        self._step_count = 0
        self._episode_hits = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        # Draw the run seed from the env generator so reset(seed=...) is reproducible
        run_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.sim.start(seed=run_seed)

        self._step_count = 0
        self._episode_hits = 0

        return self._get_obs(), self._get_info()

    def step(self, action):
        if int(action) == 1:
            self.sim.request_jump()

        self.sim.update()
        events = self.sim.events
        self._episode_hits += events["damage"]

        reward = self._compute_reward(events)

        terminated = not self.sim.active
        self._step_count += 1
        truncated = self._step_count >= self.max_steps and not terminated

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        cfg = self.config
        sim = self.sim
        p = sim.player
        ground_y = float(cfg.ground_y)
        jump_v = max(1e-6, abs(cfg.jump_velocity))

        obs_parts = [
            clamp(p.y / ground_y * 2 - 1, -1, 1),
            clamp(p.dy / jump_v, -1, 1),
            1.0 if p.grounded else -1.0,
            clamp(p.invincibility_timer / max(1, cfg.invincibility_frames) * 2 - 1, -1, 1) if p.invincible else -1.0,
            clamp(sim.speed / max(1e-6, cfg.base_speed * 4) * 2 - 1, -1, 1),
            sim.lives / cfg.starting_lives * 2 - 1,
        ]

        a = sim.antagonist
        obs_parts += [clamp(a.y / ground_y * 2 - 1, -1, 1), 1.0 if a.jumping else -1.0]

        # Obstacles still ahead of (or under) the player, nearest first
        ahead = sorted(
            (o for o in sim.obstacles if o.x + o.width >= p.x),
            key=lambda o: o.x,
        )
        for i in range(self.k_obstacles):
            if i < len(ahead):
                o = ahead[i]
                obs_parts += [
                    clamp((o.x - p.x) / cfg.width, -1, 1),
                    clamp(o.height / cfg.obstacle_max_height, 0, 1),
                ]
            else:
                obs_parts += [1.0, 0.0]

        # Hazards come from behind, nearest leading edge first
        incoming = sorted(
            (h for h in sim.hazards if h.x <= p.x + p.width),
            key=lambda h: p.x - (h.x + h.width),
        )
        for i in range(self.m_hazards):
            if i < len(incoming):
                h = incoming[i]
                obs_parts += [
                    clamp((h.x + h.width - p.x) / cfg.width, -1, 1),
                    clamp(h.y / ground_y * 2 - 1, -1, 1),
                ]
            else:
                obs_parts += [-1.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, events: Dict[str, int]) -> float:
        w = self.reward_weights
        reward = w["R_ALIVE"]
        reward -= w["R_DAMAGE"] * events.get("damage", 0)
        reward -= w["R_JUMP"] * events.get("jumps", 0)
        if not self.sim.active:
            reward -= w["R_DEATH"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.sim.display_score,
            "lives": self.sim.lives,
            "speed": self.sim.speed,
            "frame": self.sim.frame,
            "hits": self._episode_hits,
            "num_obstacles": len(self.sim.obstacles),
            "num_hazards": len(self.sim.hazards),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .render import RunnerWindow
            self._window = RunnerWindow(self.sim, interactive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: int = 42, antagonist: str = "stationary"):
    """Run a random-policy episode"""
    env = RunnerEnv(render_mode="human" if render else None, antagonist=antagonist)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        # Jumping on every frame would be pointless, tap occasionally
        action = 1 if env.np_random.random() < 0.05 else 0
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(1 / 60)

    print(f"Random episode return: {total:.2f}, score: {info['score']}, frames: {info['frame']}")
    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=True)
