"""2D Game module - endless runner simulation and environment"""

from .config import RunnerConfig
from .simulation import RunnerSimulation, RunListener, RunPhase, RunSnapshot
from .clock import SimulationClock
from .runner_env import RunnerEnv, run_random_episode

__all__ = [
    'RunnerConfig',
    'RunnerSimulation',
    'RunListener',
    'RunPhase',
    'RunSnapshot',
    'SimulationClock',
    'RunnerEnv',
    'run_random_episode',
]
