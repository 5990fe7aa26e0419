"""
env.py - Gymnasium environment for playing against the heuristic computer

The agent takes the human's seat (player A). After each agent move the
computer's reply is committed immediately instead of waiting out its
display delay.
"""

from typing import Any, Dict, Optional, Tuple, Union

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from dropfour.debug import debug
from dropfour.utils import ROWS, COLS, Owner
from dropfour.game.controller import GameController, Phase


class DropFourEnv(gym.Env):
    """
    Connect Four against the four-tier heuristic, following the Gymnasium API.

    Observations are the rows x cols owner grid (0 empty, 1 agent,
    2 computer). Actions are column indices.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, rows: int = ROWS, cols: int = COLS):
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        debug.debug("Initializing DropFourEnv", "env")
        self.rows = rows
        self.cols = cols
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(cols)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(rows, cols), dtype=np.int8
        )

        self.controller: Optional[GameController] = None

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # Small negative reward to encourage faster wins

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Start a new game; the computer moves first if the coin flip says so.

        Options:
            first: Owner (or its int value) that should move first
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        first = None
        if options and options.get('first') is not None:
            first = Owner(options['first'])

        # Share the environment's seeded generator with the controller
        self.controller = GameController(self.rows, self.cols, ai_delay=0.0, rng=self.np_random)
        self.controller.start_new_game(first=first)
        self.controller.skip_delay()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop the agent's piece in column action, then let the computer reply.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if self.controller is None:
            raise RuntimeError("Call reset() before step()")

        action = int(action)
        debug.debug(f"Environment step with action {action}", "env")

        if self.controller.is_over:
            debug.warning("Step called on a finished game", "env")
            return self._get_observation(), 0.0, True, False, self._get_info()

        if not self.controller.request_move(action):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        if self.controller.phase == Phase.AI_THINKING:
            self.controller.skip_delay()

        reward = self.reward_step
        terminated = self.controller.is_over
        if terminated:
            if self.controller.is_tied:
                debug.info("Game over: draw", "env")
                reward = self.reward_draw
            elif self.controller.winner == self.controller.human:
                debug.info("Game over: agent wins", "env")
                reward = self.reward_win
            else:
                debug.info("Game over: computer wins", "env")
                reward = self.reward_lose

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        if self.render_mode is None or self.controller is None:
            return None

        if self.render_mode == "ascii":
            return self.controller.render()

        print(self.controller.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.controller.board.get_state()

    def _get_info(self) -> Dict[str, Any]:
        return self.controller.get_info()

    def close(self):
        self.controller = None
