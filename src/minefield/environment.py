"""
Gymnasium environment wrapper for Minesweeper.

Provides a standard RL interface on top of the board engine, with
take-back support through the snapshot stack.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig
from .memento import Caretaker
from .state import GameState

REWARD_SAFE = 1.0
REWARD_WIN = 10.0
REWARD_MINE = -10.0
REWARD_NO_OP = -0.1


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array indexed [y, x] where:
        - -1 = covered cell
        - -2 = flagged cell
        - 0-8 = uncovered cell with adjacent mine count
        - 9 = uncovered mine

    Actions:
        Discrete action space of size 2 * width * height.
        Action i < width * height reveals cell (i % width, i // width);
        the second half toggles a flag on the same cells.

    Rewards:
        - +1 for revealing a safe cell or toggling a flag
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action that changes nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.board = Board(self.config)
        self.history = Caretaker()
        self.render_mode = render_mode
        self._cells = self.config.height * self.config.width

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(2 * self._cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Seed for mine placement; reused by later resets.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.board.seed = seed
        self.board.reset()
        self.history.clear()
        self._steps = 0

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Flat action index (see class docstring).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        flag, x, y = self._decode_action(int(action))
        self._steps += 1

        self.history.save(self.board)
        changed = (
            self.board.toggle_flag(x, y) if flag else self.board.reveal(x, y)
        )
        if not changed:
            self.history.pop_latest()

        reward = self._calculate_reward(changed)
        terminated = self.board.is_finished

        return self.board.get_observation(), reward, terminated, False, self._get_info()

    def undo(self) -> bool:
        """Take back the last move that changed the board."""
        return self.history.undo(self.board)

    def _decode_action(self, action: int) -> Tuple[bool, int, int]:
        """Convert flat action index to (is_flag, x, y)."""
        flag = action >= self._cells
        index = action - self._cells if flag else action
        return flag, index % self.config.width, index // self.config.width

    def _calculate_reward(self, changed: bool) -> float:
        if not changed:
            return REWARD_NO_OP
        if self.board.is_won:
            return REWARD_WIN
        if self.board.is_lost:
            return REWARD_MINE
        return REWARD_SAFE

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "uncovered": self.board.count_uncovered(),
            "total_safe": self._cells - self.config.num_mines,
            "mines_remaining": self.board.mines_remaining,
            "game_state": self.board.state.name,
            "undo_depth": len(self.history),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as ASCII string."""
        symbols = {-1: ".", -2: "F", 9: "*", 0: " "}
        lines = []
        for row in self.board.get_observation():
            lines.append(
                " ".join(symbols.get(int(val), str(val)) for val in row)
            )
        return "\n".join(lines)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would change the board.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.board.is_finished:
            return mask
        for x, y in self.board.get_valid_actions():
            mask[y * self.config.width + x] = True
        if self.board.state == GameState.PLAYING:
            for y in range(self.config.height):
                for x in range(self.config.width):
                    visible = self.board.get_visible_cell(x, y)
                    if visible.is_flagged or (
                        visible.is_covered and self.board.mines_remaining > 0
                    ):
                        mask[self._cells + y * self.config.width + x] = True
        return mask


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[BoardConfig] = None,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for parallel play.

    Args:
        n_envs: Number of parallel environments.
        config: Board configuration.

    Returns:
        Vectorized environment.
    """
    def make_env() -> MinesweeperEnv:
        return MinesweeperEnv(config=config)

    return gym.vector.AsyncVectorEnv([make_env for _ in range(n_envs)])
