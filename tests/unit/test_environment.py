"""
Unit tests for the Gymnasium environment wrapper.
"""
import pytest
import numpy as np
from minefield import BoardConfig, GameState, MinesweeperEnv
from minefield.environment import (
    REWARD_MINE,
    REWARD_NO_OP,
    REWARD_SAFE,
    REWARD_WIN,
)


def reveal_action(x: int, y: int, width: int = 3) -> int:
    return y * width + x


def flag_action(x: int, y: int, width: int = 3, height: int = 3) -> int:
    return width * height + y * width + x


@pytest.fixture
def scripted_env(scripted_rng):
    """Factory for 3x3 environments with two mines at fixed positions."""
    def make(*positions) -> MinesweeperEnv:
        env = MinesweeperEnv(BoardConfig(3, 3, 2), render_mode="ansi")
        env.board.rng = scripted_rng(*positions)
        env.reset()
        return env
    return make


class TestSpaces:
    """Test observation and action spaces."""

    def test_action_space_covers_reveal_and_flag(self) -> None:
        """Two actions per cell."""
        env = MinesweeperEnv(BoardConfig(4, 5, 3))
        assert env.action_space.n == 40

    def test_reset_returns_covered_observation(self) -> None:
        """Fresh episode is fully covered."""
        env = MinesweeperEnv()
        obs, info = env.reset(seed=3)
        assert obs.shape == (9, 9)
        assert np.all(obs == -1)
        assert info["game_state"] == "NEW"
        assert env.observation_space.contains(obs)

    def test_reset_seed_fixes_layout(self) -> None:
        """Same seed, same mines."""
        first = MinesweeperEnv()
        second = MinesweeperEnv()
        first.reset(seed=5)
        second.reset(seed=5)
        first.step(reveal_action(4, 4, 9))
        second.step(reveal_action(4, 4, 9))
        np.testing.assert_array_equal(
            first.board.get_observation(), second.board.get_observation()
        )


class TestStep:
    """Test action handling and rewards."""

    def test_safe_reveal_reward(self, scripted_env) -> None:
        """Safe reveal earns a point."""
        env = scripted_env((2, 0), (2, 2))
        _, reward, terminated, truncated, _ = env.step(reveal_action(0, 0))
        assert reward == REWARD_SAFE
        assert terminated is False
        assert truncated is False

    def test_win_reward(self, scripted_env) -> None:
        """Last safe cell wins."""
        env = scripted_env((2, 0), (2, 2))
        env.step(reveal_action(0, 0))
        _, reward, terminated, _, info = env.step(reveal_action(2, 1))
        assert reward == REWARD_WIN
        assert terminated is True
        assert info["game_state"] == "WON"

    def test_mine_reward(self, scripted_env) -> None:
        """Hitting a mine ends the episode."""
        env = scripted_env((2, 0), (1, 2))
        env.step(reveal_action(0, 0))
        obs, reward, terminated, _, _ = env.step(reveal_action(1, 2))
        assert reward == REWARD_MINE
        assert terminated is True
        assert obs[2, 1] == 9

    def test_repeated_action_is_penalised(self, scripted_env) -> None:
        """An action that changes nothing costs a little."""
        env = scripted_env((2, 0), (2, 2))
        env.step(reveal_action(0, 0))
        _, reward, _, _, info = env.step(reveal_action(0, 0))
        assert reward == REWARD_NO_OP
        assert info["undo_depth"] == 1

    def test_flag_action(self, scripted_env) -> None:
        """Second half of the action space toggles flags."""
        env = scripted_env((2, 0), (2, 2))
        env.step(reveal_action(0, 0))
        obs, reward, _, _, info = env.step(flag_action(2, 0))
        assert obs[0, 2] == -2
        assert reward == REWARD_SAFE
        assert info["mines_remaining"] == 1


class TestUndo:
    """Test take-back support."""

    def test_undo_after_loss(self, scripted_env) -> None:
        """Undo returns to the game before the losing move."""
        env = scripted_env((2, 0), (1, 2))
        env.step(reveal_action(0, 0))
        env.step(reveal_action(1, 2))

        assert env.undo() is True
        assert env.board.state == GameState.PLAYING
        assert env.board.get_observation()[2, 1] == -1

    def test_undo_without_moves(self) -> None:
        """Nothing to take back on a fresh episode."""
        env = MinesweeperEnv()
        env.reset()
        assert env.undo() is False

    def test_reset_clears_history(self, scripted_env) -> None:
        """A new episode cannot undo into the previous one."""
        env = scripted_env((2, 0), (2, 2))
        env.step(reveal_action(0, 0))
        env.reset()
        assert len(env.history) == 0


class TestActionMask:
    """Test valid action masks."""

    def test_new_board_allows_reveals_only(self) -> None:
        """Flags need a game in progress."""
        env = MinesweeperEnv(BoardConfig(3, 3, 2))
        env.reset()
        mask = env.get_action_mask()
        assert mask[:9].all()
        assert not mask[9:].any()

    def test_mask_after_first_reveal(self, scripted_env) -> None:
        """Uncovered cells drop out; covered cells can be flagged."""
        env = scripted_env((2, 0), (2, 2))
        env.step(reveal_action(0, 0))
        mask = env.get_action_mask()
        covered = [reveal_action(2, 0), reveal_action(2, 1), reveal_action(2, 2)]
        assert sorted(np.where(mask[:9])[0]) == covered
        assert sorted(np.where(mask[9:])[0]) == covered

    def test_finished_game_has_no_actions(self, scripted_env) -> None:
        """Nothing is valid once the game ends."""
        env = scripted_env((2, 0), (2, 2))
        env.step(reveal_action(0, 0))
        env.step(reveal_action(2, 1))
        assert not env.get_action_mask().any()


class TestRender:
    """Test text rendering."""

    def test_ansi_render(self, scripted_env) -> None:
        """One line per row with cell symbols."""
        env = scripted_env((2, 0), (2, 2))
        env.step(reveal_action(0, 0))
        env.step(flag_action(2, 0))
        assert env.render() == "  1 F\n  2 .\n  1 ."
