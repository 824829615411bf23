#!/usr/bin/env python3
"""Watch random moves play Minesweeper, optionally taking back a loss."""
import argparse
import logging
import os
import time

import numpy as np

from minefield import BoardConfig, BoardConfigError, MinesweeperEnv


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(
    delay: float = 0.3,
    games: int = 5,
    size: int = 9,
    mines: int = 10,
    undo: bool = False,
    seed=None,
):
    """Run demo games with visualization."""
    config = BoardConfig(height=size, width=size, num_mines=mines)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(seed)
    cells = size * size

    print(f"Board: {size}x{size} with {mines} mines ({100*mines/cells:.1f}% density)")
    time.sleep(min(delay * 4, 2))

    wins = 0

    for game in range(games):
        env.reset(seed=None if seed is None else seed + game)
        take_backs = 1 if undo else 0

        done = False
        step = 0

        while not done:
            # Reveal only; flags would not help a random player.
            valid = np.where(env.get_action_mask()[:cells])[0]
            action = int(rng.choice(valid))

            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(f"Wins so far: {wins}")
            print(f"Last move: ({action % size}, {action // size})\n")
            print(env.render())

            if done and info["game_state"] == "LOST" and take_backs:
                take_backs -= 1
                env.undo()
                done = False
                print("\n*** Hit a mine, taking it back ***")
            elif done:
                if info["game_state"] == "WON":
                    wins += 1
                    print("\n*** WIN! ***")
                else:
                    print("\n*** LOST (hit mine) ***")

            time.sleep(delay)

        time.sleep(delay * 3)

    print(f"\n=== Final: {wins}/{games} wins ({100*wins/games:.0f}%) ===")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument("--size", type=int, default=9, help="Board size (NxN)")
    parser.add_argument("--mines", type=int, default=None, help="Number of mines (default: ~12%% of cells)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for mine layouts and moves")
    parser.add_argument("--undo", action="store_true", help="Take back the first losing move of each game")
    parser.add_argument("--verbose", action="store_true", help="Log engine events")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    mines = args.mines if args.mines is not None else int(args.size * args.size * 0.12)

    try:
        demo(
            delay=args.delay,
            games=args.games,
            size=args.size,
            mines=mines,
            undo=args.undo,
            seed=args.seed,
        )
    except BoardConfigError as error:
        parser.error(str(error))
