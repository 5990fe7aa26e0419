"""
cli.py - Command-line interface for playing against the dropfour engine

The terminal plays the part of the presentation layer: it turns typed
columns into move requests and runs a frame loop that feeds elapsed time to
the controller while the computer is thinking.
"""

import argparse
import sys
import time
from typing import List, Optional

import numpy as np

from dropfour.debug import debug, DebugLevel
from dropfour.utils import ROWS, COLS, AI_DELAY, FRAME_SECONDS, Owner, HUMAN, COMPUTER
from dropfour.game.board import Board
from dropfour.game.controller import GameController, Phase
from dropfour.ai.heuristic import classify_columns, choose_column, TIER_NAMES

# Special answers from get_human_move()
QUIT = -1
RESTART = -2


def parse_position(position: str, rows: int = ROWS, cols: int = COLS) -> Board:
    """
    Build a board from a comma separated list of rows*cols cell values.

    Values are 0 (empty), 1 (human) or 2 (computer), top row first.

    Raises:
        ValueError: if the string has the wrong length or unknown values
    """
    values = [int(v) for v in position.split(',') if v.strip()]
    if len(values) != rows * cols:
        raise ValueError(f"Position string must have {rows * cols} values, got {len(values)}")

    board = Board(rows, cols)
    grid = np.array(values).reshape(rows, cols)
    for row in range(rows):
        for col in range(cols):
            owner = Owner(int(grid[row, col]))
            if owner != Owner.EMPTY:
                board.place(row, col, owner)
    return board


class SimpleCLI:
    """Simple command-line interface for the dropfour engine."""

    def __init__(self):
        self.args = None
        self.controller: Optional[GameController] = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(description='Connect Four against the computer')
        parser.add_argument('--rows', type=int, default=ROWS, help='Board height')
        parser.add_argument('--cols', type=int, default=COLS, help='Board width')
        parser.add_argument('--seed', type=int, default=None,
                            help='Seed for the coin flip and the computer\'s choices')
        parser.add_argument('--debug', action='store_true', help='Enable debug logging')
        parser.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level (ignored with --debug)')
        parser.add_argument('--log-file', default=None, help='Also write logs to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game interactively')
        play_parser.add_argument('--delay', type=float, default=AI_DELAY,
                                 help='Seconds the computer pauses before moving')
        play_parser.add_argument('--no-delay', action='store_true',
                                 help='Let the computer move instantly')

        analyze_parser = subparsers.add_parser('analyze',
                                               help='Show how the computer rates each column')
        analyze_parser.add_argument('--position', type=str, required=True,
                                    help='Comma separated cell values (0, 1, 2), top row first')

        benchmark_parser = subparsers.add_parser('benchmark', help='Time the move selector')
        benchmark_parser.add_argument('--iterations', type=int, default=200,
                                      help='Number of positions to evaluate')

        self.args = parser.parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'analyze':
            return self.analyze_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    # Playing

    def play_game(self) -> None:
        """Play Connect Four against the computer until the user quits."""
        delay = 0.0 if self.args.no_delay else self.args.delay
        self.controller = GameController(self.args.rows, self.args.cols,
                                         ai_delay=delay, seed=self.args.seed)
        print("Starting a new Connect Four game!")
        print(f"You are {HUMAN}, the computer is {COMPUTER}.")
        print(f"Enter a column number (0-{self.controller.cols - 1}); 'q' quits, 'r' restarts.")

        while True:
            if not self._play_one_game():
                print("Quitting game.")
                return

            self._announce_result()
            answer = input("Play again? [y/N]: ").strip().lower()
            if answer not in ('y', 'yes'):
                return
            self.controller.start_new_game()

    def _play_one_game(self) -> bool:
        """Returns False if the user quit mid-game."""
        controller = self.controller
        print(controller.render())

        while not controller.is_over:
            if controller.phase == Phase.AI_THINKING:
                self._wait_for_computer()
                continue

            move = self.get_human_move()
            if move is None:
                continue
            if move == QUIT:
                return False
            if move == RESTART:
                controller.start_new_game()
                print("Game restarted.")
                print(controller.render())
                continue

            if controller.request_move(move):
                print(controller.render())
            else:
                print(f"Column {move} is full.")

        return True

    def _wait_for_computer(self) -> None:
        controller = self.controller
        column = controller.state.ai_column
        print("Computer is thinking...")

        # Frame loop: hand the controller the real time between frames
        last = time.monotonic()
        while controller.phase == Phase.AI_THINKING:
            time.sleep(FRAME_SECONDS)
            now = time.monotonic()
            controller.advance_time(now - last)
            last = now

        print(f"Computer plays column {column}")
        print(controller.render())

    def _announce_result(self) -> None:
        print("Game over!")
        if self.controller.is_tied:
            print("It's a draw!")
        elif self.controller.winner == HUMAN:
            print("You win! Congratulations!")
        else:
            print("Computer wins! Better luck next time.")

    def get_human_move(self) -> Optional[int]:
        """
        Get a move from human player input.

        Returns:
            Column index, QUIT, RESTART, or None if the input was invalid
        """
        cols = self.controller.cols
        user_input = input(f"Your move (columns 0-{cols - 1}, q/r): ").strip().lower()

        if user_input == 'q':
            return QUIT
        if user_input == 'r':
            return RESTART

        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or special command.")
            return None

        if not 0 <= move < cols:
            print(f"Column must be between 0 and {cols - 1}.")
            return None
        return move

    # Analysis tools

    def analyze_position(self) -> int:
        """Print the computer's tier for every column of a given position."""
        try:
            board = parse_position(self.args.position, self.args.rows, self.args.cols)
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return 1

        print("Loaded position:")
        print(board.render())

        if board.is_full():
            print("Board is full")
            return 0

        tiers = classify_columns(board, COMPUTER, HUMAN)
        for tier, columns in enumerate(tiers):
            print(f"  {TIER_NAMES[tier]:>8}: {columns}")
        return 0

    def benchmark(self) -> None:
        """Time choose_column on random mid-game positions."""
        iterations = self.args.iterations
        rng = np.random.default_rng(self.args.seed)
        print(f"Running benchmark with {iterations} iterations...")

        boards = []
        for _ in range(iterations):
            controller = GameController(self.args.rows, self.args.cols, ai_delay=0.0, rng=rng)
            for _ in range(int(rng.integers(4, 16))):
                if controller.is_over:
                    break
                controller.skip_delay()
                valid = controller.board.valid_columns()
                if valid and controller.current_turn == HUMAN:
                    controller.request_move(int(rng.choice(valid)))
            if not controller.is_over:
                boards.append(controller.board)

        debug.start_timer("benchmark")
        for board in boards:
            choose_column(board, COMPUTER, HUMAN, rng)
        elapsed = debug.end_timer("benchmark", "cli")

        if boards:
            print(f"Chose columns on {len(boards)} positions: {elapsed:.6f} seconds total, "
                  f"{elapsed / len(boards) * 1000:.6f} ms per choice")
        else:
            print("No unfinished positions were generated.")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
