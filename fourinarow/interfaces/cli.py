"""
cli.py - Command-line interface for the Four-in-a-Row device

This module provides a CLI for playing against the engine by typing protocol
commands, running scripted command sequences, and watching a demo game.
"""

import argparse
import random
import sys
from typing import Callable, List, Optional

from fourinarow.config import EngineConfig
from fourinarow.debug import COMPONENTS, debug
from fourinarow.device import FourInARowDevice
from fourinarow.game.rules import GameState
from fourinarow.utils import DETECTOR_STRATEGIES, Side, column_letter

READ_CHUNK = 16


def parse_components(value: str) -> str:
    names = [name.strip() for name in value.split(",") if name.strip()]
    unknown = [name for name in names if name not in COMPONENTS]
    if unknown:
        raise argparse.ArgumentTypeError(f"unknown components: {', '.join(unknown)}")
    return ",".join(names)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Four-in-a-Row command protocol CLI',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:

      python run.py play
      python run.py send "RESET Y" "DROPC D" CTURN BOARD
      python run.py demo --seed 7 --detector complete
    """)

    parser.add_argument('--debug', action='store_true',
        help='Enable debug mode (equivalent to --debug_level debug)')
    parser.add_argument('--debug_level',
        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
        default='warning',
        help='Set debug level: none (silent), error, warning, info, debug, trace (most verbose)')
    parser.add_argument('--log_file', type=str, default=None,
        help='Also write log output to this file')
    parser.add_argument('--debug_components', type=parse_components, default=None,
        help=f'Comma-separated components to log ({", ".join(COMPONENTS)}); default is all')

    engine_group = parser.add_argument_group('Engine options')
    engine_group.add_argument('--detector', choices=DETECTOR_STRATEGIES, default='reference',
        help='Win detection strategy: reference (anchored board sweep) or complete '
             '(all directions through the last chip)')
    engine_group.add_argument('--strict', action='store_true',
        help='Answer malformed commands with INVALID instead of ignoring them')
    engine_group.add_argument('--seed', type=int, default=None,
        help='Seed for the computer player')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')
    subparsers.add_parser('play', help='Type protocol commands interactively')

    send_parser = subparsers.add_parser('send', help='Send a scripted list of commands')
    send_parser.add_argument('frames', nargs='+', help='Command frames, e.g. "RESET Y" BOARD')

    demo_parser = subparsers.add_parser('demo', help='Play a random player against the computer')
    demo_parser.add_argument('--color', choices=['Y', 'R'], default='Y',
        help='Color of the demo player')

    return parser


def configure_debug(args: argparse.Namespace):
    """Configure debug level, log file and component filter from the parsed args."""
    debug.set_from_string("debug" if args.debug else args.debug_level)
    if args.log_file:
        debug.configure(log_file=args.log_file)
    if args.debug_components:
        debug.configure(components=args.debug_components.split(","))


class SimpleCLI:
    """Simple command-line front end over a FourInARowDevice."""

    def __init__(self, args: Optional[argparse.Namespace] = None,
                 input_func: Callable[[str], str] = input,
                 output: Callable[[str], None] = print):
        self.args = args
        self.device: Optional[FourInARowDevice] = None
        self._input = input_func
        self._output = output

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments."""
        self.args = build_parser().parse_args(argv)
        configure_debug(self.args)

    def run(self) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args()

        config = EngineConfig(detector=self.args.detector, strict=self.args.strict,
                              seed=self.args.seed)
        self.device = FourInARowDevice(config=config)

        if self.args.command == 'play':
            self.play()
        elif self.args.command == 'send':
            self.send(self.args.frames)
        elif self.args.command == 'demo':
            self.demo(self.args.color)
        else:
            self._output("Please specify a command. Use --help for options.")
            return 1
        return 0

    def transact(self, frame: str) -> str:
        """Write one frame and read the response back in small chunks."""
        return self.device.execute(frame, chunk_size=READ_CHUNK)

    def play(self) -> None:
        """Read protocol commands from the user until EOF or 'q'."""
        self._output("Commands: RESET Y|R, BOARD, DROPC A-H, CTURN. 'q' quits, 'info' shows the session.")
        while True:
            try:
                line = self._input("> ")
            except EOFError:
                break

            if line.strip() == 'q':
                break
            if line.strip() == 'info':
                for key, value in self.device.engine.info().items():
                    self._output(f"  {key}: {value}")
                continue

            self._output(self.transact(line).rstrip("\n"))

    def send(self, frames: List[str]) -> None:
        for frame in frames:
            self._output(f"> {frame}")
            self._output(self.transact(frame).rstrip("\n"))

    def demo(self, color: str = 'Y') -> None:
        """Play random columns for the player until the game ends."""
        rng = random.Random(self.args.seed if self.args else None)
        self._output(self.transact(f"RESET {color}").rstrip("\n"))

        engine = self.device.engine
        while engine.state == GameState.IN_PROGRESS:
            if engine.session.turn_owner == Side.PLAYER:
                letter = column_letter(rng.choice(engine.board.open_columns()))
                frame = f"DROPC {letter}"
            else:
                frame = "CTURN"
            self._output(f"{frame}: {self.transact(frame).rstrip()}")

        self._output(self.transact("BOARD").rstrip("\n"))
        info = engine.info()
        self._output(f"Result: {info['outcome']} after {info['turn_count']} chips")
        if info['winning_line']:
            self._output(f"Winning line: {' '.join(info['winning_line'])}")


def main(argv: Optional[List[str]] = None) -> int:
    cli = SimpleCLI()
    cli.parse_args(argv)
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
